# -*- coding: utf-8 -*-
"""
Play random games of 2048 and report the distribution of the maximum tile.
"""
import logging
from collections import Counter
from typing import Dict

from numpy.random import default_rng
from tqdm import trange

from twentyfortyeight import Direction, GameConfig, GameStateTracker, MemoryStore, classic_config


def evaluate(length: int = 10, config: GameConfig | None = None, seed: int | None = None) -> Dict[int, int]:
    """
    Play random games until they are over.

    Parameters
    ----------
    length : int, optional
        The number of games to play (default is 10).
    config : GameConfig, optional
        Configuration of every game (default is the classic game).
    seed : int, optional
        Seed of the random move choices.

    Returns
    -------
    Dict[int, int]
        Number of games per maximum tile reached.
    """
    config = config if config is not None else classic_config()
    generator = default_rng(seed)
    store = MemoryStore()
    tracker = GameStateTracker(store, config)
    directions = list(Direction)
    score = []

    with trange(length) as period:
        for num in period:
            tracker.reset_board()
            board = tracker.get_current_board()

            # ##: Play a game.
            while not tracker.is_finished:
                board = tracker.update_board(board, directions[int(generator.integers(len(directions)))])

            # ##: Log.
            period.set_description(f"Game: {num + 1}")
            period.set_postfix(score=board.score, max=board.max_tile, best=store.highscore)

            # ##: Save max cells.
            score.append(board.max_tile)

    return dict(Counter(score))


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    result = evaluate(length=args.games, seed=args.seed)
    print(f"Max tile frequency over {args.games} games: {dict(sorted(result.items()))}")

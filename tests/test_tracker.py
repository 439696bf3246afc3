"""
Tests for the game state tracker.

Tests cover board creation and reset, move orchestration (merge, spawn, score), previous board snapshots,
highscore reporting, game over detection, and recovery from store failures.
"""

from unittest import TestCase, main
from unittest.mock import MagicMock

import numpy as np
from numpy import array

from twentyfortyeight.config import GameConfig
from twentyfortyeight.core.board import Board
from twentyfortyeight.core.errors import PersistenceUnavailable
from twentyfortyeight.core.gamemove import Direction, move
from twentyfortyeight.core.grid import Grid
from twentyfortyeight.core.spawn import SpawnPolicy
from twentyfortyeight.core.tile import Tile
from twentyfortyeight.envs.tracker import GameStateTracker, GameStatus
from twentyfortyeight.storage.memory import MemoryStore

# ##>: Full board where no two neighbours are equal.
CHECKERBOARD = array([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])

# ##>: Moving right then spawning a 2 on (0, 0) gives CHECKERBOARD.
ALMOST_OVER = array([[4, 2, 4, 0], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])


def single_tile_board(x: int, y: int, value: int = 2) -> Board:
    """Create a board holding one tile."""
    grid = Grid(4, 4)
    grid.set(x, y, Tile(value, x, y))
    return Board(grid)


def mock_store(highscore: int = 0) -> MagicMock:
    """Create a store mock returning a highscore and no saved board."""
    store = MagicMock()
    store.load_highscore.return_value = highscore
    store.load_board.return_value = None
    return store


class TestCurrentBoard(TestCase):
    """Test lazy creation and reset of the current board."""

    def setUp(self):
        self.tracker = GameStateTracker(mock_store(), spawner=SpawnPolicy(np.random.default_rng(42)))

    def test_initial_status(self):
        """No board exists before the first access."""
        self.assertIs(self.tracker.status, GameStatus.INITIAL)
        self.assertIsNone(self.tracker.get_previous_board())

    def test_current_board_is_seeded(self):
        """First board has 16 cells, 14 empty, two 2 tiles and a score of 0."""
        board = self.tracker.get_current_board()

        self.assertEqual(len(list(board.tiles.iterate())), 16)
        self.assertEqual(len(board.tiles.empty_cells()), 14)
        self.assertEqual([tile.value for tile in board.tiles.tiles()], [2, 2])
        self.assertEqual(board.score, 0)
        self.assertIs(self.tracker.status, GameStatus.PLAYING)

    def test_same_board_on_every_call(self):
        """The current board is created once."""
        first = self.tracker.get_current_board()
        second = self.tracker.get_current_board()
        self.assertIs(first, second)

    def test_reset_board(self):
        """After a reset a new board is generated."""
        before = self.tracker.get_current_board()
        self.tracker.update_board(single_tile_board(1, 0), Direction.DOWN)

        self.tracker.reset_board()

        self.assertIs(self.tracker.status, GameStatus.INITIAL)
        self.assertIsNone(self.tracker.get_previous_board())
        after = self.tracker.get_current_board()
        self.assertIsNot(after, before)
        self.assertEqual(after.tiles.tile_count(), 2)
        self.assertEqual(after.score, 0)

    def test_config_geometry(self):
        """Board dimensions and initial tiles follow the configuration."""
        tracker = GameStateTracker(mock_store(), GameConfig(width=5, height=3, initial_tiles=3, seed=1))
        board = tracker.get_current_board()

        self.assertEqual((board.tiles.width, board.tiles.height), (5, 3))
        self.assertEqual(board.tiles.tile_count(), 3)


class TestUpdateBoard(TestCase):
    """Test moves orchestrated by the tracker."""

    def setUp(self):
        self.store = mock_store()
        self.tracker = GameStateTracker(self.store, spawner=SpawnPolicy(np.random.default_rng(42)))

    def test_move_spawns_a_tile(self):
        """A tile free to move down lands on the bottom edge and a new tile appears."""
        board = single_tile_board(1, 0)

        updated = self.tracker.update_board(board, Direction.DOWN)

        self.assertEqual(updated.tiles.get(1, 3), Tile(2, 1, 3))
        self.assertEqual(updated.tiles.tile_count(), 2)
        self.assertTrue(all(tile.value in (2, 4) for tile in updated.tiles.tiles()))
        self.assertIs(self.tracker.get_current_board(), updated)

    def test_input_board_not_modified(self):
        """The moved board is a new object; the input keeps its tiles."""
        board = single_tile_board(1, 0)
        self.tracker.update_board(board, Direction.DOWN)
        self.assertEqual(board, single_tile_board(1, 0))

    def test_blocked_move(self):
        """A tile that cannot move keeps the same amount of empty cells and no tile is spawned."""
        board = single_tile_board(1, 3)

        updated = self.tracker.update_board(board, Direction.DOWN)

        self.assertIs(updated, board)
        self.assertEqual(len(updated.tiles.empty_cells()), 15)
        self.assertIsNone(self.tracker.get_previous_board())

    def test_merges(self):
        """Two equal tiles merge on the edge of the move direction."""
        cases = [
            ((0, 3), (3, 3), Direction.LEFT, (0, 3)),
            ((0, 3), (3, 3), Direction.RIGHT, (3, 3)),
            ((0, 0), (0, 3), Direction.DOWN, (0, 3)),
            ((0, 0), (0, 3), Direction.UP, (0, 0)),
        ]
        for first, second, direction, target in cases:
            with self.subTest(direction=direction):
                board = Board(Grid(4, 4))
                board.tiles.set(*first, Tile(2, *first))
                board.tiles.set(*second, Tile(2, *second))

                updated = self.tracker.update_board(board, direction)

                self.assertEqual(updated.tiles.get(*target).value, 4)
                self.assertEqual(updated.score, 4)

    def test_no_merges(self):
        """Different tiles slide against each other without merging."""
        cases = [
            ((0, 0), (0, 3), Direction.UP, {(0, 0): 4, (0, 1): 2}),
            ((0, 0), (0, 3), Direction.DOWN, {(0, 2): 4, (0, 3): 2}),
            ((0, 0), (3, 0), Direction.RIGHT, {(2, 0): 4, (3, 0): 2}),
            ((0, 0), (3, 0), Direction.LEFT, {(0, 0): 4, (1, 0): 2}),
        ]
        for big, small, direction, expected in cases:
            with self.subTest(direction=direction):
                board = Board(Grid(4, 4))
                board.tiles.set(*big, Tile(4, *big))
                board.tiles.set(*small, Tile(2, *small))

                updated = self.tracker.update_board(board, direction)

                for (x, y), value in expected.items():
                    self.assertEqual(updated.tiles.get(x, y).value, value)
                self.assertEqual(updated.score, 0)

    def test_spawn_invariant(self):
        """The spawned board has exactly one more tile than the merged grid."""
        board = Board(Grid.from_values(array([[2, 2, 4, 4], [0, 0, 0, 0], [8, 0, 8, 0], [0, 0, 0, 2]])), 12)
        merged = move(board.tiles, Direction.LEFT)

        updated = self.tracker.update_board(board, Direction.LEFT)

        self.assertEqual(updated.tiles.tile_count(), merged.grid.tile_count() + 1)
        self.assertEqual(updated.score, 12 + merged.score)

    def test_score_accumulates(self):
        """Score of every merge is added to the board score."""
        board = Board(Grid.from_values(array([[2, 2, 0, 0], [4, 4, 0, 0], [8, 8, 0, 0], [16, 16, 0, 0]])), 100)
        updated = self.tracker.update_board(board, Direction.LEFT)
        self.assertEqual(updated.score, 160)

    def test_autosave(self):
        """With autosave, every successful move saves the board."""
        tracker = GameStateTracker(self.store, GameConfig(autosave=True, seed=3))

        updated = tracker.update_board(single_tile_board(1, 0), Direction.DOWN)

        # ##>: A move changing nothing is not saved.
        tracker.update_board(single_tile_board(1, 3), Direction.DOWN)

        self.store.save_board.assert_called_once_with(updated)


class TestPreviousBoard(TestCase):
    """Test snapshots of the board before the last successful move."""

    def setUp(self):
        self.tracker = GameStateTracker(mock_store(), spawner=SpawnPolicy(np.random.default_rng(7)))

    def test_absent_before_first_move(self):
        """Previous board is not set by getting the current board."""
        self.tracker.get_current_board()
        self.assertIsNone(self.tracker.get_previous_board())

    def test_snapshot_is_pre_move_board(self):
        """After a move the previous board is the exact board before the move."""
        board = single_tile_board(1, 0)

        updated = self.tracker.update_board(board, Direction.DOWN)
        previous = self.tracker.get_previous_board()

        self.assertEqual(previous, board)
        self.assertIsNot(previous, board)
        self.assertNotEqual(previous.tiles.tile_count(), updated.tiles.tile_count())

    def test_same_previous_on_multiple_calls(self):
        board = single_tile_board(1, 0)
        self.tracker.update_board(board, Direction.DOWN)
        self.assertIs(self.tracker.get_previous_board(), self.tracker.get_previous_board())

    def test_snapshot_follows_each_move(self):
        """Each successful move replaces the snapshot with its own input."""
        board = single_tile_board(1, 0)

        first = self.tracker.update_board(board, Direction.DOWN)
        self.tracker.update_board(first, Direction.UP)

        self.assertEqual(self.tracker.get_previous_board(), first)

    def test_no_op_keeps_previous(self):
        """A move changing nothing leaves the previous board untouched."""
        moved = self.tracker.update_board(single_tile_board(0, 0), Direction.RIGHT)
        previous = self.tracker.get_previous_board()

        blocked = single_tile_board(1, 3)
        not_moved = self.tracker.update_board(blocked, Direction.DOWN)

        self.assertIs(not_moved, blocked)
        self.assertEqual(not_moved, single_tile_board(1, 3))
        self.assertIs(self.tracker.get_previous_board(), previous)
        self.assertEqual(previous, single_tile_board(0, 0))
        self.assertIs(self.tracker.get_current_board(), moved)


class TestHighscore(TestCase):
    """Test highscore loading and reporting."""

    def test_save_higher_score(self):
        """A score above the stored highscore is saved once."""
        store = mock_store(highscore=10)
        tracker = GameStateTracker(store)

        tracker.update_board(Board(Grid.from_values(CHECKERBOARD), 9000), Direction.DOWN)

        store.save_highscore.assert_called_once_with(9000)

    def test_do_not_save_lower_score(self):
        """A score below the stored highscore is not saved."""
        store = mock_store(highscore=9000)
        tracker = GameStateTracker(store)

        tracker.update_board(Board(Grid.from_values(CHECKERBOARD), 10), Direction.DOWN)

        store.save_highscore.assert_not_called()

    def test_do_not_save_equal_score(self):
        """A score equal to the highscore is not a new highscore."""
        store = mock_store(highscore=500)
        tracker = GameStateTracker(store)

        tracker.update_board(Board(Grid.from_values(CHECKERBOARD), 500), Direction.DOWN)

        store.save_highscore.assert_not_called()

    def test_highscore_saved_once_per_improvement(self):
        """Once saved, the highscore is only saved again when beaten."""
        store = MemoryStore(highscore=0)
        saves = MagicMock(wraps=store.save_highscore)
        store.save_highscore = saves
        tracker = GameStateTracker(store, spawner=SpawnPolicy(np.random.default_rng(5)))
        board = Board(Grid.from_values(array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])))

        tracker.update_board(board, Direction.LEFT)
        saves.assert_called_once_with(4)

        # ##>: Same score again: not a new highscore.
        tracker.update_board(Board(single_tile_board(0, 0).tiles, 4), Direction.LEFT)
        saves.assert_called_once_with(4)

        # ##>: Beaten highscore is saved again.
        tracker.update_board(Board(single_tile_board(0, 0).tiles, 8), Direction.LEFT)
        saves.assert_called_with(8)
        self.assertEqual(saves.call_count, 2)
        self.assertEqual(store.highscore, 8)

    def test_highscore_raised_elsewhere_is_not_overwritten(self):
        """A highscore raised in the store after it was read is never lowered."""
        store = MemoryStore(highscore=0)
        tracker = GameStateTracker(store, spawner=SpawnPolicy(np.random.default_rng(5)))
        self.assertEqual(tracker.get_highscore(), 0)

        # ##>: Another session beats the record.
        store.highscore = 1000
        board = Board(Grid.from_values(array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])))
        updated = tracker.update_board(board, Direction.LEFT)

        self.assertEqual(updated.score, 4)
        self.assertEqual(store.highscore, 1000)

    def test_get_highscore_delegates(self):
        """Highscore is loaded from the store."""
        store = mock_store(highscore=70000)
        tracker = GameStateTracker(store)

        self.assertEqual(tracker.get_highscore(), 70000)
        store.load_highscore.assert_called_once_with()

    def test_get_highscore_unavailable(self):
        """Unavailable store gives a highscore of 0."""
        store = mock_store()
        store.load_highscore.side_effect = PersistenceUnavailable('offline')
        tracker = GameStateTracker(store)

        with self.assertLogs('twentyfortyeight.envs.tracker', level='WARNING'):
            self.assertEqual(tracker.get_highscore(), 0)


class TestGameOver(TestCase):
    """Test game lifecycle transitions."""

    def test_move_to_game_over(self):
        """A move filling the board without possible merge ends the game."""
        tracker = GameStateTracker(mock_store(), spawner=SpawnPolicy(np.random.default_rng(0)))

        updated = tracker.update_board(Board(Grid.from_values(ALMOST_OVER)), Direction.RIGHT)

        self.assertEqual(updated.tiles, Grid.from_values(CHECKERBOARD))
        self.assertIs(tracker.status, GameStatus.GAME_OVER)
        self.assertTrue(tracker.is_finished)

    def test_game_over_is_terminal(self):
        """Once over, moves are ignored until a reset."""
        tracker = GameStateTracker(mock_store(), spawner=SpawnPolicy(np.random.default_rng(0)))
        tracker.update_board(Board(Grid.from_values(ALMOST_OVER)), Direction.RIGHT)

        board = single_tile_board(1, 0)
        self.assertIs(tracker.update_board(board, Direction.DOWN), board)
        self.assertIs(tracker.status, GameStatus.GAME_OVER)

        tracker.reset_board()
        self.assertIs(tracker.status, GameStatus.INITIAL)
        tracker.get_current_board()
        self.assertIs(tracker.status, GameStatus.PLAYING)

    def test_blocked_full_board_is_game_over(self):
        """Submitting a board that cannot move reports the game over."""
        tracker = GameStateTracker(mock_store())
        board = Board(Grid.from_values(CHECKERBOARD))

        for direction in Direction:
            self.assertIs(tracker.update_board(board, direction), board)
        self.assertIs(tracker.status, GameStatus.GAME_OVER)


class TestStoreFailures(TestCase):
    """Test that store failures never interrupt the game."""

    def test_save_highscore_failure(self):
        """Failing highscore save keeps the moved board."""
        store = mock_store()
        store.save_highscore.side_effect = PersistenceUnavailable('offline')
        tracker = GameStateTracker(store, spawner=SpawnPolicy(np.random.default_rng(1)))
        board = Board(Grid.from_values(array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])))

        with self.assertLogs('twentyfortyeight.envs.tracker', level='WARNING'):
            updated = tracker.update_board(board, Direction.LEFT)

        self.assertEqual(updated.score, 4)
        self.assertIs(tracker.get_current_board(), updated)

    def test_load_highscore_failure_skips_save(self):
        """Unreadable highscore is never replaced, the next move checks again."""
        store = mock_store()
        store.load_highscore.side_effect = PersistenceUnavailable('offline')
        tracker = GameStateTracker(store, spawner=SpawnPolicy(np.random.default_rng(1)))
        board = Board(Grid.from_values(array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])))

        with self.assertLogs('twentyfortyeight.envs.tracker', level='WARNING'):
            updated = tracker.update_board(board, Direction.LEFT)

        self.assertEqual(updated.score, 4)
        store.save_highscore.assert_not_called()

        # ##>: Store back online: the next move reports the score.
        store.load_highscore.side_effect = None
        store.load_highscore.return_value = 0
        tracker.update_board(Board(single_tile_board(0, 0).tiles, 4), Direction.RIGHT)
        store.save_highscore.assert_called_once_with(4)

    def test_resume_failure_starts_new_board(self):
        """Unreadable saved board falls back to a fresh board."""
        store = mock_store()
        store.load_board.side_effect = PersistenceUnavailable('corrupted')
        tracker = GameStateTracker(store, GameConfig(resume=True, seed=1))

        board = tracker.get_current_board()

        self.assertEqual(board.tiles.tile_count(), 2)
        self.assertEqual(board.score, 0)

    def test_resume_saved_board(self):
        """With resume, the saved board becomes the current board."""
        saved = Board(Grid.from_values(array([[2, 0, 0, 0], [0, 4, 0, 0], [0, 0, 8, 0], [0, 0, 0, 16]])), 64)
        tracker = GameStateTracker(MemoryStore(board=saved), GameConfig(resume=True))

        self.assertEqual(tracker.get_current_board(), saved)


if __name__ == '__main__':
    main()

"""Plain text rendering of boards, for logs and terminals."""

from twentyfortyeight.core.board import Board


def render_board(board: Board, empty: str = '.') -> str:
    """
    Render a board as text.

    Parameters
    ----------
    board : Board
        The board to render.
    empty : str, optional
        Symbol of an empty cell (default is '.').

    Returns
    -------
    str
        One line per row, cells separated by tabs, followed by the score.
    """
    grid = board.tiles
    lines = []
    for y in range(grid.height):
        row = (grid.get(x, y) for x in range(grid.width))
        lines.append(' \t'.join(empty if tile is None else str(tile.value) for tile in row))
    lines.append(f'score: {board.score}')
    return '\n'.join(lines)

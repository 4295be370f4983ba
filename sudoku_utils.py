# sudoku_utils.py

GRID_SIZE = 9
BOX_SIZE = 3

DEFAULT_DIFFICULTY = "medium"

DIFFICULTIES = {
    "easy": {"label": "Easy", "empty_cells": 35},
    "medium": {"label": "Medium", "empty_cells": 45},
    "hard": {"label": "Hard", "empty_cells": 55},
}

# Fixed practice puzzles, one per difficulty (row-major, '.' = blank)
PUZZLES = {
    "easy": "..3.2.6..9..3.5..1..18.64....81.29..7.......8..67.82....26.95..8..2.3..9..5.1.3..",
    "medium": "2...8.3...6..7..84.3.5..2.9...1.54.8.........4.27.6...3.1..7.4.72..4..6...4.1...3",
    "hard": "85...24..72......9..4.........1.7..23.5...9...4...........8..7..17..........36.4.",
}

BLANK_SYMBOL = "."


class PuzzleLoadError(Exception):
    """A puzzle definition could not be turned into a playable game."""


class PuzzleUnsolvableError(PuzzleLoadError):
    """The solver found no completion for a puzzle definition."""


def empty_grid():
    return [[0 for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]


def copy_board(board):
    if not board: return None
    return [row[:] for row in board]


def box_origin(row, col):
    return row - row % BOX_SIZE, col - col % BOX_SIZE


def is_valid_placement(grid, row, col, value):
    # Check row
    if value in grid[row]:
        return False
    # Check col
    for r in range(GRID_SIZE):
        if grid[r][col] == value:
            return False
    # Check 3x3 box
    start_row, start_col = box_origin(row, col)
    for i in range(BOX_SIZE):
        for j in range(BOX_SIZE):
            if grid[start_row + i][start_col + j] == value:
                return False
    return True


def find_best_cell(grid):
    """
    Most-constrained empty cell (fewest candidates), first in row-major
    order on ties. Returns (row, col, candidates) or None when the grid is full.
    """
    best = None
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            if grid[r][c] != 0:
                continue
            candidates = [n for n in range(1, GRID_SIZE + 1) if is_valid_placement(grid, r, c, n)]
            if best is None or len(candidates) < len(best[2]):
                best = (r, c, candidates)
                if not candidates:
                    return best  # Dead end, nothing can beat zero
    return best


def solve(grid):
    """Fill `grid` in place. Returns False if no completion exists."""
    cell = find_best_cell(grid)
    if cell is None:
        return True

    r, c, candidates = cell
    for num in candidates:  # Ascending order
        grid[r][c] = num
        if solve(grid):
            return True
        grid[r][c] = 0  # Backtrack
    return False


def parse_puzzle(definition):
    if definition is None or len(definition) != GRID_SIZE * GRID_SIZE:
        length = None if definition is None else len(definition)
        raise PuzzleLoadError(f"Puzzle definition must have 81 symbols, got {length}")

    grid = empty_grid()
    for i, symbol in enumerate(definition):
        row, col = divmod(i, GRID_SIZE)
        if symbol == BLANK_SYMBOL:
            continue
        if symbol not in "123456789":
            raise PuzzleLoadError(f"Invalid symbol {symbol!r} at index {i}")
        grid[row][col] = int(symbol)
    return grid


def make_cell(value=None, is_given=False):
    return {"value": value, "is_given": is_given, "is_invalid": False}


def load_puzzle(definition, difficulty):
    """
    Build the playable board and its answer key from a puzzle definition.
    Returns (board, solution); raises PuzzleUnsolvableError if the
    definition has no completion.
    """
    givens = parse_puzzle(definition)

    solution = copy_board(givens)
    if not solve(solution):
        print(f"Sudoku: Failed to solve {difficulty} puzzle")
        raise PuzzleUnsolvableError(f"Failed to solve {difficulty} puzzle")

    board = []
    for r in range(GRID_SIZE):
        row_cells = []
        for c in range(GRID_SIZE):
            val = givens[r][c]
            row_cells.append(make_cell(val, True) if val else make_cell())
        board.append(row_cells)
    return board, solution


def get_sudoku_puzzle(difficulty: str = DEFAULT_DIFFICULTY):
    definition = PUZZLES.get(difficulty)
    if definition is None:
        raise PuzzleLoadError(f"Unknown difficulty '{difficulty}'")
    return load_puzzle(definition, difficulty)

# sudoku_session.py
import copy

from sudoku_utils import (
    BOX_SIZE,
    DEFAULT_DIFFICULTY,
    DIFFICULTIES,
    GRID_SIZE,
    PuzzleLoadError,
    get_sudoku_puzzle,
)

STATUS_MENU = "menu"
STATUS_PLAYING = "playing"
STATUS_SOLVED = "solved"

# direction: (row delta, col delta)
MOVES = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}


def new_session(difficulty: str = DEFAULT_DIFFICULTY) -> dict:
    return {
        "status": STATUS_MENU,
        "difficulty": difficulty,
        "board": None,
        "solution": None,
        "selection": None,  # (row, col)
        "error_count": 0,
        "elapsed_seconds": 0,
        "last_error": None,
    }


def set_difficulty(session: dict, difficulty: str) -> bool:
    # Difficulty is only picked from the menu
    if session["status"] != STATUS_MENU or difficulty not in DIFFICULTIES:
        return False
    session["difficulty"] = difficulty
    return True


def start_game(session: dict, difficulty: str = None) -> bool:
    """
    Load the puzzle for `difficulty` (or the session's current one) and
    start a fresh game. On a load failure the session goes back to the
    menu and the error message is kept in session["last_error"].
    """
    difficulty = difficulty or session["difficulty"]
    try:
        board, solution = get_sudoku_puzzle(difficulty)
    except PuzzleLoadError as ex:
        print(f"Sudoku: Error starting game ({difficulty}): {ex}")
        session["status"] = STATUS_MENU
        session["last_error"] = str(ex)
        return False

    session["difficulty"] = difficulty
    session["board"] = board
    session["solution"] = solution
    session["selection"] = None
    session["error_count"] = 0
    session["elapsed_seconds"] = 0
    session["last_error"] = None
    session["status"] = STATUS_PLAYING
    return True


def return_to_menu(session: dict) -> bool:
    session["status"] = STATUS_MENU
    session["selection"] = None
    return True


def select_cell(session: dict, row: int, col: int) -> bool:
    session["selection"] = (row, col)
    return True


def move_selection(session: dict, direction: str) -> bool:
    if session["status"] != STATUS_PLAYING or session["selection"] is None:
        return False
    d_row, d_col = MOVES[direction]
    row, col = session["selection"]
    new_row = min(GRID_SIZE - 1, max(0, row + d_row))
    new_col = min(GRID_SIZE - 1, max(0, col + d_col))
    if (new_row, new_col) == (row, col):
        return False  # Edge of the grid
    session["selection"] = (new_row, new_col)
    return True


def first_open_cell(board):
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            cell = board[r][c]
            if cell["value"] is None and not cell["is_given"]:
                return r, c
    return None


def is_board_solved(board, solution) -> bool:
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            val = board[r][c]["value"]
            if val is None or val != solution[r][c]:
                return False
    return True


def enter_value(session: dict, value) -> bool:
    """
    Write `value` (1-9, or None to erase) into the selected cell.

    With nothing selected a digit goes into the first open cell, which
    becomes the selection. Given cells never change. A wrong digit counts
    as one error per invalid streak: further wrong digits into a cell that
    is already invalid are not counted again.
    """
    if session["status"] != STATUS_PLAYING:
        return False
    board = session["board"]

    if session["selection"] is None:
        if value is None:
            return False
        open_cell = first_open_cell(board)
        if open_cell is None:
            return False
        session["selection"] = open_cell

    row, col = session["selection"]
    cell = board[row][col]
    if cell["is_given"]:
        return False

    if value is None:
        cell["value"] = None
        cell["is_invalid"] = False
    else:
        was_invalid = cell["is_invalid"]
        cell["value"] = value
        if session["solution"][row][col] != value:
            cell["is_invalid"] = True
            if not was_invalid:
                session["error_count"] += 1
        else:
            cell["is_invalid"] = False

    if is_board_solved(board, session["solution"]):
        session["status"] = STATUS_SOLVED
        print(f"Sudoku: {session['difficulty']} puzzle solved in {session['elapsed_seconds']}s with {session['error_count']} errors.")
    return True


def erase(session: dict) -> bool:
    return enter_value(session, None)


def tick(session: dict) -> bool:
    if session["status"] != STATUS_PLAYING:
        return False
    session["elapsed_seconds"] += 1
    return True


def is_related_cell(selection, row, col) -> bool:
    """Same row, column or box as the selection."""
    if selection is None:
        return False
    sel_r, sel_c = selection
    return (
        sel_r == row
        or sel_c == col
        or (sel_r // BOX_SIZE == row // BOX_SIZE and sel_c // BOX_SIZE == col // BOX_SIZE)
    )


def selected_value(session: dict):
    if session["selection"] is None or session["board"] is None:
        return None
    row, col = session["selection"]
    return session["board"][row][col]["value"]


def get_snapshot(session: dict) -> dict:
    return {
        "status": session["status"],
        "difficulty": session["difficulty"],
        "board": copy.deepcopy(session["board"]),
        "selection": session["selection"],
        "error_count": session["error_count"],
        "elapsed_seconds": session["elapsed_seconds"],
    }

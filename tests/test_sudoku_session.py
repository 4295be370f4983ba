import pytest

import sudoku_utils
from sudoku_session import (
    STATUS_MENU,
    STATUS_PLAYING,
    STATUS_SOLVED,
    enter_value,
    erase,
    get_snapshot,
    is_board_solved,
    is_related_cell,
    move_selection,
    new_session,
    return_to_menu,
    select_cell,
    selected_value,
    set_difficulty,
    start_game,
    tick,
)

UNSOLVABLE = "....9...." + "." * 27 + "1234.5678" + "." * 36


@pytest.fixture
def session():
    s = new_session()
    assert start_game(s, "easy")
    return s


def open_cells(s):
    return [(r, c) for r in range(9) for c in range(9) if not s["board"][r][c]["is_given"]]


def wrong_value(s, r, c):
    return s["solution"][r][c] % 9 + 1


def test_new_session_starts_in_menu():
    s = new_session()
    assert s["status"] == STATUS_MENU
    assert s["board"] is None
    assert s["difficulty"] == "medium"


def test_start_game_resets_session(session):
    select_cell(session, 0, 0)
    enter_value(session, 9)
    tick(session)
    assert start_game(session, "hard")
    assert session["status"] == STATUS_PLAYING
    assert session["difficulty"] == "hard"
    assert session["selection"] is None
    assert session["error_count"] == 0
    assert session["elapsed_seconds"] == 0


def test_start_game_without_difficulty_replays_current(session):
    assert start_game(session)
    assert session["difficulty"] == "easy"
    assert session["board"][0][0]["value"] is None


def test_start_game_failure_returns_to_menu(session, monkeypatch):
    monkeypatch.setitem(sudoku_utils.PUZZLES, "hard", UNSOLVABLE)
    assert start_game(session, "hard") is False
    assert session["status"] == STATUS_MENU
    assert "Failed to solve hard puzzle" in session["last_error"]


def test_start_game_unknown_difficulty_stays_in_menu():
    s = new_session()
    assert start_game(s, "expert") is False
    assert s["status"] == STATUS_MENU
    assert s["last_error"]


def test_set_difficulty_only_in_menu(session):
    assert set_difficulty(session, "hard") is False
    return_to_menu(session)
    assert set_difficulty(session, "hard") is True
    assert session["difficulty"] == "hard"
    assert set_difficulty(session, "expert") is False


def test_return_to_menu_stops_timer(session):
    tick(session)
    return_to_menu(session)
    assert session["status"] == STATUS_MENU
    assert tick(session) is False
    assert session["elapsed_seconds"] == 1


def test_tick_only_while_playing():
    s = new_session()
    assert tick(s) is False
    assert s["elapsed_seconds"] == 0
    start_game(s, "easy")
    tick(s)
    tick(s)
    assert s["elapsed_seconds"] == 2


def test_given_cells_are_immutable(session):
    assert session["board"][0][2] == {"value": 3, "is_given": True, "is_invalid": False}
    select_cell(session, 0, 2)
    assert enter_value(session, 7) is False
    assert erase(session) is False
    assert session["board"][0][2] == {"value": 3, "is_given": True, "is_invalid": False}
    assert session["error_count"] == 0


def test_same_wrong_digit_counts_once(session):
    select_cell(session, 0, 0)
    enter_value(session, 9)
    enter_value(session, 9)
    assert session["board"][0][0]["is_invalid"] is True
    assert session["error_count"] == 1


def test_different_wrong_digits_count_once_while_invalid(session):
    select_cell(session, 0, 0)
    enter_value(session, 9)
    enter_value(session, 8)
    assert session["error_count"] == 1


def test_erase_breaks_the_invalid_streak(session):
    select_cell(session, 0, 0)
    enter_value(session, 9)
    erase(session)
    assert session["board"][0][0] == {"value": None, "is_given": False, "is_invalid": False}
    assert session["error_count"] == 1
    enter_value(session, 9)
    assert session["error_count"] == 2


def test_correct_digit_clears_invalid_flag(session):
    select_cell(session, 0, 0)
    enter_value(session, 9)
    enter_value(session, 4)
    assert session["board"][0][0] == {"value": 4, "is_given": False, "is_invalid": False}
    enter_value(session, 9)
    assert session["error_count"] == 2


def test_digit_without_selection_fills_first_open_cell(session):
    assert enter_value(session, 4)
    assert session["selection"] == (0, 0)
    assert session["board"][0][0]["value"] == 4
    session["selection"] = None
    assert enter_value(session, 8)
    assert session["selection"] == (0, 1)


def test_erase_without_selection_is_noop(session):
    assert erase(session) is False
    assert session["selection"] is None


def test_digit_without_open_cell_is_noop(session):
    for r, c in open_cells(session):
        select_cell(session, r, c)
        enter_value(session, wrong_value(session, r, c))
    errors = session["error_count"]
    session["selection"] = None
    assert enter_value(session, 5) is False
    assert session["error_count"] == errors
    assert session["selection"] is None


def test_enter_value_ignored_outside_playing():
    s = new_session()
    assert enter_value(s, 4) is False
    start_game(s, "easy")
    return_to_menu(s)
    assert enter_value(s, 4) is False
    assert s["board"][0][0]["value"] is None


def test_win_requires_every_cell_correct(session):
    cells = open_cells(session)
    *rest, (last_r, last_c) = cells
    for r, c in rest:
        select_cell(session, r, c)
        enter_value(session, session["solution"][r][c])
        assert session["status"] == STATUS_PLAYING
    assert not is_board_solved(session["board"], session["solution"])

    select_cell(session, last_r, last_c)
    enter_value(session, wrong_value(session, last_r, last_c))
    assert session["status"] == STATUS_PLAYING

    enter_value(session, session["solution"][last_r][last_c])
    assert session["status"] == STATUS_SOLVED
    assert tick(session) is False
    assert enter_value(session, 1) is False


@pytest.mark.parametrize("start,direction", [
    ((0, 0), "up"), ((0, 0), "left"), ((8, 8), "down"), ((8, 8), "right"),
])
def test_navigation_clamps_at_edges(session, start, direction):
    select_cell(session, *start)
    assert move_selection(session, direction) is False
    assert session["selection"] == start


def test_navigation_moves_selection(session):
    select_cell(session, 4, 4)
    move_selection(session, "up")
    move_selection(session, "right")
    assert session["selection"] == (3, 5)
    move_selection(session, "down")
    move_selection(session, "left")
    assert session["selection"] == (4, 4)


def test_navigation_needs_selection_and_play(session):
    assert move_selection(session, "down") is False
    assert session["selection"] is None
    select_cell(session, 1, 1)
    return_to_menu(session)
    select_cell(session, 1, 1)
    assert move_selection(session, "down") is False


def test_related_cells_and_selected_value(session):
    assert not is_related_cell(None, 0, 0)
    assert is_related_cell((4, 4), 4, 0)
    assert is_related_cell((4, 4), 0, 4)
    assert is_related_cell((4, 4), 3, 5)
    assert not is_related_cell((4, 4), 0, 0)
    assert selected_value(session) is None
    select_cell(session, 0, 2)
    assert selected_value(session) == 3


def test_snapshot_is_detached(session):
    snap = get_snapshot(session)
    snap["board"][0][0]["value"] = 4
    assert session["board"][0][0]["value"] is None
    assert set(snap) == {"status", "difficulty", "board", "selection", "error_count", "elapsed_seconds"}


def test_easy_end_to_end_scenario():
    s = new_session()
    assert start_game(s, "easy")
    assert s["solution"][0][0] == 4

    select_cell(s, 0, 0)
    enter_value(s, 4)
    assert s["board"][0][0] == {"value": 4, "is_given": False, "is_invalid": False}
    assert s["error_count"] == 0

    enter_value(s, 9)
    assert s["board"][0][0]["is_invalid"] is True
    assert s["error_count"] == 1

    enter_value(s, 9)
    assert s["error_count"] == 1

    erase(s)
    assert s["board"][0][0] == {"value": None, "is_given": False, "is_invalid": False}
    assert s["error_count"] == 1

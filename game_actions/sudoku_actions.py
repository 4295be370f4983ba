# game_actions/sudoku_actions.py
from sudoku_session import (
    STATUS_PLAYING,
    enter_value,
    erase,
    move_selection,
    return_to_menu,
    select_cell,
    set_difficulty,
    start_game,
    tick,
)

# Keyboard key names (flet reports "Arrow Up", browsers "ArrowUp")
KEY_MOVES = {
    "Arrow Up": "MOVE_UP", "ArrowUp": "MOVE_UP",
    "Arrow Down": "MOVE_DOWN", "ArrowDown": "MOVE_DOWN",
    "Arrow Left": "MOVE_LEFT", "ArrowLeft": "MOVE_LEFT",
    "Arrow Right": "MOVE_RIGHT", "ArrowRight": "MOVE_RIGHT",
}
ERASE_KEYS = ("Backspace", "Delete")


def key_to_action(key: str):
    """
    Map a key name to (action_type, payload), or None for keys the game
    does not use.
    """
    if not key:
        return None
    if key in KEY_MOVES:
        return KEY_MOVES[key], {}
    if key in ERASE_KEYS:
        return "ERASE", {}
    digit = key[-1] if key.startswith("Numpad ") else key
    if len(digit) == 1 and digit in "123456789":
        return "ENTER_DIGIT", {"value": int(digit)}
    return None


def process_key(session: dict, key: str) -> bool:
    mapped = key_to_action(key)
    if mapped is None:
        return False
    action_type, payload = mapped
    # Digits may auto-select a cell; everything else needs a selection
    if action_type != "ENTER_DIGIT" and (session["status"] != STATUS_PLAYING or session["selection"] is None):
        return False
    return process_sudoku_action(session, action_type, payload)


def process_sudoku_action(session: dict, action_type: str, payload: dict = None) -> bool:
    """Apply one logical input action. Returns True if the session changed."""
    payload = payload or {}

    if action_type == "MOVE_UP":
        return move_selection(session, "up")
    elif action_type == "MOVE_DOWN":
        return move_selection(session, "down")
    elif action_type == "MOVE_LEFT":
        return move_selection(session, "left")
    elif action_type == "MOVE_RIGHT":
        return move_selection(session, "right")
    elif action_type == "ENTER_DIGIT":
        value = payload.get("value")
        if not isinstance(value, int) or not 1 <= value <= 9:
            print(f"Sudoku: Ignoring ENTER_DIGIT with invalid value {value!r}")
            return False
        return enter_value(session, value)
    elif action_type == "ERASE":
        return erase(session)
    elif action_type == "SELECT_CELL":
        return select_cell(session, payload["row"], payload["col"])
    elif action_type == "START_GAME":
        return start_game(session, payload.get("difficulty"))
    elif action_type == "SET_DIFFICULTY":
        return set_difficulty(session, payload.get("difficulty"))
    elif action_type == "RETURN_TO_MENU":
        return return_to_menu(session)
    elif action_type == "TICK":
        return tick(session)

    print(f"Sudoku: Unknown action type '{action_type}', ignored.")
    return False

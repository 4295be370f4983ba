# sudoku_game.py
import flet as ft
import threading

from game_actions.sudoku_actions import process_key, process_sudoku_action
from sudoku_session import (
    STATUS_MENU,
    STATUS_PLAYING,
    STATUS_SOLVED,
    is_related_cell,
    new_session,
    selected_value,
)
from sudoku_utils import DIFFICULTIES, GRID_SIZE
from timer_helpers import format_elapsed, start_tick_timer

# --- Sizing Constants ---
FONT_SIZE_NORMAL = 14
FONT_SIZE_LARGE = 18
FONT_SIZE_XLARGE = 20 # For cell numbers
FONT_SIZE_TITLE = 22
FONT_SIZE_STAT = 24
BUTTON_HEIGHT_NORMAL = 40
TITLE_ICON_SIZE = 26
SUDOKU_CELL_SIZE = 42
SUDOKU_GRID_BORDER_THICKNESS_NORMAL = 1
SUDOKU_GRID_BORDER_THICKNESS_BOLD = 2.5
NUMBER_PAD_BUTTON_SIZE = 52

# --- Colours ---
GIVEN_NUMBER_COLOR = ft.Colors.BLACK87
USER_ENTERED_COLOR = ft.Colors.LIGHT_BLUE_700
INVALID_NUMBER_COLOR = ft.Colors.RED_ACCENT_700
DEFAULT_BORDER_COLOR = ft.Colors.BLACK54
SELECTED_CELL_BG_COLOR = ft.Colors.LIGHT_BLUE_ACCENT_100
RELATED_CELL_BG_COLOR = ft.Colors.BLUE_GREY_100
SAME_VALUE_BG_COLOR = ft.Colors.LIGHT_BLUE_50
NORMAL_CELL_BG_COLOR = ft.Colors.WHITE


def cell_border(r, c):
    def side(is_bold):
        return ft.border.BorderSide(
            SUDOKU_GRID_BORDER_THICKNESS_BOLD if is_bold else SUDOKU_GRID_BORDER_THICKNESS_NORMAL,
            DEFAULT_BORDER_COLOR,
        )
    return ft.border.Border(
        top=side(r % 3 == 0),
        left=side(c % 3 == 0),
        right=side(c % 3 == 2),
        bottom=side(r % 3 == 2),
    )


def sudoku_logic(page: ft.Page, go_home_fn):
    session = new_session()
    session_lock = threading.Lock() # Timer thread and UI events both mutate the session
    timer_state = {"stop_event": None}

    time_text = ft.Text("0:00", size=FONT_SIZE_STAT, weight=ft.FontWeight.BOLD, color=ft.Colors.LIGHT_BLUE_700)
    errors_text = ft.Text("0", size=FONT_SIZE_STAT, weight=ft.FontWeight.BOLD, color=INVALID_NUMBER_COLOR)
    difficulty_text = ft.Text("", size=FONT_SIZE_STAT, weight=ft.FontWeight.BOLD, color=ft.Colors.GREEN_700)
    status_text = ft.Text("", size=FONT_SIZE_LARGE, text_align=ft.TextAlign.CENTER)

    difficulty_dropdown = ft.Dropdown(
        value=session["difficulty"],
        options=[ft.dropdown.Option(key=key, text=meta["label"]) for key, meta in DIFFICULTIES.items()],
        width=200,
        on_change=lambda e: handle_action("SET_DIFFICULTY", {"difficulty": e.control.value}),
    )

    grid_column = ft.Column(spacing=0, horizontal_alignment=ft.CrossAxisAlignment.CENTER)
    number_pad = ft.Column(horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=5)
    erase_button = ft.ElevatedButton(
        "Erase", on_click=lambda e: handle_action("ERASE"),
        width=NUMBER_PAD_BUTTON_SIZE * 3 + 10, height=BUTTON_HEIGHT_NORMAL,
        bgcolor=ft.Colors.RED_200,
    )
    main_column = ft.Column(
        expand=True,
        scroll=ft.ScrollMode.ADAPTIVE,
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        spacing=10
    )

    cell_texts = [[None for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]
    cell_containers = [[None for _ in range(GRID_SIZE)] for _ in range(GRID_SIZE)]

    def refresh_page():
        if page.client_storage:
            page.update()

    # --- Timer ---
    def stop_timer():
        if timer_state["stop_event"] is not None:
            timer_state["stop_event"].set()
            timer_state["stop_event"] = None

    def on_timer_tick():
        if not page.client_storage or page.route != "/game/sudoku":
            return False # Page closed or navigated away
        with session_lock:
            still_playing = process_sudoku_action(session, "TICK")
            elapsed = session["elapsed_seconds"]
        if not still_playing:
            return False
        time_text.value = format_elapsed(elapsed)
        if page.client_storage:
            time_text.update()
        return True

    def restart_timer():
        stop_timer()
        timer_state["stop_event"] = threading.Event()
        start_tick_timer(on_timer_tick, timer_state["stop_event"])

    # --- Board ---
    def build_grid():
        grid_column.controls.clear()
        for r in range(GRID_SIZE):
            row_controls = []
            for c in range(GRID_SIZE):
                cell_text = ft.Text(size=FONT_SIZE_XLARGE, text_align=ft.TextAlign.CENTER)
                cell_texts[r][c] = cell_text
                cell_container = ft.Container(
                    content=cell_text,
                    width=SUDOKU_CELL_SIZE, height=SUDOKU_CELL_SIZE,
                    alignment=ft.alignment.center,
                    border=cell_border(r, c),
                    on_click=lambda e, r=r, c=c: handle_action("SELECT_CELL", {"row": r, "col": c}),
                )
                cell_containers[r][c] = cell_container
                row_controls.append(cell_container)
            grid_column.controls.append(ft.Row(row_controls, spacing=0, alignment=ft.MainAxisAlignment.CENTER))

    def refresh_grid():
        board = session["board"]
        if not board: return
        selection = session["selection"]
        highlight_value = selected_value(session)
        erase_button.disabled = selection is None
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                cell = board[r][c]
                text = cell_texts[r][c]
                text.value = str(cell["value"]) if cell["value"] is not None else ""
                if cell["is_given"]:
                    text.color = GIVEN_NUMBER_COLOR
                    text.weight = ft.FontWeight.W_900
                else:
                    text.color = INVALID_NUMBER_COLOR if cell["is_invalid"] else USER_ENTERED_COLOR
                    text.weight = ft.FontWeight.BOLD

                if selection == (r, c):
                    bg = SELECTED_CELL_BG_COLOR
                elif is_related_cell(selection, r, c):
                    bg = RELATED_CELL_BG_COLOR
                elif highlight_value is not None and cell["value"] == highlight_value:
                    bg = SAME_VALUE_BG_COLOR
                else:
                    bg = NORMAL_CELL_BG_COLOR
                cell_containers[r][c].bgcolor = bg

    def build_number_pad():
        number_pad.controls.clear()
        for start in (1, 4, 7):
            number_pad.controls.append(ft.Row(
                [
                    ft.ElevatedButton(
                        str(n), on_click=lambda e, num=n: handle_action("ENTER_DIGIT", {"value": num}),
                        width=NUMBER_PAD_BUTTON_SIZE, height=NUMBER_PAD_BUTTON_SIZE,
                        style=ft.ButtonStyle(padding=0)
                    )
                    for n in range(start, start + 3)
                ],
                alignment=ft.MainAxisAlignment.CENTER, spacing=5
            ))
        number_pad.controls.append(erase_button)

    def refresh_stats():
        is_playing = session["status"] == STATUS_PLAYING
        time_text.value = format_elapsed(session["elapsed_seconds"]) if is_playing else "0:00"
        errors_text.value = str(session["error_count"])
        difficulty_text.value = DIFFICULTIES[session["difficulty"]]["label"]

    def stat_box(label, value_control):
        return ft.Container(
            content=ft.Column(
                [ft.Text(label, size=FONT_SIZE_NORMAL, color=ft.Colors.BLACK54), value_control],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=2
            ),
            padding=ft.padding.symmetric(horizontal=15, vertical=8),
            border=ft.border.all(1, ft.Colors.BLACK26),
            border_radius=8,
            expand=True,
        )

    # --- Actions ---
    def handle_action(action_type, payload=None):
        with session_lock:
            previous_status = session["status"]
            changed = process_sudoku_action(session, action_type, payload)
            current_status = session["status"]
        if not changed:
            if action_type == "START_GAME" and session["last_error"]:
                page.snack_bar = ft.SnackBar(ft.Text(f"Could not start game: {session['last_error']}"), open=True)
                refresh_page()
            return
        on_session_changed(action_type, previous_status, current_status)

    def on_session_changed(action_type, previous_status, current_status):
        if action_type == "START_GAME":
            build_grid()
            restart_timer()
        elif current_status != STATUS_PLAYING:
            stop_timer()

        if current_status != previous_status or action_type == "START_GAME":
            update_ui_layout()
        else:
            refresh_grid()
            refresh_stats()
            refresh_page()

    def handle_keyboard(e: ft.KeyboardEvent):
        with session_lock:
            previous_status = session["status"]
            changed = process_key(session, e.key)
            current_status = session["status"]
        if changed:
            on_session_changed("KEY", previous_status, current_status)

    page.on_keyboard_event = handle_keyboard

    def cleanup_and_go_home(e=None):
        stop_timer()
        page.on_keyboard_event = None
        go_home_fn()

    # --- Layout ---
    def update_ui_layout():
        main_column.controls.clear()
        title_bar = ft.Row(
            [
                ft.Text("🧩 Sudoku", size=FONT_SIZE_TITLE, weight=ft.FontWeight.BOLD, expand=True, text_align=ft.TextAlign.CENTER),
                ft.IconButton(ft.Icons.HOME_ROUNDED, tooltip="Back to main menu", on_click=cleanup_and_go_home, icon_size=TITLE_ICON_SIZE)
            ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN, vertical_alignment=ft.CrossAxisAlignment.CENTER
        )
        main_column.controls.append(title_bar)
        refresh_stats()

        if session["status"] == STATUS_MENU:
            difficulty_dropdown.value = session["difficulty"]
            main_column.controls.append(ft.Row(
                [stat_box("Time", time_text), stat_box("Errors", errors_text), stat_box("Difficulty", difficulty_dropdown)],
                alignment=ft.MainAxisAlignment.CENTER, spacing=10
            ))
            status_text.value = 'Select difficulty above and click "Start Game"'
            main_column.controls.append(status_text)
            main_column.controls.append(
                ft.ElevatedButton("Start Game", on_click=lambda e: handle_action("START_GAME"), width=250, height=BUTTON_HEIGHT_NORMAL + 10, bgcolor=ft.Colors.GREEN_400)
            )
        else:
            main_column.controls.append(ft.Row(
                [stat_box("Time", time_text), stat_box("Errors", errors_text), stat_box("Difficulty", difficulty_text)],
                alignment=ft.MainAxisAlignment.CENTER, spacing=10
            ))
            if not grid_column.controls:
                build_grid()
            refresh_grid()
            main_column.controls.append(grid_column)

            if session["status"] == STATUS_SOLVED:
                main_column.controls.append(ft.Container(
                    content=ft.Column(
                        [
                            ft.Text("🎉 You Win!", size=FONT_SIZE_TITLE + 10, weight=ft.FontWeight.BOLD, color=ft.Colors.AMBER_700),
                            ft.Text(f"Completed in {format_elapsed(session['elapsed_seconds'])}", size=FONT_SIZE_LARGE),
                            ft.Text(f"Errors: {session['error_count']}", size=FONT_SIZE_NORMAL, color=ft.Colors.BLACK54),
                            ft.Row(
                                [
                                    ft.ElevatedButton("Play Again", on_click=lambda e: handle_action("START_GAME"), bgcolor=ft.Colors.GREEN_400, height=BUTTON_HEIGHT_NORMAL),
                                    ft.ElevatedButton("Change Difficulty", on_click=lambda e: handle_action("RETURN_TO_MENU"), height=BUTTON_HEIGHT_NORMAL),
                                ],
                                alignment=ft.MainAxisAlignment.CENTER, spacing=10
                            ),
                        ],
                        horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=8
                    ),
                    padding=20, border_radius=8, border=ft.border.all(1, ft.Colors.BLACK26),
                ))
            else:
                if not number_pad.controls:
                    build_number_pad()
                main_column.controls.append(number_pad)
                main_column.controls.append(ft.Row(
                    [
                        ft.ElevatedButton("New Game", on_click=lambda e: handle_action("START_GAME"), width=160, height=BUTTON_HEIGHT_NORMAL, bgcolor=ft.Colors.GREEN_400),
                        ft.ElevatedButton("Change Difficulty", on_click=lambda e: handle_action("RETURN_TO_MENU"), width=180, height=BUTTON_HEIGHT_NORMAL),
                    ],
                    alignment=ft.MainAxisAlignment.CENTER, spacing=10
                ))

        refresh_page()

    update_ui_layout()
    return [ft.Container(content=main_column, expand=True, alignment=ft.alignment.top_center, padding=ft.padding.all(10))]


def sudoku_game_entry(page: ft.Page, go_home_fn):
    return sudoku_logic(page, go_home_fn)

# app.py
import flet as ft
import os

from sudoku_game import sudoku_game_entry
from sudoku_utils import DIFFICULTIES


# --- FLET APP MAIN FUNCTION (Routing and Views) ---
def main(page: ft.Page):
    page.title = "🧩 Sudoku"
    page.vertical_alignment = ft.MainAxisAlignment.START
    page.horizontal_alignment = ft.CrossAxisAlignment.CENTER
    page.theme_mode = ft.ThemeMode.LIGHT
    page.scroll = ft.ScrollMode.ADAPTIVE

    def go_home(e=None):
        page.on_keyboard_event = None
        page.go("/")

    def view_home_page():
        return ft.View(
            "/",
            [
                ft.Text("🧩 Sudoku", size=32, weight="bold", text_align="center"),
                ft.Text("Fill the grid so every row, column and box holds 1 to 9.", size=18, text_align="center"),
                ft.ElevatedButton("▶ Play", on_click=lambda _: page.go("/game/sudoku"), width=250, height=50),
                ft.ElevatedButton("📜 Rules", on_click=lambda _: page.go("/rules/sudoku"), width=250, height=50),
            ],
            vertical_alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=20,
            scroll=ft.ScrollMode.AUTO
        )

    def view_rules_page():
        levels = ", ".join(f"{meta['label']} (~{meta['empty_cells']} blanks)" for meta in DIFFICULTIES.values())
        return ft.View(
            "/rules/sudoku",
            [
                ft.Text("📜 Sudoku rules", size=28, weight="bold"),
                ft.Text("🎯 Fill every blank so each row, column and 3x3 box contains the digits 1-9 exactly once.", size=16, text_align=ft.TextAlign.CENTER),
                ft.Text("🕹️ Click a cell (or use the arrow keys) and type a digit. Backspace/Delete erases. Typing with nothing selected fills the first empty cell.", size=16, text_align=ft.TextAlign.CENTER),
                ft.Text("❌ A digit that does not match the answer turns red and counts as one error until you fix or erase it.", size=16, text_align=ft.TextAlign.CENTER),
                ft.Text(f"📊 Levels: {levels}", size=16, text_align=ft.TextAlign.CENTER),
                ft.ElevatedButton("▶ Play", on_click=lambda _: page.go("/game/sudoku"), width=250, height=50),
                ft.ElevatedButton("🏠 Back to main menu", on_click=go_home, width=200, height=40),
            ],
            vertical_alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=15,
            scroll=ft.ScrollMode.AUTO,
            padding=20
        )

    def view_game_page():
        return ft.View(
            "/game/sudoku",
            sudoku_game_entry(page, go_home),
            scroll=ft.ScrollMode.ADAPTIVE,
            vertical_alignment=ft.MainAxisAlignment.START,
            padding=10
        )

    def route_change(e: ft.RouteChangeEvent):
        target_route = e.route
        if page.views and len(page.views) == 1 and page.views[0].route == target_route:
            print(f"--- ROUTE CHANGE (OPTIMIZED) --- Target: {target_route} is current top. Skipping rebuild.")
            if page.client_storage: page.update()
            return

        print(f"--- ROUTE CHANGE START --- Target: {target_route}")
        page.views.clear()

        if target_route == "/rules/sudoku":
            page.views.append(view_rules_page())
        elif target_route == "/game/sudoku":
            page.views.append(view_game_page())
        else:
            if target_route not in ("/", ""):
                print(f"Unknown route {target_route}. Showing home page.")
            page.views.append(view_home_page())

        if page.client_storage:
            page.update()
        print(f"--- ROUTE CHANGE END --- New Top: {page.views[-1].route}")

    def view_pop(e: ft.ViewPopEvent):
        # Single-view stack: back always leads home
        go_home()

    page.on_route_change = route_change
    page.on_view_pop = view_pop
    page.go(page.route if page.route else "/")


def run():
    ft.app(
        target=main,
        assets_dir="assets",
        port=int(os.environ.get("PORT", 8550)),
        view=ft.AppView.WEB_BROWSER if os.environ.get("SUDOKU_WEB") else ft.AppView.FLET_APP,
    )


if __name__ == "__main__":
    run()

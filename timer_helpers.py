# timer_helpers.py
import threading


def format_elapsed(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


def start_tick_timer(on_tick, stop_event: threading.Event, interval: float = 1.0):
    """
    Call on_tick() once per interval on a daemon thread until stop_event is
    set or on_tick() returns False.
    """
    def timer_logic():
        while not stop_event.wait(timeout=interval):
            if on_tick() is False:
                break
        print("Sudoku timer stopped.")

    thread = threading.Thread(target=timer_logic, daemon=True)
    thread.start()
    print("Sudoku timer started.")
    return thread

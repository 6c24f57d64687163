"""
Interactive terminal front end for conduit.
Place pipes from the queue with the keyboard while the water advances.
"""

import logging
import queue
import random
import sys
import threading
import time

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render, render_queue
from flow import Flow
from game import Game
from grid_parser import parse_layout
from leaderboard import Leaderboard
from pipe_types import Direction, GameStatus, Position
from sound import SoundConfig, SoundSystem

FRAME_SECONDS = 1 / 20

CURSOR_KEYS: dict[str, Direction] = {
    "w": Direction.TOP,
    "s": Direction.BOTTOM,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    readchar.key.UP: Direction.TOP,
    readchar.key.DOWN: Direction.BOTTOM,
    readchar.key.LEFT: Direction.LEFT,
    readchar.key.RIGHT: Direction.RIGHT,
}


class InteractiveDemo:
    """Frame loop driving one Game from keyboard input."""

    def __init__(
        self,
        level: int = 0,
        player: str = "Plumber",
        leaderboard: Leaderboard | None = None,
        sound: SoundSystem | None = None,
    ) -> None:
        self.level = level
        self.player = player
        self.leaderboard = leaderboard or Leaderboard()
        self.console = Console()
        self.sound = sound or SoundSystem(SoundConfig(), console=self.console)
        self.game = Game(rng=random.Random(level), on_sound=self.sound.play)
        self.cursor = Position(1, self.game.grid.entry_position.y)
        self.status_message = "Ready"
        self.recorded = False
        self._keys: "queue.Queue[str]" = queue.Queue()

    def generate_display(self) -> Panel:
        """Generate the current display with HUD, queue and grid."""
        state = self.game.get_state()

        status = Text()
        status.append("Status: ", style="bold")
        status.append(f"{state.status.value}{' (paused)' if state.paused else ''}\n")
        status.append("Score: ", style="bold")
        status.append(f"{state.score}   ")
        status.append("Length: ", style="bold")
        status.append(f"{state.length}/{self.game.rules.min_length}   ")
        status.append("Discards: ", style="bold")
        status.append(f"{state.discards}\n")
        if state.status is GameStatus.WAITING:
            status.append(f"Water in {state.countdown:.1f}s\n", style="bold yellow")
        else:
            status.append(f"Time: {state.elapsed_time:.1f}s   Tick: {state.flow_timer:.2f}s\n")

        status.append("\nNext: ", style="bold")
        status.append(Text.from_ansi(render_queue(self.game.get_queue())))
        status.append("\n\n")
        status.append(Text.from_ansi(render(self.game.grid, self.game.flow, self.cursor)))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  WASD/arrows - Move cursor    Space - Place pipe\n")
        status.append("  X - Discard   P - Pause   M - Sound on/off\n")
        status.append("  R - Restart   Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        border = {
            GameStatus.WON: "green",
            GameStatus.FLOODED: "red",
        }.get(state.status, "blue")
        return Panel(status, title=f"Conduit - Level {self.level}", border_style=border, width=60)

    def move_cursor(self, direction: Direction) -> None:
        moved = self.cursor.step(direction)
        if self.game.grid.in_bounds(moved.x, moved.y):
            self.cursor = moved

    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the player quits."""
        lowered = key.lower()
        if lowered == "q":
            self.status_message = "Quitting..."
            return False

        if key in CURSOR_KEYS or lowered in CURSOR_KEYS:
            self.move_cursor(CURSOR_KEYS.get(key) or CURSOR_KEYS[lowered])
        elif key == " ":
            if self.game.place_pipe(self.cursor.x, self.cursor.y):
                self.status_message = f"✓ Placed pipe at ({self.cursor.x}, {self.cursor.y})"
            else:
                self.status_message = f"✗ Cannot place at ({self.cursor.x}, {self.cursor.y})"
        elif lowered == "x":
            if self.game.discard():
                self.status_message = f"Discarded, {self.game.get_discards_remaining()} left"
            else:
                self.status_message = "✗ No discards left"
        elif lowered == "p":
            if self.game.toggle_pause():
                self.status_message = "Paused" if self.game.get_state().paused else "Resumed"
        elif lowered == "m":
            self.status_message = f"Sound {'on' if self.sound.toggle() else 'off'}"
        elif lowered == "r":
            self.game.restart()
            self.recorded = False
            self.status_message = "Restarted"
        else:
            self.status_message = f"Unknown key: {repr(key)}"
        return True

    def record_result(self) -> None:
        """Save a won run to the leaderboard once."""
        status = self.game.get_status()
        if self.recorded or status not in (GameStatus.WON, GameStatus.FLOODED):
            return
        self.recorded = True

        if status is GameStatus.FLOODED:
            self.status_message = f"Flooded after {self.game.get_length()} segments. R to retry"
            return

        rank = self.leaderboard.record_score(
            self.level, self.player, self.game.get_score(), self.game.get_pipes_placed()
        )
        self.status_message = f"Level complete! Score {self.game.get_score()}" + (
            f", leaderboard rank {rank}" if rank is not None else ""
        )

    def _read_keys(self) -> None:
        # Only feeds the queue; all game mutation happens on the frame loop
        while True:
            self._keys.put(readchar.readkey())

    def run(self) -> None:
        """Run the frame loop until the player quits."""
        threading.Thread(target=self._read_keys, daemon=True).start()
        last = time.monotonic()

        with Live(self.generate_display(), console=self.console, refresh_per_second=20) as live:
            try:
                running = True
                while running:
                    while running and not self._keys.empty():
                        running = self.handle_key(self._keys.get_nowait())

                    now = time.monotonic()
                    self.game.update(now - last)
                    last = now
                    self.record_result()

                    live.update(self.generate_display())
                    time.sleep(FRAME_SECONDS)

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    loop="""
        ______
        >─┐___
        _┌┼┐__
        _└┼┘__
        __│___
        __└───
    """,
    snake="""
        >──┐___
        ┌──┘___
        └──────
    """,
)


def show_layout(name: str) -> None:
    """Flow water through a fixed layout until it floods, then print it."""
    grid = parse_layout(LAYOUTS[name])
    flow = Flow(grid)
    flow.start()
    while flow.advance():
        pass

    print(render(grid, flow))
    print()
    print(f"{flow.get_segments()} segments, stopped: {flow.flood_reason.value if flow.flood_reason else '-'}")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] in LAYOUTS:
        # Scripted run, no keyboard
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
        show_layout(sys.argv[1])
    else:
        level = int(sys.argv[1]) if len(sys.argv) > 1 else 0
        InteractiveDemo(level=level, leaderboard=Leaderboard("conduit_leaderboard.json")).run()

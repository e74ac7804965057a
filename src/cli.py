"""Command-line screen loop for the to-do list.

Each cycle clears the terminal, draws the screen's latest frame, reads one
line and turns it into an input event on the screen. Nothing is saved.
"""
import logging
from typing import Optional
from view import TodoScreen

logger = logging.getLogger(__name__)

# --- terminal control helpers ---
# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home)
# Order (3J first) improves reliability in some terminals.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


def _rest(line: str) -> str:
    """Text after the command word, inner spacing preserved."""
    parts = line.split(None, 1)
    return parts[1] if len(parts) > 1 else ''


class CLI:
    def __init__(self, screen: TodoScreen, alt_screen: bool):
        self.screen: TodoScreen = screen
        # env lookup for the alt screen lives on the --alt-screen option in main
        self.alt_screen: bool = alt_screen
        self.message: Optional[str] = None

    def run(self) -> None:
        """Main REPL loop; the frame is cleared and redrawn each cycle.

        Uses the terminal's alternate screen (if enabled) so earlier frames
        do not remain in scrollback history.
        """
        exit_message: Optional[str] = None
        logger.info("Screen loop started (alt_screen=%s).", self.alt_screen)
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.screen.draw()
                if self.message:
                    print(f"\n{self.message}")
                    self.message = None
                line = input("\n: ")
                stripped = line.strip()
                if not stripped:
                    continue
                lower = stripped.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the list...")
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                self.handle_command(line)
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            self.screen.close()
            if exit_message:
                print(exit_message)
            logger.info("Screen loop finished.")

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        cmd = tokens[0].lower()
        if cmd == 'type':
            self.screen.type_text(_rest(line))
        elif cmd == 'add':
            self._cmd_add(line)
        elif cmd in ('tap', 'rm'):
            self._cmd_tap(tokens)
        elif cmd == 'search':
            self.screen.type_search(_rest(line))
        else:
            logger.debug("Unknown command %r", cmd)
            self.message = "Unknown command. Type 'help' for instructions."

    def _cmd_add(self, line: str) -> None:
        # no empty-title guard: a blank field makes a blank task
        if len(line.split()) > 1:  # inline shorthand
            self.screen.type_text(_rest(line))
        self.screen.press_add()

    def _cmd_tap(self, tokens: list) -> None:
        if len(tokens) != 2:
            self.message = f"Usage: {tokens[0].lower()} <row>"
            return
        raw = tokens[1].rstrip('.')
        if not raw.isdecimal():
            self.message = "Invalid row."
            return
        self.message = self.screen.tap(int(raw))

    def _help(self) -> None:
        print("Commands:")
        print("  type <text...>      Set the task field (bare 'type' clears it)")
        print("  add                 Press Add: create a task from the field")
        print("  add <text...>       Shorthand: fill the field and press Add")
        print("  tap <row>           Remove the task on that row (alias: rm)")
        print("  search <text...>    Set the search field")
        print("  help                Show this help (press Enter to return)")
        print("  exit                Quit (tasks are not kept)")

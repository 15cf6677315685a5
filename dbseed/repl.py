"""
REPL - Interactive selection shell

Provides an interactive prompt with:
- Selection parsing, one command line per entry
- Meta-commands (\\h, \\q)
- Error handling that keeps the session alive
"""

from typing import Callable, List, Optional

from loguru import logger

from .parser import ParseError, SelectionArgs
from .selection import Selection, parse_stream
from .sanitize import SanitizeConfig


def format_selection(selection: Selection) -> str:
    """Render one selection as 'table: selector, selector'"""
    if not selection.selectors:
        return f"{selection.table}: (all rows)"
    return f"{selection.table}: " + ", ".join(repr(s) for s in selection.selectors)


class REPL:
    """Interactive shell for selection commands"""

    PROMPT = "seed> "

    def __init__(self, config: Optional[SanitizeConfig] = None,
                 read: Optional[Callable[[str], str]] = None,
                 write: Optional[Callable[[str], None]] = None):
        self.config = config or SanitizeConfig()
        self.read = read or input
        self.write = write or print
        self.running = False
        self.selections: List[Selection] = []

    def start(self) -> List[Selection]:
        """Main command loop. Returns every selection accepted."""
        self.running = True

        self.write("Type selections, e.g.: org 123 / deduction latest 1000")
        self.write("  \\h  - Help")
        self.write("  \\q  - Quit")

        while self.running:
            try:
                line = self.read(self.PROMPT).strip()
            except EOFError:
                self.write("")
                break
            except KeyboardInterrupt:
                self.write("\nUse \\q to quit")
                continue

            if not line:
                continue

            if line.startswith('\\'):
                self._handle_meta_command(line)
            else:
                self._handle_selection(line)

        return self.selections

    def _handle_meta_command(self, command: str):
        if command == '\\q':
            self.running = False
        elif command == '\\h':
            self.write("Grammar: TABLE selector[, selector...] [/ TABLE ...]")
            self.write("Selectors: <id> | rand N | latest N | limit N | sort COLUMN [desc]")
        else:
            self.write(f"Unknown command: {command}")

    def _handle_selection(self, line: str):
        try:
            args = SelectionArgs.from_shell(line)
            selections = parse_stream(args.token_stream())
        except ParseError as e:
            self.write(f"Error: {e}")
            return
        except ValueError as e:
            # Unbalanced quotes from shlex
            self.write(f"Error: {e}")
            return

        for selection in selections:
            selection.table = self.config.resolve_table(selection.table)
            self.write(format_selection(selection))
        logger.debug("accepted {} selections", len(selections))
        self.selections.extend(selections)

"""
Display sinks: where console output ends up.

The console core only ever talks to a ``DisplaySink``. ``RichDisplaySink``
is the terminal implementation used by the REPL and headless hosts; it keeps
a plain-text transcript for ``dump`` and renders each line through Rich.
"""

import os
from typing import List, Optional, Protocol

from rich.console import Console

# Style of the echoed input line that precedes a command's output.
ECHO_STYLE = "#999999"
ERROR_STYLE = "bold red"
STATUS_STYLE = "dim cyan"


console = Console()


def clear_terminal() -> None:
    """Clear the terminal screen."""
    os.system("cls" if os.name == "nt" else "clear")


class DisplaySink(Protocol):
    """Destination for console output, owned by the host."""

    def print(self, text: str, style: str = "") -> None:
        pass

    def clear(self) -> None:
        pass

    def get_current_content(self) -> str:
        pass


class RichDisplaySink:
    """Records a transcript and renders it to a Rich console."""

    def __init__(self, output: Optional[Console] = None, clear_screen: bool = True) -> None:
        self._output = output
        self._clear_screen = clear_screen
        self._lines: List[str] = []

    @property
    def output(self) -> Console:
        # Looked up lazily so a patched module-level console is honoured.
        return self._output or console

    def print(self, text: str, style: str = "") -> None:
        self._lines.append(text)
        self.output.print(text, style=style or None, markup=False, highlight=False)

    def clear(self) -> None:
        self._lines.clear()
        if self._clear_screen:
            clear_terminal()

    def get_current_content(self) -> str:
        return "".join(f"{line}\n" for line in self._lines)


class MemoryDisplaySink:
    """Sink that only keeps the transcript; used when nothing is rendered."""

    def __init__(self) -> None:
        self.lines: List[str] = []
        self.styles: List[str] = []
        self.clear_count = 0

    def print(self, text: str, style: str = "") -> None:
        self.lines.append(text)
        self.styles.append(style)

    def clear(self) -> None:
        self.lines.clear()
        self.styles.clear()
        self.clear_count += 1

    def get_current_content(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

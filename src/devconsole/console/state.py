"""
Console visibility state (replaces the global "open" flag on the console).
"""


class ConsoleState:
    """Holds whether the console is currently open."""

    def __init__(self) -> None:
        self.open: bool = False

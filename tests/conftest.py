from pathlib import Path
from typing import List

import pytest

from devconsole.console.commands import ConsoleCommand
from devconsole.console.dispatcher import CommandConsole
from devconsole.console.rendering import MemoryDisplaySink
from devconsole.runtime_config import RuntimeConfig


@pytest.fixture(autouse=True)
def isolated_dirs(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Keep logs, history and config out of the real home directory."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for key in (
        "DEVCONSOLE_DUMP_DIR",
        "DEVCONSOLE_TOGGLE_KEY",
        "DEVCONSOLE_LOG_LEVEL",
        "DEVCONSOLE_PLUGINS",
    ):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


@pytest.fixture
def sink() -> MemoryDisplaySink:
    return MemoryDisplaySink()


@pytest.fixture
def console(sink: MemoryDisplaySink, tmp_path: Path) -> CommandConsole:
    """Console with the built-in commands, dumping into tmp_path."""
    return CommandConsole(sink=sink, dump_dir=tmp_path)


class RecordingCommand(ConsoleCommand):
    """Command that records the parameters it was called with."""

    names = ("Record", "rec")
    help_text = "Records its parameters."

    def __init__(self) -> None:
        self.calls: List[List[str]] = []

    def execute(self, console: CommandConsole, parameters: List[str]) -> None:
        self.calls.append(parameters)


class FailingCommand(ConsoleCommand):
    names = ("explode",)
    help_text = "Always fails."

    def execute(self, console: CommandConsole, parameters: List[str]) -> None:
        raise RuntimeError("boom")


class MockConsole:
    """Mock console host for testing."""

    def __init__(self, config: RuntimeConfig):
        self.config = config
        self.run_called = False

    async def run(self) -> None:
        self.run_called = True

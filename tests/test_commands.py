from datetime import datetime
from pathlib import Path

import pytest

import devconsole.console.commands as commands_module
from devconsole.console.commands import (
    ClearCommand,
    DumpCommand,
    EchoCommand,
    HelpCommand,
    default_dump_filename,
)
from devconsole.console.dispatcher import CommandConsole
from devconsole.console.rendering import ERROR_STYLE, MemoryDisplaySink


def test_echo_joins_parameters(console: CommandConsole, sink: MemoryDisplaySink) -> None:
    EchoCommand().execute(console, ["hi", "there"])
    assert sink.lines == ["hi there"]


def test_echo_without_parameters_prints_blank(
    console: CommandConsole, sink: MemoryDisplaySink
) -> None:
    EchoCommand().execute(console, [])
    assert sink.lines == [""]


def test_help_lists_every_command_once_in_order(
    console: CommandConsole, sink: MemoryDisplaySink
) -> None:
    HelpCommand().execute(console, [])
    assert sink.lines == [
        'echo --> Takes input and "echoes" it back to the console.',
        "h, help --> Provides help, info, documentation, etc. about the given command.",
        "c, cls, clr, clear --> Clears the console of all text.",
        f"dump --> {DumpCommand.help_text}",
    ]


def test_help_for_single_command(console: CommandConsole, sink: MemoryDisplaySink) -> None:
    HelpCommand().execute(console, ["CLS"])
    assert sink.lines == ["Clears the console of all text."]


def test_help_for_unknown_command(console: CommandConsole, sink: MemoryDisplaySink) -> None:
    HelpCommand().execute(console, ["Nope"])
    assert sink.lines == ['Command "Nope" does not exist.']
    assert sink.styles == [ERROR_STYLE]


def test_clear_empties_sink(console: CommandConsole, sink: MemoryDisplaySink) -> None:
    console.print("something")
    ClearCommand().execute(console, [])
    assert sink.lines == []
    assert sink.clear_count == 1
    assert console.get_current_content() == ""


def test_default_dump_filename_format() -> None:
    name = default_dump_filename(datetime(2024, 3, 7, 18, 5, 9))
    # year-day-month--hour-minute-second
    assert name == "consoledump_2024-07-03--18-05-09.txt"


def test_dump_without_argument_writes_current_content(
    console: CommandConsole, sink: MemoryDisplaySink, tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        commands_module, "default_dump_filename", lambda: "consoledump_fixed.txt"
    )
    console.print("first line")
    console.clear()
    console.print("second line")
    console.print("")
    expected = console.get_current_content()

    DumpCommand().execute(console, [])

    dumped = tmp_path / "consoledump_fixed.txt"
    assert dumped.read_text(encoding="utf-8") == expected
    assert expected == "second line\n\n"
    assert sink.lines[-1] == f'Console content dumped to "{dumped}".'


def test_dump_default_name_uses_timestamp(console: CommandConsole, tmp_path: Path) -> None:
    DumpCommand().execute(console, [])
    dumps = list(tmp_path.glob("consoledump_*.txt"))
    assert len(dumps) == 1


def test_dump_with_filename(console: CommandConsole, tmp_path: Path) -> None:
    console.print("héllo")
    DumpCommand().execute(console, ["notes/out.txt"])
    assert (tmp_path / "notes" / "out.txt").read_text(encoding="utf-8") == "héllo\n"


def test_dump_filename_after_double_space(console: CommandConsole, tmp_path: Path) -> None:
    console.handle_input("dump  notes.txt")
    assert (tmp_path / "notes.txt").read_text(encoding="utf-8") == "dump  notes.txt\n"
    assert not list(tmp_path.glob("consoledump_*.txt"))


def test_dump_failure_is_reported_not_raised(
    console: CommandConsole, sink: MemoryDisplaySink, tmp_path: Path
) -> None:
    (tmp_path / "taken").mkdir()
    DumpCommand().execute(console, ["taken"])
    assert sink.lines[-1].startswith("Failed to dump console content:")
    assert sink.styles[-1] == ERROR_STYLE

import logging
from typing import Any, Generator, List, Optional

from prompt_toolkit.application import run_in_terminal
from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import HTML, FormattedText, to_formatted_text
from prompt_toolkit.history import FileHistory
from prompt_toolkit.shortcuts import PromptSession
from prompt_toolkit.styles import Style
from rich.panel import Panel

from devconsole.console.dispatcher import create_command_console
from devconsole.console.key_bindings import get_key_bindings
from devconsole.console.registry import CommandRegistry
from devconsole.console.rendering import STATUS_STYLE, RichDisplaySink, console
from devconsole.runtime_config import RuntimeConfig, get_data_dir

logger = logging.getLogger(__name__)

EXIT_WORDS = ("exit", "quit")


class CommandCompletionHandler:
    """Completion and suggestion of command names typed at the prompt."""

    style: Style = Style.from_dict(
        {
            "completion-menu": "noinherit",
            "completion-menu.completion": "noinherit",
            "completion-menu.scrollbar": "noinherit",
            "completion-menu.completion.current": "noinherit bold",
            "scrollbar": "noinherit",
            "scrollbar.background": "noinherit",
            "scrollbar.button": "noinherit",
            "bottom-toolbar": "noreverse",
        }
    )

    def __init__(self, registry: CommandRegistry) -> None:
        self._registry = registry

    def _names(self) -> List[str]:
        return [
            name
            for command in self._registry.all_commands()
            for name in command.get_names()
            if name
        ]

    @property
    def completer(self) -> Completer:
        handler = self

        class _CommandCompleter(Completer):
            def get_completions(
                self, document: Document, complete_event: CompleteEvent
            ) -> Generator[Completion, None, None]:
                text = document.text_before_cursor
                if document.cursor_position_row != 0 or " " in text:
                    return
                for command in handler._registry.all_commands():
                    for name in command.get_names():
                        if name and name.lower().startswith(text.lower()):
                            display = f"{name:<20} {command.get_help()}"
                            yield Completion(
                                name, start_position=-len(text), display=display
                            )

        return _CommandCompleter()

    @property
    def auto_suggest(self) -> AutoSuggest:
        handler = self

        class _CommandAutoSuggest(AutoSuggest):
            def get_suggestion(
                self, buffer: Buffer, document: Document
            ) -> Optional[Suggestion]:
                text = document.text
                if not text or " " in text:
                    return None
                for name in handler._names():
                    if (
                        name.lower().startswith(text.lower())
                        and name.lower() != text.lower()
                    ):
                        return Suggestion(name[len(text) :])
                return None

        return _CommandAutoSuggest()


class ReplConsole:
    """Console host that reads commands interactively from the terminal."""

    config: RuntimeConfig
    prompt_session: Optional[PromptSession[str]]

    def __init__(self, config: RuntimeConfig) -> None:
        self.config = config
        self.prompt_session = None
        self.sink = RichDisplaySink()
        self.command_console = create_command_console(
            config, self.sink, on_show=self._on_show, on_hide=self._on_hide
        )
        self._completion_handler = CommandCompletionHandler(
            self.command_console.registry
        )

    def prompt_fragments(self) -> FormattedText:
        """Return the prompt, flagging when the console is hidden."""
        if self.command_console.is_open:
            return to_formatted_text("\n› ")

        formatted_text = HTML(
            "<ansigray>console hidden (<b>{}</b> to show)</ansigray>\n›"
        ).format(self.config.toggle_key)
        return to_formatted_text(formatted_text)

    def _on_show(self) -> None:
        self._print_to_terminal("Console opened.", STATUS_STYLE)

    def _on_hide(self) -> None:
        self._print_to_terminal("Console hidden, input is ignored.", STATUS_STYLE)

    def _print_to_terminal(self, message: str, style: str = "") -> None:
        """Helper method to print messages to terminal with optional styling."""
        run_in_terminal(
            lambda: console.print(message, style=style or None, markup=False)
        )

    def submit(self, user_input: str) -> None:
        """Forward submitted text to the console, only while it is open."""
        if not self.command_console.is_open:
            logger.debug("Ignoring input while console is hidden: %r", user_input)
            self._print_to_terminal(
                f"Console is hidden, press {self.config.toggle_key} to show it.", "dim"
            )
            return
        self.command_console.handle_input(user_input)

    def create_prompt_session(self, **kwargs: Any) -> "PromptSession[str]":
        """Build the prompt session; extra keyword arguments go to PromptSession.

        Enter submits the text as typed. A completion is only applied when
        the user selected it with tab or the arrow keys.
        """
        return PromptSession(
            message=self.prompt_fragments,
            completer=self._completion_handler.completer,
            auto_suggest=self._completion_handler.auto_suggest,
            style=self._completion_handler.style,
            complete_while_typing=True,
            key_bindings=get_key_bindings(self.command_console, self.config.toggle_key),
            **kwargs,
        )

    async def run(self) -> None:
        """Interactive REPL loop for the console interface."""
        console.print(
            Panel(
                f"[bold cyan]╭─ DEVELOPER CONSOLE ─╮[/bold cyan]\n\n"
                f"[dim]Commands:[/dim] [dim cyan]{len(self.command_console.registry)}[/dim cyan]\n"
                f"[dim]Toggle key:[/dim] [dim cyan]{self.config.toggle_key}[/dim cyan]\n"
                f"[dim]Dump directory:[/dim] [dim cyan]{self.config.dump_dir}[/dim cyan]",
                expand=False,
            )
        )

        # Store command history under the XDG data directory
        history_dir = get_data_dir()
        history_dir.mkdir(parents=True, exist_ok=True)
        history_path = history_dir / "console_history"

        self.prompt_session = self.create_prompt_session(
            history=FileHistory(str(history_path))
        )

        if self.config.start_open:
            self.command_console.show()

        try:
            while True:
                user_input = await self.prompt_session.prompt_async()
                if user_input.strip().lower() in EXIT_WORDS:
                    break
                self.submit(user_input)
        except (KeyboardInterrupt, EOFError):
            pass
        logger.info("Console session ended")

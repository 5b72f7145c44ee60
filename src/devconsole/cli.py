import asyncio
import logging
import os
from pathlib import Path
from typing import Callable, List, Optional

import typer
from prompt_toolkit.key_binding import KeyBindings
from typing_extensions import Annotated

from devconsole.console.commands import DEFAULT_COMMANDS
from devconsole.console.console import (
    ConsoleInterface,
    HeadlessConsole,
    ReplConsole,
    read_command_lines,
)
from devconsole.console.plugins import load_plugin_commands
from devconsole.console.registry import CommandRegistry
from devconsole.logger import setup_logging
from devconsole.runtime_config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_TOGGLE_KEY,
    DUMP_DIR_ENV,
    LOG_LEVEL_ENV,
    PLUGINS_ENV,
    TOGGLE_KEY_ENV,
    RuntimeConfig,
    load_envs,
    parse_plugin_list,
)

# Global factory function - set by create_app()
_console_factory: Optional[Callable[[RuntimeConfig], ConsoleInterface]] = None

PluginOption = Annotated[
    Optional[List[str]],
    typer.Option(
        "--plugin",
        help=(
            "Module to load extra commands from, as 'package.module' (reads COMMANDS) "
            f"or 'package.module:ATTR'. Repeatable; defaults to ${PLUGINS_ENV}"
        ),
    ),
]


def default_console_factory(config: RuntimeConfig) -> ConsoleInterface:
    """Default factory for creating console hosts."""
    if config.headless:
        return HeadlessConsole(config)
    else:
        return ReplConsole(config)


def _resolve_plugins(plugin: Optional[List[str]]) -> List[str]:
    if plugin:
        return list(plugin)
    return list(parse_plugin_list(os.environ.get(PLUGINS_ENV)))


def _check_toggle_key(toggle_key: str) -> None:
    try:
        KeyBindings().add(toggle_key)
    except ValueError as e:
        typer.echo(f"Error: invalid toggle key {toggle_key!r}: {e}", err=True)
        raise typer.Exit(code=1)


def _check_log_level(log_level: str) -> None:
    if not isinstance(logging.getLevelName(log_level.upper()), int):
        typer.echo(f"Error: unknown log level {log_level!r}", err=True)
        raise typer.Exit(code=1)


def list_commands(plugin: PluginOption = None) -> None:
    """List the available console commands."""
    factories = [*DEFAULT_COMMANDS, *load_plugin_commands(_resolve_plugins(plugin))]
    for command in CommandRegistry.from_factories(factories):
        typer.echo(f"{', '.join(command.get_names())} --> {command.get_help()}")


def main(
    ctx: typer.Context,
    command: Annotated[
        Optional[List[str]],
        typer.Option(
            "--command",
            "-c",
            help="Input line to run without the interactive prompt; repeatable, use '-' to read lines from stdin",
        ),
    ] = None,
    plugin: PluginOption = None,
    dump_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--dump-dir",
            envvar=DUMP_DIR_ENV,
            help="Directory the dump command writes into (default: current directory)",
        ),
    ] = None,
    toggle_key: Annotated[
        str,
        typer.Option("--toggle-key", envvar=TOGGLE_KEY_ENV, help="Key that shows/hides the console"),
    ] = DEFAULT_TOGGLE_KEY,
    hidden: Annotated[
        bool,
        typer.Option("--hidden", help="Start with the console hidden"),
    ] = False,
    log_level: Annotated[
        str,
        typer.Option("--log-level", envvar=LOG_LEVEL_ENV, help="Log file level"),
    ] = DEFAULT_LOG_LEVEL,
) -> None:
    """DEVELOPER CONSOLE - starts an interactive command console"""
    # Subcommands do their own thing
    if ctx.invoked_subcommand is not None:
        return

    _check_toggle_key(toggle_key)
    _check_log_level(log_level)
    log_file = setup_logging(log_level)
    logger = logging.getLogger(__name__)

    cfg = RuntimeConfig(
        dump_dir=dump_dir or Path.cwd(),
        toggle_key=toggle_key,
        start_open=not hidden,
        plugins=tuple(_resolve_plugins(plugin)),
        log_level=log_level.upper(),
        commands=tuple(read_command_lines(command or [])),
    )

    if cfg.headless:
        logger.info(f"Running {len(cfg.commands)} console command(s) headless")
    else:
        logger.info(f"Starting interactive console, logging to {log_file}")

    try:
        console_fact = _console_factory or default_console_factory
        console = console_fact(cfg)
        asyncio.run(console.run())
    except KeyboardInterrupt:
        print("\nExiting...")


def create_app(
    console_factory: Optional[Callable[[RuntimeConfig], ConsoleInterface]] = None,
) -> typer.Typer:
    """
    Create and configure the Typer application.

    Args:
        console_factory: Factory function to create console hosts

    Returns:
        Typer application
    """
    # Load settings from .env if not already set in the environment
    load_envs()

    # Set global factory function
    global _console_factory
    _console_factory = console_factory

    app = typer.Typer(rich_markup_mode=None)
    app.command("list-commands")(list_commands)
    app.callback(invoke_without_command=True)(main)

    return app


# Create default app instance for the console script entry point
app = create_app()


if __name__ == "__main__":
    app()

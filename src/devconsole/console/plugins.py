"""
Load console commands from plugin modules.

A plugin is a module exposing a list of command factories (command classes
or zero-argument callables). ``"package.module"`` reads ``COMMANDS``;
``"package.module:ATTR"`` reads ``ATTR`` instead.
"""

import importlib
import logging
from typing import Iterable, List

from devconsole.console.commands import CommandFactory
from devconsole.console.errors import PluginLoadError

logger = logging.getLogger(__name__)

DEFAULT_PLUGIN_ATTRIBUTE = "COMMANDS"


def resolve_plugin(spec: str) -> List[CommandFactory]:
    """Import the plugin named by ``spec`` and return its command factories."""
    module_name, _, attribute = spec.partition(":")
    attribute = attribute or DEFAULT_PLUGIN_ATTRIBUTE
    if not module_name:
        raise PluginLoadError(f"invalid plugin reference: {spec!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise PluginLoadError(f"cannot import plugin module {module_name!r}: {e}") from e

    try:
        factories = getattr(module, attribute)
    except AttributeError as e:
        raise PluginLoadError(f"plugin module {module_name!r} has no {attribute!r}") from e

    if callable(factories):
        return [factories]
    try:
        return list(factories)
    except TypeError as e:
        raise PluginLoadError(
            f"{module_name}:{attribute} is not a list of command factories"
        ) from e


def load_plugin_commands(specs: Iterable[str]) -> List[CommandFactory]:
    """
    Collect command factories from every plugin in ``specs``.

    Plugins that fail to load are logged and skipped.
    """
    factories: List[CommandFactory] = []
    for spec in specs:
        try:
            loaded = resolve_plugin(spec)
        except PluginLoadError as e:
            logger.warning("Skipping console plugin %s: %s", spec, e)
            continue
        logger.info("Loaded %d console command(s) from %s", len(loaded), spec)
        factories.extend(loaded)
    return factories

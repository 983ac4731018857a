# src/matcher_shell/core/command_registry.py
import logging
from typing import Any, Callable, Dict, List

from matcher_shell.core.discovery import discover_handlers

logger = logging.getLogger(__name__)

# Exit code a handler returns to ask the interactive loop to stop.
QUIT_SIGNAL = 130

# The central registries, populated by register_all_commands().
CommandRegistry: Dict[str, Callable[[List[str]], int]] = {}
COMMAND_HIERARCHY: Dict[str, Any] = {}
COMMAND_HELP_TEXTS: Dict[str, str] = {}


def register_command(name: str, handler: Callable[[List[str]], int]) -> None:
    """Adds a command and its handler function to the registry."""
    CommandRegistry[name] = handler
    logger.debug("Registered command '%s'", name)


def register_all_commands() -> None:
    """Discovers all handlers, hierarchies and help texts, then registers them."""
    discovered_handlers, discovered_hierarchies, discovered_help_texts = discover_handlers()

    for name, handler in discovered_handlers.items():
        if name not in CommandRegistry:
            register_command(name, handler)

    COMMAND_HIERARCHY.update(discovered_hierarchies)
    COMMAND_HELP_TEXTS.update(discovered_help_texts)

    # Commands without subcommands still need an entry for the completer
    for name in CommandRegistry:
        COMMAND_HIERARCHY.setdefault(name, None)

    logger.debug("Registered %d handlers.", len(CommandRegistry))


def dispatch(name: str, args: List[str]) -> int:
    """Runs a registered command and returns its exit code."""
    handler = CommandRegistry.get(name)
    if handler is None:
        print(f"Unknown command: '{name}'. Type 'help' for a list of commands.")
        return 1
    return handler(args)

from __future__ import annotations

import logging
import shlex
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import NestedCompleter
from prompt_toolkit.history import FileHistory

from matcher_shell.core.command_registry import COMMAND_HIERARCHY, QUIT_SIGNAL, dispatch, register_all_commands
from matcher_shell.core.managers.config_manager import config_manager
from matcher_shell.core.utils.configure_logging import configure_logger
from matcher_shell.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def run_line(line: str) -> int:
    """Splits a command line into a command name and arguments and executes it."""
    try:
        tokens = shlex.split(line, posix=True)
    except ValueError as e:
        print(f"❌ Error: could not parse command line: {e}")
        return 1

    if not tokens:
        return 0

    return dispatch(tokens[0], tokens[1:])


def start_shell() -> None:
    """Starts the interactive REPL (Read-Eval-Print Loop)."""
    history_path = PathUtils.get_shell_history_file()
    session = PromptSession(
        history=FileHistory(str(history_path)),
        completer=NestedCompleter.from_nested_dict(COMMAND_HIERARCHY),
        complete_while_typing=True,
    )
    logger.info("Shell startup; history file at: %s", history_path)

    print("Welcome to Matcher Shell (type 'help' for commands)")
    try:
        while True:
            try:
                line = session.prompt("Matcher>> ").strip()
            except (EOFError, KeyboardInterrupt):
                break

            if not line:
                continue

            if run_line(line) == QUIT_SIGNAL:
                break
    finally:
        print("Bye!")


def main(argv: list[str] | None = None) -> int:
    """
    Entrypoint. With arguments, runs a single command and returns its exit code;
    without arguments, starts the interactive shell.
    """
    configure_logger(
        config_manager.get_nested("debug.level", "WARNING"),
        module_specific_levels=config_manager.get_nested("debug.modules", {}),
    )
    register_all_commands()

    args = sys.argv[1:] if argv is None else argv
    if args:
        return dispatch(args[0], args[1:])

    start_shell()
    return 0


if __name__ == "__main__":
    sys.exit(main())

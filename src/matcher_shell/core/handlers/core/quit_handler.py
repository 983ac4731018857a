# src/matcher_shell/core/handlers/core/quit_handler.py
from typing import List

from matcher_shell.core.command_registry import QUIT_SIGNAL


def handle_quit(_args: List[str]) -> int:
    """Signals the shell to stop."""
    return QUIT_SIGNAL

# src/matcher_shell/core/handlers/core/help_handler.py
from typing import List

from matcher_shell.core.utils.helptext import get_help_text


def handle_help(_args: List[str]) -> int:
    print(get_help_text())
    return 0

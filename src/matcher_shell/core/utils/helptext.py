# src/matcher_shell/core/utils/helptext.py
from matcher_shell.core.command_registry import COMMAND_HELP_TEXTS

HEADER_HELP_TEXT = """
Matcher Shell - Help

Compares XML documents while ignoring the order of attributes and of sibling
elements. Run a single command (`matcher-shell match a.xml b.xml`) or start
the shell without arguments.

---
COMMANDS
---
GENERAL:
  help                Show this help text.
  quit                Exit the shell.
""".strip()


def get_help_text() -> str:
    """Assembles the help text from the header and every discovered command help fragment."""
    full_help_parts = [HEADER_HELP_TEXT]

    for command_name in sorted(COMMAND_HELP_TEXTS.keys()):
        full_help_parts.append(COMMAND_HELP_TEXTS[command_name])

    return "\n\n".join(full_help_parts)

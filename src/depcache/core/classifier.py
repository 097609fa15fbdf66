"""Classification of command text into reads and mutating commands.

The check is a line-based heuristic, not a grammar: a statement is expected to
start its leading verb at the beginning of a line, which keeps multi-line
formatted SQL working. Unusually formatted writes may be missed.
"""

from __future__ import annotations

_MUTATING_PREFIXES = ("insert ", "update ", "delete ", "create ")


def is_mutating_command(text: str | None) -> bool:
    """
    Return True if any line of the command starts with a mutating verb.

    Args:
        text: Raw command text. None, empty and whitespace-only text are reads.

    Returns:
        True for `insert`, `update`, `delete` and `create` commands,
        False otherwise.
    """
    if not text or not text.strip():
        return False

    for line in text.split("\n"):
        if line.strip().lower().startswith(_MUTATING_PREFIXES):
            return True

    return False

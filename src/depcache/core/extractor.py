"""Extraction of candidate resource names from raw command text.

Instead of parsing SQL, the command is tokenized on whitespace and the token
following each structural marker (FROM, JOIN, INTO, UPDATE) is taken as a
candidate resource name. The scan is best-effort and never raises.
"""

from __future__ import annotations

_TABLE_MARKERS = frozenset({"FROM", "JOIN", "INTO", "UPDATE"})
_QUOTE_CHARS = "[]`'\""


def normalize_identifier(token: str) -> str:
    """
    Reduce a raw token to a bare resource name.

    Only one qualifier level is stripped: `schema.table` becomes `table`, and
    deeper names such as `server.schema.table` collapse to their second part
    (`schema`). Brackets, backticks and quotes are removed everywhere.

    Returns:
        The normalized name, or an empty string if nothing is left.
    """
    parts = [p for p in token.split(".") if p]
    if not parts:
        return ""

    name = parts[0] if len(parts) == 1 else parts[1]
    name = name.strip()
    for ch in _QUOTE_CHARS:
        name = name.replace(ch, "")
    return name


def extract_candidate_identifiers(text: str | None) -> set[str]:
    """
    Collect the identifiers that follow table markers in the command text.

    Every token is tested as a marker, including one that is itself the
    candidate of a preceding marker (`FROM JOIN Users` yields both `JOIN` and
    `Users`). A marker in the last position yields nothing.

    Args:
        text: Raw command text.

    Returns:
        Set of normalized candidate names (possibly empty).
    """
    if not text:
        return set()

    tokens = text.split()
    candidates: set[str] = set()

    for i, token in enumerate(tokens):
        if token.upper() not in _TABLE_MARKERS or i + 1 >= len(tokens):
            continue
        name = normalize_identifier(tokens[i + 1])
        if name:
            candidates.add(name)

    return candidates

from __future__ import annotations

from .keywords import SQL_KEYWORDS


def _is_ascii_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def sanitize_name(name: str) -> str:
    """Map an arbitrary event or field name to a bare SQL identifier.

    Keeps ASCII alphanumerics and `_`, prefixes `_` when the result is empty or
    does not start with a letter, and suffixes `_` when it is a keyword.
    Distinct names can map to the same identifier (`a-b` and `ab`); this is
    not detected.
    """
    result = "".join(c for c in name if _is_ascii_alnum(c) or c == "_")
    if not result or not (result[0].isascii() and result[0].isalpha()):
        result = "_" + result
    if result.lower() in SQL_KEYWORDS:
        result += "_"
    return result

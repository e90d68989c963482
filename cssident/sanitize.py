"""Turn substituted templates into valid CSS identifiers."""

from __future__ import annotations

import re

__all__ = ["FALLBACK_IDENT", "is_valid_ident", "sanitize_ident"]

FALLBACK_IDENT = "_"

_INVALID_CHARS_PATTERN = re.compile(r"[^A-Za-z0-9_-]+")
_INVALID_START_PATTERN = re.compile(r"^(?:-?[0-9]|-$)")
_VALID_IDENT_PATTERN = re.compile(r"^(?!-?[0-9])(?!-$)[A-Za-z0-9_-]+$")


def sanitize_ident(value: str) -> str:
    """Return ``value`` rewritten as a legal CSS identifier.

    Each run of characters outside ``[A-Za-z0-9_-]`` collapses to a single
    ``-``. Identifiers that would start with a digit, with ``-`` and a digit,
    or that are a lone ``-`` get a leading ``_``. An empty result becomes
    ``"_"``. Sanitizing an already sanitized identifier returns it unchanged.
    """

    collapsed = _INVALID_CHARS_PATTERN.sub("-", str(value or ""))
    if not collapsed:
        return FALLBACK_IDENT
    if _INVALID_START_PATTERN.match(collapsed):
        return f"_{collapsed}"
    return collapsed


def is_valid_ident(value: str) -> bool:
    return bool(_VALID_IDENT_PATTERN.match(value or ""))

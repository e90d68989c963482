"""Placeholder scanning and substitution for local ident templates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from cssident.errors import UnknownPlaceholderError
from cssident.hashing import compute_hash, parse_hash_spec

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for annotations only
    from cssident.config import Configuration
    from cssident.resolver import IdentContext

__all__ = [
    "Placeholder",
    "PlaceholderKind",
    "render_placeholder",
    "scan_template",
    "substitute_template",
]

# ``[`` letters, any number of ``:param`` parts, ``]``. Params cannot hold
# brackets or colons, so tokens never overlap or nest.
_TOKEN_PATTERN = re.compile(r"\[(?P<keyword>[A-Za-z]+)(?P<params>(?::[^\[\]:]*)*)\]")


class PlaceholderKind(Enum):
    PATH = "path"
    NAME = "name"
    EXT = "ext"
    FOLDER = "folder"
    LOCAL = "local"
    HASH = "hash"
    UNKNOWN = "unknown"

    @classmethod
    def from_keyword(cls, keyword: str, *, has_params: bool) -> "PlaceholderKind":
        if keyword == cls.HASH.value:
            return cls.HASH
        if has_params:
            return cls.UNKNOWN
        for kind in cls:
            if kind is not cls.UNKNOWN and kind.value == keyword:
                return kind
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class Placeholder:
    """A bracketed token found in a template."""

    kind: PlaceholderKind
    raw: str
    start: int
    end: int
    params: tuple[str, ...] = ()


def scan_template(template: str) -> list[Placeholder]:
    """Return the placeholder tokens of ``template`` in left-to-right order."""

    placeholders: list[Placeholder] = []
    for match in _TOKEN_PATTERN.finditer(template):
        raw_params = match.group("params")
        params = tuple(raw_params.split(":")[1:]) if raw_params else ()
        kind = PlaceholderKind.from_keyword(match.group("keyword"), has_params=bool(raw_params))
        placeholders.append(
            Placeholder(
                kind=kind,
                raw=match.group(0),
                start=match.start(),
                end=match.end(),
                params=params,
            )
        )
    return placeholders


def render_placeholder(
    placeholder: Placeholder,
    context: "IdentContext",
    configuration: "Configuration",
) -> str:
    """Compute the replacement text for a single placeholder."""

    kind = placeholder.kind
    if kind is PlaceholderKind.PATH:
        return context.dirname
    if kind is PlaceholderKind.NAME:
        return context.name
    if kind is PlaceholderKind.EXT:
        return context.ext if configuration.ext_with_dot else context.ext_no_dot
    if kind is PlaceholderKind.FOLDER:
        return context.folder
    if kind is PlaceholderKind.LOCAL:
        return context.local_name
    if kind is PlaceholderKind.HASH:
        spec = parse_hash_spec(
            placeholder.params,
            defaults=configuration.default_hash_spec,
            token=placeholder.raw,
        )
        return compute_hash(context.hash_source, spec)
    if kind is PlaceholderKind.UNKNOWN:
        if configuration.strict_unknown_tokens:
            raise UnknownPlaceholderError(placeholder.raw, position=placeholder.start)
        return placeholder.raw
    raise AssertionError(f"Unhandled placeholder kind: {kind!r}")


def substitute_template(
    template: str,
    context: "IdentContext",
    configuration: "Configuration",
) -> str:
    """Replace every placeholder in ``template`` in a single pass.

    Text between tokens, including stray brackets, is copied unchanged. The
    result is not sanitized.
    """

    pieces: list[str] = []
    cursor = 0
    for placeholder in scan_template(template):
        pieces.append(template[cursor : placeholder.start])
        pieces.append(render_placeholder(placeholder, context, configuration))
        cursor = placeholder.end
    pieces.append(template[cursor:])
    return "".join(pieces)

"""Resolve CSS module class names into scoped local idents."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from cssident.config import Configuration, default_configuration
from cssident.errors import ConfigurationError, InvalidInputError
from cssident.hashing import encode_text, hash_source
from cssident.paths import decompose_path
from cssident.placeholders import substitute_template
from cssident.sanitize import sanitize_ident

__all__ = ["IdentContext", "build_context", "resolve_local_ident"]


logger = logging.getLogger(__name__)

Options = Union[Configuration, Mapping[str, Any], None]


@dataclass(frozen=True, slots=True)
class IdentContext:
    """Fields derived once per call and shared by every placeholder."""

    file_path: str
    local_name: str
    dirname: str
    folder: str
    name: str
    ext: str
    ext_no_dot: str
    content: Optional[bytes]
    hash_source: bytes


def _coerce_options(options: Options) -> Configuration:
    if options is None:
        return default_configuration()
    if isinstance(options, Configuration):
        return options
    if isinstance(options, Mapping):
        return Configuration.from_mapping(options)
    raise ConfigurationError(
        f"Options must be a Configuration or a mapping, got {type(options).__name__}."
    )


def build_context(
    resource_path: str,
    local_name: str,
    *,
    content: Union[bytes, str, None] = None,
    configuration: Optional[Configuration] = None,
) -> IdentContext:
    """Validate inputs and derive the fields templates can reference."""

    if not isinstance(local_name, str) or not local_name.strip():
        raise InvalidInputError("Local name must be a non-empty string.")
    if content is not None and not isinstance(content, (bytes, bytearray, str)):
        raise InvalidInputError(
            f"Content must be bytes or str, got {type(content).__name__}."
        )

    configuration = configuration or default_configuration()
    parts = decompose_path(resource_path, root=configuration.root)
    raw_content = encode_text(content, "Content") if isinstance(content, str) else content
    if raw_content is not None:
        raw_content = bytes(raw_content)

    return IdentContext(
        file_path=parts.path,
        local_name=local_name,
        dirname=parts.dirname,
        folder=parts.folder,
        name=parts.name,
        ext=parts.ext,
        ext_no_dot=parts.ext_no_dot,
        content=raw_content,
        hash_source=hash_source(parts.path, local_name, raw_content),
    )


def resolve_local_ident(
    resource_path: str,
    local_name: str,
    template: str,
    options: Options = None,
    *,
    content: Union[bytes, str, None] = None,
) -> str:
    """Return the scoped identifier for ``local_name`` declared in ``resource_path``.

    Args:
        resource_path: Path of the stylesheet, relative or absolute. Backslash
            separators are accepted and normalized.
        local_name: The class name as written in the stylesheet.
        template: Template such as ``"[name]__[local]--[hash:md5:hex:5]"``.
        options: A :class:`Configuration`, a mapping of option names, or
            ``None`` for the defaults.
        content: Optional raw stylesheet source. When given, ``[hash]`` is
            computed from it instead of from the path.

    Raises:
        InvalidInputError: empty path or local name, or a non-string template.
        UnsupportedAlgorithmError: a hash algorithm is not available.
        MalformedHashSpecError: a ``[hash:...]`` token has invalid parameters.
        UnknownPlaceholderError: strict mode found an unrecognized token.
    """

    if not isinstance(template, str):
        raise InvalidInputError(f"Template must be a string, got {type(template).__name__}.")

    configuration = _coerce_options(options)
    context = build_context(
        resource_path,
        local_name,
        content=content,
        configuration=configuration,
    )
    substituted = substitute_template(template, context, configuration)
    ident = sanitize_ident(substituted)
    logger.debug(
        "Resolved %s in %s with %r to %s", local_name, context.file_path, template, ident
    )
    return ident

"""Top-level package for cssident."""

from __future__ import annotations

import logging
from importlib import metadata

from cssident.config import Configuration, default_configuration, load_configuration
from cssident.errors import (
    ConfigurationError,
    InvalidInputError,
    LocalIdentError,
    MalformedHashSpecError,
    UnknownPlaceholderError,
    UnsupportedAlgorithmError,
)
from cssident.resolver import resolve_local_ident

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    __version__: str = metadata.version("cssident")
except metadata.PackageNotFoundError:  # pragma: no cover - runtime fallback during dev
    __version__ = "0.0.0.dev0"

__all__ = [
    "Configuration",
    "ConfigurationError",
    "InvalidInputError",
    "LocalIdentError",
    "MalformedHashSpecError",
    "UnknownPlaceholderError",
    "UnsupportedAlgorithmError",
    "__version__",
    "default_configuration",
    "load_configuration",
    "resolve_local_ident",
]

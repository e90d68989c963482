"""Exceptions raised while resolving local idents."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "ConfigurationError",
    "InvalidInputError",
    "LocalIdentError",
    "MalformedHashSpecError",
    "UnknownPlaceholderError",
    "UnsupportedAlgorithmError",
]


class LocalIdentError(ValueError):
    """Base class for every error surfaced by ``cssident``."""


class InvalidInputError(LocalIdentError):
    """Raised when the resource path, local name or template is unusable."""


class ConfigurationError(LocalIdentError):
    """Raised when configuration values are invalid."""


class UnsupportedAlgorithmError(LocalIdentError):
    """Raised when a hash algorithm is not available."""

    def __init__(self, algorithm: str, *, token: Optional[str] = None) -> None:
        self.algorithm: str = algorithm
        self.token: Optional[str] = token
        where = f" in placeholder {token!r}" if token else ""
        super().__init__(f"Unsupported hash algorithm {algorithm!r}{where}.")


class UnknownPlaceholderError(LocalIdentError):
    """Raised in strict mode when a template contains an unknown placeholder."""

    def __init__(self, token: str, *, position: int) -> None:
        self.token: str = token
        self.position: int = position
        super().__init__(
            f"Unknown placeholder {token!r} at offset {position} in template."
        )


class MalformedHashSpecError(LocalIdentError):
    """Raised when ``[hash:...]`` parameters cannot be parsed."""

    def __init__(self, message: str, *, token: Optional[str] = None) -> None:
        self.token: Optional[str] = token
        if token:
            message = f"{message} (in placeholder {token!r})"
        super().__init__(message)

"""Immutable configuration for local ident resolution."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace as dataclass_replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from cssident.errors import ConfigurationError
from cssident.hashing import (
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_HASH_DIGEST,
    DEFAULT_HASH_DIGEST_LENGTH,
    HashSpec,
    validate_algorithm,
    validate_digest,
    validate_length,
)

__all__ = [
    "Configuration",
    "default_configuration",
    "load_configuration",
]

# Accept both the camelCase names bundler configs use and Python field names.
_KEY_ALIASES: dict[str, str] = {
    "hashAlgorithm": "hash_algorithm",
    "hashDigest": "hash_digest",
    "hashDigestLength": "hash_digest_length",
    "context": "root",
    "strictUnknownTokens": "strict_unknown_tokens",
    "extWithDot": "ext_with_dot",
}
_CONFIG_SECTION = "cssident"


@dataclass(frozen=True, slots=True)
class Configuration:
    """Options shared by every placeholder substitution in a call."""

    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    hash_digest: str = DEFAULT_HASH_DIGEST
    hash_digest_length: Optional[int] = DEFAULT_HASH_DIGEST_LENGTH
    root: Optional[str] = None
    strict_unknown_tokens: bool = False
    ext_with_dot: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "hash_algorithm", validate_algorithm(self.hash_algorithm))
        object.__setattr__(self, "hash_digest", validate_digest(self.hash_digest))
        object.__setattr__(self, "hash_digest_length", validate_length(self.hash_digest_length))
        if self.root is not None:
            if not isinstance(self.root, (str, Path)):
                raise ConfigurationError(f"root must be a path string, got {self.root!r}")
            object.__setattr__(self, "root", str(self.root) or None)
        for flag in ("strict_unknown_tokens", "ext_with_dot"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigurationError(f"{flag} must be a boolean, got {getattr(self, flag)!r}")

    @property
    def default_hash_spec(self) -> HashSpec:
        return HashSpec(
            algorithm=self.hash_algorithm,
            digest=self.hash_digest,
            length=self.hash_digest_length,
        )

    def replace(self, **changes: Any) -> "Configuration":
        """Return a validated copy with ``changes`` applied."""

        return dataclass_replace(self, **changes)

    @classmethod
    def from_mapping(cls, payload: Optional[Mapping[str, Any]]) -> "Configuration":
        """Build a configuration from camelCase or snake_case option names."""

        if payload is None:
            return cls()
        if not isinstance(payload, Mapping):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(payload).__name__}."
            )

        known = {field.name for field in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in payload.items():
            name = _KEY_ALIASES.get(str(key), str(key))
            if name not in known:
                raise ConfigurationError(f"Unknown configuration option {key!r}.")
            if name in values:
                raise ConfigurationError(f"Configuration option {name!r} given more than once.")
            if value is None and name != "root" and name != "hash_digest_length":
                continue
            values[name] = value
        return cls(**values)


def default_configuration() -> Configuration:
    """Return the default configuration."""

    return Configuration()


def load_configuration(path: Union[str, Path]) -> Configuration:
    """Read a YAML configuration file.

    Options may sit at the top level of the document or under a
    ``cssident:`` section.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Unable to parse {config_path}: {exc}") from exc

    if data is None:
        return default_configuration()
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"{config_path} must contain a mapping of options.")
    section = data.get(_CONFIG_SECTION, data)
    if section is None:
        return default_configuration()
    return Configuration.from_mapping(section)

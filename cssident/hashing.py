"""Digest computation for ``[hash...]`` placeholders."""

from __future__ import annotations

import base64
import hashlib
import string
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from cssident.errors import InvalidInputError, MalformedHashSpecError, UnsupportedAlgorithmError

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "DEFAULT_HASH_DIGEST",
    "DEFAULT_HASH_DIGEST_LENGTH",
    "DIGEST_TYPES",
    "SUPPORTED_ALGORITHMS",
    "HashSpec",
    "compute_hash",
    "encode_text",
    "hash_source",
    "parse_hash_spec",
    "validate_algorithm",
    "validate_digest",
    "validate_length",
]

DEFAULT_HASH_ALGORITHM = "md5"
DEFAULT_HASH_DIGEST = "hex"
DEFAULT_HASH_DIGEST_LENGTH = 16

# shake_* digests have no fixed size, so they cannot back a plain [hash].
SUPPORTED_ALGORITHMS: tuple[str, ...] = tuple(
    sorted(name for name in hashlib.algorithms_guaranteed if not name.startswith("shake_"))
)
DIGEST_TYPES: tuple[str, ...] = ("hex", "base64", "base64url", "base32", "base36", "base62")

_BASE62_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
_MAX_HASH_PARAMS = 3


@dataclass(frozen=True, slots=True)
class HashSpec:
    """Algorithm, encoding and truncation for one ``[hash...]`` token."""

    algorithm: str = DEFAULT_HASH_ALGORITHM
    digest: str = DEFAULT_HASH_DIGEST
    length: Optional[int] = DEFAULT_HASH_DIGEST_LENGTH


def validate_algorithm(name: str, *, token: Optional[str] = None) -> str:
    lowered = str(name).strip().lower()
    # Accept "sha-256" and "sha3-256" spellings of "sha256" and "sha3_256".
    for candidate in (lowered, lowered.replace("-", ""), lowered.replace("-", "_")):
        if candidate in SUPPORTED_ALGORITHMS:
            return candidate
    raise UnsupportedAlgorithmError(str(name), token=token)


def validate_digest(name: str, *, token: Optional[str] = None) -> str:
    normalized = str(name).strip().lower()
    if normalized not in DIGEST_TYPES:
        raise MalformedHashSpecError(
            f"Unknown digest encoding {name!r}; expected one of {', '.join(DIGEST_TYPES)}",
            token=token,
        )
    return normalized


def validate_length(value: Union[int, str, None], *, token: Optional[str] = None) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedHashSpecError(f"Invalid digest length {value!r}", token=token)
    if isinstance(value, str):
        text = value.strip()
        if not text.isdigit():
            raise MalformedHashSpecError(f"Invalid digest length {value!r}", token=token)
        value = int(text)
    if not isinstance(value, int) or value <= 0:
        raise MalformedHashSpecError(
            f"Digest length must be a positive integer, got {value!r}", token=token
        )
    return value


def parse_hash_spec(
    params: Sequence[str],
    *,
    defaults: HashSpec = HashSpec(),
    token: Optional[str] = None,
) -> HashSpec:
    """Parse the ``:``-separated parameters of a ``[hash...]`` token.

    Accepted shapes are ``[hash]``, ``[hash:<algo>]``,
    ``[hash:<algo>:<digest>]`` and ``[hash:<algo>:<digest>:<length>]``.
    Empty parts fall back to ``defaults``. A lone numeric parameter such as
    ``[hash:8]`` is read as the length.

    Raises:
        MalformedHashSpecError: too many parameters, a bad digest encoding or
            a length that is not a positive integer.
        UnsupportedAlgorithmError: the algorithm is not available.
    """

    parts = list(params)
    if len(parts) > _MAX_HASH_PARAMS:
        raise MalformedHashSpecError(
            f"Expected at most {_MAX_HASH_PARAMS} hash parameters, got {len(parts)}",
            token=token,
        )

    if len(parts) == 1 and parts[0].strip().isdigit():
        parts = ["", "", parts[0]]
    parts.extend([""] * (_MAX_HASH_PARAMS - len(parts)))
    algorithm_part, digest_part, length_part = parts

    algorithm = (
        validate_algorithm(algorithm_part, token=token)
        if algorithm_part.strip()
        else defaults.algorithm
    )
    digest = validate_digest(digest_part, token=token) if digest_part.strip() else defaults.digest
    length = validate_length(length_part, token=token) if length_part.strip() else defaults.length

    return HashSpec(algorithm=algorithm, digest=digest, length=length)


def hash_source(
    path: str,
    local_name: str,
    content: Union[bytes, str, None] = None,
) -> bytes:
    """Return the bytes hashed for ``[hash]``.

    With ``content`` the resource body is hashed together with the local
    name; without it the normalized path stands in for the body, so the
    result does not depend on reading the file.

    Strings decoded with ``surrogateescape`` (``os.fsdecode`` output, argv on
    POSIX) hash as the bytes they came from.
    """

    if content is None:
        prefix = encode_text(path, "Resource path")
    elif isinstance(content, str):
        prefix = encode_text(content, "Content")
    else:
        prefix = bytes(content)
    return prefix + b"\x00" + encode_text(local_name, "Local name")


def encode_text(value: str, label: str = "Value") -> bytes:
    try:
        return value.encode("utf-8", errors="surrogateescape")
    except UnicodeEncodeError as exc:
        raise InvalidInputError(
            f"{label} contains characters that cannot be encoded as UTF-8: {exc.reason}"
        ) from exc


def compute_hash(data: bytes, spec: HashSpec) -> str:
    """Digest ``data`` and encode it using only identifier-safe characters.

    Every encoding has a fixed width for a given algorithm, so a template
    always yields the same number of characters. A ``length`` longer than
    that width raises ``MalformedHashSpecError``.
    """

    hasher = hashlib.new(spec.algorithm, usedforsecurity=False)
    hasher.update(data)
    raw = hasher.digest()

    if spec.digest == "hex":
        encoded = raw.hex()
    elif spec.digest in ("base64", "base64url"):
        encoded = base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
    elif spec.digest == "base32":
        encoded = base64.b32encode(raw).decode("ascii").rstrip("=").lower()
    elif spec.digest == "base36":
        encoded = _encode_integer(raw, _BASE62_ALPHABET[:36])
    elif spec.digest == "base62":
        encoded = _encode_integer(raw, _BASE62_ALPHABET)
    else:
        raise MalformedHashSpecError(f"Unknown digest encoding {spec.digest!r}")

    if spec.length is not None:
        if spec.length > len(encoded):
            raise MalformedHashSpecError(
                f"Digest length {spec.length} exceeds the {len(encoded)} characters "
                f"a {spec.algorithm} {spec.digest} digest provides"
            )
        encoded = encoded[: spec.length]
    return encoded


def _encode_integer(raw: bytes, alphabet: str) -> str:
    value = int.from_bytes(raw, "big")
    base = len(alphabet)
    # Smallest width that fits any digest of this size; pad to it.
    width = 1
    while base**width < 1 << (8 * len(raw)):
        width += 1
    chars: list[str] = []
    while value:
        value, remainder = divmod(value, base)
        chars.append(alphabet[remainder])
    return "".join(reversed(chars)).rjust(width, alphabet[0])

"""Split resource paths into the pieces templates can reference."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Optional

from cssident.errors import InvalidInputError

__all__ = ["PathParts", "decompose_path", "normalize_path"]


@dataclass(frozen=True, slots=True)
class PathParts:
    """Structural parts of a resource path, always using ``/`` separators."""

    path: str
    dirname: str
    folder: str
    segments: tuple[str, ...]
    name: str
    ext: str

    @property
    def ext_no_dot(self) -> str:
        return self.ext[1:] if self.ext.startswith(".") else self.ext


def normalize_path(file_path: str, *, root: Optional[str] = None) -> str:
    """Return ``file_path`` with forward slashes, relative to ``root`` if given.

    The path is only made relative when it and ``root`` are both absolute or
    both relative; mixing the two leaves the path as given.
    """

    if not isinstance(file_path, str) or not file_path.strip():
        raise InvalidInputError("Resource path must be a non-empty string.")

    normalized = file_path.replace("\\", "/")
    if root:
        base = str(root).replace("\\", "/")
        if posixpath.isabs(base) == posixpath.isabs(normalized):
            normalized = posixpath.relpath(normalized, base)
    return normalized


def decompose_path(file_path: str, *, root: Optional[str] = None) -> PathParts:
    """Break ``file_path`` into directory, folder, name and extension."""

    normalized = normalize_path(file_path, root=root)
    directory, basename = posixpath.split(normalized)
    if not basename or basename in (".", ".."):
        raise InvalidInputError(f"Resource path {file_path!r} does not name a file.")

    # splitext keeps leading dots with the stem, so ".env" has no extension.
    name, ext = posixpath.splitext(basename)

    segments = tuple(part for part in directory.split("/") if part)
    dirname = f"{directory.rstrip('/')}/" if directory else ""
    folder = segments[-1] if segments else ""

    return PathParts(
        path=normalized,
        dirname=dirname,
        folder=folder,
        segments=segments,
        name=name,
        ext=ext,
    )

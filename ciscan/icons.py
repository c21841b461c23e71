"""Icon descriptors with names derived from the icon's project-relative path."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Icon:
    """An icon file and the unique name it is stored under."""

    filename: str
    path: str


def _extension(path: str) -> str:
    name = path.rsplit(os.sep, 1)[-1]
    index = name.rfind(".")
    return name[index:] if index >= 0 else ""


def _relative(path: str, base_path: str) -> str:
    if os.path.isabs(path) != os.path.isabs(base_path):
        raise ValueError(f"can't make {path} relative to {base_path}")
    return os.path.relpath(path, base_path)


def create_icon_descriptors(icon_paths: list[str], base_path: str) -> list[Icon]:
    """Return icons for the unique, sorted paths, named by the hash of their relative path."""
    icons = []
    for icon_path in sorted(set(icon_paths)):
        relative = _relative(icon_path, base_path)
        digest = hashlib.sha256(relative.encode("utf-8")).hexdigest()
        icons.append(Icon(filename=digest + _extension(icon_path), path=icon_path))
    return icons
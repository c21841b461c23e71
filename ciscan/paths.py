"""File listing, path ordering and path filters used by the project scanners."""

from __future__ import annotations

import json
import os
import re
import stat
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

FilterFunc = Callable[[str], bool]


@dataclass
class PackagesModel:
    """The parts of a ``package.json`` file the scanners look at."""

    scripts: dict[str, str] = field(default_factory=dict)
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)


def _string_map(data: dict[str, Any], key: str) -> dict[str, str]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict) or not all(isinstance(v, str) for v in value.values()):
        raise ValueError(f"package.json field {key!r} must be an object of strings")
    return dict(value)


def parse_packages_json_content(content: str) -> PackagesModel:
    """Parse the text of a ``package.json`` file."""
    data = json.loads(content)
    if data is None:
        return PackagesModel()
    if not isinstance(data, dict):
        raise ValueError("package.json content must be a JSON object")
    return PackagesModel(
        scripts=_string_map(data, "scripts"),
        dependencies=_string_map(data, "dependencies"),
        dev_dependencies=_string_map(data, "devDependencies"),
    )


def parse_packages_json(path: str) -> PackagesModel:
    """Read and parse a ``package.json`` file."""
    with open(path, encoding="utf-8") as handle:
        return parse_packages_json_content(handle.read())


def _abs_path(path: str) -> str:
    if not path:
        raise ValueError("no path provided")
    return os.path.abspath(os.path.expanduser(path))


def _base(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip(os.sep)
    if not stripped:
        return os.sep
    return stripped.rsplit(os.sep, 1)[-1]


def _extension(path: str) -> str:
    name = path.rsplit(os.sep, 1)[-1]
    index = name.rfind(".")
    return name[index:] if index >= 0 else ""


def _strip_private(path: str) -> str:
    if path.startswith("/private/var"):
        return path[len("/private"):]
    return path


def rel_path(base_path: str, path: str) -> str:
    """Return ``path`` relative to ``base_path``, ignoring a ``/private`` prefix on ``/var``."""
    absolute_base = _strip_private(_abs_path(base_path))
    absolute_path = _strip_private(_abs_path(path))
    return os.path.relpath(absolute_path, absolute_base)


@dataclass
class SortablePath:
    """A path with its absolute form split into non-empty components."""

    path: str
    abs_path: str
    components: list[str]

    @classmethod
    def from_path(cls, path: str) -> SortablePath:
        abs_path = _abs_path(path)
        components = [part for part in abs_path.split(os.sep) if part]
        return cls(path=path, abs_path=abs_path, components=components)

    @property
    def sort_key(self) -> tuple[int, str]:
        """Depth first, then the last component alphabetically."""
        return len(self.components), _base(self.abs_path)


def sort_paths_by_components(paths: list[str]) -> list[str]:
    """Order paths by depth, then by base name."""
    sortables = [SortablePath.from_path(path) for path in paths]
    return [item.path for item in sorted(sortables, key=lambda item: item.sort_key)]


def _walk(path: str) -> Iterator[str]:
    yield path
    if stat.S_ISDIR(os.lstat(path).st_mode):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.join(path, name))


def list_paths_sorted_by_components(search_dir: str, relative: bool) -> list[str]:
    """List every file and directory under ``search_dir``, including itself, sorted by depth."""
    root = os.path.abspath(search_dir)
    os.lstat(root)
    paths = [os.path.relpath(path, root) if relative else path for path in _walk(root)]
    return sort_paths_by_components(paths)


def filter_paths(paths: list[str], *filters: FilterFunc) -> list[str]:
    """Keep the paths that every filter allows."""
    return [path for path in paths if all(allows(path) for allows in filters)]


def base_filter(base: str, allowed: bool) -> FilterFunc:
    """Match paths whose last element equals ``base``, ignoring case."""
    wanted = base.casefold()

    def check(path: str) -> bool:
        return allowed == (_base(path).casefold() == wanted)

    return check


def extension_filter(ext: str, allowed: bool) -> FilterFunc:
    """Match paths whose extension equals ``ext``, ignoring case."""
    wanted = ext.casefold()

    def check(path: str) -> bool:
        return allowed == (_extension(path).casefold() == wanted)

    return check


def regexp_filter(pattern: str, allowed: bool) -> FilterFunc:
    """Match paths in which ``pattern`` finds a non-empty match."""
    expression = re.compile(pattern)

    def check(path: str) -> bool:
        match = expression.search(path)
        return allowed == bool(match and match.group(0))

    return check


def component_filter(component: str, allowed: bool) -> FilterFunc:
    """Match paths that have ``component`` as one of their elements."""

    def check(path: str) -> bool:
        return allowed == (component in path.split(os.sep))

    return check


def component_with_extension_filter(ext: str, allowed: bool) -> FilterFunc:
    """Match paths with an element whose extension is ``ext``."""

    def check(path: str) -> bool:
        return allowed == any(_extension(part) == ext for part in path.split(os.sep))

    return check


def is_directory_filter(allowed: bool) -> FilterFunc:
    """Match paths that are directories; raises ``OSError`` for missing paths."""

    def check(path: str) -> bool:
        return allowed == stat.S_ISDIR(os.lstat(path).st_mode)

    return check


def in_directory_filter(directory: str, allowed: bool) -> FilterFunc:
    """Match paths whose parent directory is ``directory``."""

    def check(path: str) -> bool:
        return allowed == (os.path.normpath(os.path.dirname(path)) == directory)

    return check


def directory_contains_file(file_name: str) -> FilterFunc:
    """Match directories that contain an entry called ``file_name``."""
    is_directory = is_directory_filter(True)

    def check(path: str) -> bool:
        if not is_directory(path):
            return False
        try:
            os.lstat(os.path.join(path, file_name))
        except FileNotFoundError:
            return False
        return True

    return check


def file_contains(path: str, text: str) -> bool:
    """Report whether the file at ``path`` contains ``text``."""
    with open(path, encoding="utf-8") as handle:
        return text in handle.read()
"""Finding React Native ``package.json`` files and the JS dependency manager in use."""

from __future__ import annotations

import os

from ciscan.paths import (
    base_filter,
    component_filter,
    filter_paths,
    list_paths_sorted_by_components,
    parse_packages_json,
)


def collect_package_json_files(search_dir: str) -> list[str]:
    """Return the ``package.json`` files under ``search_dir`` that depend on react-native.

    Paths are relative to ``search_dir`` and are read relative to the
    current working directory.
    """
    file_list = list_paths_sorted_by_components(search_dir, True)
    package_files = filter_paths(
        file_list,
        base_filter("package.json", True),
        component_filter("node_modules", False),
    )
    return [
        package_file
        for package_file in package_files
        if "react-native" in parse_packages_json(package_file).dependencies
    ]


def contains_yarn_lock(package_json_dir: str) -> bool:
    """Report whether a ``yarn.lock`` file sits in ``package_json_dir``."""
    try:
        os.stat(os.path.join(package_json_dir, "yarn.lock"))
    except FileNotFoundError:
        return False
    except OSError as error:
        raise OSError(f"Failed to check if yarn.lock file exists in the workdir: {error}") from error
    return True
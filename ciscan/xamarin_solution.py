"""Locating Xamarin solution files and reading their solution configurations."""

from __future__ import annotations

from ciscan.paths import component_filter, extension_filter, filter_paths

SOLUTION_EXTENSION = ".sln"
COMPONENTS_DIR_NAME = "Components"
NODE_MODULES_DIR_NAME = "node_modules"

_SOLUTION_CONFIGURATION_START = "GlobalSection(SolutionConfigurationPlatforms) = preSolution"
_SOLUTION_CONFIGURATION_END = "EndGlobalSection"

_SOLUTION_FILTERS = (
    extension_filter(SOLUTION_EXTENSION, True),
    component_filter(COMPONENTS_DIR_NAME, False),
    component_filter(NODE_MODULES_DIR_NAME, False),
)


def filter_solution_files(paths: list[str]) -> list[str]:
    """Keep ``.sln`` files that are not inside ``Components`` or ``node_modules``."""
    return filter_paths(paths, *_SOLUTION_FILTERS)


def get_solution_configs(solution_file: str) -> dict[str, list[str]]:
    """Map each solution configuration to its platforms.

    Raises ``ValueError`` for a line in the configuration section that is not
    a single ``key = value`` pair.
    """
    with open(solution_file, encoding="utf-8") as handle:
        content = handle.read()

    configs: dict[str, list[str]] = {}
    in_section = False
    for line in content.split("\n"):
        if _SOLUTION_CONFIGURATION_START in line:
            in_section = True
            continue
        if _SOLUTION_CONFIGURATION_END in line:
            in_section = False
            continue
        if not in_section:
            continue

        parts = line.split("=")
        if len(parts) != 2:
            raise ValueError(f"failed to parse config line ({line})")
        config_and_platform = parts[1].strip().split("|")
        if len(config_and_platform) == 2:
            config, platform = config_and_platform
            configs.setdefault(config, []).append(platform)

    return configs
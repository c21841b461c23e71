"""Scanner that detects Xamarin solutions and builds their workflow configurations."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field

from ciscan import steps
from ciscan.config import PRIMARY_WORKFLOW_ID, ConfigBuilder
from ciscan.icons import Icon
from ciscan.options import OptionNode, OptionType, new_config_option, new_option
from ciscan.paths import list_paths_sorted_by_components
from ciscan.xamarin_solution import filter_solution_files, get_solution_configs

logger = logging.getLogger(__name__)

SCANNER_NAME = "xamarin"
DEFAULT_CONFIG_NAME = "default-xamarin-config"

XAMARIN_SOLUTION_INPUT_KEY = "xamarin_solution"
XAMARIN_SOLUTION_INPUT_ENV_KEY = "BITRISE_PROJECT_PATH"
XAMARIN_SOLUTION_INPUT_TITLE = "Path to the Xamarin Solution file"
XAMARIN_SOLUTION_INPUT_SUMMARY = (
    "Your solution file has to contain all the solution configurations you wish to use on "
    "Bitrise. A solution configuration specifies how projects in the solution are to be "
    "built and deployed."
)

XAMARIN_CONFIGURATION_INPUT_KEY = "xamarin_configuration"
XAMARIN_CONFIGURATION_INPUT_ENV_KEY = "BITRISE_XAMARIN_CONFIGURATION"
XAMARIN_CONFIGURATION_INPUT_TITLE = "Xamarin solution configuration"
XAMARIN_CONFIGURATION_INPUT_SUMMARY = (
    "The Xamarin solution configuration that you wish to run in your first build. You can "
    "change this at any time in your Workflows."
)

XAMARIN_PLATFORM_INPUT_KEY = "xamarin_platform"
XAMARIN_PLATFORM_INPUT_ENV_KEY = "BITRISE_XAMARIN_PLATFORM"
XAMARIN_PLATFORM_INPUT_TITLE = "Xamarin solution platform"
XAMARIN_PLATFORM_INPUT_SUMMARY = ""

XAMARIN_IOS_LICENSE_INPUT_KEY = "xamarin_ios_license"
XAMARIN_ANDROID_LICENSE_INPUT_KEY = "xamarin_android_license"
XAMARIN_MAC_LICENSE_INPUT_KEY = "xamarin_mac_license"

_COMPONENTS_PATTERN = re.compile(r".*Components/.+")


def config_name(has_nuget_packages: bool, has_xamarin_components: bool) -> str:
    """Name of the config generated for the given dependency kinds."""
    name = "xamarin-"
    if has_nuget_packages:
        name += "nuget-"
    if has_xamarin_components:
        name += "components-"
    return name + "config"


def _archive_step() -> steps.StepListItem:
    return steps.xamarin_archive_step(
        {XAMARIN_SOLUTION_INPUT_KEY: "$" + XAMARIN_SOLUTION_INPUT_ENV_KEY},
        {XAMARIN_CONFIGURATION_INPUT_KEY: "$" + XAMARIN_CONFIGURATION_INPUT_ENV_KEY},
        {XAMARIN_PLATFORM_INPUT_KEY: "$" + XAMARIN_PLATFORM_INPUT_ENV_KEY},
    )


@dataclass
class XamarinScanner:
    """Detects Xamarin solutions and offers their configurations and platforms."""

    file_list: list[str] = field(default_factory=list)
    solution_files: list[str] = field(default_factory=list)
    has_nuget_packages: bool = False
    has_xamarin_components: bool = False
    has_ios_project: bool = False
    has_android_project: bool = False
    has_mac_project: bool = False

    name = SCANNER_NAME

    def detect_platform(self, search_dir: str) -> bool:
        """Report whether ``search_dir`` holds a solution file; paths are kept relative."""
        try:
            file_list = list_paths_sorted_by_components(search_dir, True)
        except OSError as error:
            raise OSError(f"failed to search for files in ({search_dir}), error: {error}") from error
        self.file_list = file_list

        logger.info("Searching for solution files")
        self.solution_files = filter_solution_files(file_list)

        logger.info("%d solution files detected", len(self.solution_files))
        for solution_file in self.solution_files:
            logger.info("- %s", solution_file)

        if not self.solution_files:
            logger.info("platform not detected")
            return False

        logger.info("Platform detected")
        return True

    def excluded_scanner_names(self) -> list[str]:
        """Scanners to skip when this one detects its platform: none."""
        return []

    def _scan_dependencies(self) -> None:
        for path in self.file_list:
            if not self.has_nuget_packages and os.path.basename(path) == "packages.config":
                self.has_nuget_packages = True
            # Adding a component creates a Components/<name>/ directory.
            if not self.has_xamarin_components and _COMPONENTS_PATTERN.search(path):
                self.has_xamarin_components = True
            if self.has_nuget_packages and self.has_xamarin_components:
                break

        logger.info("Nuget packages found" if self.has_nuget_packages else "NO Nuget packages found")
        logger.info(
            "Xamarin Components found"
            if self.has_xamarin_components
            else "NO Xamarin Components found"
        )

    def options(self) -> tuple[OptionNode, list[str], list[Icon]]:
        """Return the option tree, the warnings and the icons (always none).

        Raises ``ValueError`` when no solution file has a usable configuration.
        """
        logger.info("Searching for NuGet packages & Xamarin Components")
        self._scan_dependencies()

        warnings: list[str] = []
        valid_solutions: dict[str, dict[str, list[str]]] = {}
        for solution_file in self.solution_files:
            logger.info("Inspecting solution file: %s", solution_file)
            try:
                configs = get_solution_configs(solution_file)
            except (OSError, ValueError) as error:
                logger.warning("Failed to get solution configs, error: %s", error)
                warnings.append(f"Failed to get solution ({solution_file}) configs, error: {error}")
                continue

            if configs:
                logger.info("%d configurations found", len(configs))
                for configuration, platforms in configs.items():
                    logger.info("- %s with platforms: %s", configuration, platforms)
                valid_solutions[solution_file] = configs
            else:
                logger.warning("No config found for %s", solution_file)
                warnings.append(f"No configs found for solution: {solution_file}")

        if not valid_solutions:
            logger.error("No valid solution file found")
            raise ValueError("No valid solution file found")

        leaf_name = config_name(self.has_nuget_packages, self.has_xamarin_components)
        solution_option = new_option(
            XAMARIN_SOLUTION_INPUT_TITLE,
            XAMARIN_SOLUTION_INPUT_SUMMARY,
            XAMARIN_SOLUTION_INPUT_ENV_KEY,
            OptionType.SELECTOR,
        )
        for solution_file, config_map in valid_solutions.items():
            configuration_option = new_option(
                XAMARIN_CONFIGURATION_INPUT_TITLE,
                XAMARIN_CONFIGURATION_INPUT_SUMMARY,
                XAMARIN_CONFIGURATION_INPUT_ENV_KEY,
                OptionType.SELECTOR,
            )
            solution_option.add_option(solution_file, configuration_option)

            for configuration, platforms in config_map.items():
                platform_option = new_option(
                    XAMARIN_PLATFORM_INPUT_TITLE,
                    XAMARIN_PLATFORM_INPUT_SUMMARY,
                    XAMARIN_PLATFORM_INPUT_ENV_KEY,
                    OptionType.SELECTOR,
                )
                configuration_option.add_option(configuration, platform_option)
                for platform in platforms:
                    platform_option.add_config(platform, new_config_option(leaf_name, None))

        return solution_option, warnings, []

    def default_options(self) -> OptionNode:
        """Return the option tree asking for solution, configuration and platform."""
        solution_option = new_option(
            XAMARIN_SOLUTION_INPUT_TITLE,
            XAMARIN_SOLUTION_INPUT_SUMMARY,
            XAMARIN_SOLUTION_INPUT_ENV_KEY,
            OptionType.USER_INPUT,
        )
        configuration_option = new_option(
            XAMARIN_CONFIGURATION_INPUT_TITLE,
            XAMARIN_CONFIGURATION_INPUT_SUMMARY,
            XAMARIN_CONFIGURATION_INPUT_ENV_KEY,
            OptionType.USER_INPUT,
        )
        solution_option.add_option("", configuration_option)
        platform_option = new_option(
            XAMARIN_PLATFORM_INPUT_TITLE,
            XAMARIN_PLATFORM_INPUT_SUMMARY,
            XAMARIN_PLATFORM_INPUT_ENV_KEY,
            OptionType.USER_INPUT,
        )
        configuration_option.add_option("", platform_option)
        platform_option.add_config("", new_config_option(DEFAULT_CONFIG_NAME, None))
        return solution_option

    def configs(self) -> dict[str, str]:
        """Return the YAML config for the detected project, keyed by its config name."""
        builder = ConfigBuilder()
        builder.append_steps(PRIMARY_WORKFLOW_ID, *steps.default_prepare_step_list(False))
        builder.append_steps(PRIMARY_WORKFLOW_ID, steps.certificate_and_profile_installer_step())

        if self.has_xamarin_components:
            inputs = []
            if self.has_ios_project:
                inputs.append({XAMARIN_IOS_LICENSE_INPUT_KEY: "yes"})
            if self.has_android_project:
                inputs.append({XAMARIN_ANDROID_LICENSE_INPUT_KEY: "yes"})
            if self.has_mac_project:
                inputs.append({XAMARIN_MAC_LICENSE_INPUT_KEY: "yes"})
            builder.append_steps(PRIMARY_WORKFLOW_ID, steps.xamarin_user_management_step(*inputs))

        if self.has_nuget_packages:
            builder.append_steps(PRIMARY_WORKFLOW_ID, steps.nuget_restore_step())

        if self.has_xamarin_components:
            builder.append_steps(PRIMARY_WORKFLOW_ID, steps.xamarin_components_restore_step())

        builder.append_steps(PRIMARY_WORKFLOW_ID, _archive_step())
        builder.append_steps(PRIMARY_WORKFLOW_ID, *steps.default_deploy_step_list(False))

        config = builder.generate(SCANNER_NAME)
        return {
            config_name(self.has_nuget_packages, self.has_xamarin_components): config.to_yaml()
        }

    def default_configs(self) -> dict[str, str]:
        """Return the YAML config used when the project is set up by hand."""
        builder = ConfigBuilder()
        builder.append_steps(PRIMARY_WORKFLOW_ID, *steps.default_prepare_step_list(False))
        builder.append_steps(PRIMARY_WORKFLOW_ID, steps.certificate_and_profile_installer_step())
        builder.append_steps(PRIMARY_WORKFLOW_ID, steps.xamarin_user_management_step())
        builder.append_steps(PRIMARY_WORKFLOW_ID, steps.nuget_restore_step())
        builder.append_steps(PRIMARY_WORKFLOW_ID, steps.xamarin_components_restore_step())
        builder.append_steps(PRIMARY_WORKFLOW_ID, _archive_step())
        builder.append_steps(PRIMARY_WORKFLOW_ID, *steps.default_deploy_step_list(False))

        config = builder.generate(SCANNER_NAME)
        return {DEFAULT_CONFIG_NAME: config.to_yaml()}
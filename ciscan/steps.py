"""Step list items used to build workflow configurations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ACTIVATE_SSH_KEY_ID = "activate-ssh-key"
ACTIVATE_SSH_KEY_VERSION = "4.0.3"

ANDROID_LINT_ID = "android-lint"
ANDROID_LINT_VERSION = "0.9.6"

ANDROID_UNIT_TEST_ID = "android-unit-test"
ANDROID_UNIT_TEST_VERSION = "1.0.0"

ANDROID_BUILD_ID = "android-build"
ANDROID_BUILD_VERSION = "0.10.0"

GIT_CLONE_ID = "git-clone"
GIT_CLONE_VERSION = "4.0.17"

CACHE_PULL_ID = "cache-pull"
CACHE_PULL_VERSION = "2.1.1"

CACHE_PUSH_ID = "cache-push"
CACHE_PUSH_VERSION = "2.2.1"

CERTIFICATE_AND_PROFILE_INSTALLER_ID = "certificate-and-profile-installer"
CERTIFICATE_AND_PROFILE_INSTALLER_VERSION = "1.10.1"

CHANGE_ANDROID_VERSION_CODE_AND_VERSION_NAME_ID = "change-android-versioncode-and-versionname"
CHANGE_ANDROID_VERSION_CODE_AND_VERSION_NAME_VERSION = "1.1.1"

DEPLOY_TO_BITRISE_IO_ID = "deploy-to-bitrise-io"
DEPLOY_TO_BITRISE_IO_VERSION = "1.9.2"

SCRIPT_ID = "script"
SCRIPT_VERSION = "1.1.5"
SCRIPT_DEFAULT_TITLE = "Do anything with Script step"

SIGN_APK_ID = "sign-apk"
SIGN_APK_VERSION = "1.4.1"

INSTALL_MISSING_ANDROID_TOOLS_ID = "install-missing-android-tools"
INSTALL_MISSING_ANDROID_TOOLS_VERSION = "2.3.7"

FASTLANE_ID = "fastlane"
FASTLANE_VERSION = "2.6.0"

COCOAPODS_INSTALL_ID = "cocoapods-install"
COCOAPODS_INSTALL_VERSION = "1.9.1"

CARTHAGE_ID = "carthage"
CARTHAGE_VERSION = "3.2.2"

RECREATE_USER_SCHEMES_ID = "recreate-user-schemes"
RECREATE_USER_SCHEMES_VERSION = "1.0.2"

XCODE_ARCHIVE_ID = "xcode-archive"
XCODE_ARCHIVE_VERSION = "2.7.0"

XCODE_TEST_ID = "xcode-test"
XCODE_TEST_VERSION = "2.4.1"

XAMARIN_USER_MANAGEMENT_ID = "xamarin-user-management"
XAMARIN_USER_MANAGEMENT_VERSION = "1.1.0"

NUGET_RESTORE_ID = "nuget-restore"
NUGET_RESTORE_VERSION = "1.1.0"

XAMARIN_COMPONENTS_RESTORE_ID = "xamarin-components-restore"
XAMARIN_COMPONENTS_RESTORE_VERSION = "0.9.0"

XAMARIN_ARCHIVE_ID = "xamarin-archive"
XAMARIN_ARCHIVE_VERSION = "1.5.1"

XCODE_ARCHIVE_MAC_ID = "xcode-archive-mac"
XCODE_ARCHIVE_MAC_VERSION = "1.8.0"

XCODE_TEST_MAC_ID = "xcode-test-mac"
XCODE_TEST_MAC_VERSION = "1.4.0"

CORDOVA_ARCHIVE_ID = "cordova-archive"
CORDOVA_ARCHIVE_VERSION = "2.1.0"

IONIC_ARCHIVE_ID = "ionic-archive"
IONIC_ARCHIVE_VERSION = "2.1.0"

GENERATE_CORDOVA_BUILD_CONFIG_ID = "generate-cordova-build-configuration"
GENERATE_CORDOVA_BUILD_CONFIG_VERSION = "0.9.6"

JASMINE_TEST_RUNNER_ID = "jasmine-runner"
JASMINE_TEST_RUNNER_VERSION = "0.9.0"

KARMA_JASMINE_TEST_RUNNER_ID = "karma-jasmine-runner"
KARMA_JASMINE_TEST_RUNNER_VERSION = "0.9.1"

NPM_ID = "npm"
NPM_VERSION = "1.1.0"

EXPO_DETACH_ID = "expo-detach"
EXPO_DETACH_VERSION = "0.9.3"

YARN_ID = "yarn"
YARN_VERSION = "0.1.0"

FLUTTER_INSTALL_ID = "flutter-installer"
FLUTTER_INSTALL_VERSION = "0.11.0"

FLUTTER_TEST_ID = "flutter-test"
FLUTTER_TEST_VERSION = "0.9.1"

FLUTTER_ANALYZE_ID = "flutter-analyze"
FLUTTER_ANALYZE_VERSION = "0.1.1"

FLUTTER_BUILD_ID = "flutter-build"
FLUTTER_BUILD_VERSION = "0.12.0"

_SSH_KEY_RUN_IF = '{{getenv "SSH_RSA_PRIVATE_KEY" | ne ""}}'
_SIGN_APK_RUN_IF = '{{getenv "BITRISEIO_ANDROID_KEYSTORE_URL" | ne ""}}'
_XAMARIN_USER_MANAGEMENT_RUN_IF = ".IsCI"

Input = dict[str, Any]


@dataclass
class StepListItem:
    """A single step reference in a workflow, with its optional settings."""

    step_id: str
    version: str = ""
    title: str = ""
    run_if: str = ""
    inputs: list[Input] = field(default_factory=list)

    @property
    def composite_id(self) -> str:
        """The step reference as written in a workflow: ``id@version`` or ``id``."""
        return f"{self.step_id}@{self.version}" if self.version else self.step_id

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Return the serialisable ``{composite_id: step}`` mapping."""
        step: dict[str, Any] = {}
        if self.title:
            step["title"] = self.title
        if self.run_if:
            step["run_if"] = self.run_if
        if self.inputs:
            step["inputs"] = [dict(item) for item in self.inputs]
        return {self.composite_id: step}


def _item(step_id: str, version: str, inputs=(), *, title: str = "", run_if: str = "") -> StepListItem:
    return StepListItem(
        step_id=step_id,
        version=version,
        title=title,
        run_if=run_if,
        inputs=[dict(item) for item in inputs],
    )


def default_prepare_step_list(include_cache: bool) -> list[StepListItem]:
    """Steps that open every workflow: SSH key, clone, optional cache pull, script."""
    steps = [activate_ssh_key_step(), git_clone_step()]
    if include_cache:
        steps.append(cache_pull_step())
    steps.append(script_step(SCRIPT_DEFAULT_TITLE))
    return steps


def default_deploy_step_list(include_cache: bool) -> list[StepListItem]:
    """Steps that close every workflow: deploy and optional cache push."""
    steps = [deploy_to_bitrise_io_step()]
    if include_cache:
        steps.append(cache_push_step())
    return steps


def activate_ssh_key_step() -> StepListItem:
    return _item(ACTIVATE_SSH_KEY_ID, ACTIVATE_SSH_KEY_VERSION, run_if=_SSH_KEY_RUN_IF)


def android_lint_step(*inputs: Input) -> StepListItem:
    return _item(ANDROID_LINT_ID, ANDROID_LINT_VERSION, inputs)


def android_unit_test_step(*inputs: Input) -> StepListItem:
    return _item(ANDROID_UNIT_TEST_ID, ANDROID_UNIT_TEST_VERSION, inputs)


def android_build_step(*inputs: Input) -> StepListItem:
    return _item(ANDROID_BUILD_ID, ANDROID_BUILD_VERSION, inputs)


def git_clone_step() -> StepListItem:
    return _item(GIT_CLONE_ID, GIT_CLONE_VERSION)


def cache_pull_step() -> StepListItem:
    return _item(CACHE_PULL_ID, CACHE_PULL_VERSION)


def cache_push_step() -> StepListItem:
    return _item(CACHE_PUSH_ID, CACHE_PUSH_VERSION)


def certificate_and_profile_installer_step() -> StepListItem:
    return _item(CERTIFICATE_AND_PROFILE_INSTALLER_ID, CERTIFICATE_AND_PROFILE_INSTALLER_VERSION)


def change_android_version_code_and_version_name_step(*inputs: Input) -> StepListItem:
    return _item(
        CHANGE_ANDROID_VERSION_CODE_AND_VERSION_NAME_ID,
        CHANGE_ANDROID_VERSION_CODE_AND_VERSION_NAME_VERSION,
        inputs,
    )


def deploy_to_bitrise_io_step() -> StepListItem:
    return _item(DEPLOY_TO_BITRISE_IO_ID, DEPLOY_TO_BITRISE_IO_VERSION)


def script_step(title: str, *inputs: Input) -> StepListItem:
    return _item(SCRIPT_ID, SCRIPT_VERSION, inputs, title=title)


def sign_apk_step() -> StepListItem:
    return _item(SIGN_APK_ID, SIGN_APK_VERSION, run_if=_SIGN_APK_RUN_IF)


def install_missing_android_tools_step(*inputs: Input) -> StepListItem:
    return _item(INSTALL_MISSING_ANDROID_TOOLS_ID, INSTALL_MISSING_ANDROID_TOOLS_VERSION, inputs)


def fastlane_step(*inputs: Input) -> StepListItem:
    return _item(FASTLANE_ID, FASTLANE_VERSION, inputs)


def cocoapods_install_step() -> StepListItem:
    return _item(COCOAPODS_INSTALL_ID, COCOAPODS_INSTALL_VERSION)


def carthage_step(*inputs: Input) -> StepListItem:
    return _item(CARTHAGE_ID, CARTHAGE_VERSION, inputs)


def recreate_user_schemes_step(*inputs: Input) -> StepListItem:
    return _item(RECREATE_USER_SCHEMES_ID, RECREATE_USER_SCHEMES_VERSION, inputs)


def xcode_archive_step(*inputs: Input) -> StepListItem:
    return _item(XCODE_ARCHIVE_ID, XCODE_ARCHIVE_VERSION, inputs)


def xcode_test_step(*inputs: Input) -> StepListItem:
    return _item(XCODE_TEST_ID, XCODE_TEST_VERSION, inputs)


def xamarin_user_management_step(*inputs: Input) -> StepListItem:
    return _item(
        XAMARIN_USER_MANAGEMENT_ID,
        XAMARIN_USER_MANAGEMENT_VERSION,
        inputs,
        run_if=_XAMARIN_USER_MANAGEMENT_RUN_IF,
    )


def nuget_restore_step() -> StepListItem:
    return _item(NUGET_RESTORE_ID, NUGET_RESTORE_VERSION)


def xamarin_components_restore_step() -> StepListItem:
    return _item(XAMARIN_COMPONENTS_RESTORE_ID, XAMARIN_COMPONENTS_RESTORE_VERSION)


def xamarin_archive_step(*inputs: Input) -> StepListItem:
    return _item(XAMARIN_ARCHIVE_ID, XAMARIN_ARCHIVE_VERSION, inputs)


def xcode_archive_mac_step(*inputs: Input) -> StepListItem:
    return _item(XCODE_ARCHIVE_MAC_ID, XCODE_ARCHIVE_MAC_VERSION, inputs)


def xcode_test_mac_step(*inputs: Input) -> StepListItem:
    return _item(XCODE_TEST_MAC_ID, XCODE_TEST_MAC_VERSION, inputs)


def cordova_archive_step(*inputs: Input) -> StepListItem:
    return _item(CORDOVA_ARCHIVE_ID, CORDOVA_ARCHIVE_VERSION, inputs)


def ionic_archive_step(*inputs: Input) -> StepListItem:
    return _item(IONIC_ARCHIVE_ID, IONIC_ARCHIVE_VERSION, inputs)


def generate_cordova_build_config_step(*inputs: Input) -> StepListItem:
    return _item(GENERATE_CORDOVA_BUILD_CONFIG_ID, GENERATE_CORDOVA_BUILD_CONFIG_VERSION, inputs)


def jasmine_test_runner_step(*inputs: Input) -> StepListItem:
    return _item(JASMINE_TEST_RUNNER_ID, JASMINE_TEST_RUNNER_VERSION, inputs)


def karma_jasmine_test_runner_step(*inputs: Input) -> StepListItem:
    return _item(KARMA_JASMINE_TEST_RUNNER_ID, KARMA_JASMINE_TEST_RUNNER_VERSION, inputs)


def npm_step(*inputs: Input) -> StepListItem:
    return _item(NPM_ID, NPM_VERSION, inputs)


def expo_detach_step(*inputs: Input) -> StepListItem:
    return _item(EXPO_DETACH_ID, EXPO_DETACH_VERSION, inputs)


def yarn_step(*inputs: Input) -> StepListItem:
    return _item(YARN_ID, YARN_VERSION, inputs)


def flutter_install_step(*inputs: Input) -> StepListItem:
    return _item(FLUTTER_INSTALL_ID, FLUTTER_INSTALL_VERSION, inputs)


def flutter_test_step(*inputs: Input) -> StepListItem:
    return _item(FLUTTER_TEST_ID, FLUTTER_TEST_VERSION, inputs)


def flutter_analyze_step(*inputs: Input) -> StepListItem:
    return _item(FLUTTER_ANALYZE_ID, FLUTTER_ANALYZE_VERSION, inputs)


def flutter_build_step(*inputs: Input) -> StepListItem:
    return _item(FLUTTER_BUILD_ID, FLUTTER_BUILD_VERSION, inputs)
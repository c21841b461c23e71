"""Workflow configuration model, its builder and the fallback config for unknown projects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

from ciscan import steps
from ciscan.steps import StepListItem

VERSION = "2.3.1"
BUILD_NUMBER = ""
COMMIT = ""

FORMAT_VERSION = "8"

PRIMARY_WORKFLOW_ID = "primary"
DEPLOY_WORKFLOW_ID = "deploy"

CUSTOM_PROJECT_TYPE = "other"
CUSTOM_CONFIG_NAME = "other-config"


class _Dumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line strings as literal blocks and never uses aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    style = "|" if "\n" in value else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", value, style=style)


_Dumper.add_representer(str, _represent_str)


@dataclass
class _Workflow:
    description: str = ""
    steps: list[StepListItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.description:
            data["description"] = self.description
        if self.steps:
            data["steps"] = [item.to_dict() for item in self.steps]
        return data


def _default_trigger_map() -> list[dict[str, str]]:
    return [
        {"push_branch": "*", "workflow": PRIMARY_WORKFLOW_ID},
        {"pull_request_source_branch": "*", "workflow": PRIMARY_WORKFLOW_ID},
    ]


@dataclass
class BitriseConfig:
    """A generated workflow configuration."""

    project_type: str
    format_version: str = FORMAT_VERSION
    default_step_lib_source: str = ""
    app_envs: list[dict[str, Any]] = field(default_factory=list)
    trigger_map: list[dict[str, str]] = field(default_factory=_default_trigger_map)
    workflows: dict[str, _Workflow] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the serialisable form, in the order the fields are written."""
        data: dict[str, Any] = {"format_version": self.format_version}
        if self.default_step_lib_source:
            data["default_step_lib_source"] = self.default_step_lib_source
        if self.project_type:
            data["project_type"] = self.project_type
        if self.app_envs:
            data["app"] = {"envs": [dict(env) for env in self.app_envs]}
        if self.trigger_map:
            data["trigger_map"] = [dict(item) for item in self.trigger_map]
        if self.workflows:
            data["workflows"] = {
                name: self.workflows[name].to_dict() for name in sorted(self.workflows)
            }
        return data

    def to_yaml(self) -> str:
        """Return the configuration as YAML text."""
        return yaml.dump(
            self.to_dict(),
            Dumper=_Dumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )


class ConfigBuilder:
    """Collects steps per workflow and produces a :class:`BitriseConfig`."""

    def __init__(self, step_lib_source: str = "", format_version: str = FORMAT_VERSION) -> None:
        self.step_lib_source = step_lib_source
        self.format_version = format_version
        self._workflows: dict[str, _Workflow] = {}

    def _workflow(self, workflow_id: str) -> _Workflow:
        return self._workflows.setdefault(workflow_id, _Workflow())

    def append_steps(self, workflow_id: str, *items: StepListItem) -> None:
        """Add steps to the end of a workflow, creating it if needed."""
        self._workflow(workflow_id).steps.extend(items)

    def set_workflow_description(self, workflow_id: str, description: str) -> None:
        """Set the description of a workflow, creating it if needed."""
        self._workflow(workflow_id).description = description

    def generate(self, project_type: str, *app_envs: dict[str, Any]) -> BitriseConfig:
        """Build the configuration for ``project_type`` with optional app-level env items."""
        workflows = {
            name: _Workflow(description=workflow.description, steps=list(workflow.steps))
            for name, workflow in self._workflows.items()
        }
        return BitriseConfig(
            project_type=project_type,
            format_version=self.format_version,
            default_step_lib_source=self.step_lib_source,
            app_envs=[dict(env) for env in app_envs],
            workflows=workflows,
        )


def custom_config() -> dict[str, str]:
    """Return the generic config used when no known platform is detected."""
    builder = ConfigBuilder()
    builder.append_steps(PRIMARY_WORKFLOW_ID, *steps.default_prepare_step_list(False))
    builder.append_steps(PRIMARY_WORKFLOW_ID, *steps.default_deploy_step_list(False))
    config = builder.generate(CUSTOM_PROJECT_TYPE)
    return {CUSTOM_CONFIG_NAME: config.to_yaml()}
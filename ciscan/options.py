"""Option decision trees and the project-type layer added by automation tool scanners."""

from __future__ import annotations

import copy
import enum
from dataclasses import dataclass, field
from typing import Any, TypeVar

PROJECT_TYPE_USER_TITLE = "Project type"
# Used as the env key of the project-type question; empty means it is not written to the config.
PROJECT_TYPE_ENV_KEY = ""
PROJECT_TYPE_USER_SUMMARY = (
    "The type of your project. This determines what Steps are added to your automatically "
    "configured Workflows. You can, however, add any Steps to your Workflows at any time."
)


class OptionType(str, enum.Enum):
    """How the value of an option is chosen."""

    SELECTOR = "selector"
    USER_INPUT = "user_input"
    OPTIONAL_USER_INPUT = "user_input_optional"


@dataclass
class OptionNode:
    """A node of the option tree; leaves name the config that a branch selects."""

    title: str = ""
    summary: str = ""
    env_key: str = ""
    option_type: OptionType | None = None
    child_option_map: dict[str, OptionNode] = field(default_factory=dict)
    config: str = ""
    icons: list[str] = field(default_factory=list)

    def add_option(self, value: str, child: OptionNode) -> None:
        """Attach ``child`` as the follow-up question for ``value``."""
        self.child_option_map[value] = child

    def add_config(self, value: str, child: OptionNode) -> None:
        """Attach the config leaf ``child`` for ``value``."""
        self.child_option_map[value] = child

    def is_config_option(self) -> bool:
        return self.config != ""

    def copy(self) -> OptionNode:
        """Return a deep copy of the tree below this node."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Return the serialisable form, leaving out empty fields."""
        data: dict[str, Any] = {}
        if self.title:
            data["title"] = self.title
        if self.summary:
            data["summary"] = self.summary
        if self.env_key:
            data["env_key"] = self.env_key
        if self.option_type is not None:
            data["type"] = self.option_type.value
        if self.child_option_map:
            data["value_map"] = {
                value: child.to_dict() for value, child in self.child_option_map.items()
            }
        if self.config:
            data["config"] = self.config
        if self.icons:
            data["icons"] = list(self.icons)
        return data


def new_option(title: str, summary: str, env_key: str, option_type: OptionType) -> OptionNode:
    """Create a question node."""
    return OptionNode(title=title, summary=summary, env_key=env_key, option_type=option_type)


def new_config_option(name: str, icons: list[str] | None) -> OptionNode:
    """Create a leaf naming a config."""
    return OptionNode(config=name, icons=list(icons or []))


def _config_name_with_project_type(config_name: str, project_type: str) -> str:
    return f"{config_name}_{project_type}"


def _with_project_type(options: OptionNode, project_type: str) -> OptionNode:
    tree = options.copy()

    def rename(node: OptionNode) -> None:
        if node.is_config_option() or not node.child_option_map:
            node.config = _config_name_with_project_type(node.config, project_type)
            return
        for child in node.child_option_map.values():
            rename(child)

    rename(tree)
    return tree


T = TypeVar("T")


def add_project_type_to_config(
    config_name: str, config: T, detected_project_types: list[str]
) -> dict[str, T]:
    """Return one copy of ``config`` per project type, keyed ``<config_name>_<type>``."""
    configs: dict[str, T] = {}
    for project_type in detected_project_types:
        typed = copy.copy(config)
        typed.project_type = project_type  # type: ignore[attr-defined]
        configs[_config_name_with_project_type(config_name, project_type)] = typed
    return configs


def add_project_type_to_options(
    option_tree: OptionNode, detected_project_types: list[str]
) -> OptionNode:
    """Put a project-type question above ``option_tree``, one branch per detected type."""
    root = new_option(
        PROJECT_TYPE_USER_TITLE, PROJECT_TYPE_USER_SUMMARY, PROJECT_TYPE_ENV_KEY, OptionType.SELECTOR
    )
    for project_type in detected_project_types:
        root.add_option(project_type, _with_project_type(option_tree, project_type))
    return root
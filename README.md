# ciscan

`ciscan` is a library that inspects a project directory and builds CI
workflow configurations for it. It finds the files that identify a project,
works out the questions a user must answer as a tree of options, and produces
the workflow YAML that each branch of that tree selects.

## Installation

```
pip install .
```

To also install the test requirements:

```
pip install ".[test]"
```

## Modules

- `ciscan.steps`: `StepListItem` and one factory per workflow step, such as
  `git_clone_step()`, `script_step(title)`, `npm_step(...)` and
  `xcode_archive_step(...)`. Inputs are passed as one-key dicts, e.g.
  `npm_step({"command": "install"})`. `default_prepare_step_list(include_cache)`
  and `default_deploy_step_list(include_cache)` give the steps that open and
  close every workflow. `StepListItem.to_dict()` returns the
  `{"id@version": {...}}` mapping written into the YAML.
- `ciscan.paths`: `list_paths_sorted_by_components(search_dir, relative)`
  walks a directory (the directory itself included) and orders the paths by
  depth, then by base name; `sort_paths_by_components` and `SortablePath`
  do that ordering on any list. `filter_paths(paths, *filters)` keeps the
  paths every filter allows; filters are made by `base_filter`,
  `extension_filter`, `regexp_filter`, `component_filter`,
  `component_with_extension_filter`, `is_directory_filter`,
  `in_directory_filter` and `directory_contains_file`, each taking an
  `allowed` flag that inverts the match (except `directory_contains_file`).
  `parse_packages_json` / `parse_packages_json_content` read a `package.json`
  into a `PackagesModel`; `rel_path` and `file_contains` are small helpers.
- `ciscan.icons`: `create_icon_descriptors(icon_paths, base_path)` returns
  sorted, de-duplicated `Icon` entries whose file name is the SHA-256 of the
  icon's path relative to `base_path`, plus its extension.
- `ciscan.options`: the `OptionNode` decision tree with its `OptionType`
  (`selector`, `user_input`, `user_input_optional`), built with `new_option`
  and `new_config_option`. `add_project_type_to_options` puts a
  "Project type" question above a tree and suffixes each leaf config name
  with `_<type>`; `add_project_type_to_config` makes one copy of a config per
  project type, keyed the same way.
- `ciscan.config`: `ConfigBuilder` collects steps per workflow
  (`append_steps`, `set_workflow_description`) and `generate(project_type)`
  returns a `BitriseConfig`, whose `to_yaml()` gives the YAML text. Workflows
  are written in name order with the default push and pull-request triggers
  on `primary`. `custom_config()` returns the generic `other-config` used
  when no platform is recognised.
- `ciscan.xamarin_solution`: `filter_solution_files` keeps `.sln` files
  outside `Components` and `node_modules`; `get_solution_configs` maps each
  solution configuration to its platforms and raises `ValueError` on a
  malformed line.
- `ciscan.react_native_files`: `collect_package_json_files` finds the
  `package.json` files that depend on `react-native`; `contains_yarn_lock`
  tells whether a directory has a `yarn.lock`.
- `ciscan.xamarin`: `XamarinScanner`, a complete platform scanner, and
  `config_name`.

## Example

```python
from ciscan.xamarin import XamarinScanner

scanner = XamarinScanner()
if scanner.detect_platform("."):
    tree, warnings, icons = scanner.options()
    for name, yaml_text in scanner.configs().items():
        print(name)
        print(yaml_text)
```

`detect_platform` keeps the paths it finds relative to the search directory,
and `options()` opens the solution files by those paths, so run it with the
project directory as the working directory. `options()` also records whether
NuGet packages or Xamarin Components are present, which decides the steps and
the name of the config that `configs()` returns; it raises `ValueError` when
no solution file has a usable configuration.

## What this package does not do

- There is no command-line tool; everything is used from Python.
- `XamarinScanner` is the only platform scanner. For React Native there are
  only the file helpers in `ciscan.react_native_files`; there is no scanner
  that turns a React Native, iOS, Android or other project into options and
  configs.
- Nothing here asks the user the option tree's questions or writes result
  files; callers receive the `OptionNode` tree and the YAML strings and
  decide what to do with them.

## Running the tests

```
pytest
```
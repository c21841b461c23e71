import pytest

from ciscan.xamarin_solution import filter_solution_files, get_solution_configs


def test_filter_contains_solution_files():
    file_list = [
        "/Users/bitrise/Develop/bitrise/sample-apps/sample-apps-xamarin-ios/CreditCardValidator.iOS.sln",
        "/Users/bitrise/Develop/bitrise/sample-apps/sample-apps-android/sln",
        "path/to/my/gradlew/file",
        "path/to/my",
    ]
    files = filter_solution_files(file_list)
    assert len(files) == 1
    assert files[0] == (
        "/Users/bitrise/Develop/bitrise/sample-apps/sample-apps-xamarin-ios/CreditCardValidator.iOS.sln"
    )


def test_filter_does_not_contain_solution_file():
    files = filter_solution_files(["path/to/my/gradlew/build.", "path/to/my/gradle"])
    assert len(files) == 0


def test_filter_skips_components_and_node_modules():
    files = filter_solution_files(
        [
            "app/Components/lib/Lib.sln",
            "app/node_modules/pkg/Pkg.sln",
            "app/App.SLN",
        ]
    )
    assert files == ["app/App.SLN"]


SOLUTION = """Microsoft Visual Studio Solution File, Format Version 12.00
Global
\tGlobalSection(SolutionConfigurationPlatforms) = preSolution
\t\tDebug|iPhoneSimulator = Debug|iPhoneSimulator
\t\tRelease|iPhone = Release|iPhone
\t\tDebug|iPhone = Debug|iPhone
\tEndGlobalSection
\tGlobalSection(ProjectConfigurationPlatforms) = postSolution
\t\t{ABC}.Debug|iPhone.ActiveCfg = Debug|iPhone
\tEndGlobalSection
EndGlobal
"""


def test_get_solution_configs(tmp_path):
    solution = tmp_path / "App.sln"
    solution.write_text(SOLUTION, encoding="utf-8")
    assert get_solution_configs(str(solution)) == {
        "Debug": ["iPhoneSimulator", "iPhone"],
        "Release": ["iPhone"],
    }


def test_get_solution_configs_without_section(tmp_path):
    solution = tmp_path / "Empty.sln"
    solution.write_text("Global\nEndGlobal\n", encoding="utf-8")
    assert get_solution_configs(str(solution)) == {}


def test_get_solution_configs_bad_line(tmp_path):
    solution = tmp_path / "Bad.sln"
    solution.write_text(
        "GlobalSection(SolutionConfigurationPlatforms) = preSolution\n"
        "\t\tno separator here\n"
        "EndGlobalSection\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="failed to parse config line"):
        get_solution_configs(str(solution))


def test_get_solution_configs_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_solution_configs(str(tmp_path / "missing.sln"))
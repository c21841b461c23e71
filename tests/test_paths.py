import os

import pytest

from ciscan.paths import (
    PackagesModel,
    SortablePath,
    base_filter,
    component_filter,
    component_with_extension_filter,
    directory_contains_file,
    extension_filter,
    file_contains,
    filter_paths,
    in_directory_filter,
    is_directory_filter,
    list_paths_sorted_by_components,
    parse_packages_json,
    parse_packages_json_content,
    regexp_filter,
    rel_path,
    sort_paths_by_components,
)


@pytest.mark.parametrize("path", ["test", "./test"])
def test_sortable_path_relative(path):
    expected_abs = os.path.abspath(path)
    sortable = SortablePath.from_path(path)
    assert sortable.path == path
    assert sortable.abs_path == expected_abs
    assert sortable.components == [c for c in expected_abs.split(os.sep) if c]


def test_sortable_path_absolute():
    sortable = SortablePath.from_path("/Users/bitrise/test")
    assert sortable.path == "/Users/bitrise/test"
    assert sortable.abs_path == "/Users/bitrise/test"
    assert sortable.components == ["Users", "bitrise", "test"]


def test_sortable_path_empty_raises():
    with pytest.raises(ValueError):
        SortablePath.from_path("")


def test_sort_abs_paths():
    paths = [
        "/Users/bitrise/test/test/test",
        "/Users/bitrise/test/test",
        "/Users/vagrant",
        "/Users/bitrise",
    ]
    assert sort_paths_by_components(paths) == [
        "/Users/bitrise",
        "/Users/vagrant",
        "/Users/bitrise/test/test",
        "/Users/bitrise/test/test/test",
    ]


def test_sort_rel_paths():
    paths = ["bitrise/test/test/test", "bitrise/test/test", "vagrant", "bitrise"]
    assert sort_paths_by_components(paths) == [
        "bitrise",
        "vagrant",
        "bitrise/test/test",
        "bitrise/test/test/test",
    ]


@pytest.fixture
def tree(tmp_path):
    for rel in ("testdir/testfile", "testdir/testdir/testfile"):
        target = tmp_path / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("test")
    return tmp_path


def test_list_paths_relative(tree):
    assert list_paths_sorted_by_components(str(tree), True) == [
        ".",
        "testdir",
        "testdir/testdir",
        "testdir/testfile",
        "testdir/testdir/testfile",
    ]


def test_list_paths_absolute(tree):
    root = str(tree)
    assert list_paths_sorted_by_components(root, False) == [
        root,
        os.path.join(root, "testdir"),
        os.path.join(root, "testdir/testdir"),
        os.path.join(root, "testdir/testfile"),
        os.path.join(root, "testdir/testdir/testfile"),
    ]


def test_list_paths_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        list_paths_sorted_by_components(str(tmp_path / "missing"), True)


def test_filter_paths_without_filter():
    paths = ["/Users/bitrise/test", "/Users/vagrant/test"]
    assert filter_paths(paths) == paths


def test_filter_paths_with_filter():
    paths = ["/Users/bitrise/test", "/Users/vagrant/test"]
    assert filter_paths(paths, lambda p: "vagrant" in p) == ["/Users/vagrant/test"]


@pytest.mark.parametrize(
    "allowed, expected",
    [(True, ["path/to/my/gradlew"]), (False, ["path/to/my/gradlew/file"])],
)
def test_base_filter(allowed, expected):
    paths = ["path/to/my/gradlew", "path/to/my/gradlew/file"]
    assert filter_paths(paths, base_filter("gradlew", allowed)) == expected


@pytest.mark.parametrize(
    "allowed, expected",
    [(True, ["path/to/my/project.xcodeproj"]), (False, ["path/to/my/project.xcworkspace"])],
)
def test_extension_filter(allowed, expected):
    paths = ["path/to/my/project.xcodeproj", "path/to/my/project.xcworkspace"]
    assert filter_paths(paths, extension_filter(".xcodeproj", allowed)) == expected


@pytest.mark.parametrize(
    "allowed, expected",
    [(True, ["path/to/my/project.xcodeproj"]), (False, ["path/to/my/project.xcworkspace"])],
)
def test_regexp_filter(allowed, expected):
    paths = ["path/to/my/project.xcodeproj", "path/to/my/project.xcworkspace"]
    assert filter_paths(paths, regexp_filter(".*.xcodeproj", allowed)) == expected


@pytest.mark.parametrize(
    "allowed, expected",
    [(True, ["/Users/bitrise/test"]), (False, ["/Users/vagrant/test"])],
)
def test_component_filter(allowed, expected):
    paths = ["/Users/bitrise/test", "/Users/vagrant/test"]
    assert filter_paths(paths, component_filter("bitrise", allowed)) == expected


@pytest.mark.parametrize(
    "allowed, expected",
    [(True, ["/Users/bitrise.framework/test"]), (False, ["/Users/vagrant/test"])],
)
def test_component_with_extension_filter(allowed, expected):
    paths = ["/Users/bitrise.framework/test", "/Users/vagrant/test"]
    assert filter_paths(paths, component_with_extension_filter(".framework", allowed)) == expected


def test_is_directory_filter(tmp_path):
    tmp_file = tmp_path / "file.txt"
    tmp_file.write_text("")
    paths = [str(tmp_path), str(tmp_file)]
    assert filter_paths(paths, is_directory_filter(True)) == [str(tmp_path)]
    assert filter_paths(paths, is_directory_filter(False)) == [str(tmp_file)]


def test_is_directory_filter_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        filter_paths([str(tmp_path / "missing")], is_directory_filter(True))


@pytest.mark.parametrize(
    "allowed, expected",
    [(True, ["/Users/bitrise/test"]), (False, ["/Users/vagrant/test"])],
)
def test_in_directory_filter(allowed, expected):
    paths = ["/Users/bitrise/test", "/Users/vagrant/test"]
    assert filter_paths(paths, in_directory_filter("/Users/bitrise", allowed)) == expected


@pytest.mark.parametrize(
    "name, expected",
    [("contents.xcworkspacedata", True), ("contents.xcworkspacedataasd", False)],
)
def test_directory_contains_file(tmp_path, name, expected):
    workspace = tmp_path / "sample.xcworkspace"
    workspace.mkdir()
    (workspace / "contents.xcworkspacedata").write_text("")
    assert directory_contains_file(name)(str(workspace)) is expected


def test_directory_contains_file_on_file(tmp_path):
    plain = tmp_path / "plain.txt"
    plain.write_text("")
    assert directory_contains_file("x")(str(plain)) is False


def test_parse_packages_json_content():
    content = '{"scripts": {"test": "jest"}, "dependencies": {"react-native": "0.59"}}'
    assert parse_packages_json_content(content) == PackagesModel(
        scripts={"test": "jest"}, dependencies={"react-native": "0.59"}, dev_dependencies={}
    )


@pytest.mark.parametrize("content", ["[1, 2]", '{"scripts": {"test": 1}}', "{bad"])
def test_parse_packages_json_content_invalid(content):
    with pytest.raises(ValueError):
        parse_packages_json_content(content)


def test_parse_packages_json_file(tmp_path):
    pth = tmp_path / "package.json"
    pth.write_text('{"devDependencies": {"jest": "24"}}')
    assert parse_packages_json(str(pth)).dev_dependencies == {"jest": "24"}


def test_rel_path_strips_private():
    assert rel_path("/private/var/x", "/var/x/y") == "y"
    assert rel_path("/a/b", "/a/b") == "."


def test_file_contains(tmp_path):
    pth = tmp_path / "f.txt"
    pth.write_text("hello world")
    assert file_contains(str(pth), "world") is True
    assert file_contains(str(pth), "absent") is False
"""Tests for path utilities."""

import pytest

from dep_verify.utils.path_utils import (
    PathFilter,
    glob_to_regex,
    is_excluded_path,
    relative_posix_path,
    walk_files,
)


@pytest.mark.parametrize("pattern,path,expected", [
    ("vendor/**", "vendor/pkg/package.json", True),
    ("vendor/**", "src/vendor/package.json", False),
    ("**/test/**", "a/b/test/c/pom.xml", True),
    ("*.csproj", "App.csproj", True),
    ("*.csproj", "src/App.csproj", False),
    ("samples/*/package.json", "samples/demo/package.json", True),
    ("samples/*/package.json", "samples/demo/nested/package.json", False),
    ("file?.txt", "file1.txt", True),
    ("file?.txt", "file12.txt", False),
    ("Vendor/**", "vendor/x", True),
    ("a.b/**", "axb/c", False),
])
def test_glob_to_regex(pattern, path, expected):
    assert bool(glob_to_regex(pattern).match(path)) is expected


class TestPathFilter:
    """Test exclude filtering."""

    def test_first_matching_pattern_is_reported(self):
        path_filter = PathFilter(["docs/**", "vendor/**", "**/package.json"])

        assert path_filter.matching_pattern("vendor/pkg/package.json") == "vendor/**"
        assert path_filter.matching_pattern("src/pom.xml") is None

    def test_backslashes_are_normalized(self):
        assert PathFilter(["vendor/**"]).is_excluded("vendor\\pkg\\package.json")

    def test_no_patterns_excludes_nothing(self):
        assert not PathFilter().is_excluded("anything")


def test_is_excluded_path(tmp_path):
    file_path = tmp_path / "vendor" / "pkg" / "package.json"

    assert is_excluded_path(file_path, tmp_path, ["vendor/**"])
    assert not is_excluded_path(file_path, tmp_path, ["test/**"])


def test_relative_posix_path(tmp_path):
    assert relative_posix_path(tmp_path / "a" / "b.txt", tmp_path) == "a/b.txt"


def test_walk_files_is_sorted_and_pruned(tmp_path):
    for relative in ["b/x.txt", "a/x.txt", "skip/x.txt", "x.txt", "a/y.md"]:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")

    files = list(walk_files(tmp_path, ["skip"], lambda name: name.endswith(".txt")))

    assert files == [tmp_path / "x.txt", tmp_path / "a" / "x.txt", tmp_path / "b" / "x.txt"]

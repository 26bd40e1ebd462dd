"""Tests for fuzzy suggestions."""

import os
import stat
from itertools import permutations
from pathlib import Path

import pytest

from theshit.command import Command
from theshit.fuzzy import (
    CommandMatch,
    ExecutableCache,
    FuzzySuggester,
    find_similar_commands,
    levenshtein_distance,
    scan_executables,
)


def make_executable(directory: Path, name: str, executable: bool = True) -> Path:
    path = directory / name
    path.write_text("#!/bin/sh\n")
    mode = stat.S_IRUSR | stat.S_IWUSR
    if executable:
        mode |= stat.S_IXUSR
    path.chmod(mode)
    return path


class TestLevenshtein:
    """Test edit distance."""

    @pytest.mark.parametrize(
        "a, b, expected",
        [
            ("", "", 0),
            ("git", "git", 0),
            ("gti", "git", 2),
            ("gi", "git", 1),
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("flaw", "lawn", 2),
        ],
    )
    def test_known_distances(self, a: str, b: str, expected: int) -> None:
        """Test distances for known pairs."""
        assert levenshtein_distance(a, b) == expected

    @pytest.mark.parametrize("a, b", [("python", "pyton"), ("ls", "sl"), ("", "x"), ("docker", "dokcer")])
    def test_symmetric(self, a: str, b: str) -> None:
        """Test distance(a, b) == distance(b, a)."""
        assert levenshtein_distance(a, b) == levenshtein_distance(b, a)

    @pytest.mark.parametrize("a, b", [("git", "gti"), ("a", "b"), ("", "a")])
    def test_zero_only_when_equal(self, a: str, b: str) -> None:
        """Test distinct strings have a positive distance."""
        assert levenshtein_distance(a, a) == 0
        assert levenshtein_distance(a, b) > 0

    def test_triangle_inequality(self) -> None:
        """Test d(a, c) <= d(a, b) + d(b, c)."""
        words = ["git", "gti", "grep", "python", "pyton", ""]
        for a, b, c in permutations(words, 3):
            assert levenshtein_distance(a, c) <= levenshtein_distance(a, b) + levenshtein_distance(b, c)


class TestFindSimilarCommands:
    """Test candidate ranking."""

    def test_sorted_by_distance(self) -> None:
        """Test candidates come back closest first."""
        matches = find_similar_commands("gti", ["grep", "gtk", "git", "gti"], max_distance=2)

        assert [m.distance for m in matches] == sorted(m.distance for m in matches)
        assert matches[0] == CommandMatch(command="gti", distance=0)

    def test_ties_keep_discovery_order(self) -> None:
        """Test equal distances preserve input order."""
        matches = find_similar_commands("ab", ["xb", "ax", "ab"], max_distance=1)

        assert [m.command for m in matches] == ["ab", "xb", "ax"]

    def test_threshold_inclusive(self) -> None:
        """Test the distance bound is inclusive."""
        assert find_similar_commands("gti", ["git"], max_distance=2) == [CommandMatch("git", 2)]
        assert find_similar_commands("gti", ["git"], max_distance=1) == []


class TestScanExecutables:
    """Test search path scanning."""

    def test_finds_executables(self, tmp_path: Path) -> None:
        """Test only user-executable regular files are listed."""
        make_executable(tmp_path, "git")
        make_executable(tmp_path, "notes.txt", executable=False)
        make_executable(tmp_path, ".hidden")
        (tmp_path / "subdir").mkdir()

        assert scan_executables(str(tmp_path)) == ["git"]

    def test_symlinks_included(self, tmp_path: Path) -> None:
        """Test symlinks to executables are listed."""
        target = make_executable(tmp_path, "python3")
        (tmp_path / "python").symlink_to(target)

        assert sorted(scan_executables(str(tmp_path))) == ["python", "python3"]

    def test_first_directory_wins(self, tmp_path: Path) -> None:
        """Test duplicate names are listed once."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        make_executable(first, "tool")
        make_executable(second, "tool")
        make_executable(second, "other")

        commands = scan_executables(os.pathsep.join([str(first), str(second)]))

        assert commands.count("tool") == 1
        assert commands[0] == "tool"
        assert "other" in commands

    def test_missing_directories_skipped(self, tmp_path: Path) -> None:
        """Test nonexistent and empty path entries are ignored."""
        make_executable(tmp_path, "ls")
        search_path = os.pathsep.join(["", str(tmp_path / "missing"), str(tmp_path)])

        assert scan_executables(search_path) == ["ls"]


class TestExecutableCache:
    """Test the executable cache."""

    def test_scans_once(self, tmp_path: Path) -> None:
        """Test the search path is scanned only on first use."""
        make_executable(tmp_path, "git")
        cache = ExecutableCache(search_path=str(tmp_path))

        assert not cache.loaded
        assert cache.get_commands() == ["git"]

        make_executable(tmp_path, "grep")

        assert cache.get_commands() == ["git"]
        assert cache.loaded

    def test_preloaded(self) -> None:
        """Test preloaded names skip scanning."""
        cache = ExecutableCache(search_path="/nonexistent", commands=["git", "grep"])

        assert cache.loaded
        assert cache.get_commands() == ["git", "grep"]


class TestFuzzySuggester:
    """Test the suggester."""

    def test_top_suggestion(self) -> None:
        """Test an unresolved token is replaced by the closest executable."""
        suggester = FuzzySuggester(ExecutableCache(commands=["git"]))
        cmd = Command("gti status -s", "gti: command not found")

        assert suggester.has_match("gti")
        assert suggester.suggest(cmd) == ["git status -s"]

    def test_match_stricter_than_suggest(self) -> None:
        """Test suggestions may use a wider bound than matching."""
        suggester = FuzzySuggester(
            ExecutableCache(commands=["gitk", "git"]),
            match_distance=1,
            suggest_distance=3,
        )
        cmd = Command("gi log", "")

        assert suggester.has_match("gi")
        assert suggester.suggest(cmd) == ["git log", "gitk log"]

    def test_limit(self) -> None:
        """Test at most ``limit`` suggestions are produced."""
        suggester = FuzzySuggester(
            ExecutableCache(commands=["aa", "ab", "ac", "ad"]),
            limit=2,
        )

        assert suggester.suggest(Command("a", "")) == ["aa", "ab"]

    def test_no_tokens(self) -> None:
        """Test an empty script yields nothing."""
        suggester = FuzzySuggester(ExecutableCache(commands=["git"]))

        assert suggester.suggest(Command("", "")) == []

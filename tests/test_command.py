"""Tests for the command record."""

import dataclasses

import pytest

from theshit.command import Command, split_script, to_lower


class TestSplitScript:
    """Test script tokenization."""

    def test_single_spaces(self) -> None:
        """Test splitting on single spaces."""
        assert split_script("git commit -m msg") == ("git", "commit", "-m", "msg")

    def test_runs_of_spaces_dropped(self) -> None:
        """Test empty fragments from repeated spaces are discarded."""
        assert split_script("  ls   -la  ") == ("ls", "-la")

    def test_tabs_are_not_separators(self) -> None:
        """Test only the space character separates tokens."""
        assert split_script("echo\ta b") == ("echo\ta", "b")

    def test_empty(self) -> None:
        """Test an empty script has no tokens."""
        assert split_script("") == ()


class TestCommand:
    """Test the Command dataclass."""

    @pytest.mark.parametrize("script", ["ls", "git  push", " cd .. ", "", "a b c d"])
    def test_tokens_derived_from_script(self, script: str) -> None:
        """Test tokens are the space-split, empty-filtered script."""
        cmd = Command(script=script, output="")

        assert list(cmd.tokens) == [t for t in script.split(" ") if t]
        assert Command(script=script, output="other").tokens == cmd.tokens

    def test_immutable(self) -> None:
        """Test commands cannot be modified in place."""
        cmd = Command(script="ls", output="")

        with pytest.raises(dataclasses.FrozenInstanceError):
            cmd.script = "ls -la"  # type: ignore[misc]

    def test_from_raw_tolerates_none(self) -> None:
        """Test missing output becomes an empty string."""
        cmd = Command.from_raw("ls", None)

        assert cmd.output == ""

    def test_no_normalisation(self) -> None:
        """Test script and output are kept verbatim."""
        cmd = Command.from_raw("LS 'a b'", "Permission Denied\n")

        assert cmd.script == "LS 'a b'"
        assert cmd.output == "Permission Denied\n"
        assert cmd.tokens == ("LS", "'a", "b'")


def test_to_lower() -> None:
    """Test the case-folding helper."""
    assert to_lower("Permission DENIED") == "permission denied"

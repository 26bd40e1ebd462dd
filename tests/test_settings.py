"""Tests for settings."""

import logging
import os

import pytest

from theshit.settings import Settings


class TestSettings:
    """Test environment loading."""

    def test_defaults(self) -> None:
        """Test defaults with an empty environment."""
        settings = Settings.from_env({})

        assert settings.require_confirmation is True
        assert settings.no_colors is False
        assert settings.debug is False
        assert settings.max_attempts is None
        assert settings.match_distance == 2
        assert settings.suggest_distance == 3
        assert settings.num_close_matches == 3
        assert settings.exclude_rules == ()
        assert settings.rules_dirs == ()

    def test_boolean_toggles(self) -> None:
        """Test toggles are true only for the exact value 'true'."""
        settings = Settings.from_env(
            {
                "THESHIT_REQUIRE_CONFIRMATION": "false",
                "THESHIT_NO_COLORS": "true",
                "THESHIT_DEBUG": "TRUE",
            }
        )

        assert settings.require_confirmation is False
        assert settings.no_colors is True
        assert settings.debug is False

    def test_integers(self) -> None:
        """Test integer settings."""
        settings = Settings.from_env(
            {
                "THESHIT_MAX_ATTEMPTS": "4",
                "THESHIT_MATCH_DISTANCE": "1",
                "THESHIT_SUGGEST_DISTANCE": "2",
                "THESHIT_NUM_CLOSE_MATCHES": "5",
            }
        )

        assert settings.max_attempts == 4
        assert settings.match_distance == 1
        assert settings.suggest_distance == 2
        assert settings.num_close_matches == 5

    @pytest.mark.parametrize("value", ["many", "-1", ""])
    def test_invalid_integer_keeps_default(self, value: str, caplog: pytest.LogCaptureFixture) -> None:
        """Test invalid integers are logged and ignored."""
        with caplog.at_level(logging.WARNING, logger="theshit.settings"):
            settings = Settings.from_env({"THESHIT_MATCH_DISTANCE": value})

        assert settings.match_distance == 2
        assert "THESHIT_MATCH_DISTANCE" in caplog.text

    @pytest.mark.parametrize(
        "name, attr, default",
        [("MAX_ATTEMPTS", "max_attempts", None), ("NUM_CLOSE_MATCHES", "num_close_matches", 3)],
    )
    def test_zero_counts_keep_default(
        self, name: str, attr: str, default: int | None, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Test attempt and match counts below one are logged and ignored."""
        with caplog.at_level(logging.WARNING, logger="theshit.settings"):
            settings = Settings.from_env({f"THESHIT_{name}": "0"})

        assert getattr(settings, attr) == default
        assert f"THESHIT_{name}" in caplog.text

    def test_zero_distance_allowed(self) -> None:
        """Test distance thresholds may be zero."""
        settings = Settings.from_env({"THESHIT_MATCH_DISTANCE": "0", "THESHIT_SUGGEST_DISTANCE": "0"})

        assert settings.match_distance == 0
        assert settings.suggest_distance == 0

    def test_lists(self) -> None:
        """Test list settings are split and trimmed."""
        settings = Settings.from_env(
            {
                "THESHIT_EXCLUDE_RULES": "sudo, git_commit_amend,,",
                "THESHIT_RULES_DIR": os.pathsep.join(["/a", "/b"]),
            }
        )

        assert settings.exclude_rules == ("sudo", "git_commit_amend")
        assert settings.rules_dirs == ("/a", "/b")

    @pytest.mark.parametrize(
        "max_attempts, recursive, expected",
        [(None, False, 1), (None, True, 10), (3, True, 3), (3, False, 3)],
    )
    def test_max_attempts_for(self, max_attempts: int | None, recursive: bool, expected: int) -> None:
        """Test the attempt bound."""
        assert Settings(max_attempts=max_attempts).max_attempts_for(recursive) == expected

from __future__ import annotations

from pathlib import Path

import pytest

from covgate.core.config import DEFAULT_COVERAGE_PATH
from covgate.core.settings import OnFailStatus, Settings, parse_settings
from covgate.errors import ConfigError


def test_defaults() -> None:
    settings, warnings = parse_settings({})
    assert settings == Settings()
    assert settings.coverage_path == Path(DEFAULT_COVERAGE_PATH)
    assert settings.on_fail_status is OnFailStatus.FAIL
    assert settings.fails_job
    assert warnings == []


def test_parses_all_options() -> None:
    settings, warnings = parse_settings(
        {
            "MINIMUM_SUITE_COVERAGE": "95",
            "MINIMUM_FILE_COVERAGE": "90.5",
            "COVERAGE_PATH": "build/cov.json",
            "DEBUG_MODE": "TRUE",
            "ON_FAIL_STATUS": "WARN",
            "POST_COMMENT": "1",
            "UPDATE_COMMENT": "true",
            "GITHUB_TOKEN": "t0k",
        }
    )
    assert warnings == []
    assert settings == Settings(
        minimum_suite_coverage=95.0,
        minimum_file_coverage=90.5,
        coverage_path=Path("build/cov.json"),
        debug_mode=True,
        on_fail_status=OnFailStatus.WARN,
        post_comment=True,
        update_comment=True,
        github_token="t0k",
    )
    assert not settings.fails_job


def test_action_inputs_are_recognised_and_plain_names_win() -> None:
    settings, _ = parse_settings({"INPUT_MINIMUM_FILE_COVERAGE": "40", "INPUT_MINIMUM_SUITE_COVERAGE": "10"})
    assert settings.minimum_file_coverage == 40.0
    settings, _ = parse_settings({"INPUT_MINIMUM_SUITE_COVERAGE": "10", "MINIMUM_SUITE_COVERAGE": "20"})
    assert settings.minimum_suite_coverage == 20.0


@pytest.mark.parametrize("raw", ["-1", "100.01", "250", "nan", "abc", "inf"])
def test_invalid_threshold_is_fatal(raw: str) -> None:
    with pytest.raises(ConfigError, match="minimum_suite_coverage"):
        parse_settings({"MINIMUM_SUITE_COVERAGE": raw})
    with pytest.raises(ConfigError, match="minimum_file_coverage"):
        parse_settings({"MINIMUM_FILE_COVERAGE": raw})


@pytest.mark.parametrize("raw", ["0", "100", "", "  ", "80%"])
def test_threshold_bounds_are_inclusive(raw: str) -> None:
    settings, _ = parse_settings({"MINIMUM_FILE_COVERAGE": raw})
    assert 0 <= settings.minimum_file_coverage <= 100


@pytest.mark.parametrize("name", ["DEBUG_MODE", "POST_COMMENT", "UPDATE_COMMENT"])
def test_malformed_flag_warns_and_defaults_to_false(name: str) -> None:
    settings, warnings = parse_settings({name: "yes", "GITHUB_TOKEN": "t"})
    assert getattr(settings, name.lower()) is False
    assert warnings == [f"`{name.lower()}` should be 'true' or 'false', got 'yes'. Using default (false)."]


def test_invalid_fail_status_warns_and_defaults_to_fail() -> None:
    settings, warnings = parse_settings({"ON_FAIL_STATUS": "explode"})
    assert settings.on_fail_status is OnFailStatus.FAIL
    assert len(warnings) == 1
    assert "on_fail_status" in warnings[0]


@pytest.mark.parametrize("token", [None, "", "   "])
def test_post_comment_without_token_is_disabled(token: str | None) -> None:
    env = {"POST_COMMENT": "true"}
    if token is not None:
        env["GITHUB_TOKEN"] = token
    settings, warnings = parse_settings(env)
    assert settings.post_comment is False
    assert settings.github_token is None
    assert warnings == ["`post_comment` is enabled but no `github_token` was provided. Comments won't be posted."]


def test_warnings_are_collected_independently() -> None:
    _, warnings = parse_settings({"DEBUG_MODE": "maybe", "ON_FAIL_STATUS": "nope", "POST_COMMENT": "sure"})
    assert len(warnings) == 3

"""Tests for configuration helpers."""

import pytest

from face_duel.config import Settings, normalize_base_url


def test_settings_defaults(settings: Settings) -> None:
    assert settings.join_capture_attempts == 10
    assert settings.join_capture_delay_seconds == pytest.approx(0.3)
    assert settings.shoot_capture_attempts == 1
    assert settings.roster_poll_interval_seconds == pytest.approx(4.0)
    assert settings.log_level == "INFO"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARBITER_WS_URL", "wss://arbiter.example:8765")
    monkeypatch.setenv("JOIN_CAPTURE_ATTEMPTS", "3")

    loaded = Settings(_env_file=None)

    assert loaded.arbiter_ws_url == "wss://arbiter.example:8765"
    assert loaded.join_capture_attempts == 3
    assert loaded.arbiter_api_url is None


def test_settings_read_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARBITER_WS_URL", "ws://arbiter.test:8765")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    assert Settings(_env_file=None).log_level == "DEBUG"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, None),
        ("", None),
        ("  ", None),
        ("https://arbiter.test:8080/", "https://arbiter.test:8080"),
        ("https://arbiter.test", "https://arbiter.test"),
    ],
)
def test_normalize_base_url(raw: str | None, expected: str | None) -> None:
    assert normalize_base_url(raw) == expected

"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from alertslack.config import Settings, get_settings
from tests.conftest import WEBHOOK_URL


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, settings: Settings) -> None:
        assert settings.webhook_url == WEBHOOK_URL
        assert settings.username == "Grafana"
        assert settings.source_mode == "grafana"
        assert settings.default_channel == "alerts"
        assert settings.silence_buttons is False
        assert settings.slack_date_macros is False
        assert not settings.external_mode

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALERTSLACK_WEBHOOK_URL", WEBHOOK_URL)
        monkeypatch.setenv("ALERTSLACK_USERNAME", "Alertmanager")
        monkeypatch.setenv("ALERTSLACK_SILENCE_BUTTONS", "true")
        settings = Settings(_env_file=None)

        assert settings.username == "Alertmanager"
        assert settings.silence_buttons is True

    def test_webhook_url_required(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ALERTSLACK_WEBHOOK_URL", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_external_mode_requires_base_url(self, make_settings) -> None:
        with pytest.raises(ValidationError):
            make_settings(source_mode="alertmanager")

    def test_external_base_url_trailing_slash(self, make_settings) -> None:
        settings = make_settings(source_mode="alertmanager", external_base_url="https://grafana.example/")
        assert settings.external_base_url == "https://grafana.example"
        assert settings.external_mode

    def test_unknown_mode_rejected(self, make_settings) -> None:
        with pytest.raises(ValidationError):
            make_settings(source_mode="loki")

    def test_frozen(self, settings: Settings) -> None:
        with pytest.raises(ValidationError):
            settings.username = "other"

    def test_get_settings_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALERTSLACK_WEBHOOK_URL", WEBHOOK_URL)
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

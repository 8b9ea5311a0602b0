"""Unit tests for settings loading and service wiring."""

from __future__ import annotations

import json

from mitra.config.env import get_settings
from mitra.config.settings import Settings
from mitra.services.factory import build_services, build_store
from mitra.store.firestore import FirestoreStore
from mitra.store.memory import InMemoryStore

_KEYS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "OPENWEATHER_API_KEY",
    "GOOGLE_SERVICE_ACCOUNT_KEY",
    "GOOGLE_SERVICE_ACCOUNT_KEY_PATH",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "FIRESTORE_PROJECT_ID",
    "REQUEST_TIMEOUT_SECONDS",
    "AUTH_ENABLED",
)


def _clear_env(monkeypatch) -> None:
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)


class TestGetSettings:
    def test_defaults(self, monkeypatch) -> None:
        _clear_env(monkeypatch)
        settings = get_settings()
        assert settings.gemini_model == "gemini-1.5-flash-latest"
        assert settings.request_timeout_seconds == 10.0
        assert not settings.gemini_configured()
        assert not settings.firestore_configured()
        assert settings.auth_enabled is False

    def test_reads_env(self, monkeypatch) -> None:
        _clear_env(monkeypatch)
        monkeypatch.setenv("GEMINI_API_KEY", "g-key")
        monkeypatch.setenv("OPENWEATHER_API_KEY", "w-key")
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("AUTH_ENABLED", "true")
        settings = get_settings()
        assert settings.gemini_configured()
        assert settings.weather_configured()
        assert settings.request_timeout_seconds == 5.0
        assert settings.auth_enabled is True

    def test_bad_timeout_falls_back(self, monkeypatch) -> None:
        _clear_env(monkeypatch)
        monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "soon")
        assert get_settings().request_timeout_seconds == 10.0

    def test_key_file_supplies_project(self, monkeypatch, tmp_path) -> None:
        _clear_env(monkeypatch)
        key = tmp_path / "key.json"
        key.write_text(json.dumps({"client_email": "svc@x.iam", "project_id": "mitra-demo"}))
        monkeypatch.setenv("GOOGLE_SERVICE_ACCOUNT_KEY_PATH", str(key))
        settings = get_settings()
        assert settings.google_credentials_path == str(key.resolve())
        assert settings.firestore_project_id == "mitra-demo"
        assert settings.firestore_configured()

    def test_inline_json_key(self, monkeypatch) -> None:
        _clear_env(monkeypatch)
        monkeypatch.setenv(
            "GOOGLE_SERVICE_ACCOUNT_KEY",
            json.dumps({"client_email": "svc@x.iam", "project_id": "inline-proj"}),
        )
        settings = get_settings()
        assert settings.google_credentials_path.endswith(".json")
        assert settings.firestore_project_id == "inline-proj"


class TestFactory:
    def test_in_memory_store_without_firestore(self) -> None:
        assert isinstance(build_store(Settings()), InMemoryStore)

    def test_firestore_store_when_configured(self, tmp_path) -> None:
        settings = Settings(google_credentials_path=str(tmp_path / "k.json"), firestore_project_id="p")
        assert isinstance(build_store(settings), FirestoreStore)

    def test_new_session_starts_with_welcome(self) -> None:
        services = build_services(Settings())
        session = services.new_session()
        assert len(session.messages) == 1

"""Tests for environment-driven settings."""

from pathlib import Path

from api import SessionManager
from settings import DEFAULT_API_URL, DEFAULT_DRAG_DISTANCE, Settings, load_settings, state_dir

from conftest import make_token


class TestLoadSettings:
    def test_defaults(self, monkeypatch, tmp_path):
        for name in (
            "TIERLIST_API_URL",
            "TIERLIST_STORAGE_URL",
            "TIERLIST_SHARE_URL",
            "TIERLIST_TIMEOUT",
            "TIERLIST_DRAG_DISTANCE",
            "TIERLIST_ACCESS_TOKEN",
        ):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        settings = load_settings()

        assert settings.api_url == DEFAULT_API_URL
        assert settings.storage_url == ""
        assert settings.drag_distance == DEFAULT_DRAG_DISTANCE
        assert settings.access_token is None
        assert settings.session_path == tmp_path / "tierlist" / "session.json"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("TIERLIST_API_URL", "https://api.example/")
        monkeypatch.setenv("TIERLIST_STORAGE_URL", "https://store.example/")
        monkeypatch.setenv("TIERLIST_TIMEOUT", "4.5")
        monkeypatch.setenv("TIERLIST_DRAG_DISTANCE", "3")
        monkeypatch.setenv("TIERLIST_ACCESS_TOKEN", "tok")

        settings = load_settings()

        assert settings.api_url == "https://api.example"
        assert settings.storage_url == "https://store.example"
        assert settings.timeout == 4.5
        assert settings.drag_distance == 3.0
        assert settings.access_token == "tok"

    def test_bad_number_uses_default(self, monkeypatch):
        monkeypatch.setenv("TIERLIST_DRAG_DISTANCE", "far")
        assert load_settings().drag_distance == DEFAULT_DRAG_DISTANCE

    def test_state_dir_follows_xdg(self, monkeypatch, tmp_path):
        monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path))
        assert state_dir() == tmp_path / "tierlist"


class TestSettings:
    def test_share_base_defaults_to_api_url(self):
        assert Settings(api_url="http://api/").share_base == "http://api"
        assert Settings(api_url="http://api", share_url="http://web/").share_base == "http://web"

    def test_with_overrides_ignores_none(self):
        settings = Settings(api_url="http://a", session_path=Path("/tmp/s.json"))
        updated = settings.with_overrides(api_url=None, access_token="tok")
        assert updated.api_url == "http://a"
        assert updated.access_token == "tok"
        assert settings.access_token is None

    def test_default_settings_do_not_persist_session(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert Settings().session_path is None
        sessions = SessionManager(Settings().session_path)
        sessions.sign_in(make_token())
        assert sessions.get_current_session() is not None
        assert list(tmp_path.iterdir()) == []

"""Runtime settings for tierlist, read from the environment."""

import os
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_API_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 15.0
DEFAULT_DRAG_DISTANCE = 2.0

# Storage bucket holding uploaded template images
IMAGE_BUCKET = "template-images"


def _xdg_dir(var: str, fallback: Path) -> Path:
    return Path(os.environ.get(var, str(fallback))) / "tierlist"


def state_dir() -> Path:
    """Directory for logs ($XDG_STATE_HOME/tierlist)."""
    return _xdg_dir("XDG_STATE_HOME", Path.home() / ".local" / "state")


def config_dir() -> Path:
    """Directory for the stored session ($XDG_CONFIG_HOME/tierlist)."""
    return _xdg_dir("XDG_CONFIG_HOME", Path.home() / ".config")


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Connection and interaction settings."""

    api_url: str = DEFAULT_API_URL
    storage_url: str = ""  # Uploads are disabled when empty
    share_url: str = ""  # Defaults to api_url
    timeout: float = DEFAULT_TIMEOUT
    drag_distance: float = DEFAULT_DRAG_DISTANCE
    access_token: str | None = None
    session_path: Path | None = None  # Session is not persisted when None

    @property
    def share_base(self) -> str:
        return (self.share_url or self.api_url).rstrip("/")

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def load_settings() -> Settings:
    """Build Settings from TIERLIST_* environment variables."""
    return Settings(
        api_url=os.environ.get("TIERLIST_API_URL", DEFAULT_API_URL).rstrip("/"),
        storage_url=os.environ.get("TIERLIST_STORAGE_URL", "").rstrip("/"),
        share_url=os.environ.get("TIERLIST_SHARE_URL", "").rstrip("/"),
        timeout=_float_env("TIERLIST_TIMEOUT", DEFAULT_TIMEOUT),
        drag_distance=_float_env("TIERLIST_DRAG_DISTANCE", DEFAULT_DRAG_DISTANCE),
        access_token=os.environ.get("TIERLIST_ACCESS_TOKEN") or None,
        session_path=config_dir() / "session.json",
    )

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PLACEHOLDER_URL = "YOUR_APP_SCRIPT_WEB_APP_URL_HERE"
DEFAULT_API_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbxUc9kG9nBzXfsrYVDFF2z5yiPWUP3c-vqgvP_unva6SoWgJZ_Ri3qlh6ZlBj7ZL23f/exec"
)
# Runtime overrides are only honoured for Apps Script deployments
ENDPOINT_HOST_MARKER = "script.google.com"
DEFAULT_TIMEOUT = 20.0


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    api_url: str
    timeout: float
    home: Path
    log_level: str
    log_dir: Path


def get_settings() -> Settings:
    """
    Read settings from the environment.

    DOCTRACKER_API_URL falls back to the bundled Apps Script deployment;
    everything else has a sensible local default.
    """
    home = Path(os.getenv("DOCTRACKER_HOME") or Path.home() / ".doctracker").expanduser()
    log_dir = os.getenv("DOCTRACKER_LOG_DIR")
    raw_timeout = os.getenv("DOCTRACKER_TIMEOUT", str(DEFAULT_TIMEOUT))
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise SystemExit(f"DOCTRACKER_TIMEOUT must be a number: {raw_timeout!r}")
    return Settings(
        api_url=(os.getenv("DOCTRACKER_API_URL") or "").strip() or DEFAULT_API_URL,
        timeout=timeout,
        home=home,
        log_level=os.getenv("DOCTRACKER_LOG_LEVEL", "WARNING").upper(),
        log_dir=Path(log_dir).expanduser() if log_dir else home / "logs",
    )


def is_configured(url: str) -> bool:
    return bool(url) and url != PLACEHOLDER_URL


def accepts_override(url: str) -> bool:
    """A typed-in endpoint only takes effect once it looks like an Apps Script URL."""
    return ENDPOINT_HOST_MARKER in (url or "")

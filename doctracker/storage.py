import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

PREFERENCES_FILE = "preferences.json"
THEMES = ("light", "dark")


def preferences_path(home: Path) -> Path:
    return home / PREFERENCES_FILE


def load_preferences(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
            if not content:
                return {}
            data = json.loads(content)
            return data if isinstance(data, dict) else {}
    except (json.JSONDecodeError, IOError):
        return {}


def save_preferences(path: Path, prefs: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(prefs, f, indent=2, ensure_ascii=False)


def load_theme(path: Path) -> Optional[str]:
    """Return the saved theme, or None when nothing valid was saved."""
    theme = load_preferences(path).get("theme")
    return theme if theme in THEMES else None


def save_theme(path: Path, theme: str) -> None:
    if theme not in THEMES:
        raise ValueError(f"Unknown theme: {theme}")
    prefs = load_preferences(path)
    prefs["theme"] = theme
    save_preferences(path, prefs)


def system_prefers_dark() -> bool:
    """
    Best-effort guess at the terminal's colour scheme.

    DOCTRACKER_PREFERS_DARK wins when set; otherwise COLORFGBG ("fg;bg") is
    read, where background colours 0-6 and 8 are dark.
    """
    explicit = os.getenv("DOCTRACKER_PREFERS_DARK")
    if explicit is not None and explicit.strip():
        return explicit.strip().lower() in ("1", "true", "yes", "dark")

    colorfgbg = os.getenv("COLORFGBG", "")
    bg = colorfgbg.split(";")[-1].strip()
    if bg.isdigit():
        return int(bg) in (0, 1, 2, 3, 4, 5, 6, 8)
    return False

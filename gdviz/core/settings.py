"""Application configuration defaults and persistent settings helpers.

Only generation and display defaults live here. Fitted parameters are
never written to disk.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from .surface import DEFAULT_PERCENTILE, clamp_percentile


SETTINGS_DIR = Path.home() / ".config" / "gdviz"
SETTINGS_PATH = SETTINGS_DIR / "settings.json"

DEFAULT_LEARNING_RATE = 0.01
MIN_LEARNING_RATE = 1e-4
MAX_LEARNING_RATE = 1.0


def load_settings() -> dict:
    """Load settings from disk.

    Returns an empty dict if settings file does not exist or contains invalid JSON.
    """
    if not SETTINGS_PATH.exists():
        return {}

    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}

    return data if isinstance(data, dict) else {}


def save_settings(data: dict) -> None:
    """Persist settings to disk atomically."""
    SETTINGS_DIR.mkdir(parents=True, exist_ok=True)
    tmp_path = SETTINGS_PATH.with_suffix(".tmp")
    tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
    tmp_path.replace(SETTINGS_PATH)


def get_setting(key: str, default: Any = None) -> Any:
    """Read a setting value with a fallback default."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> None:
    """Set and persist a single setting key."""
    settings = load_settings()
    settings[key] = value
    save_settings(settings)


@dataclass(frozen=True)
class AppConfig:
    """Session configuration: ground truth, sampling and display tuning."""

    samples: int = 120
    slope: float = -0.8
    intercept: float = 10.0
    noise: float = 1.2
    seed: Optional[int] = None
    learning_rate: float = DEFAULT_LEARNING_RATE
    surface_percentile: float = DEFAULT_PERCENTILE
    surface_eps: float = 1e-8
    frame_interval_ms: int = 16

    @classmethod
    def from_settings(cls, overrides: Optional[dict] = None) -> "AppConfig":
        """
        Merge the settings file and explicit overrides over the defaults.

        Overrides win over the file; None override values and unknown
        keys are ignored. The surface percentile is clamped to [0, 1].
        """
        names = {f.name for f in fields(cls)}
        merged = {k: v for k, v in load_settings().items() if k in names}
        for key, value in (overrides or {}).items():
            if key in names and value is not None:
                merged[key] = value
        if "surface_percentile" in merged:
            merged["surface_percentile"] = clamp_percentile(merged["surface_percentile"])
        return replace(cls(), **merged)

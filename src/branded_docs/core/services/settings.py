from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_ENV = "BRANDED_DOCS_SETTINGS"
SETTINGS_PATH = Path(__file__).resolve().parents[2] / "data" / "render_settings.json"


@dataclass(frozen=True)
class RenderSettings:
    font_base_url: str = ""
    font_dir: str = ""
    font_timeout: float = 10.0
    default_currency: str = "SAR"
    gradient_steps: int = 24


DEFAULT_SETTINGS = RenderSettings()

_ENV_OVERRIDES = {
    "BRANDED_DOCS_FONT_URL": "font_base_url",
    "BRANDED_DOCS_FONT_DIR": "font_dir",
    "BRANDED_DOCS_FONT_TIMEOUT": "font_timeout",
}


def _coerce(name: str, value):
    if name == "font_timeout":
        return float(value)
    if name == "gradient_steps":
        return max(2, int(value))
    return str(value or "")


def load_render_settings(path: Path | None = None) -> RenderSettings:
    """
    Defaults, then an optional JSON file, then environment overrides.
    An unreadable or malformed file falls back to the defaults.
    """
    values = asdict(DEFAULT_SETTINGS)
    known = {f.name for f in fields(RenderSettings)}

    env_path = os.environ.get(SETTINGS_ENV)
    target = path or (Path(env_path) if env_path else SETTINGS_PATH)
    if target.exists():
        try:
            data = json.loads(target.read_text(encoding="utf-8"))
            for key, raw in dict(data).items():
                if key in known:
                    values[key] = _coerce(key, raw)
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Ignoring render settings %s: %s", target, exc)
            values = asdict(DEFAULT_SETTINGS)

    for env_name, key in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            values[key] = _coerce(key, raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring %s=%r", env_name, raw)
    return RenderSettings(**values)


def save_render_settings(settings: RenderSettings, path: Path | None = None) -> Path:
    target = path or SETTINGS_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(asdict(settings), ensure_ascii=False, indent=2), encoding="utf-8")
    return target

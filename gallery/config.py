# gallery/config.py
"""
Settings and logging for the gallery ingester and API.

Values come from, in increasing priority:
  1) built-in defaults
  2) a YAML file (config/gallery.yml, or GALLERY_CONFIG / --config)
  3) environment variables (a local .env is loaded first)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional, Tuple

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = "config/gallery.yml"
PLACEHOLDER_API_KEY = "YOUR API KEY"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    # upstream portfolio API
    api_key: str = PLACEHOLDER_API_KEY
    api_base: str = "https://api.behance.net/v2"
    pages: int = 10
    request_timeout: float = 20.0

    # storage
    db_path: str = "gallery.db"
    photos_dir: str = "photos"
    results_path: str = "results.json"

    # ingestion
    download_timeout: float = 3.0
    workers: int = 8

    # http
    host: str = "0.0.0.0"
    port: int = 8000
    open_browser: bool = True
    browser_urls: Tuple[str, ...] = field(
        default=(
            "http://localhost:8000",
            "http://localhost:6060/src/gallery/results.html",
        )
    )

    log_level: str = "INFO"


# env var -> settings field
_ENV_OVERRIDES = {
    "BEHANCE_API_KEY": "api_key",
    "BEHANCE_API_BASE": "api_base",
    "GALLERY_PAGES": "pages",
    "GALLERY_REQUEST_TIMEOUT": "request_timeout",
    "GALLERY_DB": "db_path",
    "GALLERY_PHOTOS_DIR": "photos_dir",
    "GALLERY_RESULTS": "results_path",
    "GALLERY_DOWNLOAD_TIMEOUT": "download_timeout",
    "GALLERY_WORKERS": "workers",
    "GALLERY_HOST": "host",
    "GALLERY_PORT": "port",
    "GALLERY_OPEN_BROWSER": "open_browser",
    "LOG_LEVEL": "log_level",
}

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}


def _as_bool(raw) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUTHY


def load_config(cfg_path: str) -> dict:
    """
    Load the YAML config. Structure mirrors Settings, e.g.:

    api_key: abc123
    pages: 10
    storage:
      db_path: gallery.db
      photos_dir: photos
    """
    path = Path(cfg_path)
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {cfg_path} must be a mapping, got {type(data).__name__}")
    # Nested sections are flattened; keys are unique across sections.
    flat = {}
    for k, v in data.items():
        if isinstance(v, dict):
            flat.update(v)
        else:
            flat[k] = v
    return flat


def _coerce(name: str, value):
    if name == "browser_urls":
        return tuple(value or ())
    current = getattr(Settings, name, None)
    if isinstance(current, bool):
        return _as_bool(value)
    if isinstance(current, int):
        return int(value)
    if isinstance(current, float):
        return float(value)
    return str(value)


def load_settings(cfg_path: Optional[str] = None) -> Settings:
    """Build Settings from defaults, the YAML file and the environment."""
    load_dotenv()
    cfg_path = cfg_path or os.getenv("GALLERY_CONFIG", DEFAULT_CONFIG_PATH)

    known = set(Settings.__dataclass_fields__)
    values = {}
    for k, v in load_config(cfg_path).items():
        if k not in known:
            logging.getLogger(__name__).warning("Ignoring unknown config key %r in %s", k, cfg_path)
            continue
        values[k] = _coerce(k, v)

    for env_key, name in _ENV_OVERRIDES.items():
        raw = os.getenv(env_key)
        if raw is None or not raw.strip():
            continue
        values[name] = _coerce(name, raw.strip())

    return replace(Settings(), **values)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once per process."""
    if getattr(setup_logging, "_configured", False):
        return
    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format=LOG_FORMAT, level=lvl)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(lvl)
    setup_logging._configured = True

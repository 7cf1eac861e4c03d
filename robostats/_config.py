"""Settings loader for the robostats service.

Values come from the environment first (``RE_API_KEY``, ``PORT``), then from
a ``config.json`` next to the project root with keys ``re_key`` and ``port``.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_PROJECT_ROOT / ".env")

CONFIG_PATH = _PROJECT_ROOT / "config.json"
DEFAULT_BASE_URL = "https://www.robotevents.com/api/v2"
DEFAULT_PORT = 8080


class ConfigError(RuntimeError):
    """Raised when no API key can be found."""


@dataclass(frozen=True)
class Settings:
    re_api_key: str
    port: int = DEFAULT_PORT
    base_url: str = DEFAULT_BASE_URL


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path) as f:
        return json.load(f)


def load_settings(config_path: Path | None = None) -> Settings:
    """Build Settings once at startup."""
    file_cfg = _read_config_file(config_path or CONFIG_PATH)

    key = os.getenv("RE_API_KEY") or file_cfg.get("re_key")
    if not key:
        raise ConfigError("RE_API_KEY is not set and config.json has no 're_key'")

    port = os.getenv("PORT") or file_cfg.get("port") or DEFAULT_PORT
    base_url = os.getenv("RE_API_URL", DEFAULT_BASE_URL)
    return Settings(re_api_key=key, port=int(port), base_url=base_url.rstrip("/"))

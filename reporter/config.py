"""Configuration: paths, defaults, env/config-file readers."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

# ── Paths ────────────────────────────────────────────────────────────────────

CONFIG_DIR = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / "reporter"
CONFIG_PATH = CONFIG_DIR / "config.json"

# ── Config File Loader ───────────────────────────────────────────────────────

_reporter_config: dict | None = None


def _load_config() -> dict[str, Any]:
    """Load ~/.config/reporter/config.json (cached per invocation)."""
    global _reporter_config
    if _reporter_config is None:
        try:
            loaded = json.loads(CONFIG_PATH.read_text())
        except (OSError, json.JSONDecodeError):
            loaded = {}
        _reporter_config = loaded if isinstance(loaded, dict) else {}
    return _reporter_config


def _getenv_default(key: str, default: str) -> str:
    """Return the env var if set and non-empty, else default."""
    value = os.environ.get(key)
    if value:
        return value
    return default


_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _cfg_bool(env_key: str, config_key: str, default: bool) -> bool:
    """Read a boolean: env var (1/0, true/false, ...) → config file → default."""
    env = os.environ.get(env_key, "").strip().lower()
    if env in _TRUE:
        return True
    if env in _FALSE:
        return False
    val = _load_config().get(config_key)
    if isinstance(val, bool):
        return val
    return default


def _cfg_str(env_key: str, config_key: str, default: str) -> str:
    """Read a string: non-empty env var → config file → default."""
    env = os.environ.get(env_key)
    if env:
        return env
    val = _load_config().get(config_key)
    if isinstance(val, str):
        return val
    return default


# ── Preferences ──────────────────────────────────────────────────────────────

THRESHOLD = _cfg_str("REPORTER_THRESHOLD", "threshold", "10s")
ALWAYS = _cfg_bool("REPORTER_ALWAYS", "always", False)
TITLE = _cfg_str("REPORTER_TITLE", "title", "Task finished")
BELL = _cfg_bool("REPORTER_BELL", "bell", True)
PUSH_URL = _cfg_str("REPORTER_PUSH_URL", "push_url", "")
LOG_FILE = _cfg_str("REPORTER_LOG_FILE", "log_file", "")

# ── Constants ────────────────────────────────────────────────────────────────

PUSH_TIMEOUT = 5

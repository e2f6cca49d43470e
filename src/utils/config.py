"""Application settings read from the environment and an optional .env file."""
import logging
import os
from pathlib import Path
from threading import Lock

DEFAULT_STORE_FILE = "data/local_store.json"
DEFAULT_MAX_INSCRIPTIONS = 50
DEFAULT_SUBMIT_DELAY_SECONDS = 0.5
DEFAULT_LOG_LEVEL = "INFO"

_KNOWN_KEYS = {
    "REGISTRATION_STORE_FILE",
    "MAX_INSCRIPTIONS",
    "SUBMIT_DELAY_SECONDS",
    "LOG_LEVEL",
}

_ENV_LOADED = False
_ENV_LOCK = Lock()
_LOGGING_CONFIGURED = False


def load_env(env_path: str = ".env") -> None:
    """
    Load known settings from a .env file if present.

    Behavior:
        - Runs once per process
        - Skips blank lines and comments
        - Values already set in os.environ are kept
    """
    global _ENV_LOADED

    if _ENV_LOADED:
        return

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        path = Path(env_path)
        if path.exists():
            for raw_line in path.read_text(encoding="utf-8").splitlines():
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue

                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"\'')

                if key in _KNOWN_KEYS and key not in os.environ:
                    os.environ[key] = value

        _ENV_LOADED = True


def _reset_env_loaded() -> None:
    """Allow load_env to run again (tests)."""
    global _ENV_LOADED
    _ENV_LOADED = False


def get_store_file() -> str:
    """Path of the JSON key-value store."""
    load_env()
    return os.getenv("REGISTRATION_STORE_FILE", "").strip() or DEFAULT_STORE_FILE


def get_max_inscriptions() -> int:
    """List capacity; falls back to the default on missing or invalid values."""
    load_env()
    raw = os.getenv("MAX_INSCRIPTIONS", "").strip()
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_INSCRIPTIONS
    return value if value > 0 else DEFAULT_MAX_INSCRIPTIONS


def get_submit_delay() -> float:
    """Seconds to wait before confirming a submission."""
    load_env()
    raw = os.getenv("SUBMIT_DELAY_SECONDS", "").strip()
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_SUBMIT_DELAY_SECONDS
    return value if value >= 0 else DEFAULT_SUBMIT_DELAY_SECONDS


def get_log_level() -> int:
    load_env()
    name = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Configure the root logger once from LOG_LEVEL."""
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _LOGGING_CONFIGURED = True

"""Load and validate environment variables. Single source for env handling."""
import json
import logging
import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (parent of mitra/)
_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_root / ".env")

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _get(key: str, default: str = "") -> str:
    """Get config: Streamlit secrets (deployed) then env vars (local)."""
    try:
        import streamlit as st
        if hasattr(st, "secrets") and st.secrets and key in st.secrets:
            return str(st.secrets.get(key, default))
    except Exception:
        pass
    return os.getenv(key, default)


def load_env() -> None:
    """Ensure .env is loaded. Call at app startup."""
    load_dotenv(_root / ".env")


def configure_logging(level: str = "INFO") -> None:
    """Install a basic root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=_LOG_FORMAT)
    root.setLevel(level.upper())


def _resolve_credentials(raw: str) -> tuple[str, str]:
    """Return (credentials_path, project_id) from a key path or inline JSON key.

    Inline JSON (Streamlit Cloud secret) is written to a temp file because the
    google-auth loader reads from disk.
    """
    raw = (raw or "").strip()
    if not raw:
        return "", ""
    if raw.startswith("{") and "client_email" in raw:
        try:
            info = json.loads(raw)
        except json.JSONDecodeError:
            return "", ""
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w") as f:
            f.write(raw)
        return path, str(info.get("project_id", ""))
    p = Path(raw)
    if not p.is_absolute():
        p = _root / p
    if not p.exists():
        return "", ""
    try:
        project_id = str(json.loads(p.read_text(encoding="utf-8")).get("project_id", ""))
    except (OSError, json.JSONDecodeError):
        project_id = ""
    return str(p.resolve()), project_id


def get_settings() -> "Settings":
    """Return validated settings. Uses Streamlit secrets when deployed, else env / .env."""
    from mitra.config.settings import REQUEST_TIMEOUT_SECONDS, Settings

    raw_key = (
        _get("GOOGLE_SERVICE_ACCOUNT_KEY")
        or _get("GOOGLE_SERVICE_ACCOUNT_KEY_PATH")
        or _get("GOOGLE_APPLICATION_CREDENTIALS", "")
    )
    credentials_path, key_project_id = _resolve_credentials(raw_key)

    timeout_raw = _get("REQUEST_TIMEOUT_SECONDS", "")
    try:
        timeout = float(timeout_raw) if timeout_raw else REQUEST_TIMEOUT_SECONDS
    except ValueError:
        timeout = REQUEST_TIMEOUT_SECONDS

    return Settings(
        gemini_api_key=_get("GEMINI_API_KEY", ""),
        gemini_model=_get("GEMINI_MODEL", "") or "gemini-1.5-flash-latest",
        openweather_api_key=_get("OPENWEATHER_API_KEY", ""),
        google_credentials_path=credentials_path,
        firestore_project_id=_get("FIRESTORE_PROJECT_ID", "") or key_project_id,
        request_timeout_seconds=timeout,
        auth_enabled=_get("AUTH_ENABLED", "").strip().lower() in ("1", "true", "yes"),
        log_level=_get("LOG_LEVEL", "INFO") or "INFO",
    )

"""Runtime configuration read from environment variables."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_DB_PATH = Path.home() / ".cajachica" / "cajachica.db"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_SESSION_SECRET = "change-me"


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    database_url: Optional[str] = None
    db_path: Optional[str] = None
    google_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    session_secret: str = DEFAULT_SESSION_SECRET
    log_level: str = "INFO"
    cli_user: str = "local"

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "Settings":
        """Build settings from environment variables (os.environ by default)."""
        env = os.environ if environ is None else environ
        return cls(
            database_url=env.get("CAJACHICA_DATABASE_URL") or None,
            db_path=env.get("CAJACHICA_DB_PATH") or None,
            google_api_key=env.get("GOOGLE_AI_API_KEY") or None,
            gemini_model=env.get("CAJACHICA_GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            session_secret=env.get("CAJACHICA_SESSION_SECRET") or DEFAULT_SESSION_SECRET,
            log_level=(env.get("CAJACHICA_LOG_LEVEL") or "INFO").upper(),
            cli_user=env.get("CAJACHICA_USER") or "local",
        )

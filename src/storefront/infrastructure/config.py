"""Runtime settings, read from the environment (and a ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_SENDER = "TitanSupps <noreply@titansupps.com>"


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_json: bool = False
    mail_backend: str = "console"  # console | resend
    resend_api_key: str = ""
    email_from: str = DEFAULT_SENDER

    @staticmethod
    def from_env() -> Settings:
        load_dotenv()
        return Settings(
            database_url=os.getenv(
                "STOREFRONT_DATABASE_URL", f"sqlite:///{_DATA_DIR / 'storefront.db'}"
            ),
            log_level=os.getenv("STOREFRONT_LOG_LEVEL", "INFO"),
            log_json=_flag(os.getenv("STOREFRONT_LOG_JSON", "")),
            mail_backend=os.getenv("STOREFRONT_MAIL_BACKEND", "console").lower(),
            resend_api_key=os.getenv("RESEND_API_KEY", ""),
            email_from=os.getenv("EMAIL_FROM") or DEFAULT_SENDER,
        )


def _flag(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}

"""Centralised settings for the word-forms scraper.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Target site
    # ------------------------------------------------------------------
    domain: str = field(
        default_factory=lambda: os.environ.get(
            "WORDFORMS_DOMAIN", "https://www.collinsdictionary.com"
        ).rstrip("/")
    )

    # ------------------------------------------------------------------
    # Batch defaults
    # ------------------------------------------------------------------
    process_redirections: bool = field(
        default_factory=lambda: _env_bool("PROCESS_REDIRECTIONS", True)
    )
    navigation_timeout: float = field(
        default_factory=lambda: float(os.environ.get("NAVIGATION_TIMEOUT", "60.0"))
    )
    inter_request_delay: float = field(
        default_factory=lambda: float(os.environ.get("INTER_REQUEST_DELAY", "0.0"))
    )

    # ------------------------------------------------------------------
    # Browser
    # ------------------------------------------------------------------
    browser_headless: bool = field(
        default_factory=lambda: _env_bool("BROWSER_HEADLESS", True)
    )


# Module-level singleton; import this everywhere:
#   from wordforms.config import settings
settings = Settings()

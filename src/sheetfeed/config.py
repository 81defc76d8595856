"""Configuration management for sheetfeed."""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

MissingEditLinkPolicy = Literal["submit", "warn", "raise"]

MISSING_EDIT_LINK_POLICIES = ("submit", "warn", "raise")


def _parse_missing_edit_link() -> MissingEditLinkPolicy:
    """Parse the missing edit link policy from environment variable."""
    value = os.getenv("MISSING_EDIT_LINK", "").strip().lower()
    if value in MISSING_EDIT_LINK_POLICIES:
        return value
    return "warn"


class Settings(BaseModel):
    """Application settings."""

    # Google OAuth2 credentials
    google_credentials_path: Path = Path(os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"))
    google_token_path: Path = Path(os.getenv("GOOGLE_TOKEN_PATH", "token.json"))

    # Root of the spreadsheets feed API
    feed_base_url: str = os.getenv("SHEETFEED_BASE_URL", "https://spreadsheets.google.com/feeds")

    # Seconds; passed straight to httpx
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30.0"))

    # What to do when a cell fetched for update carries no edit link:
    # 'submit' sends an empty href, 'warn' logs then sends, 'raise' refuses.
    missing_edit_link: MissingEditLinkPolicy = _parse_missing_edit_link()

    debug: bool = os.getenv("DEBUG", "false").lower() == "true"


settings = Settings()

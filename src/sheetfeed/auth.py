"""Google OAuth2 credentials for the spreadsheets feed."""

import logging
from typing import Generator, Optional

import httpx
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from .config import Settings, settings as default_settings
from .exceptions import AuthError, CredentialsNotFoundError

logger = logging.getLogger(__name__)

SCOPES = ["https://spreadsheets.google.com/feeds"]


def _refresh(creds: Credentials) -> None:
    try:
        creds.refresh(Request())
    except RefreshError as e:
        raise AuthError(f"Failed to refresh Google credentials: {e}") from e


def load_credentials(settings: Optional[Settings] = None) -> Credentials:
    """Load, refresh or obtain OAuth2 credentials.

    A saved token is reused when valid, refreshed when expired, and
    otherwise the installed-app flow is run. The resulting token is saved.
    """
    settings = settings or default_settings
    creds = None

    if settings.google_token_path.exists():
        creds = Credentials.from_authorized_user_file(str(settings.google_token_path), SCOPES)

    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired Google credentials")
            _refresh(creds)
        else:
            if not settings.google_credentials_path.exists():
                raise CredentialsNotFoundError(
                    f"Google credentials file not found at {settings.google_credentials_path}. "
                    "Please download it from Google Cloud Console."
                )
            flow = InstalledAppFlow.from_client_secrets_file(
                str(settings.google_credentials_path), SCOPES
            )
            creds = flow.run_local_server(port=0)

        # Save credentials for next run
        settings.google_token_path.parent.mkdir(parents=True, exist_ok=True)
        with open(settings.google_token_path, "w") as token:
            token.write(creds.to_json())

    return creds


class GoogleCredentialsAuth(httpx.Auth):
    """httpx auth that sends a Google bearer token, refreshing it when stale."""

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if not self._credentials.valid:
            _refresh(self._credentials)
        request.headers["Authorization"] = f"Bearer {self._credentials.token}"
        yield request

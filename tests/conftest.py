"""Pytest configuration and shared fixtures."""

from typing import Callable

import httpx
import pytest

from sheetfeed.config import Settings
from sheetfeed.feed import FeedClient
from tests.helpers.feeds import BASE


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Create settings with test values."""
    return Settings(
        google_credentials_path=tmp_path / "credentials.json",
        google_token_path=tmp_path / "token.json",
        feed_base_url=BASE,
        http_timeout=5.0,
        missing_edit_link="warn",
        debug=False,
    )


@pytest.fixture
def make_client(test_settings) -> Callable[..., FeedClient]:
    """Build a FeedClient whose HTTP traffic goes to a handler function.

    Every request seen by the handler is recorded in ``client.requests``.
    """

    def factory(handler, settings: Settings = None) -> FeedClient:
        requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            request.read()
            requests.append(request)
            return handler(request)

        http_client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        client = FeedClient(http_client, settings=settings or test_settings)
        client.requests = requests
        return client

    return factory

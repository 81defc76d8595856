"""Spreadsheets feed client and resource handles.

Handles are small immutable records holding the client and the identifiers
they address. Each ``get``/``submit`` call makes exactly one HTTP round trip
and reads the whole response before returning. ``CellHandle.set`` makes two.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import httpx

from ..auth import GoogleCredentialsAuth, load_credentials
from ..config import Settings, settings as default_settings
from ..exceptions import MissingEditLinkError, TransportError, WorksheetNotFoundError
from . import urls
from .batch import build_batch_feed
from .decoder import decode_batch_response, decode_cell, decode_spreadsheet, decode_worksheet
from .models import Cell, PendingEdit, Spreadsheet, UpdateResult, Worksheet

logger = logging.getLogger(__name__)

BATCH_CONTENT_TYPE = "text/xml"


class FeedClient:
    """Thin synchronous transport for the spreadsheets feed API."""

    def __init__(
        self,
        http_client: Optional[httpx.Client] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.base_url = self.settings.feed_base_url
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=self.settings.http_timeout)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "FeedClient":
        """Create a client authorised with the configured Google credentials."""
        settings = settings or default_settings
        credentials = load_credentials(settings)
        http_client = httpx.Client(
            timeout=settings.http_timeout,
            auth=GoogleCredentialsAuth(credentials),
        )
        client = cls(http_client, settings=settings)
        client._owns_client = True
        return client

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "FeedClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs) -> bytes:
        logger.info(f"{method} {url}")
        try:
            response = self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not response.is_success:
            raise TransportError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        data = response.content
        logger.debug(f"{method} {url} -> {response.status_code}, {len(data)} bytes")
        return data

    def get(self, url: str) -> bytes:
        return self._request("GET", url)

    def post(self, url: str, body: str, content_type: str) -> bytes:
        return self._request(
            "POST",
            url,
            content=body.encode("utf-8"),
            headers={"Content-Type": content_type},
        )

    def spreadsheet(self, spreadsheet_id: str) -> "SpreadsheetHandle":
        return SpreadsheetHandle(self, spreadsheet_id)


@dataclass(frozen=True)
class SpreadsheetHandle:
    client: FeedClient
    spreadsheet_id: str

    def get(self) -> Spreadsheet:
        """Fetch the spreadsheet's worksheet listing."""
        url = urls.worksheets_url(self.spreadsheet_id, self.client.base_url)
        return decode_spreadsheet(self.client.get(url))

    def worksheet(self, worksheet_id: str) -> "WorksheetHandle":
        return WorksheetHandle(self.client, self.spreadsheet_id, worksheet_id)

    def worksheet_from_link(self, link: str) -> "WorksheetHandle":
        """Address the worksheet named by a summary id such as ``.../private/full/od6``."""
        worksheet_id = urls.worksheet_id_from_link(self.spreadsheet_id, link, self.client.base_url)
        return self.worksheet(worksheet_id)

    def worksheet_by_title(self, title: str) -> "WorksheetHandle":
        """Fetch the listing and address the first worksheet with this title."""
        summary = self.get().worksheet_by_title(title)
        if summary is None:
            raise WorksheetNotFoundError(
                f"No worksheet titled {title!r} in spreadsheet {self.spreadsheet_id}"
            )
        return self.worksheet_from_link(summary.id)


@dataclass(frozen=True)
class WorksheetHandle:
    client: FeedClient
    spreadsheet_id: str
    worksheet_id: str

    @property
    def cells_url(self) -> str:
        return urls.cells_url(self.spreadsheet_id, self.worksheet_id, self.client.base_url)

    def get(self) -> Worksheet:
        """Fetch every cell of the worksheet."""
        return decode_worksheet(self.client.get(self.cells_url))

    def cell(self, row: int, col: int) -> "CellHandle":
        return CellHandle(self.client, self.spreadsheet_id, self.worksheet_id, row, col)

    def _check_edit_link(self, edit: PendingEdit) -> None:
        if edit.edit_link:
            return
        policy = self.client.settings.missing_edit_link
        if policy == "raise":
            raise MissingEditLinkError(edit.row, edit.col)
        if policy == "warn":
            logger.warning(
                f"Cell R{edit.row}C{edit.col} has no edit link; "
                "submitting without one, the server will likely reject it"
            )

    def submit(self, edits: Iterable[PendingEdit]) -> UpdateResult:
        """Send edits as a single batch request.

        Every edit should carry the edit link of the cell it changes. Edits
        without one are handled by the ``missing_edit_link`` setting before
        anything is sent.
        """
        edits = list(edits)
        for edit in edits:
            self._check_edit_link(edit)

        body = build_batch_feed(self.cells_url, edits)
        url = urls.batch_url(self.spreadsheet_id, self.worksheet_id, self.client.base_url)
        statuses = decode_batch_response(self.client.post(url, body, BATCH_CONTENT_TYPE))

        errors = [f"{s.batch_id}: {s.code} {s.reason}".rstrip() for s in statuses if not s.ok]
        for error in errors:
            logger.warning(f"Batch entry failed in worksheet {self.worksheet_id}: {error}")

        return UpdateResult(
            success=not errors,
            spreadsheet_id=self.spreadsheet_id,
            worksheet_id=self.worksheet_id,
            updated_cells=sum(1 for s in statuses if s.ok),
            errors=errors,
            details=statuses,
        )


@dataclass(frozen=True)
class CellHandle:
    client: FeedClient
    spreadsheet_id: str
    worksheet_id: str
    row: int
    col: int

    def worksheet(self) -> WorksheetHandle:
        return WorksheetHandle(self.client, self.spreadsheet_id, self.worksheet_id)

    def get(self) -> Cell:
        """Fetch the cell's current state, including its edit link."""
        url = urls.cell_url(
            self.spreadsheet_id, self.worksheet_id, self.row, self.col, self.client.base_url
        )
        return decode_cell(self.client.get(url))

    def set(self, input_value: str) -> UpdateResult:
        """Update the cell's input value.

        Fetches the cell for its edit link, then submits a one-entry batch.
        A failure in either step is raised and nothing is retried.
        """
        edit_link = self.get().edit_link or ""
        edit = PendingEdit(row=self.row, col=self.col, input_value=input_value, edit_link=edit_link)
        return self.worksheet().submit([edit])

"""URL templates for the spreadsheets feed API."""

import re
from typing import Optional

from ..config import settings
from ..exceptions import ParseError

_CELLS_FEED_ID = re.compile(r"/feeds/cells/(?P<spreadsheet>[^/]+)/(?P<worksheet>[^/]+)/private/full/?$")


def _base(base_url: Optional[str]) -> str:
    return (base_url or settings.feed_base_url).rstrip("/")


def worksheets_url(spreadsheet_id: str, base_url: Optional[str] = None) -> str:
    return f"{_base(base_url)}/worksheets/{spreadsheet_id}/private/full"


def cells_url(spreadsheet_id: str, worksheet_id: str, base_url: Optional[str] = None) -> str:
    return f"{_base(base_url)}/cells/{spreadsheet_id}/{worksheet_id}/private/full"


def cell_url(
    spreadsheet_id: str,
    worksheet_id: str,
    row: int,
    col: int,
    base_url: Optional[str] = None,
) -> str:
    return f"{cells_url(spreadsheet_id, worksheet_id, base_url)}/R{row}C{col}"


def batch_url(spreadsheet_id: str, worksheet_id: str, base_url: Optional[str] = None) -> str:
    return f"{cells_url(spreadsheet_id, worksheet_id, base_url)}/batch"


def worksheet_id_from_link(
    spreadsheet_id: str, link: str, base_url: Optional[str] = None
) -> str:
    """Extract the worksheet id from a worksheet summary's id or link.

    The link must look like ``{base}/worksheets/{spreadsheet_id}/private/full/{worksheet_id}``.
    """
    prefix = worksheets_url(spreadsheet_id, base_url) + "/"
    if not link.startswith(prefix):
        raise ParseError(f"Link {link!r} does not start with {prefix!r}")

    worksheet_id = link[len(prefix):]
    if not worksheet_id or "/" in worksheet_id:
        raise ParseError(f"Link {link!r} has no single worksheet segment after {prefix!r}")
    return worksheet_id


def worksheet_id_from_feed_id(feed_id: str) -> str:
    """Extract the worksheet id from a cells feed id."""
    match = _CELLS_FEED_ID.search(feed_id)
    if not match:
        raise ParseError(f"Not a cells feed id: {feed_id!r}")
    return match.group("worksheet")

"""Spreadsheets feed protocol: models, cell index, batch builder and client."""

from .batch import build_batch_feed, batch_id
from .client import CellHandle, FeedClient, SpreadsheetHandle, WorksheetHandle
from .decoder import decode_batch_response, decode_cell, decode_spreadsheet, decode_worksheet
from .index import CellIndex, build_index
from .models import (
    BatchEntryStatus,
    Cell,
    Link,
    PendingEdit,
    Spreadsheet,
    UpdateResult,
    Worksheet,
    WorksheetSummary,
)

__all__ = [
    "FeedClient",
    "SpreadsheetHandle",
    "WorksheetHandle",
    "CellHandle",
    "CellIndex",
    "build_index",
    "build_batch_feed",
    "batch_id",
    "decode_spreadsheet",
    "decode_worksheet",
    "decode_cell",
    "decode_batch_response",
    "Link",
    "WorksheetSummary",
    "Spreadsheet",
    "Cell",
    "Worksheet",
    "PendingEdit",
    "BatchEntryStatus",
    "UpdateResult",
]

"""sheetfeed - client for the Google Spreadsheets XML feed protocol."""

from .exceptions import (
    AuthError,
    CellNotFoundError,
    ConstructionError,
    CredentialsNotFoundError,
    DecodeError,
    MissingEditLinkError,
    ParseError,
    SheetFeedError,
    TransportError,
    WorksheetNotFoundError,
)
from .feed import (
    Cell,
    CellHandle,
    CellIndex,
    FeedClient,
    PendingEdit,
    Spreadsheet,
    SpreadsheetHandle,
    UpdateResult,
    Worksheet,
    WorksheetHandle,
    WorksheetSummary,
    build_batch_feed,
    build_index,
)

__version__ = "0.1.0"

__all__ = [
    "FeedClient",
    "SpreadsheetHandle",
    "WorksheetHandle",
    "CellHandle",
    "Spreadsheet",
    "WorksheetSummary",
    "Worksheet",
    "Cell",
    "CellIndex",
    "PendingEdit",
    "UpdateResult",
    "build_index",
    "build_batch_feed",
    "SheetFeedError",
    "TransportError",
    "DecodeError",
    "ParseError",
    "CellNotFoundError",
    "WorksheetNotFoundError",
    "ConstructionError",
    "MissingEditLinkError",
    "AuthError",
    "CredentialsNotFoundError",
]

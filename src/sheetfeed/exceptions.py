"""
Exception classes for sheetfeed.

Every accessor raises the first of these it encounters. Nothing is retried
and no partial result is returned alongside an error.
"""

from typing import Optional


class SheetFeedError(Exception):
    """Base class for all sheetfeed errors."""
    pass


class TransportError(SheetFeedError):
    """Raised when an HTTP round trip fails.

    Covers connection failures, timeouts and any non-2xx response. The HTTP
    status is kept in ``status_code`` when the server answered at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(SheetFeedError):
    """Raised when a response body is not XML or does not match the feed schema.

    The response must be treated as unusable; nothing is recovered from it.
    """
    pass


class ParseError(SheetFeedError):
    """Raised when a worksheet identifier cannot be extracted from a URL."""
    pass


class CellNotFoundError(SheetFeedError, LookupError):
    """Raised when a cell is absent from a worksheet's cell feed.

    This is an expected "no value" outcome, distinct from a failed request.
    """

    def __init__(self, row: int, col: int):
        super().__init__(f"cell ({row}, {col}) not found")
        self.row = row
        self.col = col


class WorksheetNotFoundError(SheetFeedError, LookupError):
    """Raised when no worksheet in a spreadsheet has the requested title."""
    pass


class AuthError(SheetFeedError):
    """Raised when Google credentials cannot be obtained or refreshed."""
    pass


class CredentialsNotFoundError(AuthError, FileNotFoundError):
    """Raised when neither a saved token nor a client secrets file is available."""
    pass


class ConstructionError(SheetFeedError):
    """Raised when a batch update document cannot be built.

    The update is never sent when this is raised.
    """
    pass


class MissingEditLinkError(ConstructionError):
    """Raised when a cell has no edit link and the policy forbids submitting without one."""

    def __init__(self, row: int, col: int):
        super().__init__(f"cell ({row}, {col}) has no edit link")
        self.row = row
        self.col = col

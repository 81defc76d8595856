"""Data models mirroring the spreadsheets feed documents."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..exceptions import CellNotFoundError
from .index import CellIndex, build_index
from .urls import worksheet_id_from_feed_id

EDIT_REL = "edit"


def link_by_rel(rel: str, links: tuple["Link", ...]) -> Optional[str]:
    """Return the href of the first link with the given relation."""
    for link in links:
        if link.rel == rel:
            return link.href
    return None


class Link(BaseModel):
    """An Atom <link> element."""

    model_config = ConfigDict(frozen=True)

    rel: str = ""
    href: str = ""
    type: str = ""


class WorksheetSummary(BaseModel):
    """One entry of a spreadsheet's worksheet listing."""

    model_config = ConfigDict(frozen=True)

    id: str  # canonical worksheet feed URL
    title: str = ""
    row_count: int = 0
    col_count: int = 0
    links: tuple[Link, ...] = ()

    def link(self, rel: str) -> Optional[str]:
        return link_by_rel(rel, self.links)


class Spreadsheet(BaseModel):
    """A spreadsheet as described by its worksheets feed."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    worksheets: tuple[WorksheetSummary, ...] = ()

    def worksheet_by_title(self, title: str) -> Optional[WorksheetSummary]:
        """Return the first worksheet summary with this exact title."""
        for worksheet in self.worksheets:
            if worksheet.title == title:
                return worksheet
        return None

    def worksheet_id_by_title(self, title: str) -> Optional[str]:
        """Return the id (a feed URL) of the first worksheet with this title."""
        worksheet = self.worksheet_by_title(title)
        return worksheet.id if worksheet else None


class Cell(BaseModel):
    """A single cell record."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=1)
    col: int = Field(ge=1)
    input_value: str = ""
    numeric_value: Optional[float] = None  # only set when the cell parses as a number
    links: tuple[Link, ...] = ()

    def link(self, rel: str) -> Optional[str]:
        return link_by_rel(rel, self.links)

    @property
    def edit_link(self) -> Optional[str]:
        return self.link(EDIT_REL)


class PendingEdit(BaseModel):
    """A requested cell change that has not been sent yet."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=1)
    col: int = Field(ge=1)
    input_value: str
    edit_link: str = ""


class Worksheet(BaseModel):
    """A worksheet's cell feed.

    The cell index is derived from ``cells`` when the model is built, and
    again for any copy made with ``model_copy``. It is never changed in
    place. Fetch the worksheet again to see newer values.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    row_count: int = 0
    col_count: int = 0
    cells: tuple[Cell, ...] = ()
    links: tuple[Link, ...] = ()

    _index: CellIndex = PrivateAttr()

    def model_post_init(self, __context: Any) -> None:
        self._index = build_index(self.cells)

    def model_copy(self, *, update: Optional[dict[str, Any]] = None, deep: bool = False) -> "Worksheet":
        copy = super().model_copy(update=update, deep=deep)
        copy._index = build_index(copy.cells)
        return copy

    @property
    def index(self) -> CellIndex:
        return self._index

    def get(self, col: int, row: int) -> Optional[Cell]:
        """Return the cell at (col, row), or None if the feed has no entry for it."""
        return self._index.lookup(col, row)

    def cell(self, col: int, row: int) -> Cell:
        """Return the cell at (col, row) or raise CellNotFoundError."""
        cell = self._index.lookup(col, row)
        if cell is None:
            raise CellNotFoundError(row, col)
        return cell

    def column_by_title(self, title: str) -> Optional[int]:
        """Return a column whose header (row 1) equals title.

        If several columns share the header, which one is returned is not
        defined.
        """
        return self._index.column_by_header(title)

    def link(self, rel: str) -> Optional[str]:
        return link_by_rel(rel, self.links)

    def worksheet_key(self) -> str:
        """Return the worksheet identifier embedded in this feed's id."""
        return worksheet_id_from_feed_id(self.id)

    def edit(self, col: int, row: int, input_value: str) -> PendingEdit:
        """Prepare an edit of an existing cell using its current edit link.

        A cell without an edit link yields an empty one; the
        ``missing_edit_link`` setting decides what happens on submit.
        """
        cell = self.cell(col, row)
        return PendingEdit(
            row=row,
            col=col,
            input_value=input_value,
            edit_link=cell.edit_link or "",
        )


class BatchEntryStatus(BaseModel):
    """Outcome of one entry in a batch response."""

    model_config = ConfigDict(frozen=True)

    batch_id: str
    code: int
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.code < 300


class UpdateResult(BaseModel):
    """Result of submitting a batch of cell updates."""

    success: bool
    spreadsheet_id: str
    worksheet_id: str
    updated_cells: int = 0
    errors: list[str] = Field(default_factory=list)
    details: list[BatchEntryStatus] = Field(default_factory=list)

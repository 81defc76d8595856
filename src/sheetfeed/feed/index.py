"""Row/column lookup over a worksheet's flat cell list."""

from typing import TYPE_CHECKING, Iterable, Iterator, Optional

if TYPE_CHECKING:
    from .models import Cell

HEADER_ROW = 1


class CellIndex:
    """Two-level ``column -> row -> Cell`` mapping.

    Built once by ``build_index`` and read-only afterwards, so it is safe to
    share between concurrent readers.
    """

    def __init__(self, columns: dict[int, dict[int, "Cell"]]):
        self._columns = columns

    def lookup(self, col: int, row: int) -> Optional["Cell"]:
        """Return the cell at (col, row), or None when it was never indexed."""
        rows = self._columns.get(col)
        if rows is None:
            return None
        return rows.get(row)

    def column_by_header(self, title: str) -> Optional[int]:
        """Return the first column whose row-1 input value equals title.

        Comparison is exact. Columns with no row-1 cell are skipped. Column
        order is not defined, so with duplicate headers any of the matching
        columns may be returned.
        """
        for col, rows in self._columns.items():
            header = rows.get(HEADER_ROW)
            if header is not None and header.input_value == title:
                return col
        return None

    def columns(self) -> list[int]:
        """Return the indexed column numbers."""
        return list(self._columns)

    def __contains__(self, coordinate: object) -> bool:
        """Return True if a (col, row) tuple has an indexed cell."""
        if not isinstance(coordinate, tuple) or len(coordinate) != 2:
            return False
        col, row = coordinate
        return self.lookup(col, row) is not None

    def __len__(self) -> int:
        """Return the number of indexed cells."""
        return sum(len(rows) for rows in self._columns.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellIndex):
            return NotImplemented
        return self._columns == other._columns

    __hash__ = None

    def __iter__(self) -> Iterator["Cell"]:
        """Iterate over indexed cells, column by column."""
        for rows in self._columns.values():
            yield from rows.values()


def build_index(cells: Iterable["Cell"]) -> CellIndex:
    """Index cells by column then row; a later duplicate replaces an earlier one."""
    columns: dict[int, dict[int, "Cell"]] = {}
    for cell in cells:
        columns.setdefault(cell.col, {})[cell.row] = cell
    return CellIndex(columns)

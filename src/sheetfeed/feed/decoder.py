"""Decoding of spreadsheets feed XML into models."""

import logging
from typing import Callable, Optional, TypeVar
from xml.etree import ElementTree as ET

from pydantic import ValidationError

from ..exceptions import DecodeError
from .batch import ATOM_NS, BATCH_NS, GS_NS
from .models import BatchEntryStatus, Cell, Link, Spreadsheet, Worksheet, WorksheetSummary

logger = logging.getLogger(__name__)

NS = {"atom": ATOM_NS, "batch": BATCH_NS, "gs": GS_NS}

T = TypeVar("T")


def _parse(data: bytes, root_tag: str) -> ET.Element:
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise DecodeError(f"Response is not well-formed XML: {e}") from e

    expected = f"{{{ATOM_NS}}}{root_tag}"
    if root.tag != expected:
        raise DecodeError(f"Expected <{root_tag}> root element, got {root.tag}")
    return root


def _text(element: ET.Element, path: str) -> str:
    return (element.findtext(path, default="", namespaces=NS) or "").strip()


def _int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise DecodeError(f"Invalid integer for {what}: {value!r}") from e


def _count(element: ET.Element, path: str) -> int:
    value = _text(element, path)
    return _int(value, path) if value else 0


def _links(element: ET.Element) -> tuple[Link, ...]:
    return tuple(
        Link(
            rel=link.get("rel", ""),
            href=link.get("href", ""),
            type=link.get("type", ""),
        )
        for link in element.findall("atom:link", NS)
    )


def _build(factory: Callable[..., T], **fields) -> T:
    try:
        return factory(**fields)
    except ValidationError as e:
        raise DecodeError(f"Feed does not match the expected schema: {e}") from e


def _cell_from_entry(entry: ET.Element) -> Cell:
    element = entry.find("gs:cell", NS)
    if element is None:
        raise DecodeError("Cell entry has no <gs:cell> element")

    row = element.get("row")
    col = element.get("col")
    if row is None or col is None:
        raise DecodeError("<gs:cell> is missing its row or col attribute")

    numeric_value: Optional[float] = None
    raw_numeric = element.get("numericValue")
    if raw_numeric:
        try:
            numeric_value = float(raw_numeric)
        except ValueError as e:
            raise DecodeError(f"Invalid numericValue: {raw_numeric!r}") from e

    return _build(
        Cell,
        row=_int(row, "row"),
        col=_int(col, "col"),
        input_value=element.get("inputValue", ""),
        numeric_value=numeric_value,
        links=_links(entry),
    )


def decode_spreadsheet(data: bytes) -> Spreadsheet:
    """Decode a worksheets feed into a Spreadsheet."""
    root = _parse(data, "feed")
    worksheets = tuple(
        _build(
            WorksheetSummary,
            id=_text(entry, "atom:id"),
            title=_text(entry, "atom:title"),
            row_count=_count(entry, "gs:rowCount"),
            col_count=_count(entry, "gs:colCount"),
            links=_links(entry),
        )
        for entry in root.findall("atom:entry", NS)
    )
    return _build(Spreadsheet, title=_text(root, "atom:title"), worksheets=worksheets)


def decode_worksheet(data: bytes) -> Worksheet:
    """Decode a cells feed into a Worksheet, building its cell index."""
    root = _parse(data, "feed")
    cells = tuple(_cell_from_entry(entry) for entry in root.findall("atom:entry", NS))
    worksheet = _build(
        Worksheet,
        id=_text(root, "atom:id"),
        title=_text(root, "atom:title"),
        row_count=_count(root, "gs:rowCount"),
        col_count=_count(root, "gs:colCount"),
        cells=cells,
        links=_links(root),
    )
    logger.debug(f"Decoded worksheet {worksheet.id!r} with {len(cells)} cells")
    return worksheet


def decode_cell(data: bytes) -> Cell:
    """Decode a single cell entry."""
    return _cell_from_entry(_parse(data, "entry"))


def decode_batch_response(data: bytes) -> list[BatchEntryStatus]:
    """Decode the per-entry statuses of a batch response feed.

    An empty body yields no statuses.
    """
    if not data.strip():
        return []

    root = _parse(data, "feed")
    statuses = []
    for entry in root.findall("atom:entry", NS):
        status = entry.find("batch:status", NS)
        if status is None:
            raise DecodeError("Batch response entry has no <batch:status> element")
        statuses.append(
            _build(
                BatchEntryStatus,
                batch_id=_text(entry, "batch:id"),
                code=_int(status.get("code", ""), "batch:status code"),
                reason=status.get("reason", ""),
            )
        )
    return statuses

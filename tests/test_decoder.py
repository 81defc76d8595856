"""Tests for feed decoding."""

import pytest

from sheetfeed.exceptions import DecodeError
from sheetfeed.feed.decoder import (
    decode_batch_response,
    decode_cell,
    decode_spreadsheet,
    decode_worksheet,
)

from tests.helpers.feeds import (
    BATCH_RESPONSE_CONFLICT,
    BATCH_RESPONSE_OK,
    CELL_ENTRY,
    CELL_ENTRY_WITHOUT_EDIT_LINK,
    CELLS_FEED,
    WORKSHEETS_FEED,
)


class TestDecodeSpreadsheet:
    """Test decoding of worksheets feeds."""

    def test_title_and_worksheets(self):
        """Test that the listing is decoded in feed order."""
        spreadsheet = decode_spreadsheet(WORKSHEETS_FEED)

        assert spreadsheet.title == "Budget"
        assert [w.title for w in spreadsheet.worksheets] == ["Sheet1", "Totals", "Sheet1"]

        first = spreadsheet.worksheets[0]
        assert first.id == "https://spreadsheets.google.com/feeds/worksheets/abc/private/full/od6"
        assert first.row_count == 100
        assert first.col_count == 20
        assert first.link("edit").endswith("/od6/v1")
        assert first.link("alternate") is None

    def test_missing_counts_default_to_zero(self):
        """Test that absent rowCount/colCount decode as zero."""
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom">
          <entry><id>x</id><title>T</title></entry>
        </feed>"""

        spreadsheet = decode_spreadsheet(data)

        assert spreadsheet.worksheets[0].row_count == 0
        assert spreadsheet.worksheets[0].col_count == 0

    def test_invalid_count_is_decode_error(self):
        """Test that a non-numeric count fails decoding."""
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom"
              xmlns:gs="http://schemas.google.com/spreadsheets/2006">
          <entry><id>x</id><gs:rowCount>many</gs:rowCount></entry>
        </feed>"""

        with pytest.raises(DecodeError):
            decode_spreadsheet(data)


class TestDecodeWorksheet:
    """Test decoding of cells feeds."""

    def test_cells_and_metadata(self):
        """Test that cells, counts and links are decoded."""
        worksheet = decode_worksheet(CELLS_FEED)

        assert worksheet.id == "https://spreadsheets.google.com/feeds/cells/abc/od6/private/full"
        assert worksheet.title == "Sheet1"
        assert worksheet.row_count == 100
        assert worksheet.col_count == 20
        assert len(worksheet.cells) == 4
        assert worksheet.link("http://schemas.google.com/g/2005#batch").endswith("/batch")

    def test_cell_values(self):
        """Test input and numeric values of decoded cells."""
        worksheet = decode_worksheet(CELLS_FEED)

        amount = worksheet.get(2, 2)
        assert amount.input_value == "=1000+200"
        assert amount.numeric_value == 1200.0
        assert amount.edit_link.endswith("/R2C2/5e6f")

        rent = worksheet.get(1, 2)
        assert rent.input_value == "Rent"
        assert rent.numeric_value is None
        assert rent.edit_link is None

    def test_round_trip_through_index(self):
        """Test that every decoded cell can be found at its own coordinate."""
        worksheet = decode_worksheet(CELLS_FEED)

        for cell in worksheet.cells:
            assert worksheet.get(cell.col, cell.row) == cell
        assert worksheet.column_by_title("Amount") == 2

    def test_decoding_is_repeatable(self):
        """Test that decoding the same bytes twice gives equal worksheets."""
        assert decode_worksheet(CELLS_FEED) == decode_worksheet(CELLS_FEED)

    def test_cell_without_coordinates_is_decode_error(self):
        """Test that a gs:cell missing row/col fails decoding."""
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom"
              xmlns:gs="http://schemas.google.com/spreadsheets/2006">
          <entry><gs:cell col="1" inputValue="x"/></entry>
        </feed>"""

        with pytest.raises(DecodeError):
            decode_worksheet(data)

    def test_zero_row_is_decode_error(self):
        """Test that coordinates must be 1-based."""
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom"
              xmlns:gs="http://schemas.google.com/spreadsheets/2006">
          <entry><gs:cell row="0" col="1" inputValue="x"/></entry>
        </feed>"""

        with pytest.raises(DecodeError):
            decode_worksheet(data)

    def test_entry_without_cell_is_decode_error(self):
        """Test that cell entries must carry a gs:cell element."""
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom">
          <entry><id>x</id></entry>
        </feed>"""

        with pytest.raises(DecodeError):
            decode_worksheet(data)

    def test_empty_feed(self):
        """Test a worksheet with no cells."""
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom"><id>x</id></feed>"""

        worksheet = decode_worksheet(data)

        assert worksheet.cells == ()
        assert worksheet.get(1, 1) is None


class TestDecodeCell:
    """Test decoding of single cell entries."""

    def test_cell_entry(self):
        """Test decoding a cell entry with an edit link."""
        cell = decode_cell(CELL_ENTRY)

        assert (cell.row, cell.col) == (2, 3)
        assert cell.input_value == "41"
        assert cell.numeric_value == 41.0
        assert cell.edit_link == (
            "https://spreadsheets.google.com/feeds/cells/abc/od6/private/full/R2C3/9z"
        )

    def test_cell_entry_without_edit_link(self):
        """Test that a missing edit link decodes as None."""
        cell = decode_cell(CELL_ENTRY_WITHOUT_EDIT_LINK)

        assert cell.edit_link is None
        assert cell.link("self") is not None

    def test_feed_is_not_a_cell(self):
        """Test that a feed document is rejected where an entry is expected."""
        with pytest.raises(DecodeError, match="entry"):
            decode_cell(CELLS_FEED)


class TestMalformedDocuments:
    """Test failures common to every decoder."""

    @pytest.mark.parametrize(
        "decoder", [decode_spreadsheet, decode_worksheet, decode_cell, decode_batch_response]
    )
    def test_not_xml(self, decoder):
        """Test that non-XML bodies raise DecodeError."""
        with pytest.raises(DecodeError):
            decoder(b"<html><body>Sign in</body>")

    @pytest.mark.parametrize("decoder", [decode_spreadsheet, decode_worksheet])
    def test_wrong_namespace(self, decoder):
        """Test that a non-Atom root is rejected."""
        with pytest.raises(DecodeError):
            decoder(b"<feed><id>x</id></feed>")


class TestDecodeBatchResponse:
    """Test decoding of batch response statuses."""

    def test_success(self):
        """Test a successful batch response."""
        (status,) = decode_batch_response(BATCH_RESPONSE_OK)

        assert status.batch_id == "R2C3"
        assert status.code == 200
        assert status.reason == "Success"
        assert status.ok

    def test_conflict(self):
        """Test a rejected entry."""
        (status,) = decode_batch_response(BATCH_RESPONSE_CONFLICT)

        assert status.code == 409
        assert not status.ok

    def test_empty_body(self):
        """Test that an empty body yields no statuses."""
        assert decode_batch_response(b"") == []
        assert decode_batch_response(b"  \n") == []

    def test_entry_without_status(self):
        """Test that entries must carry a batch:status."""
        data = b"""<feed xmlns="http://www.w3.org/2005/Atom"
              xmlns:batch="http://schemas.google.com/gdata/batch">
          <entry><batch:id>R1C1</batch:id></entry>
        </feed>"""

        with pytest.raises(DecodeError):
            decode_batch_response(data)

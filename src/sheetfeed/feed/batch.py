"""Batch update feed rendering.

The batch endpoint accepts one Atom feed per request with one entry per
cell update. Each entry must carry the cell's current edit link, otherwise
the server rejects it as a version conflict.
"""

import logging
import re
from typing import Iterable

from jinja2 import Environment, StrictUndefined, TemplateError
from markupsafe import Markup, escape

from ..exceptions import ConstructionError
from .models import PendingEdit

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
BATCH_NS = "http://schemas.google.com/gdata/batch"
GS_NS = "http://schemas.google.com/spreadsheets/2006"

BATCH_FEED_TEMPLATE = """\
<feed xmlns="{{ atom_ns }}"
    xmlns:batch="{{ batch_ns }}"
    xmlns:gs="{{ gs_ns }}">
  <id>{{ base_url }}</id>
{% for edit in edits %}
  <entry>
    <batch:id>R{{ edit.row }}C{{ edit.col }}</batch:id>
    <batch:operation type="update"/>
    <id>{{ base_url }}/R{{ edit.row }}C{{ edit.col }}</id>
    <link rel="edit" type="application/atom+xml" href="{{ edit.edit_link|attrvalue }}"/>
    <gs:cell row="{{ edit.row }}" col="{{ edit.col }}" inputValue="{{ edit.input_value|attrvalue }}"/>
  </entry>
{% endfor %}
</feed>
"""

# Whitespace that XML attribute normalisation would otherwise turn into spaces
_ATTRIBUTE_WHITESPACE = {"\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}

# Characters that cannot appear in an XML 1.0 document at all
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _attribute_value(value: object) -> Markup:
    escaped = str(escape(value))
    for char, reference in _ATTRIBUTE_WHITESPACE.items():
        escaped = escaped.replace(char, reference)
    return Markup(escaped)


_environment = Environment(
    autoescape=True,
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)
_environment.filters["attrvalue"] = _attribute_value
_template = _environment.from_string(BATCH_FEED_TEMPLATE)


def batch_id(row: int, col: int) -> str:
    """Return the batch identifier used for the cell at (row, col)."""
    return f"R{row}C{col}"


def _check_characters(edit: PendingEdit) -> None:
    for name, value in (("input value", edit.input_value), ("edit link", edit.edit_link)):
        if _INVALID_XML_CHARS.search(value):
            raise ConstructionError(
                f"Cannot encode {name} of {batch_id(edit.row, edit.col)}: "
                "contains characters not allowed in XML"
            )


def build_batch_feed(base_url: str, edits: Iterable[PendingEdit]) -> str:
    """Render pending edits into a batch update feed.

    Args:
        base_url: The worksheet's cells feed URL; used as the feed id and
            as the prefix of every entry id.
        edits: Edits to include, rendered in the given order.

    Returns:
        The XML document as a string.

    Raises:
        ConstructionError: If there is nothing to send or the document
            cannot be rendered.
    """
    edits = list(edits)
    if not edits:
        raise ConstructionError("A batch update needs at least one edit")
    if _INVALID_XML_CHARS.search(base_url):
        raise ConstructionError("Base URL contains characters not allowed in XML")
    for edit in edits:
        _check_characters(edit)

    try:
        document = _template.render(
            atom_ns=ATOM_NS,
            batch_ns=BATCH_NS,
            gs_ns=GS_NS,
            base_url=base_url,
            edits=edits,
        )
    except TemplateError as e:
        raise ConstructionError(f"Failed to render batch feed: {e}") from e

    logger.debug(f"Rendered batch feed with {len(edits)} entries ({len(document)} chars)")
    return document

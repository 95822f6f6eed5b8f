"""Projections - flattened text, CSV and JSON views of a Document."""

import csv
import io
import json
from typing import Optional

from docstruct.errors import EmptyDocumentError
from docstruct.models import Document, Page

TABLE_MARKER = "Table"
FORM_HEADER = ["Key", "Value"]


def page_text(page: Page) -> str:
    """Plain text of a page: each line followed by a newline."""
    return page.text


def form_rows(page: Page) -> list[list[str]]:
    """One (key text, value text) row per form field, in form order."""
    return [[field.key_text, field.value_text] for field in page.form.fields]


def table_rows(page: Page) -> list[list[str]]:
    """CSV rows for all tables of a page.

    Each table is a ``["Table"]`` marker row, one row of cell texts per table
    row, then two empty rows.
    """
    rows: list[list[str]] = []
    for table in page.tables:
        rows.append([TABLE_MARKER])
        for row in table.rows:
            rows.append(row.texts)
        rows.append([])
        rows.append([])
    return rows


def page_blocks_json(page: Page) -> str:
    """The page's raw blocks as a JSON array."""
    return json.dumps([block.to_raw() for block in page.blocks])


def response_json(document: Document) -> str:
    """The raw response(s) the document was built from.

    A single response serializes as an object, several as an array.

    Raises:
        EmptyDocumentError: If the document has no pages.
    """
    if document.is_empty:
        raise EmptyDocumentError()
    raw = [response.to_raw() for response in document.responses]
    if len(raw) == 1:
        return json.dumps(raw[0])
    return json.dumps(raw)


def to_csv(rows: list[list[str]], header: Optional[list[str]] = None) -> str:
    """Render rows as CSV text."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    if header is not None:
        writer.writerow(header)
    writer.writerows(rows)
    return output.getvalue()

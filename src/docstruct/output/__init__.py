"""Output stage: projections of a Document and their hand-off to storage."""

from . import projections
from .generator import OutputGenerator, OutputResult
from .projections import (
    form_rows,
    page_blocks_json,
    page_text,
    response_json,
    table_rows,
    to_csv,
)

__all__ = [
    "projections",
    "OutputGenerator",
    "OutputResult",
    "page_text",
    "form_rows",
    "table_rows",
    "page_blocks_json",
    "response_json",
    "to_csv",
]

"""Table IR models - tables grouped into rows of cells."""

from typing import Literal, Optional

from pydantic import Field

from .base import BaseIRModel, Geometry
from .text import ContentItem


class Cell(BaseIRModel):
    """
    Individual cell in a table.

    Spans are metadata only: a merged cell appears once, at its anchor
    position, and is not repeated into the rows or columns it covers.
    """

    row_index: int = Field(..., ge=0, description="1-indexed row number")
    column_index: int = Field(..., ge=0, description="1-indexed column number")
    row_span: int = Field(default=1, ge=1, description="Number of rows this cell spans")
    column_span: int = Field(default=1, ge=1, description="Number of columns this cell spans")

    geometry: Geometry
    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)
    content: list[ContentItem] = Field(default_factory=list)
    text: str = ""

    @property
    def is_merged(self) -> bool:
        """Check if cell spans multiple rows or columns."""
        return self.row_span > 1 or self.column_span > 1


class Row(BaseIRModel):
    """A horizontal row of cells."""

    cells: list[Cell] = Field(default_factory=list)

    @property
    def texts(self) -> list[str]:
        return [cell.text for cell in self.cells]


class Table(BaseIRModel):
    """
    Grid-based content detected on a page.

    Rows follow the order cells were listed in the source. When that order
    was not row-major, the table is kept but flagged for audit.
    """

    kind: Literal["table"] = "table"
    geometry: Geometry
    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)
    rows: list[Row] = Field(default_factory=list)

    # Quality
    needs_audit: bool = Field(default=False)
    audit_reason: Optional[str] = None

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_cols(self) -> int:
        """Widest row, counted in cells."""
        return max((len(row.cells) for row in self.rows), default=0)

    def get_row(self, row: int) -> list[Cell]:
        """Get cells of a row by 0-indexed position."""
        if 0 <= row < len(self.rows):
            return list(self.rows[row].cells)
        return []

    def get_cell(self, row_index: int, column_index: int) -> Optional[Cell]:
        """Get cell anchored at the given 1-indexed source position."""
        for row in self.rows:
            for cell in row.cells:
                if cell.row_index == row_index and cell.column_index == column_index:
                    return cell
        return None

    def to_markdown(self) -> str:
        """Convert table to markdown format."""
        num_cols = self.num_cols
        if num_cols == 0:
            return ""

        lines = []
        for i, row in enumerate(self.rows):
            texts = [t.strip() for t in row.texts]
            texts += [""] * (num_cols - len(texts))
            lines.append("| " + " | ".join(texts) + " |")
            # Add separator after first row (header)
            if i == 0:
                lines.append("| " + " | ".join(["---"] * num_cols) + " |")

        return "\n".join(lines)

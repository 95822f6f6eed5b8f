"""Text-level entities: words, selection marks and lines."""

from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from .base import BaseIRModel, Geometry, SelectionStatus


class Word(BaseIRModel):
    """One or more characters not separated by spaces."""

    kind: Literal["word"] = "word"
    geometry: Geometry
    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)
    text: str = ""


class SelectionElement(BaseIRModel):
    """Check box or option button detected on the page."""

    kind: Literal["selection_element"] = "selection_element"
    geometry: Geometry
    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)
    selection_status: SelectionStatus

    @property
    def text(self) -> str:
        """Selection marks read as their status string."""
        return self.selection_status.value

    @property
    def is_selected(self) -> bool:
        return self.selection_status == SelectionStatus.SELECTED


# Mixed content of form values and table cells
ContentItem = Annotated[Union[Word, SelectionElement], Field(discriminator="kind")]


class Line(BaseIRModel):
    """
    A run of contiguous words on the page.

    ``text`` is taken verbatim from the source block, never recomputed from
    ``words``.
    """

    kind: Literal["line"] = "line"
    geometry: Geometry
    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)
    text: str = ""
    words: list[Word] = Field(default_factory=list)

"""Document-level IR models."""

from pydantic import Field

from .base import BaseIRModel
from .block import AnalyzeResponse
from .page import Page


class Document(BaseIRModel):
    """
    Top-level document container.

    Built from one or more raw responses whose blocks are split into pages.
    The responses are kept, unchanged, for the full-response output.
    """

    pages: list[Page] = Field(default_factory=list)
    responses: list[AnalyzeResponse] = Field(
        default_factory=list, exclude=True, repr=False
    )

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def is_empty(self) -> bool:
        """Check if assembly produced no pages."""
        return not self.pages

    @property
    def text(self) -> str:
        """Text of all pages, in page order."""
        return "".join(page.text for page in self.pages)

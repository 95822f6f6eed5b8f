"""Page-level IR models."""

from typing import Annotated, Optional, Union

from pydantic import Field

from .base import BaseIRModel, Geometry
from .block import Block
from .form import Form, FormField
from .table import Table
from .text import Line

# Top-level page entities, in source block order
PageContent = Annotated[Union[Line, Table, FormField], Field(discriminator="kind")]


class Page(BaseIRModel):
    """
    Single page of an analyzed document.

    ``content`` interleaves lines, tables and fields exactly as their blocks
    appeared in the source, so layout order survives across entity types.
    ``id`` and ``geometry`` are unset when the input had no PAGE block.
    """

    geometry: Optional[Geometry] = None
    lines: list[Line] = Field(default_factory=list)
    form: Form = Field(default_factory=Form)
    tables: list[Table] = Field(default_factory=list)
    content: list[PageContent] = Field(default_factory=list)
    text: str = Field(default="", description="Line texts, each followed by a newline")

    # Raw source blocks for verbatim output; not part of the model dump
    blocks: list[Block] = Field(default_factory=list, exclude=True, repr=False)

    @property
    def fields(self) -> list[FormField]:
        return self.form.fields

    @property
    def has_tables(self) -> bool:
        """Check if page contains tables."""
        return bool(self.tables)

    @property
    def has_form(self) -> bool:
        """Check if page contains key/value fields."""
        return bool(self.form.fields)

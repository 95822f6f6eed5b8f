"""Base models and common types for the document model."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal


class BlockType(str, Enum):
    """Kinds of recognition blocks understood by the assembler."""

    PAGE = "PAGE"
    LINE = "LINE"
    WORD = "WORD"
    TABLE = "TABLE"
    CELL = "CELL"
    KEY_VALUE_SET = "KEY_VALUE_SET"
    SELECTION_ELEMENT = "SELECTION_ELEMENT"


class RelationshipType(str, Enum):
    """Typed edges between blocks."""

    CHILD = "CHILD"
    VALUE = "VALUE"


class EntityType(str, Enum):
    """Role of a KEY_VALUE_SET block."""

    KEY = "KEY"
    VALUE = "VALUE"


class SelectionStatus(str, Enum):
    """State of a check box or option button."""

    SELECTED = "SELECTED"
    NOT_SELECTED = "NOT_SELECTED"


class SourceModel(BaseModel):
    """Base for records parsed from raw (PascalCase) block JSON."""

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        frozen=True,
    )


class BoundingBox(SourceModel):
    """Axis-aligned box, normalized to the page (0-1)."""

    model_config = ConfigDict(extra="allow")

    width: float = Field(..., description="Box width as a ratio of page width")
    height: float = Field(..., description="Box height as a ratio of page height")
    left: float = Field(..., description="Left edge X coordinate")
    top: float = Field(..., description="Top edge Y coordinate")

    @property
    def right(self) -> float:
        """Right edge X coordinate."""
        return self.left + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge Y coordinate."""
        return self.top + self.height


class Point(SourceModel):
    """Single polygon vertex."""

    model_config = ConfigDict(extra="allow")

    x: float
    y: float


class Geometry(SourceModel):
    """Coarse bounding box plus a fine-grained polygon around the item."""

    model_config = ConfigDict(extra="allow")

    bounding_box: BoundingBox
    polygon: list[Point] = Field(default_factory=list)


class BaseIRModel(BaseModel):
    """Base class for all document model entities.

    Entities are built once from an immutable block list and never mutated.
    They carry no timestamps or generated identifiers so that identical input
    always yields equal models.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Identifier of the source block")

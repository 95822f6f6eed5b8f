"""Raw block records as delivered by the document-analysis API."""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import ConfigDict, Field

from .base import BlockType, EntityType, Geometry, RelationshipType, SourceModel


class Relationship(SourceModel):
    """Ordered reference from one block to others by identifier."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., description="CHILD, VALUE, or a kind we do not follow")
    ids: list[str] = Field(default_factory=list)


class Block(SourceModel):
    """
    Atomic recognized unit: a page, line, word, table, cell, key/value set or
    selection mark.

    Unknown keys are kept so the block can be written back verbatim, and
    ``block_type`` stays a plain string so that kinds we do not model
    (MERGED_CELL, QUERY, ...) survive parsing.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    block_type: str
    confidence: Optional[float] = None
    text: Optional[str] = None
    entity_types: Optional[list[str]] = None
    row_index: Optional[int] = None
    column_index: Optional[int] = None
    row_span: Optional[int] = None
    column_span: Optional[int] = None
    selection_status: Optional[str] = None
    geometry: Optional[Geometry] = None
    relationships: Optional[list[Relationship]] = None

    @property
    def kind(self) -> Optional[BlockType]:
        """Recognized block kind, or None for kinds the assembler ignores."""
        try:
            return BlockType(self.block_type)
        except ValueError:
            return None

    def has_entity_type(self, entity_type: EntityType) -> bool:
        """Check if the block carries the given KEY/VALUE role."""
        return entity_type.value in (self.entity_types or [])

    def relationship_ids(self, rel_type: RelationshipType) -> list[str]:
        """All identifiers referenced through relationships of one type."""
        ids: list[str] = []
        for rel in self.relationships or []:
            if rel.type == rel_type.value:
                ids.extend(rel.ids)
        return ids

    def has_relationship(self, rel_type: RelationshipType) -> bool:
        return any(rel.type == rel_type.value for rel in self.relationships or [])

    def to_raw(self) -> dict:
        """Dump back to the source JSON shape."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class AnalyzeResponse(SourceModel):
    """One raw analysis response: its block list plus untouched metadata."""

    model_config = ConfigDict(extra="allow")

    blocks: list[Block] = Field(default_factory=list)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "AnalyzeResponse":
        """Parse a response from its JSON text."""
        return cls.model_validate_json(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "AnalyzeResponse":
        """Load a response saved as a JSON file."""
        return cls.from_json(Path(path).read_bytes())

    def to_raw(self) -> dict:
        """Dump back to the source JSON shape."""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")

    def to_json(self) -> str:
        return json.dumps(self.to_raw())

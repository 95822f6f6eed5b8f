"""IR (Intermediate Representation) models for the document model.

This module defines the Pydantic models for both sides of the assembler:
the raw blocks delivered by the analysis API, and the hierarchical document
built from them. All models are immutable and support JSON serialization.

Key Design Principles:
1. Deterministic: identical blocks always build equal models
2. Reference-tolerant: a missing block reference is an absence, not an error
3. Source order: page content keeps the order of its source blocks
4. Verbatim raw data: input blocks serialize back unchanged

Model Hierarchy:
- Document → Pages → Lines → Words
- Page → Form → Fields → Key/Value → Words/SelectionElements
- Page → Tables → Rows → Cells → Words/SelectionElements
"""

from .base import (
    BaseIRModel,
    BlockType,
    BoundingBox,
    EntityType,
    Geometry,
    Point,
    RelationshipType,
    SelectionStatus,
)
from .block import (
    AnalyzeResponse,
    Block,
    Relationship,
)
from .document import Document
from .form import (
    FieldKey,
    FieldValue,
    Form,
    FormField,
)
from .page import (
    Page,
    PageContent,
)
from .table import (
    Cell,
    Row,
    Table,
)
from .text import (
    ContentItem,
    Line,
    SelectionElement,
    Word,
)

__all__ = [
    # Base types
    "BaseIRModel",
    "BlockType",
    "BoundingBox",
    "EntityType",
    "Geometry",
    "Point",
    "RelationshipType",
    "SelectionStatus",
    # Raw input
    "AnalyzeResponse",
    "Block",
    "Relationship",
    # Document
    "Document",
    # Page
    "Page",
    "PageContent",
    # Text
    "ContentItem",
    "Line",
    "SelectionElement",
    "Word",
    # Form
    "FieldKey",
    "FieldValue",
    "Form",
    "FormField",
    # Table
    "Cell",
    "Row",
    "Table",
]

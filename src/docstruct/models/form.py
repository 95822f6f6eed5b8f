"""Form IR models - key/value fields detected on a page."""

from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional

from pydantic import Field, PrivateAttr

from .base import BaseIRModel, Geometry
from .text import ContentItem, Word


class FieldKey(BaseIRModel):
    """Key side of a field: its words and their space-joined text."""

    geometry: Geometry
    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)
    words: list[Word] = Field(default_factory=list)
    text: str = ""


class FieldValue(BaseIRModel):
    """
    Value side of a field.

    Content mixes words and selection marks in source order; in ``text`` a
    selection mark contributes its status string.
    """

    geometry: Geometry
    confidence: Optional[float] = Field(None, ge=0.0, le=100.0)
    content: list[ContentItem] = Field(default_factory=list)
    text: str = ""


class FormField(BaseIRModel):
    """A key with its (possibly missing) value."""

    kind: Literal["field"] = "field"
    key: FieldKey
    value: Optional[FieldValue] = None

    @property
    def key_text(self) -> str:
        return self.key.text

    @property
    def value_text(self) -> str:
        """Value text, or empty string when the key has no value."""
        return self.value.text if self.value is not None else ""


class Form(BaseIRModel):
    """
    All fields of a page in encounter order.

    Duplicate key texts stay in ``fields``; the key lookup returns the last
    one seen.
    """

    fields: list[FormField] = Field(default_factory=list)

    _fields_map: dict[str, FormField] = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context: Any) -> None:
        self._fields_map = {field.key_text: field for field in self.fields}

    @property
    def fields_map(self) -> Mapping[str, FormField]:
        """Read-only key text to field mapping (later fields win)."""
        return MappingProxyType(self._fields_map)

    def get_field_by_key(self, key: str) -> Optional[FormField]:
        """Get the field whose key text is exactly ``key``."""
        return self._fields_map.get(key)

    def search_fields_by_key(self, key: str) -> list[FormField]:
        """Fields whose key text contains ``key``, ignoring case."""
        search_key = key.lower()
        return [f for f in self.fields if search_key in f.key_text.lower()]
"""docstruct: structured documents from document-analysis blocks."""

from docstruct.models import Document, Page
from docstruct.pipeline import build_document

__version__ = "0.1.0"

__all__ = ["Document", "Page", "build_document", "__version__"]

"""Exceptions raised by docstruct."""


class DocstructError(Exception):
    """Base class for docstruct errors."""


class EmptyDocumentError(DocstructError):
    """Assembly produced a document without pages."""

    def __init__(self, document_id: str = ""):
        self.document_id = document_id
        super().__init__(f"empty document {document_id}".rstrip())


class StorageError(DocstructError):
    """A storage write failed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")

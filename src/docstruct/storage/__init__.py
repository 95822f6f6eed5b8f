"""Storage layer for docstruct.

Output payloads are handed to a StorageWriter; the core never does I/O
itself.
"""

from .base import StorageWriter
from .local import InMemoryStorage, LocalStorage

__all__ = [
    "StorageWriter",
    "LocalStorage",
    "InMemoryStorage",
]

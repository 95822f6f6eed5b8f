"""Pipeline stages for document model assembly.

Pure, synchronous stages (no I/O):
1. block_index - Identifier lookup and per-page block groups
2. builders - Words, lines, fields, cells and tables from single blocks
3. assembler - Single-pass page assembly and document assembly

Each call builds its own index; nothing is shared between calls, so
independent documents can be assembled concurrently.
"""

from .assembler import DocumentAssembler, PageAssembler, build_document
from .block_index import BlockIndex, build_block_index, partition_pages
from .builders import (
    build_cell,
    build_field,
    build_line,
    build_selection_element,
    build_table,
    build_word,
    extract_geometry,
)

__all__ = [
    # Index
    "BlockIndex",
    "build_block_index",
    "partition_pages",
    # Builders
    "extract_geometry",
    "build_word",
    "build_selection_element",
    "build_line",
    "build_field",
    "build_cell",
    "build_table",
    # Assembly
    "PageAssembler",
    "DocumentAssembler",
    "build_document",
]

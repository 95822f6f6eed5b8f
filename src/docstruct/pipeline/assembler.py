"""Assembly Stage - Build pages and documents from raw responses.

Flow:
1. Index all blocks by identifier (block_index)
2. Partition blocks into per-page groups
3. Walk each group once, dispatching on block kind to the entity builders
4. Collect the pages into a Document

Every BlockType member has an entry in the dispatch table; adding a kind
without a handler fails at import time.
"""

import logging
from collections.abc import Callable, Iterable
from typing import Optional, Union

from docstruct.models import (
    AnalyzeResponse,
    Block,
    BlockType,
    Document,
    EntityType,
    Form,
    FormField,
    Geometry,
    Line,
    Page,
    Table,
)
from docstruct.pipeline.block_index import (
    BlockIndex,
    build_block_index,
    partition_pages,
)
from docstruct.pipeline.builders import (
    build_field,
    build_line,
    build_table,
    extract_geometry,
)

logger = logging.getLogger(__name__)


class _PageState:
    """Accumulators for one pass over a page's blocks."""

    def __init__(self, blocks: list[Block]):
        self.blocks = blocks
        self.id: Optional[str] = None
        self.geometry: Optional[Geometry] = None
        self.lines: list[Line] = []
        self.fields: list[FormField] = []
        self.tables: list[Table] = []
        self.content: list[Union[Line, Table, FormField]] = []
        self.text_parts: list[str] = []

    def to_page(self) -> Page:
        return Page(
            id=self.id,
            geometry=self.geometry,
            lines=self.lines,
            form=Form(fields=self.fields),
            tables=self.tables,
            content=self.content,
            text="".join(self.text_parts),
            blocks=self.blocks,
        )


_Handler = Callable[[_PageState, Block, BlockIndex], None]


def _on_page(state: _PageState, block: Block, index: BlockIndex) -> None:
    state.id = block.id
    state.geometry = extract_geometry(block)


def _on_line(state: _PageState, block: Block, index: BlockIndex) -> None:
    line = build_line(block, index)
    state.lines.append(line)
    state.content.append(line)
    state.text_parts.append(line.text + "\n")


def _on_table(state: _PageState, block: Block, index: BlockIndex) -> None:
    table = build_table(block, index)
    state.tables.append(table)
    state.content.append(table)


def _on_key_value_set(state: _PageState, block: Block, index: BlockIndex) -> None:
    # VALUE blocks are only reached through their key's VALUE relationship
    if not block.has_entity_type(EntityType.KEY):
        return
    field = build_field(block, index)
    if field is not None:
        state.fields.append(field)
        state.content.append(field)


def _via_relationship(state: _PageState, block: Block, index: BlockIndex) -> None:
    """Words, cells and selection marks are built by their parents."""


PAGE_HANDLERS: dict[BlockType, _Handler] = {
    BlockType.PAGE: _on_page,
    BlockType.LINE: _on_line,
    BlockType.TABLE: _on_table,
    BlockType.KEY_VALUE_SET: _on_key_value_set,
    BlockType.WORD: _via_relationship,
    BlockType.CELL: _via_relationship,
    BlockType.SELECTION_ELEMENT: _via_relationship,
}

_unhandled = set(BlockType) - set(PAGE_HANDLERS)
if _unhandled:
    raise RuntimeError(
        f"No page handler for block types: {sorted(t.value for t in _unhandled)}"
    )


class PageAssembler:
    """Builds a Page from one page's block group in a single ordered pass."""

    def __init__(self, handlers: Optional[dict[BlockType, _Handler]] = None):
        self.handlers = handlers or PAGE_HANDLERS

    def assemble(self, blocks: list[Block], index: BlockIndex) -> Page:
        """Assemble a page.

        Args:
            blocks: The page's blocks in source order.
            index: Identifier lookup over all blocks of the document.

        Returns:
            The completed Page.
        """
        state = _PageState(blocks)
        for block in blocks:
            kind = block.kind
            if kind is None:
                logger.debug("Ignoring block %s of type %s", block.id, block.block_type)
                continue
            self.handlers[kind](state, block, index)

        page = state.to_page()
        logger.debug(
            "Assembled page %s: %d lines, %d fields, %d tables",
            page.id,
            len(page.lines),
            len(page.form.fields),
            len(page.tables),
        )
        return page


class DocumentAssembler:
    """Builds a Document from one or more raw responses."""

    def __init__(self, page_assembler: Optional[PageAssembler] = None):
        self.page_assembler = page_assembler or PageAssembler()

    def assemble(self, responses: Iterable[AnalyzeResponse]) -> Document:
        """Assemble all pages of the responses, in page order."""
        responses = list(responses)
        index = build_block_index(responses)
        groups = partition_pages(responses)

        pages = [self.page_assembler.assemble(group, index) for group in groups]
        logger.info(
            "Assembled document: %d blocks, %d pages", len(index), len(pages)
        )
        return Document(pages=pages, responses=responses)


def build_document(*responses: Union[AnalyzeResponse, dict]) -> Document:
    """Build a Document from responses given as models or raw dicts."""
    parsed = [
        r if isinstance(r, AnalyzeResponse) else AnalyzeResponse.model_validate(r)
        for r in responses
    ]
    return DocumentAssembler().assemble(parsed)

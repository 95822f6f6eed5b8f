"""Entity Builders - Turn single blocks into document model entities.

Each builder takes one source block plus the block index and follows the
block's relationships by identifier:
- LINE → Line with its WORD children
- KEY_VALUE_SET (KEY) → FormField, following VALUE to the value block
- TABLE → Table, grouping its CELL children into rows
- CELL → Cell with its WORD / SELECTION_ELEMENT children

References that do not resolve are dropped silently.
"""

import logging
from typing import Optional, Union

from docstruct.models import (
    Block,
    BlockType,
    Cell,
    EntityType,
    FieldKey,
    FieldValue,
    FormField,
    Geometry,
    Line,
    RelationshipType,
    Row,
    SelectionElement,
    SelectionStatus,
    Table,
    Word,
)
from docstruct.pipeline.block_index import BlockIndex

logger = logging.getLogger(__name__)

WORD_KINDS = (BlockType.WORD,)
CONTENT_KINDS = (BlockType.WORD, BlockType.SELECTION_ELEMENT)
CELL_KINDS = (BlockType.CELL,)


def extract_geometry(block: Block) -> Geometry:
    """Get the normalized geometry of a block.

    Raises:
        ValueError: If the block has no geometry.
    """
    if block.geometry is None:
        raise ValueError(f"Block {block.id} ({block.block_type}) has no geometry")
    return Geometry(
        bounding_box=block.geometry.bounding_box,
        polygon=list(block.geometry.polygon),
    )


def build_word(block: Block) -> Word:
    return Word(
        id=block.id,
        geometry=extract_geometry(block),
        confidence=block.confidence,
        text=block.text or "",
    )


def build_selection_element(block: Block) -> SelectionElement:
    return SelectionElement(
        id=block.id,
        geometry=extract_geometry(block),
        confidence=block.confidence,
        selection_status=SelectionStatus(block.selection_status),
    )


def build_content_item(block: Block) -> Union[Word, SelectionElement]:
    """Build a word or selection element from a block of either kind."""
    if block.kind == BlockType.SELECTION_ELEMENT:
        return build_selection_element(block)
    return build_word(block)


def _child_words(block: Block, index: BlockIndex) -> list[Word]:
    child_ids = block.relationship_ids(RelationshipType.CHILD)
    return [build_word(b) for b in index.resolve(child_ids, WORD_KINDS)]


def _child_content(
    block: Block, index: BlockIndex
) -> list[Union[Word, SelectionElement]]:
    child_ids = block.relationship_ids(RelationshipType.CHILD)
    return [build_content_item(b) for b in index.resolve(child_ids, CONTENT_KINDS)]


def build_line(block: Block, index: BlockIndex) -> Line:
    """Build a line; its text is trusted from the block as is."""
    return Line(
        id=block.id,
        geometry=extract_geometry(block),
        confidence=block.confidence,
        text=block.text or "",
        words=_child_words(block, index),
    )


def build_field_key(block: Block, index: BlockIndex) -> FieldKey:
    words = _child_words(block, index)
    return FieldKey(
        id=block.id,
        geometry=extract_geometry(block),
        confidence=block.confidence,
        words=words,
        text=" ".join(w.text for w in words),
    )


def build_field_value(block: Block, index: BlockIndex) -> FieldValue:
    content = _child_content(block, index)
    return FieldValue(
        id=block.id,
        geometry=extract_geometry(block),
        confidence=block.confidence,
        content=content,
        text=" ".join(item.text for item in content),
    )


def _value_block(block: Block, index: BlockIndex) -> Optional[Block]:
    """Last VALUE-referenced block that is a VALUE-role key/value set."""
    value_ids = block.relationship_ids(RelationshipType.VALUE)
    found = None
    for candidate in index.resolve(value_ids, (BlockType.KEY_VALUE_SET,)):
        if candidate.has_entity_type(EntityType.VALUE):
            found = candidate
    return found


def build_field(block: Block, index: BlockIndex) -> Optional[FormField]:
    """Build a form field from a KEY-role key/value set block.

    Args:
        block: KEY_VALUE_SET block carrying the KEY entity type.
        index: Block index for resolving children and the value.

    Returns:
        The field, or None when the key resolves to no words. Such keys are
        dropped with a warning rather than failing the page.
    """
    key = build_field_key(block, index)
    if not key.words:
        logger.warning(
            "Detected key/value set %s whose key has no content; excluding it from output",
            block.id,
        )
        return None

    value = None
    value_block = _value_block(block, index)
    if value_block is not None and value_block.has_relationship(RelationshipType.CHILD):
        value = build_field_value(value_block, index)

    return FormField(id=block.id, key=key, value=value)


def build_cell(block: Block, index: BlockIndex) -> Cell:
    """Build a table cell.

    Cell text is each word followed by a space and each selection status
    followed by ", ", in content order.
    """
    content = _child_content(block, index)
    text = ""
    for item in content:
        if isinstance(item, SelectionElement):
            text += item.text + ", "
        else:
            text += item.text + " "

    return Cell(
        id=block.id,
        row_index=block.row_index or 0,
        column_index=block.column_index or 0,
        row_span=block.row_span or 1,
        column_span=block.column_span or 1,
        geometry=extract_geometry(block),
        confidence=block.confidence,
        content=content,
        text=text,
    )


def build_table(block: Block, index: BlockIndex) -> Table:
    """Build a table, grouping its cells into rows.

    Cells are taken in the order the table lists them. A new row starts
    whenever a cell's row index goes past the current one; every cell is
    appended to the open row, so columns follow listing order. The open row
    is closed on every advance and at the end, even when it holds no cells:
    a first cell on row 2 leaves an empty first row, and a table whose
    children all fail to resolve has one empty row.

    Cells that step back to an earlier row, or repeat a position, cannot be
    placed on the grid this way. They are still kept in listing order, and
    the table is flagged for audit.
    """
    child_ids = block.relationship_ids(RelationshipType.CHILD)
    cells = [build_cell(b, index) for b in index.resolve(child_ids, CELL_KINDS)]

    rows: list[Row] = []
    current_row_index = 1
    current_cells: list[Cell] = []
    seen: set[tuple[int, int]] = set()
    problems: list[str] = []

    for cell in cells:
        position = (cell.row_index, cell.column_index)
        if position in seen:
            problems.append(f"duplicate cell position {position}")
        seen.add(position)

        if cell.row_index > current_row_index:
            rows.append(Row(cells=current_cells))
            current_cells = []
            current_row_index = cell.row_index
        elif cell.row_index < current_row_index:
            problems.append(
                f"cell {cell.id} at row {cell.row_index} listed after row {current_row_index}"
            )
        current_cells.append(cell)

    if block.has_relationship(RelationshipType.CHILD):
        rows.append(Row(cells=current_cells))

    audit_reason = None
    if problems:
        audit_reason = "Cells not in row-major order: " + "; ".join(problems)
        logger.warning("Table %s: %s", block.id, audit_reason)

    return Table(
        id=block.id,
        geometry=extract_geometry(block),
        confidence=block.confidence,
        rows=rows,
        needs_audit=bool(problems),
        audit_reason=audit_reason,
    )

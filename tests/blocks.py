"""Raw block builders for tests."""

from typing import Optional


def geometry(left: float = 0.1, top: float = 0.1, width: float = 0.2, height: float = 0.05) -> dict:
    return {
        "BoundingBox": {"Width": width, "Height": height, "Left": left, "Top": top},
        "Polygon": [
            {"X": left, "Y": top},
            {"X": left + width, "Y": top},
            {"X": left + width, "Y": top + height},
            {"X": left, "Y": top + height},
        ],
    }


def block(
    block_id: str,
    block_type: str,
    children: Optional[list[str]] = None,
    values: Optional[list[str]] = None,
    **fields,
) -> dict:
    """Raw block dict in the analysis API's JSON shape."""
    raw = {
        "Id": block_id,
        "BlockType": block_type,
        "Confidence": 99.0,
        "Geometry": geometry(),
    }
    relationships = []
    if children is not None:
        relationships.append({"Type": "CHILD", "Ids": children})
    if values is not None:
        relationships.append({"Type": "VALUE", "Ids": values})
    if relationships:
        raw["Relationships"] = relationships
    raw.update(fields)
    return raw


def page(block_id: str, children: Optional[list[str]] = None) -> dict:
    return block(block_id, "PAGE", children=children)


def word(block_id: str, text: str) -> dict:
    return block(block_id, "WORD", Text=text, TextType="PRINTED")


def line(block_id: str, text: str, children: Optional[list[str]] = None) -> dict:
    return block(block_id, "LINE", children=children, Text=text)


def selection(block_id: str, status: str = "SELECTED") -> dict:
    return block(block_id, "SELECTION_ELEMENT", SelectionStatus=status)


def key(block_id: str, children: Optional[list[str]] = None, values: Optional[list[str]] = None) -> dict:
    return block(block_id, "KEY_VALUE_SET", children=children, values=values, EntityTypes=["KEY"])


def value(block_id: str, children: Optional[list[str]] = None) -> dict:
    return block(block_id, "KEY_VALUE_SET", children=children, EntityTypes=["VALUE"])


def cell(block_id: str, row: int, col: int, children: Optional[list[str]] = None, **fields) -> dict:
    return block(
        block_id,
        "CELL",
        children=children,
        RowIndex=row,
        ColumnIndex=col,
        RowSpan=fields.pop("RowSpan", 1),
        ColumnSpan=fields.pop("ColumnSpan", 1),
        **fields,
    )


def table(block_id: str, children: Optional[list[str]] = None) -> dict:
    return block(block_id, "TABLE", children=children)


def response(*blocks: dict, pages: int = 1) -> dict:
    return {
        "DocumentMetadata": {"Pages": pages},
        "AnalyzeDocumentModelVersion": "1.0",
        "Blocks": list(blocks),
    }

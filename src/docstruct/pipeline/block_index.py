"""Block Index Stage - Identifier lookup and page partitioning.

Flow:
1. Merge every response's blocks into one identifier → block mapping
2. Split the linear block sequence into per-page groups, starting a new
   group at each PAGE block

The index is built once per assembly call and passed to every builder;
nothing is kept between calls.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Optional

from docstruct.models import AnalyzeResponse, Block, BlockType

logger = logging.getLogger(__name__)


class BlockIndex(Mapping):
    """Read-only identifier → block lookup."""

    def __init__(self, blocks: Optional[Mapping[str, Block]] = None):
        self._blocks = MappingProxyType(dict(blocks or {}))

    def __getitem__(self, block_id: str) -> Block:
        return self._blocks[block_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def resolve(
        self,
        ids: Iterable[str],
        kinds: Iterable[BlockType],
    ) -> list[Block]:
        """Resolve identifiers to blocks of the requested kinds.

        Args:
            ids: Referenced identifiers, in relationship order.
            kinds: Block kinds to keep.

        Returns:
            Matching blocks in reference order. Identifiers missing from the
            index and blocks of other kinds are skipped.
        """
        wanted = frozenset(kinds)
        resolved = []
        for block_id in ids:
            block = self.get(block_id)
            if block is None:
                logger.debug("Skipping unresolved block reference %s", block_id)
                continue
            if block.kind in wanted:
                resolved.append(block)
        return resolved


def build_block_index(responses: Iterable[AnalyzeResponse]) -> BlockIndex:
    """Index blocks from all responses by identifier.

    A later response wins when identifiers collide.
    """
    blocks: dict[str, Block] = {}
    for response in responses:
        for block in response.blocks:
            blocks[block.id] = block
    return BlockIndex(blocks)


def partition_pages(responses: Iterable[AnalyzeResponse]) -> list[list[Block]]:
    """Group the concatenated block sequence by page.

    Each PAGE block opens a group that collects every following block up to
    the next PAGE block. Blocks before the first PAGE block (or all blocks,
    when there is none) form a group of their own.

    Args:
        responses: Raw responses, in order.

    Returns:
        List of block groups, one per page.
    """
    groups: list[list[Block]] = []
    current: list[Block] = []

    for response in responses:
        for block in response.blocks:
            if block.kind == BlockType.PAGE:
                if current:
                    groups.append(current)
                current = [block]
            else:
                current.append(block)

    # Don't forget last group
    if current:
        groups.append(current)

    return groups

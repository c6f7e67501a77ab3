"""Number blocks and slot placement helpers."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class Block:
    """A numbered tile; ``slot`` is None while the block sits in the pool."""

    id: int
    value: int
    slot: Optional[int] = None

    @property
    def is_placed(self) -> bool:
        return self.slot is not None


def place(blocks: Tuple[Block, ...], block_id: int, slot: int) -> Tuple[Block, ...]:
    """Move ``block_id`` into ``slot``, sending any previous occupant back to the pool."""
    updated = []
    for b in blocks:
        if b.id == block_id:
            updated.append(replace(b, slot=slot))
        elif b.slot == slot:
            updated.append(replace(b, slot=None))
        else:
            updated.append(b)
    return tuple(updated)


def unplace(blocks: Tuple[Block, ...], block_id: int) -> Tuple[Block, ...]:
    return tuple(replace(b, slot=None) if b.id == block_id else b for b in blocks)


def find(blocks: Tuple[Block, ...], block_id: int) -> Optional[Block]:
    for b in blocks:
        if b.id == block_id:
            return b
    return None

"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from logicpuzzle.core.blocks import Block
from logicpuzzle.core.session import Phase, SessionState


@dataclass(frozen=True)
class BoardView:
    """Solution slots and the block pool, split out of a session snapshot."""

    slots: Tuple[Optional[Block], ...]
    available: Tuple[Block, ...]

    @classmethod
    def from_state(cls, state: SessionState, slot_count: int) -> "BoardView":
        slots = tuple(
            next((b for b in state.blocks if b.slot == index), None) for index in range(slot_count)
        )
        available = tuple(b for b in state.blocks if not b.is_placed)
        return cls(slots=slots, available=available)

    def first_free_slot(self) -> Optional[int]:
        for index, block in enumerate(self.slots):
            if block is None:
                return index
        return None


def award_breakdown(state: SessionState) -> str:
    """Points split shown under the clear message, empty outside a clear."""
    award = state.last_award
    if state.phase is not Phase.LEVEL_CLEARED or award is None:
        return ""
    text = f"Level bonus +{award.level_bonus}"
    if award.streak_bonus:
        text += f" · Streak bonus +{award.streak_bonus}"
    return text

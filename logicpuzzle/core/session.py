"""Session state and the pure ``state x event -> state`` reducer.

The reducer never generates blocks, reads clocks or schedules anything; the
engine does that and feeds the results in as event payloads. Events that are
not legal in the current phase return the *same* state object, so callers
can detect a no-op with an identity check.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from logicpuzzle.core import blocks as block_ops
from logicpuzzle.core.blocks import Block
from logicpuzzle.core.config import GameConfig
from logicpuzzle.core.levels import LevelDefinition
from logicpuzzle.core.scoring import ScoreAward, apply_award, award_for_clear
from logicpuzzle.core.validator import SolutionCheck, check_solution

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    IDLE = "idle"
    LEVEL_ACTIVE = "level_active"
    LEVEL_CLEARED = "level_cleared"
    TIMED_OUT = "timed_out"
    SESSION_COMPLETE = "session_complete"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of a puzzle session, delivered to the host on every change."""

    phase: Phase = Phase.IDLE
    level_index: int = 0
    score: int = 0
    streak: int = 0
    best_streak: int = 0
    time_remaining: int = 0
    blocks: Tuple[Block, ...] = ()
    feedback: Optional[str] = None
    hint: Optional[int] = None
    completed: bool = False
    last_award: Optional[ScoreAward] = None

    @property
    def placed_blocks(self) -> Tuple[Block, ...]:
        return tuple(b for b in self.blocks if b.is_placed)

    @property
    def current_sum(self) -> int:
        return sum(b.value for b in self.placed_blocks)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Start:
    blocks: Tuple[Block, ...]


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class PlaceBlock:
    block_id: int
    slot: int


@dataclass(frozen=True)
class RemoveBlock:
    block_id: int


@dataclass(frozen=True)
class CheckSolution:
    pass


@dataclass(frozen=True)
class Advance:
    """Fired by the engine after the post-clear or post-timeout delay.

    Empty ``blocks`` before the last level means the next level could not be
    generated, and the session ends incomplete.
    """

    blocks: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class ClearFeedback:
    pass


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[Start, Tick, PlaceBlock, RemoveBlock, CheckSolution, Advance, ClearFeedback, Reset]

_IDLE = SessionState()


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

def clear_message(level: LevelDefinition, streak: int, award: ScoreAward) -> str:
    message = f"🎉 Perfect! Level {level.level_number} complete!"
    if streak > 1:
        message += f" Streak: {streak}! 🔥"
    return message + f" +{award.total} points"


def hint_message(result: SolutionCheck) -> str:
    diff = abs(result.difference)
    if result.difference < 0:
        hint = f"You need {diff} more. "
    elif result.difference > 0:
        hint = f"You're {diff} over. "
    elif result.placed_count < 2:
        hint = "Use at least two blocks. "
    else:
        hint = ""
    return f"Current sum: {result.current_sum}. Target: {result.target}. {hint}Keep trying! 🤔"


def _timeout_message(state: SessionState, levels: Sequence[LevelDefinition]) -> str:
    if state.level_index + 1 < len(levels):
        return f"⏰ Time is up! Moving on to level {levels[state.level_index + 1].level_number}."
    return "⏰ Time is up!"


def _final_message(score: int, completed: bool) -> str:
    if completed:
        return f"🎉 Congratulations! You've mastered all levels! Final Score: {score}"
    return f"Session over! Final Score: {score}"


# ---------------------------------------------------------------------------
# Transitions
# ---------------------------------------------------------------------------

def _ignore(state: SessionState, event: Event, reason: str) -> SessionState:
    logger.debug("Ignoring %s in phase %s: %s", type(event).__name__, state.phase.value, reason)
    return state


def _on_start(state: SessionState, event: Start, levels: Sequence[LevelDefinition], config: GameConfig) -> SessionState:
    if state.phase is not Phase.IDLE:
        return _ignore(state, event, "session already started")
    if not levels:
        return _ignore(state, event, "empty level catalog")
    if not event.blocks:
        return _ignore(state, event, "no blocks supplied")
    return SessionState(
        phase=Phase.LEVEL_ACTIVE,
        level_index=0,
        time_remaining=config.time_limit_seconds,
        blocks=tuple(event.blocks),
    )


def _on_tick(state: SessionState, event: Tick, levels: Sequence[LevelDefinition], config: GameConfig) -> SessionState:
    if state.phase is not Phase.LEVEL_ACTIVE:
        return _ignore(state, event, "timer not running")
    remaining = state.time_remaining - 1
    if remaining > 0:
        return replace(state, time_remaining=remaining)
    logger.info("Level %d timed out", levels[state.level_index].level_number)
    return replace(
        state,
        phase=Phase.TIMED_OUT,
        time_remaining=0,
        streak=0,
        hint=None,
        feedback=_timeout_message(state, levels),
    )


def _on_place(state: SessionState, event: PlaceBlock, levels: Sequence[LevelDefinition], config: GameConfig) -> SessionState:
    if state.phase is not Phase.LEVEL_ACTIVE:
        return _ignore(state, event, "no active level")
    if not 0 <= event.slot < config.slot_count:
        return _ignore(state, event, f"slot {event.slot} out of range")
    block = block_ops.find(state.blocks, event.block_id)
    if block is None:
        return _ignore(state, event, f"unknown block {event.block_id}")
    if block.slot == event.slot:
        return _ignore(state, event, "block already in that slot")
    return replace(state, blocks=block_ops.place(state.blocks, event.block_id, event.slot))


def _on_remove(state: SessionState, event: RemoveBlock, levels: Sequence[LevelDefinition], config: GameConfig) -> SessionState:
    if state.phase is not Phase.LEVEL_ACTIVE:
        return _ignore(state, event, "no active level")
    block = block_ops.find(state.blocks, event.block_id)
    if block is None or not block.is_placed:
        return _ignore(state, event, f"block {event.block_id} is not placed")
    return replace(state, blocks=block_ops.unplace(state.blocks, event.block_id))


def _on_check(state: SessionState, event: CheckSolution, levels: Sequence[LevelDefinition], config: GameConfig) -> SessionState:
    if state.phase is not Phase.LEVEL_ACTIVE:
        return _ignore(state, event, "no active level")
    level = levels[state.level_index]
    result = check_solution(state.blocks, level.target_sum)
    if not result.success:
        return replace(state, streak=0, hint=result.difference, feedback=hint_message(result))

    award = award_for_clear(level.level_number, config.time_limit_seconds, state.time_remaining, state.streak)
    streak = state.streak + 1
    logger.info("Level %d cleared for %d points (streak %d)", level.level_number, award.total, streak)
    return replace(
        state,
        phase=Phase.LEVEL_CLEARED,
        score=apply_award(state.score, award),
        streak=streak,
        best_streak=max(state.best_streak, streak),
        hint=None,
        feedback=clear_message(level, streak, award),
        last_award=award,
    )


def _on_advance(state: SessionState, event: Advance, levels: Sequence[LevelDefinition], config: GameConfig) -> SessionState:
    if state.phase not in (Phase.LEVEL_CLEARED, Phase.TIMED_OUT):
        return _ignore(state, event, "nothing to advance from")
    next_index = state.level_index + 1
    if next_index >= len(levels) or not event.blocks:
        if next_index < len(levels):
            logger.warning("No blocks for level %d, ending the session", levels[next_index].level_number)
        completed = next_index >= len(levels) and state.phase is Phase.LEVEL_CLEARED
        return replace(
            state,
            phase=Phase.SESSION_COMPLETE,
            completed=completed,
            hint=None,
            feedback=_final_message(state.score, completed),
        )
    return replace(
        state,
        phase=Phase.LEVEL_ACTIVE,
        level_index=next_index,
        time_remaining=config.time_limit_seconds,
        blocks=tuple(event.blocks),
        feedback=None,
        hint=None,
    )


def _on_clear_feedback(state: SessionState, event: ClearFeedback, levels: Sequence[LevelDefinition], config: GameConfig) -> SessionState:
    if state.phase is not Phase.LEVEL_ACTIVE or state.feedback is None:
        return state
    return replace(state, feedback=None)


def _on_reset(state: SessionState, event: Reset, levels: Sequence[LevelDefinition], config: GameConfig) -> SessionState:
    if state == _IDLE:
        return state
    return _IDLE


_HANDLERS: Dict[type, Callable[..., SessionState]] = {
    Start: _on_start,
    Tick: _on_tick,
    PlaceBlock: _on_place,
    RemoveBlock: _on_remove,
    CheckSolution: _on_check,
    Advance: _on_advance,
    ClearFeedback: _on_clear_feedback,
    Reset: _on_reset,
}


def reduce(
    state: SessionState,
    event: Event,
    levels: Sequence[LevelDefinition],
    config: Optional[GameConfig] = None,
) -> SessionState:
    """Apply ``event`` to ``state``; illegal events return ``state`` unchanged."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        return _ignore(state, event, "unknown event")
    return handler(state, event, levels, config or GameConfig())

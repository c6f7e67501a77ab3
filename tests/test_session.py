"""Tests for logicpuzzle.core.session – the pure session reducer."""

from __future__ import annotations

from dataclasses import replace

import pytest

from logicpuzzle.core.blocks import Block
from logicpuzzle.core.config import GameConfig
from logicpuzzle.core.levels import DifficultyTier, LevelDefinition
from logicpuzzle.core.session import (
    Advance,
    CheckSolution,
    ClearFeedback,
    Phase,
    PlaceBlock,
    RemoveBlock,
    Reset,
    SessionState,
    Start,
    Tick,
    reduce,
)

LEVELS = (
    LevelDefinition(1, 15, "Basic Arithmetic", 6, DifficultyTier.BASIC),
    LevelDefinition(2, 24, "Factors & Multiples", 7, DifficultyTier.BASIC),
)

BLOCKS = (Block(1, 7), Block(2, 8), Block(3, 4), Block(4, 11), Block(5, 2), Block(6, 15))
NEXT_BLOCKS = (Block(1, 12), Block(2, 12), Block(3, 5), Block(4, 1))


def _apply(state: SessionState, *events) -> SessionState:
    for event in events:
        state = reduce(state, event, LEVELS, GameConfig())
    return state


@pytest.fixture()
def active() -> SessionState:
    return _apply(SessionState(), Start(BLOCKS))


# ---------------------------------------------------------------------------
# Start
# ---------------------------------------------------------------------------

class TestStart:
    def test_idle_to_level_active(self, active: SessionState):
        assert active.phase is Phase.LEVEL_ACTIVE
        assert active.level_index == 0
        assert active.time_remaining == 120
        assert active.blocks == BLOCKS
        assert (active.score, active.streak, active.best_streak) == (0, 0, 0)

    def test_start_while_active_is_ignored(self, active: SessionState):
        assert _apply(active, Start(NEXT_BLOCKS)) is active

    def test_start_without_levels_is_ignored(self):
        state = SessionState()
        assert reduce(state, Start(BLOCKS), (), GameConfig()) is state

    def test_start_without_blocks_is_ignored(self):
        state = SessionState()
        assert _apply(state, Start(())) is state


# ---------------------------------------------------------------------------
# Tick
# ---------------------------------------------------------------------------

class TestTick:
    def test_decrements(self, active: SessionState):
        assert _apply(active, Tick()).time_remaining == 119

    def test_reaching_zero_times_out(self, active: SessionState):
        state = replace(active, time_remaining=1, streak=4, best_streak=4)
        state = _apply(state, Tick())
        assert state.phase is Phase.TIMED_OUT
        assert state.time_remaining == 0
        assert state.streak == 0
        assert state.best_streak == 4
        assert "Time is up" in state.feedback

    def test_full_countdown(self, active: SessionState):
        state = active
        for _ in range(119):
            state = _apply(state, Tick())
        assert state.phase is Phase.LEVEL_ACTIVE
        assert state.time_remaining == 1
        assert _apply(state, Tick()).phase is Phase.TIMED_OUT

    def test_tick_while_idle_is_ignored(self):
        state = SessionState()
        assert _apply(state, Tick()) is state

    def test_tick_after_timeout_is_ignored(self, active: SessionState):
        timed_out = _apply(replace(active, time_remaining=1), Tick())
        assert _apply(timed_out, Tick()) is timed_out


# ---------------------------------------------------------------------------
# Place / remove
# ---------------------------------------------------------------------------

class TestPlacement:
    def test_place_into_empty_slot(self, active: SessionState):
        state = _apply(active, PlaceBlock(1, 0))
        assert state.blocks[0].slot == 0
        assert state.current_sum == 7

    def test_place_into_occupied_slot_evicts(self, active: SessionState):
        state = _apply(active, PlaceBlock(1, 0), PlaceBlock(2, 0))
        assert state.blocks[0].slot is None
        assert state.blocks[1].slot == 0
        assert len(state.placed_blocks) == 1

    def test_move_between_slots(self, active: SessionState):
        state = _apply(active, PlaceBlock(1, 0), PlaceBlock(1, 2))
        assert state.blocks[0].slot == 2
        assert [b.id for b in state.placed_blocks] == [1]

    def test_same_slot_again_is_ignored(self, active: SessionState):
        placed = _apply(active, PlaceBlock(1, 0))
        assert _apply(placed, PlaceBlock(1, 0)) is placed

    @pytest.mark.parametrize("slot", [-1, 3, 10])
    def test_slot_out_of_range_is_ignored(self, active: SessionState, slot: int):
        assert _apply(active, PlaceBlock(1, slot)) is active

    def test_unknown_block_is_ignored(self, active: SessionState):
        assert _apply(active, PlaceBlock(42, 0)) is active

    def test_remove(self, active: SessionState):
        state = _apply(active, PlaceBlock(1, 0), RemoveBlock(1))
        assert state.blocks[0].slot is None

    def test_remove_unplaced_is_ignored(self, active: SessionState):
        assert _apply(active, RemoveBlock(1)) is active

    def test_place_while_idle_is_ignored(self):
        state = SessionState()
        assert _apply(state, PlaceBlock(1, 0)) is state

    def test_at_most_one_block_per_slot(self, active: SessionState):
        state = _apply(active, PlaceBlock(1, 0), PlaceBlock(2, 1), PlaceBlock(3, 1), PlaceBlock(4, 0))
        slots = [b.slot for b in state.placed_blocks]
        assert sorted(slots) == [0, 1]


# ---------------------------------------------------------------------------
# Check solution
# ---------------------------------------------------------------------------

class TestCheckSolution:
    def test_success_scenario(self, active: SessionState):
        state = replace(active, time_remaining=100, streak=2, best_streak=2, score=30)
        state = _apply(state, PlaceBlock(1, 0), PlaceBlock(2, 1), CheckSolution())
        assert state.phase is Phase.LEVEL_CLEARED
        assert state.score == 30 + 50
        assert state.streak == 3
        assert state.best_streak == 3
        assert state.last_award.total == 50
        assert "Perfect! Level 1 complete!" in state.feedback
        assert "Streak: 3!" in state.feedback

    def test_first_clear_has_no_streak_bonus(self, active: SessionState):
        state = _apply(active, PlaceBlock(1, 0), PlaceBlock(2, 1), CheckSolution())
        assert state.score == 20
        assert state.streak == 1
        assert "Streak" not in state.feedback

    def test_failure_resets_streak_and_hints_short(self, active: SessionState):
        state = replace(active, streak=5, best_streak=5)
        state = _apply(state, PlaceBlock(1, 0), PlaceBlock(3, 1), CheckSolution())
        assert state.phase is Phase.LEVEL_ACTIVE
        assert state.streak == 0
        assert state.best_streak == 5
        assert state.hint == -4
        assert "You need 4 more" in state.feedback

    def test_failure_hints_over(self, active: SessionState):
        state = _apply(active, PlaceBlock(2, 0), PlaceBlock(4, 1), CheckSolution())
        assert state.hint == 4
        assert "You're 4 over" in state.feedback

    def test_single_block_equal_to_target_fails(self, active: SessionState):
        state = _apply(replace(active, streak=2), PlaceBlock(6, 0), CheckSolution())
        assert state.phase is Phase.LEVEL_ACTIVE
        assert state.streak == 0
        assert state.hint == 0
        assert "at least two blocks" in state.feedback

    def test_failure_does_not_change_score(self, active: SessionState):
        state = replace(active, score=120)
        assert _apply(state, CheckSolution()).score == 120

    def test_check_while_idle_is_ignored(self):
        state = SessionState()
        assert _apply(state, CheckSolution()) is state

    def test_check_after_clear_is_ignored(self, active: SessionState):
        cleared = _apply(active, PlaceBlock(1, 0), PlaceBlock(2, 1), CheckSolution())
        assert _apply(cleared, CheckSolution()) is cleared


# ---------------------------------------------------------------------------
# Advance
# ---------------------------------------------------------------------------

class TestAdvance:
    def _cleared(self, active: SessionState) -> SessionState:
        return _apply(active, PlaceBlock(1, 0), PlaceBlock(2, 1), CheckSolution())

    def test_clear_to_next_level(self, active: SessionState):
        state = _apply(self._cleared(active), Advance(NEXT_BLOCKS))
        assert state.phase is Phase.LEVEL_ACTIVE
        assert state.level_index == 1
        assert state.time_remaining == 120
        assert state.blocks == NEXT_BLOCKS
        assert state.feedback is None
        assert state.streak == 1

    def test_timeout_to_next_level(self, active: SessionState):
        timed_out = _apply(replace(active, time_remaining=1), Tick())
        state = _apply(timed_out, Advance(NEXT_BLOCKS))
        assert state.phase is Phase.LEVEL_ACTIVE
        assert state.level_index == 1

    def test_clear_last_level_completes(self, active: SessionState):
        last = replace(active, level_index=1, blocks=NEXT_BLOCKS)
        cleared = _apply(last, PlaceBlock(1, 0), PlaceBlock(2, 1), CheckSolution())
        state = _apply(cleared, Advance())
        assert state.phase is Phase.SESSION_COMPLETE
        assert state.completed is True
        assert "Final Score" in state.feedback

    def test_timeout_on_last_level_completes_without_completion(self, active: SessionState):
        last = replace(active, level_index=1, blocks=NEXT_BLOCKS, time_remaining=1)
        state = _apply(last, Tick(), Advance())
        assert state.phase is Phase.SESSION_COMPLETE
        assert state.completed is False

    def test_advance_without_blocks_mid_catalog_ends_incomplete(self, active: SessionState):
        cleared = self._cleared(active)
        state = _apply(cleared, Advance())
        assert state.phase is Phase.SESSION_COMPLETE
        assert state.completed is False
        assert state.level_index == 0
        assert state.score == cleared.score
        assert "Final Score" in state.feedback

    def test_custom_time_limit_drives_countdown_and_bonus(self):
        config = GameConfig(time_limit_seconds=60)
        state = reduce(SessionState(), Start(BLOCKS), LEVELS, config)
        assert state.time_remaining == 60
        for event in (Tick(), Tick(), PlaceBlock(1, 0), PlaceBlock(2, 1), CheckSolution()):
            state = reduce(state, event, LEVELS, config)
        assert state.last_award.level_bonus == 1 * 20 + 2
        state = reduce(state, Advance(NEXT_BLOCKS), LEVELS, config)
        assert state.time_remaining == 60

    def test_advance_while_active_is_ignored(self, active: SessionState):
        assert _apply(active, Advance(NEXT_BLOCKS)) is active


# ---------------------------------------------------------------------------
# Terminal state, reset, feedback
# ---------------------------------------------------------------------------

class TestCompleteAndReset:
    @pytest.fixture()
    def complete(self, active: SessionState) -> SessionState:
        last = replace(active, level_index=1, blocks=NEXT_BLOCKS, time_remaining=1)
        return _apply(last, Tick(), Advance())

    @pytest.mark.parametrize(
        "event", [Tick(), CheckSolution(), Start(BLOCKS), PlaceBlock(1, 0), Advance(NEXT_BLOCKS)]
    )
    def test_complete_is_terminal(self, complete: SessionState, event):
        assert _apply(complete, event) is complete

    def test_reset_from_complete(self, complete: SessionState):
        assert _apply(complete, Reset()) == SessionState()

    def test_reset_from_active(self, active: SessionState):
        state = _apply(active, PlaceBlock(1, 0), Reset())
        assert state.phase is Phase.IDLE
        assert state.blocks == ()

    def test_reset_when_idle_is_a_no_op(self):
        state = SessionState()
        assert _apply(state, Reset()) is state

    def test_clear_feedback(self, active: SessionState):
        failed = _apply(active, CheckSolution())
        assert failed.feedback
        assert _apply(failed, ClearFeedback()).feedback is None

    def test_clear_feedback_keeps_clear_message(self, active: SessionState):
        cleared = _apply(active, PlaceBlock(1, 0), PlaceBlock(2, 1), CheckSolution())
        assert _apply(cleared, ClearFeedback()) is cleared

    def test_unknown_event_is_ignored(self, active: SessionState):
        assert reduce(active, object(), LEVELS) is active  # type: ignore[arg-type]

from __future__ import annotations

import logging
import random
import time
from dataclasses import asdict, dataclass
from typing import Callable, Iterable, List, Optional, Protocol, Tuple

from logicpuzzle.core.blocks import Block
from logicpuzzle.core.config import GameConfig
from logicpuzzle.core.generator import GenerationError, generate_blocks
from logicpuzzle.core.levels import LevelDefinition
from logicpuzzle.core.scheduling import Scheduler, TimerHandle
from logicpuzzle.core.session import (
    Advance,
    CheckSolution,
    ClearFeedback,
    Event,
    Phase,
    PlaceBlock,
    RemoveBlock,
    Reset,
    SessionState,
    Start,
    Tick,
    reduce,
)

logger = logging.getLogger(__name__)

GAME_ID = "logic-puzzle"

Listener = Callable[[SessionState], None]


@dataclass(frozen=True)
class SessionSummary:
    """What a finished session hands to the recorder."""

    game_id: str
    final_score: int
    best_streak: int
    duration_seconds: int
    completed: bool

    def to_dict(self) -> dict:
        return asdict(self)


class SessionRecorder(Protocol):
    def record(self, summary: SessionSummary) -> None: ...


class PuzzleEngine:
    """Runs a puzzle session: feeds host input and timer events through the reducer.

    The host calls :meth:`tick` once per second and forwards player actions.
    Level transitions after a clear or a timeout are scheduled on the given
    :class:`~logicpuzzle.core.scheduling.Scheduler`; :meth:`reset` cancels
    anything still pending. All calls are expected on one thread.
    """

    def __init__(
        self,
        levels: Iterable[LevelDefinition],
        scheduler: Scheduler,
        recorder: Optional[SessionRecorder] = None,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._levels: Tuple[LevelDefinition, ...] = tuple(levels)
        self._scheduler = scheduler
        self._recorder = recorder
        self._config = config or GameConfig()
        self._rng = rng or random.Random()
        self._clock = clock
        self._state = SessionState()
        self._listeners: List[Listener] = []
        self._advance_handle: Optional[TimerHandle] = None
        self._feedback_handle: Optional[TimerHandle] = None
        self._started_at: Optional[float] = None

    # -- read-only views ------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def levels(self) -> Tuple[LevelDefinition, ...]:
        return self._levels

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def current_level(self) -> Optional[LevelDefinition]:
        if self._state.phase is Phase.IDLE or not self._levels:
            return None
        return self._levels[self._state.level_index]

    @property
    def advance_pending(self) -> bool:
        return self._advance_handle is not None and self._advance_handle.active

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for state snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # -- host input -----------------------------------------------------------

    def start(self) -> None:
        if self._state.phase is not Phase.IDLE:
            logger.debug("Ignoring start in phase %s", self._state.phase.value)
            return
        started_at = self._clock()
        self._dispatch(Start(self._generate(0)))
        if self._state.phase is not Phase.IDLE:
            self._started_at = started_at

    def place_block(self, block_id: int, slot: int) -> None:
        self._dispatch(PlaceBlock(block_id, slot))

    def remove_block(self, block_id: int) -> None:
        self._dispatch(RemoveBlock(block_id))

    def check_solution(self) -> None:
        self._dispatch(CheckSolution())

    def tick(self) -> None:
        self._dispatch(Tick())

    def reset(self) -> None:
        self._cancel_pending()
        self._started_at = None
        self._dispatch(Reset())

    # -- internals ------------------------------------------------------------

    def _generate(self, level_index: int) -> Tuple[Block, ...]:
        level = self._levels[level_index] if level_index < len(self._levels) else None
        if level is None:
            return ()
        try:
            return tuple(
                generate_blocks(
                    level,
                    self._rng,
                    attempts=self._config.generation_attempts,
                    slot_count=self._config.slot_count,
                )
            )
        except GenerationError:
            logger.exception("Could not generate blocks for level %d", level.level_number)
            return ()

    def _dispatch(self, event: Event) -> None:
        previous = self._state
        state = reduce(previous, event, self._levels, self._config)
        if state is previous:
            return
        self._state = state
        self._after_transition(previous, state, event)
        self._notify(state)

    def _after_transition(self, previous: SessionState, state: SessionState, event: Event) -> None:
        if state.phase is not previous.phase and self._feedback_handle is not None:
            self._feedback_handle.cancel()
            self._feedback_handle = None

        if state.phase is Phase.LEVEL_CLEARED:
            self._schedule_advance(self._config.clear_advance_delay)
        elif state.phase is Phase.TIMED_OUT:
            self._schedule_advance(self._config.timeout_advance_delay)
        elif state.phase is Phase.LEVEL_ACTIVE and isinstance(event, CheckSolution):
            self._schedule_feedback_clear()
        elif state.phase is Phase.SESSION_COMPLETE:
            self._record(state)

    def _schedule_advance(self, delay: float) -> None:
        if self._advance_handle is not None:
            self._advance_handle.cancel()
        self._advance_handle = self._scheduler.call_later(delay, self._on_advance_due)

    def _schedule_feedback_clear(self) -> None:
        if self._feedback_handle is not None:
            self._feedback_handle.cancel()
        self._feedback_handle = self._scheduler.call_later(
            self._config.feedback_clear_delay, lambda: self._dispatch(ClearFeedback())
        )

    def _on_advance_due(self) -> None:
        self._advance_handle = None
        self._dispatch(Advance(self._generate(self._state.level_index + 1)))

    def _cancel_pending(self) -> None:
        for handle in (self._advance_handle, self._feedback_handle):
            if handle is not None:
                handle.cancel()
        self._advance_handle = None
        self._feedback_handle = None

    def _record(self, state: SessionState) -> None:
        duration = 0
        if self._started_at is not None:
            duration = max(0, int(self._clock() - self._started_at))
        summary = SessionSummary(
            game_id=GAME_ID,
            final_score=state.score,
            best_streak=state.best_streak,
            duration_seconds=duration,
            completed=state.completed,
        )
        logger.info(
            "Session complete: score=%d best_streak=%d duration=%ds completed=%s",
            summary.final_score,
            summary.best_streak,
            summary.duration_seconds,
            summary.completed,
        )
        if self._recorder is None:
            return
        try:
            self._recorder.record(summary)
        except Exception:
            logger.exception("Session recorder failed")

    def _notify(self, state: SessionState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("State listener failed")

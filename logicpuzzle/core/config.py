from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

logger = logging.getLogger(__name__)

TIME_LIMIT_SECONDS = 120
SLOT_COUNT = 3

# Seconds before the next level starts, after a clear and after a timeout.
CLEAR_ADVANCE_DELAY = 2.5
TIMEOUT_ADVANCE_DELAY = 2.0
FEEDBACK_CLEAR_DELAY = 3.0

GENERATION_ATTEMPTS = 25


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants for a puzzle session."""

    time_limit_seconds: int = TIME_LIMIT_SECONDS
    slot_count: int = SLOT_COUNT
    clear_advance_delay: float = CLEAR_ADVANCE_DELAY
    timeout_advance_delay: float = TIMEOUT_ADVANCE_DELAY
    feedback_clear_delay: float = FEEDBACK_CLEAR_DELAY
    generation_attempts: int = GENERATION_ATTEMPTS

    @classmethod
    def from_env(cls) -> "GameConfig":
        """Build a config, honouring ``LOGICPUZZLE_TIME_LIMIT`` when it is a positive integer."""
        config = cls()
        raw = os.environ.get("LOGICPUZZLE_TIME_LIMIT")
        if raw:
            try:
                value = int(raw)
            except ValueError:
                logger.warning("Ignoring invalid LOGICPUZZLE_TIME_LIMIT=%r", raw)
            else:
                if value > 0:
                    config = replace(config, time_limit_seconds=value)
                else:
                    logger.warning("Ignoring non-positive LOGICPUZZLE_TIME_LIMIT=%r", raw)
        return config


def env_seed() -> Optional[int]:
    """Return ``LOGICPUZZLE_SEED`` as an int, or None when unset or invalid."""
    raw = os.environ.get("LOGICPUZZLE_SEED")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid LOGICPUZZLE_SEED=%r", raw)
        return None

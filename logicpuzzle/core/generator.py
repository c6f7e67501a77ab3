"""Procedural block generation for puzzle levels.

Every level gets a *planted* solution: two or more values that add up to the
target and fit into the solution slots. Distractors and random padding are
then mixed in, the set is truncated to ``max_blocks`` without touching the
planted values, and the order is shuffled.

Tiers use different planting strategies:

* **basic** – a short running-remainder decomposition with small terms.
* **intermediate** – a split of the target into two multiples of one of its
  factors, with doubled factors as distractors.
* **advanced** – a prime plus a decomposition of what is left, with primes
  and doubled primes as distractors.

Each generated set is checked with a subset-sum search before it is handed
out. Failed attempts are retried with fresh draws and finally fall back to
the basic strategy.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from logicpuzzle.core.blocks import Block
from logicpuzzle.core.config import GENERATION_ATTEMPTS, SLOT_COUNT
from logicpuzzle.core.levels import DifficultyTier, LevelDefinition
from logicpuzzle.core.numbers import factors_of, primes_up_to
from logicpuzzle.core.validator import MIN_SOLUTION_SIZE, has_solution

logger = logging.getLogger(__name__)

BASIC_TERM_CAP = 8
BASIC_MAX_TERMS = 3
FACTOR_PAIR_LIMIT = 10
FACTOR_MULTIPLE_CAP = 20
PRIME_MULTIPLE_CAP = 25

PADDING_RANGES: Dict[DifficultyTier, tuple[int, int]] = {
    DifficultyTier.BASIC: (1, 10),
    DifficultyTier.INTERMEDIATE: (1, 15),
    DifficultyTier.ADVANCED: (1, 20),
}


class GenerationError(RuntimeError):
    """Raised when a strategy cannot plant a usable solution."""


@dataclass
class PuzzlePlan:
    planted: List[int]
    distractors: List[int] = field(default_factory=list)


def decompose(
    target: int,
    rng: random.Random,
    max_terms: int = BASIC_MAX_TERMS,
    min_terms: int = MIN_SOLUTION_SIZE,
) -> List[int]:
    """Split ``target`` into at most ``max_terms`` positive terms.

    Terms are drawn from ``[1, min(remaining, 8)]`` while the remainder is
    positive; the last allowed term takes whatever is left, so the result
    always sums to ``target``.
    """
    if max_terms < min_terms or target < min_terms:
        raise GenerationError(f"cannot split {target} into {min_terms}..{max_terms} terms")
    terms: List[int] = []
    remaining = target
    while remaining > 0 and len(terms) < max_terms - 1:
        cap = min(remaining, BASIC_TERM_CAP)
        if len(terms) + 1 < min_terms:
            # leave something for the terms still required
            cap = min(cap, remaining - (min_terms - len(terms) - 1))
        value = rng.randint(1, cap)
        terms.append(value)
        remaining -= value
    if remaining > 0:
        terms.append(remaining)
    return terms


def _plan_basic(level: LevelDefinition, rng: random.Random, slot_count: int) -> PuzzlePlan:
    return PuzzlePlan(planted=decompose(level.target_sum, rng, max_terms=min(BASIC_MAX_TERMS, slot_count)))


def _plan_intermediate(level: LevelDefinition, rng: random.Random, slot_count: int) -> PuzzlePlan:
    target = level.target_sum
    factors = factors_of(target)
    planted: Optional[List[int]] = None
    if factors and slot_count >= 2:
        factor = rng.choice(factors)
        count = target // factor
        if count <= FACTOR_PAIR_LIMIT:
            split = rng.randint(1, count - 1)
            planted = [factor * split, factor * (count - split)]
    if planted is None:
        planted = decompose(target, rng, max_terms=min(BASIC_MAX_TERMS, slot_count))

    multiples = [f * 2 for f in factors if f * 2 <= FACTOR_MULTIPLE_CAP]
    distractors = multiples[: rng.randint(2, 3)]
    return PuzzlePlan(planted=planted, distractors=distractors)


def _plan_advanced(level: LevelDefinition, rng: random.Random, slot_count: int) -> PuzzlePlan:
    target = level.target_sum
    primes = primes_up_to(target // 2)
    if not primes:
        raise GenerationError(f"no prime <= {target // 2} for target {target}")
    prime = rng.choice(primes)
    rest = decompose(target - prime, rng, max_terms=slot_count - 1, min_terms=1)

    distractors = rng.sample(primes, min(3, len(primes)))
    distractors += [p * 2 for p in primes if p * 2 <= PRIME_MULTIPLE_CAP][:2]
    return PuzzlePlan(planted=[prime] + rest, distractors=distractors)


_STRATEGIES: Dict[DifficultyTier, Callable[[LevelDefinition, random.Random, int], PuzzlePlan]] = {
    DifficultyTier.BASIC: _plan_basic,
    DifficultyTier.INTERMEDIATE: _plan_intermediate,
    DifficultyTier.ADVANCED: _plan_advanced,
}


def plan_puzzle(
    level: LevelDefinition,
    rng: random.Random,
    slot_count: int = SLOT_COUNT,
    tier: Optional[DifficultyTier] = None,
) -> PuzzlePlan:
    """Run the planting strategy for ``tier`` (defaults to the level's own tier)."""
    return _STRATEGIES[tier or level.difficulty](level, rng, slot_count)


def assemble(plan: PuzzlePlan, level: LevelDefinition, rng: random.Random) -> List[int]:
    """Pad, truncate and shuffle a plan into exactly ``level.max_blocks`` values."""
    planted = list(plan.planted)
    if len(planted) > level.max_blocks:
        raise GenerationError(f"{len(planted)} planted values do not fit in {level.max_blocks} blocks")

    low, high = PADDING_RANGES[level.difficulty]
    values = planted + list(plan.distractors)
    while len(values) < level.max_blocks:
        unused = [v for v in range(low, high + 1) if v not in values]
        values.append(rng.choice(unused) if unused else rng.randint(low, high))

    # Only distractors and padding may be cut.
    extras = values[len(planted):]
    rng.shuffle(extras)
    values = planted + extras[: level.max_blocks - len(planted)]
    rng.shuffle(values)
    return values


def generate_values(
    level: LevelDefinition,
    rng: Optional[random.Random] = None,
    attempts: int = GENERATION_ATTEMPTS,
    slot_count: int = SLOT_COUNT,
) -> List[int]:
    """Block values for ``level`` with a verified solution of 2..slot_count blocks."""
    rng = rng or random.Random()
    tiers = [level.difficulty]
    if level.difficulty is not DifficultyTier.BASIC:
        tiers.append(DifficultyTier.BASIC)

    for tier in tiers:
        for attempt in range(1, max(attempts, 1) + 1):
            try:
                values = assemble(plan_puzzle(level, rng, slot_count, tier), level, rng)
            except GenerationError as e:
                logger.debug("Level %d %s attempt %d failed: %s", level.level_number, tier.value, attempt, e)
                continue
            if has_solution(values, level.target_sum, max_size=slot_count):
                return values
            logger.debug(
                "Level %d %s attempt %d produced an unsolvable set %s",
                level.level_number,
                tier.value,
                attempt,
                values,
            )
        if tier is not DifficultyTier.BASIC:
            logger.warning(
                "Level %d: %s generation failed after %d attempts, falling back to basic",
                level.level_number,
                tier.value,
                attempts,
            )

    raise GenerationError(f"could not generate a solvable block set for level {level.level_number}")


def generate_blocks(
    level: LevelDefinition,
    rng: Optional[random.Random] = None,
    attempts: int = GENERATION_ATTEMPTS,
    slot_count: int = SLOT_COUNT,
) -> List[Block]:
    """Fresh, unplaced blocks for ``level`` with ids 1..max_blocks."""
    values = generate_values(level, rng, attempts=attempts, slot_count=slot_count)
    return [Block(id=i + 1, value=v) for i, v in enumerate(values)]

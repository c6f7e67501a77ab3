from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, Optional, Sequence, Tuple

from logicpuzzle.core.blocks import Block

MIN_SOLUTION_SIZE = 2


@dataclass(frozen=True)
class SolutionCheck:
    """Outcome of checking the placed blocks against a level target."""

    success: bool
    current_sum: int
    placed_count: int
    target: int

    @property
    def difference(self) -> int:
        """Signed distance from the target (negative means the sum is short)."""
        return self.current_sum - self.target


def check_solution(blocks: Iterable[Block], target: int) -> SolutionCheck:
    """Sum every placed block; success needs the exact target from at least two blocks."""
    placed = [b for b in blocks if b.is_placed]
    current_sum = sum(b.value for b in placed)
    return SolutionCheck(
        success=current_sum == target and len(placed) >= MIN_SOLUTION_SIZE,
        current_sum=current_sum,
        placed_count=len(placed),
        target=target,
    )


def find_solution(
    values: Sequence[int],
    target: int,
    min_size: int = MIN_SOLUTION_SIZE,
    max_size: Optional[int] = None,
) -> Optional[Tuple[int, ...]]:
    """Return indices of one subset of ``values`` summing to ``target``, or None.

    Subsets are tried smallest first. Block sets are small (about ten values),
    so exhaustive search is fine.
    """
    n = len(values)
    upper = n if max_size is None else min(max_size, n)
    for size in range(max(min_size, 1), upper + 1):
        for combo in combinations(range(n), size):
            if sum(values[i] for i in combo) == target:
                return combo
    return None


def has_solution(
    values: Sequence[int],
    target: int,
    min_size: int = MIN_SOLUTION_SIZE,
    max_size: Optional[int] = None,
) -> bool:
    return find_solution(values, target, min_size=min_size, max_size=max_size) is not None

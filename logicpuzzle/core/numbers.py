"""Small number-theory helpers used by the puzzle generator.

Both public helpers return an empty list for inputs below 2 rather than
raising, so callers can treat "no factors" and "no primes" uniformly.
"""

from __future__ import annotations

import math
from typing import List


def is_prime(n: int) -> bool:
    """Return True if ``n`` is prime (trial division)."""
    if n < 2:
        return False
    for d in range(2, math.isqrt(n) + 1):
        if n % d == 0:
            return False
    return True


def factors_of(n: int) -> List[int]:
    """Divisors of ``n`` strictly between 1 and ``n``, ascending."""
    if n < 2:
        return []
    small: List[int] = []
    large: List[int] = []
    for d in range(2, math.isqrt(n) + 1):
        if n % d == 0:
            small.append(d)
            if d != n // d:
                large.append(n // d)
    return small + large[::-1]


def primes_up_to(limit: int) -> List[int]:
    """All primes <= ``limit``, ascending."""
    if limit < 2:
        return []
    return [i for i in range(2, int(limit) + 1) if is_prime(i)]

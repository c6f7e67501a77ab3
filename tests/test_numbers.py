"""Tests for logicpuzzle.core.numbers – factors and primes."""

from __future__ import annotations

import pytest

from logicpuzzle.core.numbers import factors_of, is_prime, primes_up_to


# ---------------------------------------------------------------------------
# factors_of
# ---------------------------------------------------------------------------

class TestFactorsOf:
    def test_twelve(self):
        assert factors_of(12) == [2, 3, 4, 6]

    def test_square_has_root_once(self):
        assert factors_of(36) == [2, 3, 4, 6, 9, 12, 18]

    def test_excludes_one_and_self(self):
        result = factors_of(42)
        assert 1 not in result
        assert 42 not in result
        assert result == [2, 3, 6, 7, 14, 21]

    def test_prime_has_no_proper_factors(self):
        assert factors_of(13) == []

    def test_four(self):
        assert factors_of(4) == [2]

    @pytest.mark.parametrize("n", [1, 0, -5])
    def test_below_two_is_empty(self, n):
        assert factors_of(n) == []


# ---------------------------------------------------------------------------
# primes_up_to / is_prime
# ---------------------------------------------------------------------------

class TestPrimesUpTo:
    def test_thirty(self):
        assert primes_up_to(30) == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]

    def test_limit_is_inclusive(self):
        assert primes_up_to(2) == [2]
        assert primes_up_to(7)[-1] == 7

    @pytest.mark.parametrize("limit", [1, 0, -3])
    def test_below_two_is_empty(self, limit):
        assert primes_up_to(limit) == []

    def test_deterministic(self):
        assert primes_up_to(25) == primes_up_to(25)


class TestIsPrime:
    @pytest.mark.parametrize("n", [2, 3, 5, 29, 97])
    def test_primes(self, n):
        assert is_prime(n)

    @pytest.mark.parametrize("n", [-7, 0, 1, 4, 9, 25, 60])
    def test_non_primes(self, n):
        assert not is_prime(n)

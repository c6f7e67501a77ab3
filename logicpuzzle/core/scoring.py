from __future__ import annotations

from dataclasses import dataclass

LEVEL_POINTS = 20
STREAK_POINTS = 5

RANK_TITLES = (
    (1000, "Master 🏆"),
    (500, "Expert ⭐"),
    (200, "Advanced 🚀"),
    (0, "Beginner 🌱"),
)


@dataclass(frozen=True)
class ScoreAward:
    """Points earned for one level clear."""

    level_bonus: int
    streak_bonus: int

    @property
    def total(self) -> int:
        return self.level_bonus + self.streak_bonus


def level_clear_bonus(level_number: int, time_limit_seconds: int, time_remaining_seconds: int) -> int:
    """Depth reward plus the seconds spent on the level."""
    elapsed = max(0, time_limit_seconds - time_remaining_seconds)
    return level_number * LEVEL_POINTS + elapsed


def streak_bonus(streak: int) -> int:
    """Bonus for the streak carried *into* a clear, before it is incremented."""
    return max(0, streak) * STREAK_POINTS


def award_for_clear(
    level_number: int,
    time_limit_seconds: int,
    time_remaining_seconds: int,
    streak: int,
) -> ScoreAward:
    return ScoreAward(
        level_bonus=level_clear_bonus(level_number, time_limit_seconds, time_remaining_seconds),
        streak_bonus=streak_bonus(streak),
    )


def apply_award(score: int, award: ScoreAward) -> int:
    # score never decreases
    return score + max(0, award.total)


def rank_title(total_score: int) -> str:
    for threshold, title in RANK_TITLES:
        if total_score >= threshold:
            return title
    return RANK_TITLES[-1][1]

"""Tests for logicpuzzle.ui.colors – color blending and constants."""

from __future__ import annotations

from logicpuzzle.core.levels import DifficultyTier
from logicpuzzle.ui.colors import TIER_COLORS, PuzzleColors, blend_hex, timer_color


class TestPuzzleColors:
    def test_primary_is_hex(self):
        assert PuzzleColors.PRIMARY.startswith("#")
        assert len(PuzzleColors.PRIMARY) == 7

    def test_card_bg_is_rgba(self):
        assert PuzzleColors.CARD_BG.startswith("rgba(")

    def test_every_tier_has_a_color(self):
        assert set(TIER_COLORS) == set(DifficultyTier)


class TestBlendHex:
    def test_t_zero_returns_a(self):
        assert blend_hex("#FF0000", "#0000FF", 0.0) == "#FF0000"

    def test_t_one_returns_b(self):
        assert blend_hex("#FF0000", "#0000FF", 1.0) == "#0000FF"

    def test_t_is_clamped(self):
        assert blend_hex("#FF0000", "#0000FF", 5.0) == "#0000FF"
        assert blend_hex("#FF0000", "#0000FF", -1.0) == "#FF0000"

    def test_quarter_blend(self):
        result = blend_hex("#000000", "#FF0000", 0.25)
        # 0 + (255 - 0) * 0.25 = 63.75 -> 63
        assert int(result[1:3], 16) == 63

    def test_invalid_input_returns_a(self):
        assert blend_hex("red", "#0000FF", 0.5) == "red"
        assert blend_hex("#GGGGGG", "#0000FF", 0.5) == "#GGGGGG"


class TestTimerColor:
    def test_full_time_is_primary(self):
        assert timer_color(120, 120) == blend_hex(PuzzleColors.PRIMARY, PuzzleColors.WARNING, 0.0)

    def test_no_time_is_warning(self):
        assert timer_color(0, 120) == PuzzleColors.WARNING.upper()

    def test_zero_limit(self):
        assert timer_color(10, 0) == PuzzleColors.PRIMARY

"""Theme colors and color utilities for the UI."""

from logicpuzzle.core.levels import DifficultyTier


class PuzzleColors:
    """Light theme palette."""

    BG_TOP = "#e0f7fa"
    BG_BOTTOM = "#80deea"

    PRIMARY = "#00838f"
    PRIMARY_LIGHT = "#4fb3bf"
    PRIMARY_DARK = "#005662"

    CORAL = "#ff8a65"
    AMBER = "#ffb74d"
    MINT = "#69f0ae"
    LAVENDER = "#b39ddb"

    CARD_BG = "rgba(255, 255, 255, 0.85)"
    CARD_BORDER = "rgba(255, 255, 255, 0.6)"

    TEXT_PRIMARY = "#1a3a3a"
    TEXT_SECONDARY = "#4a6572"
    TEXT_MUTED = "#78909c"

    SLOT_EMPTY = "#f8fcfd"
    SLOT_BORDER = "#b0cfd3"
    SUCCESS = "#2e7d32"
    WARNING = "#c62828"


TIER_COLORS = {
    DifficultyTier.BASIC: PuzzleColors.MINT,
    DifficultyTier.INTERMEDIATE: PuzzleColors.AMBER,
    DifficultyTier.ADVANCED: PuzzleColors.CORAL,
}


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"


def timer_color(time_remaining: int, time_limit: int) -> str:
    """Fade the countdown from primary to warning red as time runs out."""
    if time_limit <= 0:
        return PuzzleColors.PRIMARY
    used = 1.0 - max(0, time_remaining) / time_limit
    return blend_hex(PuzzleColors.PRIMARY, PuzzleColors.WARNING, used)

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

import yaml

DEFAULT_LEVELS_DIR = Path(__file__).resolve().parent.parent / "data" / "levels"

MIN_TARGET_SUM = 4
MIN_BLOCKS = 4


class DifficultyTier(str, Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return list(DifficultyTier).index(self)


@dataclass(frozen=True)
class LevelDefinition:
    level_number: int
    target_sum: int
    concept: str
    max_blocks: int
    difficulty: DifficultyTier
    description: str = ""


class LevelRepository:
    """Ordered, read-only level catalog loaded from ``level<N>.yaml`` files."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else DEFAULT_LEVELS_DIR
        self._levels = self._load_levels()

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, index: int) -> LevelDefinition:
        return self._levels[index]

    def __iter__(self):
        return iter(self._levels)

    def all(self) -> Tuple[LevelDefinition, ...]:
        return self._levels

    def get(self, level_number: int) -> LevelDefinition:
        for level in self._levels:
            if level.level_number == level_number:
                return level
        raise KeyError(level_number)

    def _load_levels(self) -> Tuple[LevelDefinition, ...]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Levels directory not found: {base_dir}")

        def _sort_key(p: Path) -> tuple[int, str]:
            m = re.match(r"^level(\d+)$", p.stem)
            if m:
                return (int(m.group(1)), p.stem)
            return (10**9, p.stem)

        levels: list[LevelDefinition] = []
        for level_path in sorted(base_dir.glob("level*.yaml"), key=_sort_key):
            raw = yaml.safe_load(level_path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{level_path.name}: expected YAML mapping with 'title' and 'target'")
            title = raw.get("title")
            if not title or not isinstance(title, str):
                raise ValueError(f"{level_path.name}: missing or invalid 'title'")
            target = raw.get("target")
            if not isinstance(target, int) or isinstance(target, bool) or target < MIN_TARGET_SUM:
                raise ValueError(f"{level_path.name}: 'target' must be an integer >= {MIN_TARGET_SUM}")
            max_blocks = raw.get("max_blocks")
            if not isinstance(max_blocks, int) or isinstance(max_blocks, bool) or max_blocks < MIN_BLOCKS:
                raise ValueError(f"{level_path.name}: 'max_blocks' must be an integer >= {MIN_BLOCKS}")
            try:
                difficulty = DifficultyTier(str(raw.get("difficulty", "")).strip().lower())
            except ValueError:
                raise ValueError(f"{level_path.name}: unknown 'difficulty' {raw.get('difficulty')!r}") from None
            if levels and difficulty.rank < levels[-1].difficulty.rank:
                raise ValueError(
                    f"{level_path.name}: difficulty '{difficulty.value}' is easier than the previous level"
                )
            levels.append(
                LevelDefinition(
                    level_number=len(levels) + 1,
                    target_sum=target,
                    concept=title.strip(),
                    max_blocks=max_blocks,
                    difficulty=difficulty,
                    description=str(raw.get("description") or "").strip(),
                )
            )

        if not levels:
            raise ValueError(f"No level files (level*.yaml) found in {base_dir}")
        return tuple(levels)


def default_catalog() -> Tuple[LevelDefinition, ...]:
    """The packaged five-level catalog."""
    return LevelRepository().all()

from __future__ import annotations

import json
import logging
import os
from collections import Counter
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from logicpuzzle.core.engine import SessionSummary

logger = logging.getLogger(__name__)

GAME_NAMES: Dict[str, str] = {
    "math-sprint": "Math Sprint",
    "science-guess": "Science Guess",
    "word-builder": "Word Builder",
    "logic-puzzle": "Logic Puzzle",
}


def display_name(game_id: str) -> str:
    return GAME_NAMES.get(game_id, game_id)


def default_stats_path() -> Path:
    home = os.environ.get("LOGICPUZZLE_HOME")
    base = Path(home).expanduser() if home else Path.home() / ".logicpuzzle"
    return base / "stats.json"


@dataclass
class GameRecord:
    game_id: str
    score: int
    streak: int
    time_played: int
    completed: bool
    timestamp: str


@dataclass
class GameStats:
    games_played: int = 0
    total_score: int = 0
    best_streak: int = 0
    average_score: float = 0.0
    favorite_game: str = "None"
    total_time_played: int = 0


@dataclass
class GamePerformance:
    games_played: int
    total_score: int
    best_score: int
    average_score: float
    best_streak: int


class StatsStore:
    """Session history for the mini-games. Persists to disk across app restarts.
    File: ~/.logicpuzzle/stats.json unless LOGICPUZZLE_HOME points elsewhere."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = Path(file_path) if file_path is not None else default_stats_path()
        self._history: List[GameRecord] = self._load()

    @property
    def history(self) -> List[GameRecord]:
        return list(self._history)

    def record(self, summary: SessionSummary) -> None:
        """Append a finished session and persist."""
        self._history.append(
            GameRecord(
                game_id=summary.game_id,
                score=summary.final_score,
                streak=summary.best_streak,
                time_played=summary.duration_seconds,
                completed=summary.completed,
                timestamp=datetime.now(timezone.utc).isoformat(),
            )
        )
        self._save()

    def summary(self) -> GameStats:
        if not self._history:
            return GameStats()
        total_score = sum(r.score for r in self._history)
        counts = Counter(r.game_id for r in self._history)
        favorite, _ = counts.most_common(1)[0]
        return GameStats(
            games_played=len(self._history),
            total_score=total_score,
            best_streak=max(r.streak for r in self._history),
            average_score=total_score / len(self._history),
            favorite_game=display_name(favorite),
            total_time_played=sum(r.time_played for r in self._history),
        )

    def recent_games(self, limit: int = 5) -> List[GameRecord]:
        return sorted(self._history, key=lambda r: r.timestamp, reverse=True)[:limit]

    def game_performance(self, game_id: str) -> Optional[GamePerformance]:
        sessions = [r for r in self._history if r.game_id == game_id]
        if not sessions:
            return None
        total = sum(r.score for r in sessions)
        return GamePerformance(
            games_played=len(sessions),
            total_score=total,
            best_score=max(r.score for r in sessions),
            average_score=total / len(sessions),
            best_streak=max(r.streak for r in sessions),
        )

    def clear(self) -> None:
        """Forget all recorded sessions."""
        self._history = []
        self._save()

    def _load(self) -> List[GameRecord]:
        if not self._file_path.exists():
            return []
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load stats from %s: %s", self._file_path, e)
            return []

        history: List[GameRecord] = []
        for item in payload.get("history", []) if isinstance(payload, dict) else []:
            try:
                history.append(
                    GameRecord(
                        game_id=str(item["game_id"]),
                        score=int(item.get("score", 0)),
                        streak=int(item.get("streak", 0)),
                        time_played=int(item.get("time_played", 0)),
                        completed=bool(item.get("completed", False)),
                        timestamp=str(item.get("timestamp", "")),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed stats entry %r: %s", item, e)
        return history

    def _save(self) -> None:
        payload = {"history": [asdict(r) for r in self._history]}
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save stats to %s: %s", self._file_path, e)

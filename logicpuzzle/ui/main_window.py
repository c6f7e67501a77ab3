from __future__ import annotations

import random
from typing import Optional, Sequence

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from logicpuzzle.core.config import GameConfig
from logicpuzzle.core.engine import PuzzleEngine
from logicpuzzle.core.levels import LevelDefinition
from logicpuzzle.core.scoring import rank_title
from logicpuzzle.core.session import Phase, SessionState
from logicpuzzle.core.stats import StatsStore
from logicpuzzle.ui.colors import TIER_COLORS, PuzzleColors, timer_color
from logicpuzzle.ui.models import BoardView, award_breakdown
from logicpuzzle.ui.timers import QtScheduler
from logicpuzzle.ui.widgets import BlockTile, GlassCard, SlotTile, StatCard


class MainWindow(QMainWindow):
    """Single-screen Logic Puzzle game.

    Click a block to drop it into the first free slot, click a filled slot to
    send its block back. The window owns the 1 Hz tick timer and renders every
    snapshot the engine publishes.
    """

    def __init__(
        self,
        levels: Sequence[LevelDefinition],
        stats_store: StatsStore,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        super().__init__()
        self._config = config or GameConfig()
        self._stats_store = stats_store
        self._engine = PuzzleEngine(
            levels,
            scheduler=QtScheduler(self),
            recorder=stats_store,
            config=self._config,
            rng=rng,
        )
        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(1000)
        self._tick_timer.timeout.connect(self._engine.tick)

        self._slot_tiles: list[SlotTile] = []
        self._block_tiles: list[BlockTile] = []
        self._rendered_pool: Optional[tuple] = None

        self.setWindowTitle("Logic Puzzle")
        self._build_ui()
        self._engine.subscribe(self._render)
        self._render(self._engine.state)

    @property
    def engine(self) -> PuzzleEngine:
        return self._engine

    def _build_ui(self) -> None:
        central = QWidget()
        central.setStyleSheet(
            f"QWidget#central {{ background: qlineargradient(x1:0, y1:0, x2:0, y2:1,"
            f" stop:0 {PuzzleColors.BG_TOP}, stop:1 {PuzzleColors.BG_BOTTOM}); }}"
        )
        central.setObjectName("central")
        root = QVBoxLayout(central)
        root.setContentsMargins(32, 24, 32, 24)
        root.setSpacing(18)

        stats_row = QHBoxLayout()
        self._score_card = StatCard("🏅", "Score", "0", PuzzleColors.PRIMARY)
        self._streak_card = StatCard("🔥", "Streak", "0", PuzzleColors.CORAL)
        self._best_streak_card = StatCard("⭐", "Best", "0", PuzzleColors.LAVENDER)
        self._time_card = StatCard("⏱", "Time", "--", PuzzleColors.AMBER)
        for card in (self._score_card, self._streak_card, self._best_streak_card, self._time_card):
            stats_row.addWidget(card)
        root.addLayout(stats_row)

        board = GlassCard()
        board_layout = QVBoxLayout(board)
        board_layout.setContentsMargins(24, 20, 24, 20)
        board_layout.setSpacing(14)

        self._level_label = QLabel("")
        self._level_label.setAlignment(Qt.AlignCenter)
        self._level_label.setTextFormat(Qt.RichText)
        self._level_label.setStyleSheet(f"color: {PuzzleColors.TEXT_SECONDARY}; font-size: 14px; font-weight: 600;")
        board_layout.addWidget(self._level_label)

        self._description_label = QLabel("")
        self._description_label.setAlignment(Qt.AlignCenter)
        self._description_label.setWordWrap(True)
        self._description_label.setStyleSheet(f"color: {PuzzleColors.TEXT_MUTED}; font-size: 12px;")
        board_layout.addWidget(self._description_label)

        self._target_label = QLabel("")
        self._target_label.setAlignment(Qt.AlignCenter)
        self._target_label.setStyleSheet(f"color: {PuzzleColors.TEXT_PRIMARY}; font-size: 30px; font-weight: 900;")
        board_layout.addWidget(self._target_label)

        slots_row = QHBoxLayout()
        slots_row.addStretch(1)
        for index in range(self._config.slot_count):
            tile = SlotTile(index, self._on_slot_clicked)
            self._slot_tiles.append(tile)
            slots_row.addWidget(tile)
        slots_row.addStretch(1)
        board_layout.addLayout(slots_row)

        self._sum_label = QLabel("")
        self._sum_label.setAlignment(Qt.AlignCenter)
        self._sum_label.setStyleSheet(f"color: {PuzzleColors.TEXT_MUTED}; font-size: 13px;")
        board_layout.addWidget(self._sum_label)

        self._pool_row = QHBoxLayout()
        self._pool_row.setSpacing(10)
        board_layout.addLayout(self._pool_row)
        root.addWidget(board, 1)

        self._feedback_label = QLabel("")
        self._feedback_label.setAlignment(Qt.AlignCenter)
        self._feedback_label.setWordWrap(True)
        self._feedback_label.setStyleSheet(f"color: {PuzzleColors.TEXT_PRIMARY}; font-size: 16px; font-weight: 700;")
        root.addWidget(self._feedback_label)

        self._award_label = QLabel("")
        self._award_label.setAlignment(Qt.AlignCenter)
        self._award_label.setStyleSheet(f"color: {PuzzleColors.TEXT_SECONDARY}; font-size: 13px;")
        root.addWidget(self._award_label)

        buttons = QHBoxLayout()
        self._start_button = QPushButton("Start")
        self._check_button = QPushButton("Check")
        self._reset_button = QPushButton("Reset")
        self._start_button.clicked.connect(self._start)
        self._check_button.clicked.connect(self._engine.check_solution)
        self._reset_button.clicked.connect(self._reset)
        for button in (self._start_button, self._check_button, self._reset_button):
            button.setMinimumHeight(40)
            buttons.addWidget(button)
        root.addLayout(buttons)

        self._history_label = QLabel("")
        self._history_label.setAlignment(Qt.AlignCenter)
        self._history_label.setStyleSheet(f"color: {PuzzleColors.TEXT_MUTED}; font-size: 12px;")
        root.addWidget(self._history_label)

        check_shortcut = QShortcut(QKeySequence(Qt.Key_Return), self)
        check_shortcut.activated.connect(self._engine.check_solution)
        reset_shortcut = QShortcut(QKeySequence(Qt.Key_Escape), self)
        reset_shortcut.activated.connect(self._reset)

        self.setCentralWidget(central)
        self.resize(820, 640)

    # -- actions --------------------------------------------------------------

    def _start(self) -> None:
        self._engine.start()
        if self._engine.state.phase is Phase.LEVEL_ACTIVE:
            self._tick_timer.start()

    def _reset(self) -> None:
        self._tick_timer.stop()
        self._engine.reset()

    def _on_block_clicked(self, block_id: int) -> None:
        view = BoardView.from_state(self._engine.state, self._config.slot_count)
        slot = view.first_free_slot()
        if slot is None:
            # all slots full: replace the last one
            slot = self._config.slot_count - 1
        self._engine.place_block(block_id, slot)

    def _on_slot_clicked(self, index: int) -> None:
        block = self._slot_tiles[index].block
        if block is not None:
            self._engine.remove_block(block.id)

    # -- rendering ------------------------------------------------------------

    def _render(self, state: SessionState) -> None:
        level = self._engine.current_level
        view = BoardView.from_state(state, self._config.slot_count)
        active = state.phase is Phase.LEVEL_ACTIVE

        self._score_card.set_value(f"{state.score:,}")
        self._streak_card.set_value(str(state.streak))
        self._best_streak_card.set_value(str(state.best_streak))

        if level is None:
            self._level_label.setText("Place blocks so they add up to the target. Clear all five levels!")
            self._target_label.setText("Logic Puzzle")
            self._description_label.setText("")
            self._time_card.set_value("--")
            self._sum_label.setText("")
        else:
            minutes, seconds = divmod(state.time_remaining, 60)
            self._time_card.set_value(f"{minutes}:{seconds:02d}")
            self._time_card.value_label.setStyleSheet(
                f"color: {timer_color(state.time_remaining, self._config.time_limit_seconds) if active else 'white'};"
                " font-size: 28px; font-weight: 900;"
            )
            tier_color = TIER_COLORS[level.difficulty]
            self._level_label.setText(
                f"Level {level.level_number} of {len(self._engine.levels)} · {level.concept}"
                f" · <span style='color:{tier_color}'>{level.difficulty.value}</span>"
            )
            self._target_label.setText(f"Target: {level.target_sum}")
            self._description_label.setText(level.description)
            self._sum_label.setText(f"Current sum: {state.current_sum}")

        for tile, block in zip(self._slot_tiles, view.slots):
            tile.set_block(block)
            tile.setEnabled(active)

        if (view.available, active) != self._rendered_pool:
            self._rendered_pool = (view.available, active)
            for tile in self._block_tiles:
                self._pool_row.removeWidget(tile)
                tile.deleteLater()
            self._block_tiles = []
            for block in view.available:
                tile = BlockTile(block, self._on_block_clicked)
                tile.setEnabled(active)
                self._block_tiles.append(tile)
                self._pool_row.addWidget(tile)

        self._feedback_label.setText(state.feedback or "")
        self._award_label.setText(award_breakdown(state))
        self._start_button.setEnabled(state.phase is Phase.IDLE)
        self._check_button.setEnabled(active)

        if state.phase is Phase.SESSION_COMPLETE:
            self._tick_timer.stop()
            self._refresh_history()
        elif state.phase is Phase.IDLE:
            self._refresh_history()

    def _refresh_history(self) -> None:
        stats = self._stats_store.summary()
        if not stats.games_played:
            self._history_label.setText("")
            return
        self._history_label.setText(
            f"Games: {stats.games_played} · Total: {stats.total_score} · "
            f"Best streak: {stats.best_streak} · {rank_title(stats.total_score)}"
        )

    def closeEvent(self, event: QCloseEvent) -> None:
        self._tick_timer.stop()
        self._engine.reset()
        super().closeEvent(event)

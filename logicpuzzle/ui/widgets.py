"""Cards and tiles for the puzzle screen."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from logicpuzzle.core.blocks import Block
from logicpuzzle.ui.colors import PuzzleColors


class GlassCard(QFrame):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("glassCard")
        self.setStyleSheet(
            f"""
            QFrame#glassCard {{
                background: {PuzzleColors.CARD_BG};
                border: 1px solid {PuzzleColors.CARD_BORDER};
                border-radius: 20px;
            }}
            """
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(0, 50, 70, 40))
        self.setGraphicsEffect(shadow)


class StatCard(QFrame):
    """Colored card with an icon label and a big value (score, streak, time)."""

    def __init__(self, icon: str, label: str, value: str, bg_color: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("statCard")
        self.setStyleSheet(
            f"""
            QFrame#statCard {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {bg_color}, stop:1 {QColor(bg_color).darker(112).name()});
                border-radius: 16px;
                border: none;
            }}
            """
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 14, 18, 14)
        layout.setSpacing(4)
        label_widget = QLabel(f"{icon} {label}")
        label_widget.setStyleSheet("color: rgba(255,255,255,0.92); font-size: 12px; font-weight: 600;")
        layout.addWidget(label_widget)
        self.value_label = QLabel(str(value))
        self.value_label.setStyleSheet("color: white; font-size: 28px; font-weight: 900;")
        layout.addWidget(self.value_label)

    def set_value(self, value: str) -> None:
        self.value_label.setText(str(value))


class BlockTile(QPushButton):
    """A number block; clicking it calls ``on_click(block_id)``."""

    def __init__(self, block: Block, on_click: Callable[[int], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(str(block.value), parent)
        self.block_id = block.id
        self.setFixedSize(64, 64)
        self.setCursor(Qt.PointingHandCursor)
        self.setStyleSheet(
            f"""
            QPushButton {{
                background: {PuzzleColors.PRIMARY};
                color: white;
                border-radius: 12px;
                font-size: 22px;
                font-weight: 800;
            }}
            QPushButton:hover {{ background: {PuzzleColors.PRIMARY_DARK}; }}
            QPushButton:disabled {{ background: {PuzzleColors.TEXT_MUTED}; }}
            """
        )
        self.clicked.connect(lambda: on_click(self.block_id))


class SlotTile(QPushButton):
    """One cell of the solution area; shows the placed block or an empty frame."""

    def __init__(self, index: int, on_click: Callable[[int], None], parent: Optional[QWidget] = None) -> None:
        super().__init__("", parent)
        self.index = index
        self.block: Optional[Block] = None
        self.setFixedSize(80, 80)
        self.clicked.connect(lambda: on_click(self.index))
        self.set_block(None)

    def set_block(self, block: Optional[Block]) -> None:
        self.block = block
        if block is None:
            self.setText("?")
            fill, text = PuzzleColors.SLOT_EMPTY, PuzzleColors.TEXT_MUTED
        else:
            self.setText(str(block.value))
            fill, text = PuzzleColors.LAVENDER, "white"
        self.setStyleSheet(
            f"""
            QPushButton {{
                background: {fill};
                color: {text};
                border: 2px dashed {PuzzleColors.SLOT_BORDER};
                border-radius: 14px;
                font-size: 26px;
                font-weight: 800;
            }}
            """
        )

"""Application entry point and setup for the Logic Puzzle game."""

import logging
import random
import sys

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from logicpuzzle.core.config import GameConfig, env_seed
from logicpuzzle.core.levels import LevelRepository
from logicpuzzle.core.stats import StatsStore
from logicpuzzle.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load levels and stats, then show the puzzle window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Logic Puzzle")
    app.setApplicationDisplayName("Logic Puzzle")

    app_font = QFont()
    app_font.setFamilies(["Poppins", "Noto Sans", "Noto Color Emoji", "Segoe UI Emoji", "Apple Color Emoji"])
    app_font.setPointSize(11)
    app.setFont(app_font)
    QGuiApplication.setFont(app_font)

    config = GameConfig.from_env()
    levels = LevelRepository()
    stats_store = StatsStore()

    seed = env_seed()
    if seed is not None:
        logging.info("Using puzzle seed %d", seed)
    rng = random.Random(seed)

    window = MainWindow(levels=levels.all(), stats_store=stats_store, config=config, rng=rng)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()

"""PerfoMate - Main entry point."""

import argparse
import sys

from PyQt6.QtWidgets import QApplication

from config_manager import ConfigManager
from logging_config import setup_logging
from ui.main_window import PlateWindow


def main():
    """Launch the plate generator application."""
    parser = argparse.ArgumentParser(description="Perforated plate generator")
    parser.add_argument("--preset", help="JSON file with initial plate settings")
    parser.add_argument("--log-level", default="INFO")
    args, qt_args = parser.parse_known_args()

    setup_logging(args.log_level)

    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationDisplayName("PerfoMate")
    app.setApplicationName("PerfoMate")

    window = PlateWindow(ConfigManager(args.preset).load())
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()

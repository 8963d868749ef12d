"""Centralized styling constants for the plate generator UI.

This module consolidates colors, fonts, and sizes used throughout the application
to ensure consistency and easier maintenance.
"""

from dataclasses import dataclass

from PyQt6.QtGui import QColor, QFont

from models import Theme


@dataclass(frozen=True)
class ThemePalette:
    """Colors for one UI theme."""

    # Preview canvas
    background: QColor
    plate: QColor
    hole: QColor
    border: QColor
    shadow: QColor

    # Sidebar
    panel_background: str
    panel_text: str
    accent: str


LIGHT = ThemePalette(
    background=QColor("#f8fafc"),
    plate=QColor("#cbd5e1"),
    hole=QColor("#0f172a"),
    border=QColor("#64748b"),
    shadow=QColor(0, 0, 0, 38),
    panel_background="#ffffff",
    panel_text="#0f172a",
    accent="#2563eb",
)

DARK = ThemePalette(
    background=QColor("#0f172a"),
    plate=QColor("#334155"),
    hole=QColor("#000000"),
    border=QColor("#475569"),
    shadow=QColor(0, 0, 0, 128),
    panel_background="#1e293b",
    panel_text="#f1f5f9",
    accent="#60a5fa",
)

PALETTES = {Theme.LIGHT: LIGHT, Theme.DARK: DARK}


class Fonts:
    """Standard application fonts."""

    TITLE = QFont("Arial", 14, QFont.Weight.Bold)
    STATS = QFont("Courier", 9)


class Sizes:
    """Standard widget sizes and constraints."""

    SIDEBAR_WIDTH = 320
    PREVIEW_MIN_SIZE = (400, 300)
    SHADOW_OFFSET = 10  # pixels
    BUTTON_MIN_HEIGHT = 35


FONTS = Fonts
SIZES = Sizes


def palette_for(theme: Theme) -> ThemePalette:
    return PALETTES[theme]


def toggle_theme(theme: Theme) -> Theme:
    return Theme.DARK if theme == Theme.LIGHT else Theme.LIGHT


def sidebar_stylesheet(theme: Theme) -> str:
    """Generate the sidebar stylesheet for a theme.

    Args:
        theme: Active UI theme

    Returns:
        CSS stylesheet string for the controls panel
    """
    palette = palette_for(theme)
    return (
        f"QWidget {{ background-color: {palette.panel_background}; "
        f"color: {palette.panel_text}; }}"
        f"QPushButton#exportButton {{ background-color: {palette.accent}; "
        "color: white; border: none; border-radius: 4px; padding: 8px 20px; "
        "font-weight: bold; }"
        "QPushButton#exportButton:disabled { background-color: #94a3b8; color: #e2e8f0; }"
    )

"""UI components for the perforated plate generator.

Qt widgets live in their own modules and are imported where needed, so the
Qt-free helpers (viewport, translations) stay importable without a display.
"""

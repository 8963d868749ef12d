"""Main application window for the plate generator."""

import logging
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from image_processing import export_filename, load_image, write_svg
from models import DotSet, Language, PlateConfig, Theme
from ui.pattern_controller import PatternController
from ui.plate_controls import PlateControlsPanel
from ui.preview_canvas import PreviewCanvas
from ui.styles import toggle_theme
from ui.translations import toggle_language, tr
from ui.viewport import ViewState, zoom_percent

logger = logging.getLogger(__name__)


class PlateWindow(QMainWindow):
    """Main application window: controls sidebar and pattern preview."""

    def __init__(self, config: PlateConfig | None = None):
        super().__init__()
        self.setMinimumSize(1000, 700)

        # Application state
        self.config = config or PlateConfig()
        self.language = Language.EN
        self.theme = Theme.LIGHT
        self.image_path: Path | None = None

        # UI component references (created in _setup_ui)
        self.controls: PlateControlsPanel
        self.canvas: PreviewCanvas
        self.controller = PatternController(self)

        self._setup_ui()
        self._connect_signals()
        self._apply_language()
        self._apply_theme()

    def _setup_ui(self):
        """Initialize the user interface."""
        central = QWidget()
        layout = QHBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)

        self.controls = PlateControlsPanel(self.config)
        layout.addWidget(self.controls)

        preview_area = QWidget()
        preview_layout = QVBoxLayout(preview_area)
        preview_layout.setContentsMargins(0, 0, 0, 0)
        preview_layout.addLayout(self._create_preview_toolbar())

        self.canvas = PreviewCanvas(self.config)
        preview_layout.addWidget(self.canvas, stretch=1)

        layout.addWidget(preview_area, stretch=1)
        self.setCentralWidget(central)

    def _create_preview_toolbar(self) -> QHBoxLayout:
        """Create zoom controls and navigation hints above the preview."""
        toolbar = QHBoxLayout()
        toolbar.setContentsMargins(10, 5, 10, 5)

        self.hint_label = QLabel()
        toolbar.addWidget(self.hint_label)
        toolbar.addStretch()

        self.zoom_label = QLabel(f"{zoom_percent(ViewState())}%")
        self.zoom_label.setMinimumWidth(45)
        self.zoom_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.zoom_out_btn = QPushButton("−")
        self.zoom_in_btn = QPushButton("+")
        self.fit_btn = QPushButton("⤢")
        self.zoom_out_btn.setMaximumWidth(35)
        toolbar.addWidget(self.zoom_out_btn)
        toolbar.addWidget(self.zoom_label)
        for btn in (self.zoom_in_btn, self.fit_btn):
            btn.setMaximumWidth(35)
            toolbar.addWidget(btn)
        return toolbar

    def _connect_signals(self):
        self.controls.config_changed.connect(self._on_config_changed)
        self.controls.open_image_requested.connect(self._open_image)
        self.controls.export_requested.connect(self._export)
        self.controls.language_toggled.connect(self._toggle_language)
        self.controls.theme_toggled.connect(self._toggle_theme)

        self.controller.dots_ready.connect(self._on_dots_ready)
        self.controller.progress_changed.connect(self.controls.set_progress)
        self.controller.processing_changed.connect(self.controls.set_processing)

        self.zoom_in_btn.clicked.connect(self.canvas.zoom_in)
        self.zoom_out_btn.clicked.connect(self.canvas.zoom_out)
        self.fit_btn.clicked.connect(self.canvas.fit_to_view)
        self.canvas.zoom_changed.connect(self._on_zoom_changed)

    # === Slots ===

    def _on_config_changed(self, config: PlateConfig):
        self.config = config
        self.canvas.set_config(config)
        self.controller.set_config(config)

    def _on_zoom_changed(self, percent: int):
        self.zoom_label.setText(f"{percent}%")

    def _on_dots_ready(self, dot_set: DotSet):
        self.canvas.set_dot_set(dot_set)
        self.controls.set_hole_count(len(dot_set))

    def _open_image(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, tr(self.language, "upload_title"), "", tr(self.language, "image_filter")
        )
        if not file_path:
            return

        try:
            image = load_image(file_path)
        except ValueError as e:
            logger.error("%s", e)
            QMessageBox.warning(self, tr(self.language, "load_error"), str(e))
            return

        self.image_path = Path(file_path)
        self.controls.set_status(self.image_path.name)
        self.controller.set_config(self.config)
        self.controller.set_image(image)

    def _export(self):
        dot_set = self.controller.dot_set
        if dot_set.is_empty or self.controller.is_processing:
            return

        default_path = str(Path.home() / export_filename(self.config))
        file_path, _ = QFileDialog.getSaveFileName(
            self, tr(self.language, "export"), default_path, tr(self.language, "svg_filter")
        )
        if not file_path:
            return

        try:
            path = write_svg(dot_set, self.config, file_path)
        except OSError as e:
            logger.error("Export failed: %s", e)
            QMessageBox.warning(self, tr(self.language, "export"), str(e))
            return

        if path is not None:
            self.controls.set_status(tr(self.language, "export_done", path=path.name))

    def _toggle_language(self):
        self.language = toggle_language(self.language)
        self._apply_language()

    def _toggle_theme(self):
        self.theme = toggle_theme(self.theme)
        self._apply_theme()

    def _apply_language(self):
        self.setWindowTitle(
            f"{tr(self.language, 'app_title')} - {tr(self.language, 'subtitle')}"
        )
        self.controls.retranslate(self.language)
        self.hint_label.setText(
            f"{tr(self.language, 'drag_pan')} · {tr(self.language, 'scroll_zoom')}"
        )
        self.zoom_in_btn.setToolTip(tr(self.language, "zoom_in"))
        self.zoom_out_btn.setToolTip(tr(self.language, "zoom_out"))
        self.fit_btn.setToolTip(tr(self.language, "fit_screen"))

    def _apply_theme(self):
        self.controls.set_theme(self.theme)
        self.canvas.set_theme(self.theme)

"""Plate configuration sidebar."""

from dataclasses import replace

from PyQt6.QtCore import QSignalBlocker, pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from config_manager import clamp_config
from image_processing.utils import estimate_open_area
from models import (
    HOLE_SIZE_STEP_MM,
    MAX_PLATE_DIMENSION_MM,
    SPACING_MAX_MM,
    SPACING_MIN_MM,
    SPACING_STEP_MM,
    Language,
    PlateConfig,
    Theme,
)
from ui.styles import FONTS, SIZES, sidebar_stylesheet
from ui.translations import tr
from ui.widgets import WidgetFactory, stat_row


class PlateControlsPanel(QWidget):
    """Controls for plate dimensions, hole pattern and export.

    This component provides UI controls for:
    - Plate width/height (capped at 999 mm) and margin
    - Hole pitch slider (1-50 mm in 0.5 mm steps)
    - Min/max hole diameter (0.1 mm steps)
    - Invert mode (big holes in light areas)
    - Language/theme toggles, image open and SVG export
    """

    # Emitted with the clamped config whenever a control value changes
    config_changed = pyqtSignal(object)  # PlateConfig
    open_image_requested = pyqtSignal()
    export_requested = pyqtSignal()
    language_toggled = pyqtSignal()
    theme_toggled = pyqtSignal()

    def __init__(self, config: PlateConfig, parent=None):
        """Initialize plate controls.

        Args:
            config: Initial plate configuration
            parent: Parent widget
        """
        super().__init__(parent)
        self.config = config
        self.language = Language.EN
        self._hole_count = 0
        self._processing = False
        self._status = ""

        self.setFixedWidth(SIZES.SIDEBAR_WIDTH)
        self._setup_ui()
        self._connect_signals()
        self.retranslate(self.language)

    def _setup_ui(self):
        """Create and layout UI controls."""
        layout = QVBoxLayout()

        # --- Header ---
        header = QHBoxLayout()
        self.title_label = QLabel()
        self.title_label.setFont(FONTS.TITLE)
        header.addWidget(self.title_label)
        header.addStretch()
        self.language_btn = QPushButton("EN/中")
        self.theme_btn = QPushButton("☾")
        for btn in (self.language_btn, self.theme_btn):
            btn.setMaximumWidth(50)
            header.addWidget(btn)
        layout.addLayout(header)

        self.subtitle_label = QLabel()
        layout.addWidget(self.subtitle_label)

        # --- Image ---
        self.open_btn = QPushButton()
        self.open_btn.setMinimumHeight(SIZES.BUTTON_MIN_HEIGHT)
        layout.addWidget(self.open_btn)

        # --- Plate Dimensions ---
        self.dimensions_group = QGroupBox()
        dimensions_layout = QFormLayout()
        self.width_input = WidgetFactory.create_mm_spinbox(
            1, MAX_PLATE_DIMENSION_MM, self.config.width, decimals=0
        )
        self.height_input = WidgetFactory.create_mm_spinbox(
            1, MAX_PLATE_DIMENSION_MM, self.config.height, decimals=0
        )
        self.margin_input = WidgetFactory.create_mm_spinbox(
            0, MAX_PLATE_DIMENSION_MM, self.config.margin, decimals=1
        )
        self.width_label = QLabel()
        self.height_label = QLabel()
        self.margin_label = QLabel()
        dimensions_layout.addRow(self.width_label, self.width_input)
        dimensions_layout.addRow(self.height_label, self.height_input)
        dimensions_layout.addRow(self.margin_label, self.margin_input)
        self.dimensions_group.setLayout(dimensions_layout)
        layout.addWidget(self.dimensions_group)

        # --- Pattern Settings ---
        self.pattern_group = QGroupBox()
        pattern_layout = QVBoxLayout()

        self.spacing_label = QLabel()
        self.spacing_slider, self.spacing_value_label = WidgetFactory.create_step_slider(
            SPACING_MIN_MM, SPACING_MAX_MM, SPACING_STEP_MM, self.config.spacing
        )
        spacing_row = WidgetFactory.create_labeled_row(self.spacing_label, self.spacing_slider)
        spacing_row.addWidget(self.spacing_value_label)
        pattern_layout.addLayout(spacing_row)

        hole_form = QFormLayout()
        self.min_hole_input = WidgetFactory.create_mm_spinbox(
            0, 50, self.config.min_hole_size, step=HOLE_SIZE_STEP_MM
        )
        self.max_hole_input = WidgetFactory.create_mm_spinbox(
            0.1, 50, self.config.max_hole_size, step=HOLE_SIZE_STEP_MM
        )
        self.min_hole_label = QLabel()
        self.max_hole_label = QLabel()
        hole_form.addRow(self.min_hole_label, self.min_hole_input)
        hole_form.addRow(self.max_hole_label, self.max_hole_input)
        pattern_layout.addLayout(hole_form)

        self.invert_check = QCheckBox()
        self.invert_check.setChecked(self.config.inverted)
        pattern_layout.addWidget(self.invert_check)

        self.pattern_group.setLayout(pattern_layout)
        layout.addWidget(self.pattern_group)

        # --- Statistics ---
        self.stats_group = QGroupBox()
        stats_layout = QVBoxLayout()
        self.holes_name = QLabel()
        self.holes_value = QLabel("0")
        self.open_area_name = QLabel()
        self.open_area_value = QLabel()
        self.size_name = QLabel()
        self.size_value = QLabel()
        for value_label in (self.holes_value, self.open_area_value, self.size_value):
            value_label.setFont(FONTS.STATS)
        stats_layout.addLayout(stat_row(self.holes_name, self.holes_value))
        stats_layout.addLayout(stat_row(self.open_area_name, self.open_area_value))
        stats_layout.addLayout(stat_row(self.size_name, self.size_value))
        self.stats_group.setLayout(stats_layout)
        layout.addWidget(self.stats_group)

        layout.addStretch()

        # --- Progress and Export ---
        self.status_label = QLabel()
        layout.addWidget(self.status_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        self.export_btn = QPushButton()
        self.export_btn.setObjectName("exportButton")
        self.export_btn.setMinimumHeight(SIZES.BUTTON_MIN_HEIGHT)
        self.export_btn.setEnabled(False)
        layout.addWidget(self.export_btn)

        self.setLayout(layout)

    def _connect_signals(self):
        """Connect widget signals to config updates."""
        self.width_input.valueChanged.connect(lambda v: self._update_config("width", v))
        self.height_input.valueChanged.connect(lambda v: self._update_config("height", v))
        self.margin_input.valueChanged.connect(lambda v: self._update_config("margin", v))
        self.spacing_slider.valueChanged.connect(
            lambda _: self._update_config(
                "spacing", WidgetFactory.slider_value(self.spacing_slider)
            )
        )
        self.min_hole_input.valueChanged.connect(
            lambda v: self._update_config("min_hole_size", v)
        )
        self.max_hole_input.valueChanged.connect(
            lambda v: self._update_config("max_hole_size", v)
        )
        self.invert_check.toggled.connect(lambda v: self._update_config("inverted", v))

        self.open_btn.clicked.connect(self.open_image_requested.emit)
        self.export_btn.clicked.connect(self.export_requested.emit)
        self.language_btn.clicked.connect(self.language_toggled.emit)
        self.theme_btn.clicked.connect(self.theme_toggled.emit)

    def _update_config(self, attr: str, value):
        """Replace one config field, clamp and emit.

        Args:
            attr: PlateConfig field name
            value: New value
        """
        self.config = clamp_config(replace(self.config, **{attr: value}))
        self._sync_inputs()
        self._update_stats()
        self.config_changed.emit(self.config)

    def _sync_inputs(self):
        """Show the clamped config in every input without re-emitting."""
        config = self.config
        spinboxes = (
            (self.width_input, config.width),
            (self.height_input, config.height),
            (self.margin_input, config.margin),
            (self.min_hole_input, config.min_hole_size),
            (self.max_hole_input, config.max_hole_size),
        )
        for spinbox, value in spinboxes:
            if spinbox.value() != value:
                blocker = QSignalBlocker(spinbox)
                spinbox.setValue(value)
                blocker.unblock()

        if WidgetFactory.slider_value(self.spacing_slider) != config.spacing:
            blocker = QSignalBlocker(self.spacing_slider)
            WidgetFactory.set_slider_value(self.spacing_slider, config.spacing)
            blocker.unblock()

    # === Display updates ===

    def set_hole_count(self, count: int):
        self._hole_count = count
        self._update_stats()
        self._update_export_enabled()

    def set_processing(self, processing: bool):
        self._processing = processing
        self.progress_bar.setVisible(processing)
        self.status_label.setText(tr(self.language, "generating") if processing else self._status)
        self._update_export_enabled()

    def set_progress(self, percent: int):
        self.progress_bar.setValue(percent)

    def set_status(self, text: str):
        """Persistent status line, shown whenever no run is in progress."""
        self._status = text
        if not self._processing:
            self.status_label.setText(text)

    def set_theme(self, theme: Theme):
        self.theme_btn.setText("☾" if theme == Theme.LIGHT else "☀")
        self.setStyleSheet(sidebar_stylesheet(theme))

    def _update_export_enabled(self):
        # Export needs a finished pattern with at least one hole
        self.export_btn.setEnabled(not self._processing and self._hole_count > 0)

    def _update_stats(self):
        config = self.config
        self.holes_value.setText(f"{self._hole_count:,}")
        self.open_area_value.setText(f"~{estimate_open_area(config, self._hole_count):.1f}%")
        self.size_value.setText(f"{round(config.width)} x {round(config.height)} mm")

    def retranslate(self, language: Language):
        """Apply UI strings for a language."""
        self.language = language
        self.title_label.setText(tr(language, "app_title"))
        self.subtitle_label.setText(tr(language, "subtitle"))
        self.open_btn.setText(tr(language, "upload_placeholder"))
        self.dimensions_group.setTitle(tr(language, "dimensions_title"))
        self.width_label.setText(tr(language, "width"))
        self.height_label.setText(tr(language, "height"))
        self.margin_label.setText(tr(language, "margin"))
        self.pattern_group.setTitle(tr(language, "pattern_title"))
        self.spacing_label.setText(tr(language, "spacing"))
        self.min_hole_label.setText(tr(language, "min_hole"))
        self.max_hole_label.setText(tr(language, "max_hole"))
        self.invert_check.setText(tr(language, "invert"))
        self.stats_group.setTitle(tr(language, "stats_title"))
        self.holes_name.setText(tr(language, "total_holes"))
        self.open_area_name.setText(tr(language, "open_area"))
        self.size_name.setText(tr(language, "final_size"))
        self.export_btn.setText(tr(language, "export"))
        self.language_btn.setToolTip(tr(language, "switch_language"))
        self.theme_btn.setToolTip(tr(language, "switch_theme"))
        self._update_stats()

"""Bridges the pattern engine to the Qt event loop."""

from typing import Callable

from PIL import Image
from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from image_processing import PatternEngine
from models import DEBOUNCE_MS, DotSet, PlateConfig


class QtScheduler:
    """Resumes engine slices from the Qt event loop."""

    def call_soon(self, callback: Callable[[], None]) -> None:
        QTimer.singleShot(0, callback)


class PatternController(QObject):
    """Debounces input changes and runs the engine between UI events.

    AIDEV-NOTE: Changes arriving within DEBOUNCE_MS of each other collapse
    into one generation. The engine handles runs that are superseded after
    they start.
    """

    dots_ready = pyqtSignal(object)  # DotSet
    progress_changed = pyqtSignal(int)  # Percent
    processing_changed = pyqtSignal(bool)

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self.engine = PatternEngine(
            scheduler=QtScheduler(),
            on_publish=self._on_publish,
            on_progress=self._on_progress,
        )

        self._image: Image.Image | None = None
        self._config: PlateConfig | None = None
        self._processing = False

        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.setInterval(DEBOUNCE_MS)
        self._debounce.timeout.connect(self._start_generation)

    @property
    def dot_set(self) -> DotSet:
        return self.engine.dot_set

    @property
    def is_processing(self) -> bool:
        return self._processing

    def set_image(self, image: Image.Image):
        self._image = image
        self._schedule()

    def set_config(self, config: PlateConfig):
        self._config = config
        self._schedule()

    def _schedule(self):
        # No image means nothing to generate
        if self._image is None or self._config is None:
            return
        self._debounce.start()  # Restarts if already pending

    def _start_generation(self):
        if self._image is None or self._config is None:
            return
        self._set_processing(True)
        self.engine.generate(self._image, self._config)

    def _on_publish(self, dot_set: DotSet):
        self.dots_ready.emit(dot_set)
        self._set_processing(False)

    def _on_progress(self, fraction: float):
        self.progress_changed.emit(round(fraction * 100))

    def _set_processing(self, processing: bool):
        if processing != self._processing:
            self._processing = processing
            self.processing_changed.emit(processing)

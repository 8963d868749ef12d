"""Pannable, zoomable preview of the hole pattern."""

from PyQt6 import QtWidgets
from PyQt6.QtCore import QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QPainter, QPainterPath, QPen

from models import DotSet, PlateConfig, Theme
from ui.styles import SIZES, palette_for
from ui.viewport import (
    ViewState,
    fit_view,
    pan,
    visible_dots,
    zoom_in,
    zoom_out,
    zoom_percent,
    zoom_wheel,
)


class PreviewCanvas(QtWidgets.QWidget):
    """Custom widget for rendering the plate and its holes.

    AIDEV-NOTE: Read-only consumer of DotSet and PlateConfig; the view
    transform is the only state it owns.
    """

    zoom_changed = pyqtSignal(int)  # Percent

    def __init__(self, config: PlateConfig, parent=None):
        super().__init__(parent)
        self.setMinimumSize(*SIZES.PREVIEW_MIN_SIZE)
        self.setCursor(Qt.CursorShape.OpenHandCursor)

        self.config = config
        self.dot_set = DotSet()
        self.theme = Theme.LIGHT
        self.view = ViewState()

        self._drag_origin: "QPointF | None" = None
        self._fitted = False

    def set_dot_set(self, dot_set: DotSet):
        """Show a newly published pattern."""
        self.dot_set = dot_set
        self.update()  # Trigger repaint

    def set_config(self, config: PlateConfig):
        """Update plate settings, refitting when the plate size changes."""
        resized = (config.width, config.height) != (self.config.width, self.config.height)
        self.config = config
        if resized:
            self.fit_to_view()
        self.update()

    def set_theme(self, theme: Theme):
        self.theme = theme
        self.update()

    def fit_to_view(self):
        """Scale and center the plate in the widget."""
        self._set_view(
            fit_view(self.width(), self.height(), self.config.width, self.config.height)
        )

    def zoom_in(self):
        self._set_view(zoom_in(self.view))

    def zoom_out(self):
        self._set_view(zoom_out(self.view))

    def _set_view(self, view: ViewState):
        zoom_before = zoom_percent(self.view)
        self.view = view
        if zoom_percent(view) != zoom_before:
            self.zoom_changed.emit(zoom_percent(view))
        self.update()

    # === Qt events ===

    def showEvent(self, event):
        super().showEvent(event)
        if not self._fitted:
            self._fitted = True
            self.fit_to_view()

    def wheelEvent(self, event):
        self._set_view(zoom_wheel(self.view, event.angleDelta().y()))

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_origin = event.position()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)

    def mouseMoveEvent(self, event):
        if self._drag_origin is None:
            return
        position = event.position()
        delta = position - self._drag_origin
        self._drag_origin = position
        self._set_view(pan(self.view, delta.x(), delta.y()))

    def mouseReleaseEvent(self, event):
        self._drag_origin = None
        self.setCursor(Qt.CursorShape.OpenHandCursor)

    def leaveEvent(self, event):
        self._drag_origin = None
        super().leaveEvent(event)

    def paintEvent(self, event):
        """Render the plate, the holes and the plate border."""
        palette = palette_for(self.theme)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Background
        painter.fillRect(self.rect(), palette.background)

        view = self.view
        painter.translate(view.offset_x, view.offset_y)
        painter.scale(view.scale, view.scale)

        plate = QRectF(0, 0, self.config.width, self.config.height)

        # Drop shadow, then plate metal
        shadow_offset = SIZES.SHADOW_OFFSET / view.scale
        painter.fillRect(plate.translated(0, shadow_offset), palette.shadow)
        painter.fillRect(plate, palette.plate)

        # Holes, batched into one path
        holes = QPainterPath()
        for dot in visible_dots(
            self.dot_set,
            view,
            self.width(),
            self.height(),
            self.config.max_radius,
        ):
            holes.addEllipse(QPointF(dot.x, dot.y), dot.r, dot.r)
        painter.fillPath(holes, QBrush(palette.hole))

        # Border drawn one screen pixel wide at any zoom
        pen = QPen(palette.border)
        pen.setWidthF(1 / view.scale)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(plate)

        painter.end()

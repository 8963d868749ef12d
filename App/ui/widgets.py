"""Widget factory for the millimeter inputs of the plate sidebar.

QDoubleSpinBox and QSlider setup repeats for every dimension; these helpers
keep the panel code down to layout.
"""

from typing import Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDoubleSpinBox,
    QHBoxLayout,
    QLabel,
    QSlider,
    QWidget,
)

MM_SUFFIX = " mm"


class WidgetFactory:
    """Factory class for the sidebar's input widgets."""

    @staticmethod
    def create_mm_spinbox(
        range_min: float,
        range_max: float,
        value: float,
        decimals: int = 1,
        step: float = 1.0,
    ) -> QDoubleSpinBox:
        """Create a spin box for a length in millimeters.

        Args:
            range_min: Minimum value in mm
            range_max: Maximum value in mm
            value: Initial value in mm
            decimals: Number of decimal places shown
            step: Arrow-key / wheel increment in mm

        Returns:
            Configured QDoubleSpinBox
        """
        spinbox = QDoubleSpinBox()
        spinbox.setSuffix(MM_SUFFIX)
        spinbox.setDecimals(decimals)
        spinbox.setRange(range_min, range_max)
        spinbox.setSingleStep(step)
        spinbox.setValue(value)
        # Typing "12" should not regenerate for "1" first
        spinbox.setKeyboardTracking(False)
        return spinbox

    @staticmethod
    def create_step_slider(
        range_min: float,
        range_max: float,
        step: float,
        value: float,
        label_format: str = "{:g} mm",
        label_width: int = 60,
    ) -> Tuple[QSlider, QLabel]:
        """Create a slider over a float range with a fixed step.

        QSlider is integer based, so positions count steps from range_min.
        Use ``slider_value`` to read the float value back.

        Returns:
            Tuple of (slider, label)
        """
        slider = QSlider(Qt.Orientation.Horizontal)
        slider.setRange(0, round((range_max - range_min) / step))
        slider.setValue(round((value - range_min) / step))
        slider.setProperty("range_min", range_min)
        slider.setProperty("step", step)

        label = QLabel(label_format.format(value))
        label.setMinimumWidth(label_width)
        label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)

        slider.valueChanged.connect(
            lambda _: label.setText(label_format.format(WidgetFactory.slider_value(slider)))
        )
        return slider, label

    @staticmethod
    def slider_value(slider: QSlider) -> float:
        """Float value of a slider made by ``create_step_slider``."""
        return slider.property("range_min") + slider.value() * slider.property("step")

    @staticmethod
    def set_slider_value(slider: QSlider, value: float) -> None:
        """Move a ``create_step_slider`` slider to the step nearest ``value``."""
        slider.setValue(round((value - slider.property("range_min")) / slider.property("step")))

    @staticmethod
    def create_labeled_row(label: QLabel, widget: QWidget) -> QHBoxLayout:
        """Label followed by a widget in a horizontal layout."""
        layout = QHBoxLayout()
        layout.addWidget(label)
        layout.addWidget(widget)
        return layout


def stat_row(name_label: QLabel, value_label: QLabel) -> QHBoxLayout:
    """Label on the left, right-aligned value on the right."""
    layout = QHBoxLayout()
    layout.addWidget(name_label)
    layout.addStretch()
    value_label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
    layout.addWidget(value_label)
    return layout

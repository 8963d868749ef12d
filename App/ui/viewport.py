"""Pan/zoom math for the plate preview.

AIDEV-NOTE: Kept free of Qt so it can be tested headless. Screen
coordinates are pixels; world coordinates are plate millimeters.
"""

from dataclasses import dataclass, replace
from typing import Iterator

from models import Dot

FIT_PADDING = 80  # pixels around the plate when fitting
MAX_FIT_SCALE = 5.0
MIN_SCALE = 0.1
MAX_SCALE = 50.0
WHEEL_SENSITIVITY = 0.001
ZOOM_STEP = 1.2


@dataclass(frozen=True)
class ViewState:
    """Screen transform: screen = world * scale + offset."""

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    def world_to_screen(self, x: float, y: float) -> "tuple[float, float]":
        return x * self.scale + self.offset_x, y * self.scale + self.offset_y

    def screen_to_world(self, x: float, y: float) -> "tuple[float, float]":
        return (x - self.offset_x) / self.scale, (y - self.offset_y) / self.scale


def fit_view(
    view_width: float, view_height: float, plate_width: float, plate_height: float
) -> ViewState:
    """Scale and center the plate inside the view."""
    if plate_width <= 0 or plate_height <= 0:
        return ViewState()

    scale = min(
        (view_width - FIT_PADDING) / plate_width,
        (view_height - FIT_PADDING) / plate_height,
        MAX_FIT_SCALE,
    )
    if scale <= 0:
        scale = 1.0
    return ViewState(
        scale=scale,
        offset_x=(view_width - plate_width * scale) / 2,
        offset_y=(view_height - plate_height * scale) / 2,
    )


def zoom_wheel(view: ViewState, delta_y: float) -> ViewState:
    """Zoom for a wheel event; positive delta zooms out."""
    scale = view.scale * (1 - delta_y * WHEEL_SENSITIVITY)
    return replace(view, scale=max(MIN_SCALE, min(MAX_SCALE, scale)))


def zoom_percent(view: ViewState) -> int:
    """Scale as a rounded percentage for the toolbar readout."""
    return round(view.scale * 100)


def zoom_in(view: ViewState) -> ViewState:
    return replace(view, scale=view.scale * ZOOM_STEP)


def zoom_out(view: ViewState) -> ViewState:
    return replace(view, scale=view.scale / ZOOM_STEP)


def pan(view: ViewState, dx: float, dy: float) -> ViewState:
    return replace(view, offset_x=view.offset_x + dx, offset_y=view.offset_y + dy)


def visible_dots(
    dots, view: ViewState, view_width: float, view_height: float, max_radius: float
) -> Iterator[Dot]:
    """Yield the dots that intersect the visible area.

    Dots must be in row-major order: iteration stops at the first dot
    below the visible region.
    """
    min_x, min_y = view.screen_to_world(0, 0)
    max_x, max_y = view.screen_to_world(view_width, view_height)
    min_x -= max_radius
    min_y -= max_radius
    max_x += max_radius
    max_y += max_radius

    for dot in dots:
        if dot.y > max_y:
            break
        if dot.y < min_y:
            continue
        if dot.x < min_x or dot.x > max_x:
            continue
        yield dot

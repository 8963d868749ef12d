"""SVG export of hole patterns for laser cutting.

AIDEV-NOTE: The document's user units are millimeters: width/height carry
an "mm" suffix and the viewBox spans 0..width x 0..height, so one unit in
the drawing is one millimeter on the plate.
"""

import logging
import time
from pathlib import Path
from typing import Iterable, Optional

import svg

from models import Dot, DotSet, PlateConfig

logger = logging.getLogger(__name__)

SVG_EXTENSION = ".svg"
PLATE_STROKE_WIDTH = 0.5
HOLE_FILL = "black"


def _mm(value: float) -> str:
    """Fixed two-decimal rendering for coordinates and radii."""
    return f"{value:.2f}"


def _short_number(value: float) -> str:
    """Shortest rendering of a number (500, 8.5, 0.15)."""
    return f"{value:g}"


def dots_to_svg(dots: Iterable[Dot], width: float, height: float) -> str:
    """Convert holes to an SVG document.

    Args:
        dots: Holes in plate coordinates (mm)
        width: Plate width in mm
        height: Plate height in mm

    Returns:
        SVG content as string
    """
    # Numbers are pre-formatted strings; svg.py writes attribute values as-is
    circles: list[svg.Element] = [
        svg.Circle(
            cx=_mm(dot.x),  # type: ignore[arg-type]
            cy=_mm(dot.y),  # type: ignore[arg-type]
            r=_mm(dot.r),  # type: ignore[arg-type]
        )
        for dot in dots
    ]

    plate_outline = svg.Rect(
        x=0,
        y=0,
        width=_mm(width),  # type: ignore[arg-type]
        height=_mm(height),  # type: ignore[arg-type]
        fill="none",
        stroke="black",
        stroke_width=PLATE_STROKE_WIDTH,
    )

    document = svg.SVG(
        width=f"{_mm(width)}mm",  # type: ignore[arg-type]
        height=f"{_mm(height)}mm",  # type: ignore[arg-type]
        viewBox=svg.ViewBoxSpec(0, 0, _mm(width), _mm(height)),  # type: ignore[arg-type]
        elements=[plate_outline, svg.G(id="holes", fill=HOLE_FILL, elements=circles)],
    )
    return document.as_str()


def export_filename(config: PlateConfig, timestamp: Optional[int] = None) -> str:
    """Build the export file name.

    Format: plate_{W}x{H}_p{spacing}_d{min}-{max}_{unix seconds}.svg
    """
    if timestamp is None:
        timestamp = int(time.time())
    return (
        f"plate_{_short_number(config.width)}x{_short_number(config.height)}"
        f"_p{_short_number(config.spacing)}"
        f"_d{_short_number(config.min_hole_size)}-{_short_number(config.max_hole_size)}"
        f"_{timestamp}{SVG_EXTENSION}"
    )


def write_svg(
    dot_set: DotSet, config: PlateConfig, path: str | Path
) -> Optional[Path]:
    """Write a DotSet to an SVG file.

    Args:
        dot_set: Holes to export
        config: Plate configuration (dimensions)
        path: Destination file

    Returns:
        The path written, or None if there were no holes to export
    """
    if dot_set.is_empty:
        logger.info("Nothing to export: pattern has no holes")
        return None

    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dots_to_svg(dot_set, config.width, config.height))

    logger.info("Exported %d holes to %s", len(dot_set), path)
    return path


def export_svg(
    dot_set: DotSet,
    config: PlateConfig,
    directory: str | Path,
    timestamp: Optional[int] = None,
) -> Optional[Path]:
    """Write a DotSet into ``directory`` under the standard export name.

    The directory is created if missing. Returns None (and writes nothing)
    when the pattern has no holes.
    """
    if dot_set.is_empty:
        logger.info("Nothing to export: pattern has no holes")
        return None

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    return write_svg(dot_set, config, directory / export_filename(config, timestamp))

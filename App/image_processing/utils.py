"""Plate statistics shown alongside the preview.

AIDEV-NOTE: These are estimates for the operator, not inputs to cutting.
The open area assumes every hole has the mean of the min/max diameters.
"""

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models import PlateConfig


def estimate_open_area(config: "PlateConfig", hole_count: int) -> float:
    """Approximate percentage of the plate removed by holes.

    Args:
        config: Plate configuration
        hole_count: Number of holes in the pattern

    Returns:
        Open area in percent of the full plate (0 for a zero-area plate)
    """
    plate_area = config.width * config.height
    if plate_area <= 0:
        return 0.0
    mean_radius = (config.min_hole_size + config.max_hole_size) / 4
    return math.pi * mean_radius**2 * hole_count / plate_area * 100


"""Sampling grid planning from physical plate dimensions."""

import math

from models import Grid, PlateConfig


def plan_grid(config: PlateConfig) -> Grid:
    """Derive the hole grid for a plate.

    Args:
        config: Plate configuration (spacing must be positive)

    Returns:
        Grid with one cell per hole position. Both counts are 0 when the
        margins leave no usable area.

    Raises:
        ValueError: If spacing is not positive
    """
    if config.spacing <= 0:
        raise ValueError(f"Spacing must be positive, got {config.spacing}")

    eff_width = config.effective_width
    eff_height = config.effective_height
    if eff_width <= 0 or eff_height <= 0:
        return Grid(cols=0, rows=0, pitch=config.spacing)

    cols = math.floor(eff_width / config.spacing)
    rows = math.floor(eff_height / config.spacing)
    return Grid(cols=cols, rows=rows, pitch=config.spacing)

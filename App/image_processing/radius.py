"""Luminance to hole radius mapping."""

from models import PlateConfig


def map_radius(sample, config: PlateConfig):
    """Convert a luminance sample into a hole radius.

    Dark areas get large holes unless ``config.inverted`` is set, in which
    case light areas do.

    Args:
        sample: Luminance in [0, 1], a float or a numpy array (elementwise)
        config: Plate configuration with hole size bounds

    Returns:
        Radius in mm within [min_hole_size / 2, max_hole_size / 2]
    """
    norm = 1 - sample if config.inverted else sample
    size_factor = 1 - norm
    radius_range = (config.max_hole_size - config.min_hole_size) / 2
    return config.min_radius + size_factor * radius_range

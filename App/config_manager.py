"""Configuration boundary for plate settings.

Raw values from the UI, the command line or a JSON preset pass through
``clamp_config`` before they reach the pattern engine, so the engine only
ever sees usable geometry.
"""

import json
import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from models import (
    MAX_PLATE_DIMENSION_MM,
    SPACING_MAX_MM,
    SPACING_MIN_MM,
    HoleShape,
    PlateConfig,
)

logger = logging.getLogger(__name__)

_FIELD_NAMES = {f.name for f in fields(PlateConfig)}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _parse_bool(value: Any) -> bool:
    """Accept JSON booleans, 0/1 and the strings "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"Expected a boolean, got {value!r}")


def clamp_config(config: PlateConfig) -> PlateConfig:
    """Bring every field of a config into its allowed range.

    AIDEV-NOTE: Width/height are capped to 3 digits. When the minimum hole
    is larger than the maximum it is lowered to match.
    """
    width = _clamp(float(config.width), 0.0, MAX_PLATE_DIMENSION_MM)
    height = _clamp(float(config.height), 0.0, MAX_PLATE_DIMENSION_MM)
    spacing = _clamp(float(config.spacing), SPACING_MIN_MM, SPACING_MAX_MM)
    margin = max(0.0, float(config.margin))
    max_hole = max(0.0, float(config.max_hole_size))
    min_hole = _clamp(float(config.min_hole_size), 0.0, max_hole)
    threshold = int(_clamp(int(config.threshold), 0, 255))

    return replace(
        config,
        width=width,
        height=height,
        spacing=spacing,
        margin=margin,
        min_hole_size=min_hole,
        max_hole_size=max_hole,
        threshold=threshold,
        inverted=bool(config.inverted),
    )


def config_from_dict(
    data: Mapping[str, Any], base: Optional[PlateConfig] = None
) -> PlateConfig:
    """Build a clamped PlateConfig from a mapping of field values.

    Args:
        data: Field name to value (snake_case PlateConfig field names)
        base: Config supplying values for missing keys (defaults if None)

    Returns:
        Clamped PlateConfig

    Raises:
        ValueError: If a value cannot be converted to the field's type
    """
    config = base or PlateConfig()
    updates: dict[str, Any] = {}

    for key, value in data.items():
        if key not in _FIELD_NAMES:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        if value is None:
            continue
        if key == "shape":
            updates[key] = HoleShape(value)
        elif key == "inverted":
            updates[key] = _parse_bool(value)
        elif key == "threshold":
            updates[key] = int(value)
        else:
            updates[key] = float(value)

    return clamp_config(replace(config, **updates))


class ConfigManager:
    """Loads plate presets from JSON files."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize config manager.

        Args:
            config_path: Path to a JSON preset (None means defaults only)
        """
        self.config_path = Path(config_path) if config_path is not None else None

    def load(self) -> PlateConfig:
        """Load the preset, returning defaults if it is missing or invalid.

        Returns:
            PlateConfig with loaded or default values
        """
        config = PlateConfig()
        if self.config_path is None:
            return config

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("preset must be a JSON object")
            config = config_from_dict(data)
            logger.info("Loaded plate preset from %s", self.config_path)
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not load preset %s: %s", self.config_path, e)

        return config

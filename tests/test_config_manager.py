"""Tests for config clamping and preset loading."""

from __future__ import annotations

import json
import logging

import pytest

from config_manager import ConfigManager, clamp_config, config_from_dict
from models import HoleShape, PlateConfig


class TestClampConfig:
    def test_defaults_unchanged(self) -> None:
        assert clamp_config(PlateConfig()) == PlateConfig()

    def test_dimensions_capped(self) -> None:
        config = clamp_config(PlateConfig(width=5000, height=-3))
        assert config.width == 999.0
        assert config.height == 0.0

    @pytest.mark.parametrize("spacing, expected", [(0, 1.0), (-4, 1.0), (0.2, 1.0), (75, 50.0), (8.5, 8.5)])
    def test_spacing_range(self, spacing: float, expected: float) -> None:
        assert clamp_config(PlateConfig(spacing=spacing)).spacing == expected

    def test_negative_margin(self) -> None:
        assert clamp_config(PlateConfig(margin=-5)).margin == 0.0

    def test_min_hole_lowered_to_max(self) -> None:
        config = clamp_config(PlateConfig(min_hole_size=8, max_hole_size=3))
        assert config.min_hole_size == 3.0
        assert config.max_hole_size == 3.0

    def test_negative_hole_sizes(self) -> None:
        config = clamp_config(PlateConfig(min_hole_size=-1, max_hole_size=-2))
        assert config.min_hole_size == 0.0
        assert config.max_hole_size == 0.0

    def test_threshold_range(self) -> None:
        assert clamp_config(PlateConfig(threshold=400)).threshold == 255
        assert clamp_config(PlateConfig(threshold=-1)).threshold == 0

    def test_idempotent(self) -> None:
        once = clamp_config(PlateConfig(width=1200, spacing=0, min_hole_size=9))
        assert clamp_config(once) == once


class TestConfigFromDict:
    def test_partial_update(self) -> None:
        config = config_from_dict({"width": "300", "spacing": 5, "inverted": 1})
        assert config.width == 300.0
        assert config.spacing == 5.0
        assert config.inverted is True
        assert config.height == PlateConfig().height

    def test_base_config(self, small_plate: PlateConfig) -> None:
        config = config_from_dict({"margin": 5}, base=small_plate)
        assert config.margin == 5.0
        assert config.width == small_plate.width

    def test_shape(self) -> None:
        assert config_from_dict({"shape": "square"}).shape == HoleShape.SQUARE

    @pytest.mark.parametrize(
        "value, expected",
        [(True, True), (False, False), ("false", False), ("True", True), (0, False), (1, True)],
    )
    def test_inverted_booleans(self, value, expected: bool) -> None:
        assert config_from_dict({"inverted": value}).inverted is expected

    @pytest.mark.parametrize("value", ["no", "", 2, 0.5])
    def test_inverted_rejects_non_booleans(self, value) -> None:
        with pytest.raises(ValueError, match="boolean"):
            config_from_dict({"inverted": value})

    def test_none_values_skipped(self) -> None:
        assert config_from_dict({"width": None}).width == PlateConfig().width

    def test_values_clamped(self) -> None:
        assert config_from_dict({"width": 2000}).width == 999.0

    def test_unknown_key_warns(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="config_manager"):
            config = config_from_dict({"colour": "red"})
        assert config == PlateConfig()
        assert "colour" in caplog.text

    @pytest.mark.parametrize("data", [{"width": "wide"}, {"shape": "hexagon"}])
    def test_bad_values(self, data) -> None:
        with pytest.raises(ValueError):
            config_from_dict(data)


class TestConfigManager:
    def test_no_path_gives_defaults(self) -> None:
        assert ConfigManager().load() == PlateConfig()

    def test_load_preset(self, tmp_path) -> None:
        path = tmp_path / "plate.json"
        path.write_text(json.dumps({"width": 300, "height": 200, "inverted": True}))
        config = ConfigManager(path).load()
        assert (config.width, config.height, config.inverted) == (300.0, 200.0, True)

    def test_missing_file(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="config_manager"):
            config = ConfigManager(tmp_path / "missing.json").load()
        assert config == PlateConfig()
        assert "Could not load preset" in caplog.text

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", '{"spacing": "x"}'])
    def test_invalid_preset_falls_back(self, tmp_path, content: str) -> None:
        path = tmp_path / "plate.json"
        path.write_text(content)
        assert ConfigManager(path).load() == PlateConfig()

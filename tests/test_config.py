"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from trackmarker.config import AnimationConfig, MarkerOptions, VehicleConfig, load_config
from trackmarker.errors import InvalidPathError, InvalidSpeedError
from trackmarker.geometry import GeoPoint

RAW = {
    "title": "Harbour loop",
    "path": [[0, 0], [0, 1], [1, 1]],
    "marker": {"speed": 5.0, "autoPlay": False, "rotationOffset": -90},
    "vehicle": {"type": "boat", "icon_scale": 0.5},
    "fps": 24,
    "output": "out/loop.webm",
}


class TestMarkerOptions:
    def test_defaults(self):
        options = MarkerOptions()
        assert options.speed == 0.1
        assert options.auto_play is True
        assert options.rotation is True
        assert options.rotation_offset == 0.0
        assert options.max_delta == 0.05
        assert options.heading_mode == "segment"

    def test_camel_and_snake_case_keys(self):
        options = MarkerOptions.from_mapping({"autoPlay": 0, "rotation_offset": "12.5", "maxDelta": 0.1})
        assert options.auto_play is False
        assert options.rotation_offset == 12.5
        assert options.max_delta == 0.1

    def test_empty_mapping_gives_defaults(self):
        assert MarkerOptions.from_mapping(None) == MarkerOptions()

    def test_unknown_option_raises(self):
        with pytest.raises(ValueError):
            MarkerOptions.from_mapping({"loop": True})

    @pytest.mark.parametrize("speed", [0, -0.1])
    def test_non_positive_speed_raises(self, speed):
        with pytest.raises(InvalidSpeedError):
            MarkerOptions(speed=speed)

    def test_bad_heading_mode_raises(self):
        with pytest.raises(ValueError):
            MarkerOptions(heading_mode="smooth")

    def test_bad_max_delta_raises(self):
        with pytest.raises(ValueError):
            MarkerOptions(max_delta=0.0)

    def test_hooks_are_keyed_by_event(self):
        def on_finish(event):
            return None

        options = MarkerOptions.from_mapping({"onFinish": on_finish})
        assert options.hooks() == {"finish": on_finish}


class TestAnimationConfig:
    def test_from_mapping(self):
        config = AnimationConfig.from_mapping(RAW)
        assert config.title == "Harbour loop"
        assert config.path == [GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0), GeoPoint(1.0, 1.0)]
        assert config.marker.speed == 5.0
        assert config.marker.auto_play is False
        assert config.marker.rotation_offset == -90.0
        assert config.vehicle == VehicleConfig(type="boat", icon_path=None, icon_scale=0.5)
        assert config.frame_rate == 24
        assert config.output_path == Path("out/loop.webm")

    def test_waypoints_alias(self):
        config = AnimationConfig.from_mapping(
            {"waypoints": [{"name": "A", "lat": 0, "lon": 0}, {"name": "B", "lat": 1, "lon": 1}]}
        )
        assert len(config.path) == 2

    def test_geojson_path(self):
        config = AnimationConfig.from_mapping(
            {"path": {"type": "LineString", "coordinates": [[10, 50], [11, 51]]}}
        )
        assert config.path[0] == GeoPoint(50.0, 10.0)

    def test_missing_path_raises(self):
        with pytest.raises(ValueError):
            AnimationConfig.from_mapping({"title": "nothing"})

    def test_short_path_raises(self):
        with pytest.raises(InvalidPathError):
            AnimationConfig.from_mapping({"path": [[0, 0]]})

    def test_non_positive_frame_rate_raises(self):
        with pytest.raises(ValueError):
            AnimationConfig.from_mapping({"path": RAW["path"], "frame_rate": 0})


class TestLoadConfig:
    def test_json(self, tmp_path):
        path = tmp_path / "track.json"
        path.write_text(json.dumps(RAW), encoding="utf8")
        config = load_config(path)
        assert config.marker.speed == 5.0

    def test_yaml(self, tmp_path):
        path = tmp_path / "track.yaml"
        path.write_text(
            "title: Ridge\n"
            "path:\n"
            "  - {lat: 46.0, lon: 7.0}\n"
            "  - {lat: 46.1, lon: 7.2}\n"
            "marker:\n"
            "  speed: 0.5\n"
            "  heading_mode: lookahead\n",
            encoding="utf8",
        )
        config = load_config(path)
        assert config.title == "Ridge"
        assert config.marker.heading_mode == "lookahead"
        assert config.path[1] == GeoPoint(46.1, 7.2)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "absent.json")

    def test_top_level_must_be_a_mapping(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf8")
        with pytest.raises(ValueError):
            load_config(path)

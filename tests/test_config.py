"""Tests for configuration loading."""

import os

import yaml


class TestLoadConfig:
    """Tests for YAML configuration."""

    def test_defaults(self):
        from figshape.config import load_config

        config = load_config(None)

        assert config.ray.start_angle == 90
        assert config.ray.end_angle == 450
        assert config.ray.max_ray_steps is None
        assert config.smoothing.small_window == 8
        assert config.smoothing.large_window == 15
        assert config.smoothing.width_threshold == 120
        assert config.smoothing.mode == "truncate"
        assert config.smoothing.start_at_minimum is True
        assert config.classifier.circle_spread_threshold == 8
        assert config.classifier.triangle_max_peaks == 3
        assert config.classifier.quadrilateral_max_peaks == 5
        assert config.batch.workers == 1

    def test_missing_file_gives_defaults(self, temp_dir):
        from figshape.config import PipelineConfig, load_config

        config = load_config(os.path.join(temp_dir, "nope.yaml"))

        assert config == PipelineConfig()

    def test_partial_override(self, temp_dir):
        """Keys present in YAML override defaults; unknown keys are ignored."""
        from figshape.config import load_config

        path = os.path.join(temp_dir, "config.yaml")
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump({
                "ray": {"start_angle": 0, "end_angle": 360, "bogus": 1},
                "smoothing": {"mode": "circular"},
                "batch": {"workers": 4},
                "unknown_section": {"x": 1},
            }, f)

        config = load_config(path)

        assert config.ray.start_angle == 0
        assert config.ray.end_angle == 360
        assert config.ray.ray_magnitude == 4
        assert not hasattr(config.ray, "bogus")
        assert config.smoothing.mode == "circular"
        assert config.smoothing.large_window == 15
        assert config.batch.workers == 4

    def test_empty_file(self, temp_dir):
        from figshape.config import PipelineConfig, load_config

        path = os.path.join(temp_dir, "empty.yaml")
        open(path, "w").close()

        assert load_config(path) == PipelineConfig()

    def test_default_config_round_trip(self, temp_dir):
        from figshape.config import PipelineConfig, load_config, save_default_config

        path = os.path.join(temp_dir, "defaults.yaml")
        save_default_config(path)

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        assert list(data) == ["ray", "smoothing", "classifier", "batch", "tracing", "debug"]
        assert load_config(path) == PipelineConfig()

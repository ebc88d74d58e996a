"""
Configuration management for figshape.

Loads YAML configuration with sensible defaults for every classification stage.
"""

import os
from dataclasses import asdict, dataclass, field

import yaml


@dataclass
class RayConfig:
    """Configuration for radial ray casting."""
    start_angle: int = 90
    end_angle: int = 450  # end - start must be 360
    ray_magnitude: int = 4
    max_ray_steps: int = None  # None means the mask diagonal


@dataclass
class SmoothingConfig:
    """Configuration for the sliding-window mean filter."""
    small_window: int = 8
    large_window: int = 15
    width_threshold: int = 120  # masks narrower than this use small_window
    mode: str = "truncate"  # "truncate" or "circular"
    start_at_minimum: bool = True  # roll the signal to its lowest window before smoothing


@dataclass
class ClassifierConfig:
    """Configuration for shape inference from the smoothed signal."""
    circle_spread_threshold: int = 8
    triangle_max_peaks: int = 3
    quadrilateral_max_peaks: int = 5


@dataclass
class BatchConfig:
    """Configuration for classifying many figures."""
    workers: int = 1


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class DebugConfig:
    """Configuration for debug artifact generation."""
    enabled: bool = False
    max_edge_scale: int = 1600
    ray_stride: int = 10  # draw every Nth ray in overlays


@dataclass
class PipelineConfig:
    """Complete pipeline configuration."""
    ray: RayConfig = field(default_factory=RayConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


_SECTIONS = ("ray", "smoothing", "classifier", "batch", "tracing", "debug")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing values.
    """
    config = PipelineConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section_name in _SECTIONS:
        section_data = yaml_data.get(section_name)
        if not section_data:
            continue
        section = getattr(config, section_name)
        for key, value in section_data.items():
            if hasattr(section, key):
                setattr(section, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    config = PipelineConfig()

    yaml_data = {name: asdict(getattr(config, name)) for name in _SECTIONS}
    # File sink is a per-run choice, not a default worth persisting
    yaml_data["tracing"].pop("file_path")

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)

"""
Configuration management for circlehough
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from circlehough.errors import ConfigError

DEFAULT_CONFIG = {
    "preprocessing": {
        "blur": True,
        "edge": True,
        "invert": True
    },
    "detection": {
        "min_radius": 6,
        "edge_grey_threshold": 250,
        "angle_step_degrees": 4,
        "max_cells": 64_000_000,
        "workers": 1
    },
    "peaks": {
        "center_tolerance": 2,
        "radius_tolerance": None,
        "max_hits": None
    },
    "diagnostics": {
        "enabled": False,
        "output_dir": "output/hough",
        "radius_stride": 21
    },
    "logging": {
        "level": "INFO",
        "log_file": None
    }
}


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Check value ranges, raising ConfigError on the first bad value."""
    detection = config.get("detection", {})
    
    min_radius = detection.get("min_radius")
    if not _is_int(min_radius) or min_radius < 1:
        raise ConfigError(f"detection.min_radius must be a positive integer, got {min_radius!r}")
    
    threshold = detection.get("edge_grey_threshold")
    if not isinstance(threshold, (int, float)) or not 0 <= threshold <= 256:
        raise ConfigError(f"detection.edge_grey_threshold must be in [0, 256], got {threshold!r}")
    
    step = detection.get("angle_step_degrees")
    if not isinstance(step, (int, float)) or not 0 < step <= 360:
        raise ConfigError(f"detection.angle_step_degrees must be in (0, 360], got {step!r}")
    
    max_cells = detection.get("max_cells")
    if not _is_int(max_cells) or max_cells < 1:
        raise ConfigError(f"detection.max_cells must be a positive integer, got {max_cells!r}")
    
    workers = detection.get("workers")
    if not _is_int(workers) or workers < 1:
        raise ConfigError(f"detection.workers must be a positive integer, got {workers!r}")
    
    peaks = config.get("peaks", {})
    for key in ("center_tolerance", "radius_tolerance", "max_hits"):
        value = peaks.get(key)
        if value is not None and (not _is_int(value) or value < 0):
            raise ConfigError(f"peaks.{key} must be a non-negative integer or null, got {value!r}")
    
    stride = config.get("diagnostics", {}).get("radius_stride")
    if not _is_int(stride) or stride < 1:
        raise ConfigError(f"diagnostics.radius_stride must be a positive integer, got {stride!r}")
    
    level = config.get("logging", {}).get("level")
    if _is_int(level):
        valid_level = level >= 0
    else:
        valid_level = isinstance(logging.getLevelName(str(level).upper()), int)
    if not valid_level:
        raise ConfigError(f"logging.level must be a logging level name, got {level!r}")
    
    return config


def load_config(path: Optional[Union[str, Path]] = None,
                overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load configuration.
    
    Args:
        path: Optional YAML file merged over DEFAULT_CONFIG
        overrides: Optional dictionary merged last
        
    Returns:
        Validated configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    
    if path is not None:
        try:
            with open(path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        config = merge_config(config, loaded)
    
    if overrides:
        config = merge_config(config, overrides)
    
    return validate_config(config)

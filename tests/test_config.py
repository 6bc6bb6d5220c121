"""Tests for config module."""

import pytest
from circlehough.config import DEFAULT_CONFIG, load_config, merge_config, validate_config
from circlehough.errors import ConfigError


class TestConfig:
    """Test configuration module."""
    
    def test_default_config_exists(self):
        """Test that default config exists."""
        assert DEFAULT_CONFIG is not None
        assert isinstance(DEFAULT_CONFIG, dict)
    
    def test_detection_config(self):
        """Test detection defaults."""
        detect = DEFAULT_CONFIG['detection']
        assert detect['min_radius'] == 6
        assert detect['edge_grey_threshold'] == 250
        assert detect['angle_step_degrees'] == 4
        assert detect['workers'] == 1
    
    def test_concentric_suppression_off_by_default(self):
        """Concentric merging is opt-in."""
        assert DEFAULT_CONFIG['peaks']['radius_tolerance'] is None
        assert DEFAULT_CONFIG['diagnostics']['enabled'] is False
    
    def test_defaults_valid(self):
        """Default config passes validation."""
        assert validate_config(DEFAULT_CONFIG) is DEFAULT_CONFIG
        assert load_config() == DEFAULT_CONFIG
    
    def test_merge_does_not_mutate(self):
        """Merging returns a new dictionary."""
        merged = merge_config(DEFAULT_CONFIG, {"detection": {"min_radius": 9}})
        assert merged['detection']['min_radius'] == 9
        assert merged['detection']['edge_grey_threshold'] == 250
        assert DEFAULT_CONFIG['detection']['min_radius'] == 6
    
    def test_load_yaml(self, tmp_path):
        """YAML files are merged over the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("detection:\n  min_radius: 10\n  angle_step_degrees: 6\n")
        config = load_config(path)
        assert config['detection']['min_radius'] == 10
        assert config['detection']['angle_step_degrees'] == 6
        assert config['detection']['edge_grey_threshold'] == 250
    
    def test_overrides_win(self, tmp_path):
        """Overrides are applied after the file."""
        path = tmp_path / "config.yaml"
        path.write_text("detection:\n  min_radius: 10\n")
        config = load_config(path, {"detection": {"min_radius": 12}})
        assert config['detection']['min_radius'] == 12
    
    def test_empty_yaml(self, tmp_path):
        """An empty file means defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == DEFAULT_CONFIG
    
    def test_missing_file(self, tmp_path):
        """Unreadable files raise ConfigError."""
        with pytest.raises(ConfigError):
            load_config(tmp_path / "missing.yaml")
    
    def test_non_mapping_yaml(self, tmp_path):
        """Top level must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError):
            load_config(path)
    
    def test_numeric_log_level(self):
        """Numeric logging levels are accepted."""
        config = load_config(overrides={"logging": {"level": 10}})
        assert config["logging"]["level"] == 10
    
    @pytest.mark.parametrize("section,key,value", [
        ("detection", "min_radius", 0),
        ("detection", "min_radius", 2.5),
        ("detection", "min_radius", True),
        ("detection", "workers", True),
        ("detection", "edge_grey_threshold", 300),
        ("detection", "angle_step_degrees", 0),
        ("detection", "max_cells", -1),
        ("detection", "workers", 0),
        ("peaks", "max_hits", -3),
        ("diagnostics", "radius_stride", 0),
    ])
    def test_invalid_values(self, section, key, value):
        """Out of range values are rejected."""
        with pytest.raises(ConfigError):
            load_config(overrides={section: {key: value}})
    
    def test_invalid_log_level(self):
        """Unknown logging levels are rejected."""
        with pytest.raises(ConfigError):
            load_config(overrides={"logging": {"level": "LOUD"}})

"""
Tests for configuration management.

Tests:
- Defaults without a file
- Loading and merging YAML
- Get/set and operator phrase registration
- Save and reload
- Validation
"""

import pytest
import yaml

from quality_specs.utils.config_manager import ConfigManager


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_defaults_without_file(self, temp_dir):
        """A missing file falls back to defaults."""
        config = ConfigManager(temp_dir / "missing.yaml")
        assert config.get('parsing', 'vendor_keywords') == ['vendor']
        assert config.get('parsing', 'apply_default_methods') is False
        assert config.get('cli', 'max_input_chars') == 100000
        assert config.validate_config() == []

    def test_load_merges_with_defaults(self, config_file):
        """Loaded sections override only the keys they name."""
        config = ConfigManager(config_file)
        assert config.get('normalization', 'operator_phrases') == {'not below': '≥'}
        assert config.get('normalization', 'tighten_operator_spacing') is True
        assert config.get('parsing', 'vendor_keywords') == ['vendor', 'supplier']
        assert config.get('parsing', 'method_prefix') == 'Method: '
        assert config.config_path == config_file

    def test_load_empty_file(self, temp_dir):
        """An empty file means defaults."""
        path = temp_dir / "empty.yaml"
        path.write_text("", encoding="utf-8")
        config = ConfigManager(path)
        assert config.get_all_config() == ConfigManager.DEFAULT_CONFIG

    def test_load_missing_file_raises(self, temp_dir):
        """load_config on a missing path raises."""
        with pytest.raises(FileNotFoundError):
            ConfigManager().load_config(temp_dir / "missing.yaml")

    def test_load_invalid_yaml_raises(self, temp_dir):
        """Malformed YAML is reported."""
        path = temp_dir / "bad.yaml"
        path.write_text("parsing: [unclosed", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            ConfigManager(path)

    def test_get_unknown_key(self):
        """Unknown settings raise KeyError."""
        with pytest.raises(KeyError):
            ConfigManager().get('parsing', 'nonexistent')

    def test_set(self):
        """set() updates and creates sections."""
        config = ConfigManager()
        config.set('parsing', 'method_prefix', 'By: ')
        config.set('extra', 'flag', True)
        assert config.get('parsing', 'method_prefix') == 'By: '
        assert config.get('extra', 'flag') is True

    def test_add_operator_phrase(self):
        """Phrases are stored lowercase."""
        config = ConfigManager()
        config.add_operator_phrase('Not Above', '≤')
        assert config.get('normalization', 'operator_phrases') == {'not above': '≤'}

    def test_add_operator_phrase_rejects_non_canonical(self):
        """Only ≥ ≤ > < are accepted."""
        with pytest.raises(ValueError):
            ConfigManager().add_operator_phrase('at least', '>=')

    def test_defaults_not_shared(self):
        """Instances never mutate DEFAULT_CONFIG."""
        config = ConfigManager()
        config.add_operator_phrase('not below', '≥')
        assert ConfigManager.DEFAULT_CONFIG['normalization']['operator_phrases'] == {}

    def test_save_and_reload(self, temp_dir):
        """Saved config round-trips, including Unicode operators."""
        path = temp_dir / "nested" / "saved.yaml"
        config = ConfigManager()
        config.add_operator_phrase('not below', '≥')
        config.save_config(path)

        assert '≥' in path.read_text(encoding="utf-8")
        reloaded = ConfigManager(path)
        assert reloaded.get('normalization', 'operator_phrases') == {'not below': '≥'}

    def test_save_without_path(self):
        """Saving needs a path."""
        with pytest.raises(ValueError):
            ConfigManager().save_config()

    def test_reset_to_defaults(self, config_file):
        config = ConfigManager(config_file)
        config.reset_to_defaults()
        assert config.get('parsing', 'vendor_keywords') == ['vendor']

    def test_get_all_config_is_copy(self):
        config = ConfigManager()
        snapshot = config.get_all_config()
        snapshot['parsing']['vendor_keywords'].append('supplier')
        assert config.get('parsing', 'vendor_keywords') == ['vendor']

    @pytest.mark.parametrize("section,name,value,message", [
        ('normalization', 'operator_phrases', {'at least': '>='}, 'non-canonical'),
        ('normalization', 'operator_phrases', ['at least'], 'mapping'),
        ('parsing', 'vendor_keywords', 'vendor', 'list of strings'),
        ('parsing', 'apply_default_methods', 'yes', 'true or false'),
        ('vocabulary', 'method_casing', ['gc'], 'mapping'),
        ('cli', 'max_input_chars', 0, 'positive integer'),
        ('cli', 'max_input_chars', True, 'positive integer'),
    ])
    def test_validate_config(self, section, name, value, message):
        """Each invalid setting is reported."""
        config = ConfigManager()
        config.set(section, name, value)
        errors = config.validate_config()
        assert any(message in error for error in errors), errors

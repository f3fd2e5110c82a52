"""
Configuration management for the quality specification parser.

Handles loading, updating, and persisting configuration including
operator vocabulary extensions, parsing options, and CLI limits.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Optional
import yaml

from quality_specs.normalization.vocabulary import CANONICAL_OPERATORS

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Manages parser configuration.

    Provides methods to load, update, and persist configuration. Missing
    sections and keys fall back to DEFAULT_CONFIG.
    """

    DEFAULT_CONFIG = {
        'normalization': {
            'operator_phrases': {},
            'tighten_operator_spacing': True,
        },
        'parsing': {
            'vendor_keywords': ['vendor'],
            'apply_default_methods': False,
            'method_prefix': 'Method: ',
        },
        'vocabulary': {
            'method_casing': {},
            'default_methods': {},
        },
        'cli': {
            'max_input_chars': 100000,
        },
    }

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = config_path
        self.config: dict[str, Any] = {}

        if config_path and config_path.exists():
            self.load_config(config_path)
        else:
            logger.info("No config file found, using defaults")
            self.config = copy.deepcopy(self.DEFAULT_CONFIG)

    def load_config(self, path: Path) -> dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            FileNotFoundError: If config file does not exist
            yaml.YAMLError: If config file is invalid
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded_config = yaml.safe_load(f)

            if not loaded_config:
                logger.warning(f"Empty config file at {path}, using defaults")
                self.config = copy.deepcopy(self.DEFAULT_CONFIG)
            else:
                self.config = self._merge_with_defaults(loaded_config)

            self.config_path = path
            logger.info(f"Loaded configuration from {path}")

            return self.config

        except yaml.YAMLError as e:
            logger.error(f"Failed to parse YAML config: {e}")
            raise

    def get(self, section: str, name: str) -> Any:
        """
        Get a configuration value.

        Args:
            section: Section name (e.g., 'parsing')
            name: Key within the section

        Returns:
            Configured value

        Raises:
            KeyError: If section or key not found
        """
        if name not in self.config.get(section, {}):
            raise KeyError(f"Setting '{section}.{name}' not found in configuration")

        return self.config[section][name]

    def set(self, section: str, name: str, value: Any) -> None:
        """
        Update a configuration value.

        Args:
            section: Section name
            name: Key within the section
            value: New value
        """
        if section not in self.config:
            self.config[section] = {}

        old_value = self.config[section].get(name)
        self.config[section][name] = value

        logger.info(f"Updated '{section}.{name}': {old_value} -> {value}")

    def add_operator_phrase(self, phrase: str, operator: str) -> None:
        """
        Register an extra phrase for the operator normalizer.

        Args:
            phrase: Word form, e.g. 'not below'
            operator: One of ≥ ≤ > <

        Raises:
            ValueError: If operator is not canonical
        """
        if operator not in CANONICAL_OPERATORS:
            raise ValueError(
                f"Operator must be one of {', '.join(CANONICAL_OPERATORS)}, got '{operator}'"
            )

        phrases = self.config.setdefault('normalization', {}).setdefault('operator_phrases', {})
        phrases[phrase.lower().strip()] = operator
        logger.debug(f"Added operator phrase '{phrase}' -> '{operator}'")

    def save_config(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save to (uses self.config_path if not provided)

        Raises:
            ValueError: If no path provided and no config_path set
        """
        save_path = path or self.config_path

        if not save_path:
            raise ValueError("No path provided and no config_path set")

        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)

            with open(save_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(
                    self.config,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2,
                    allow_unicode=True,
                )

            logger.info(f"Saved configuration to {save_path}")

        except OSError as e:
            logger.error(f"Failed to save configuration: {e}")
            raise

    def get_all_config(self) -> dict[str, Any]:
        """
        Get the complete configuration dictionary.

        Returns:
            Full configuration dictionary (a copy)
        """
        return copy.deepcopy(self.config)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        logger.info("Configuration reset to defaults")

    def _merge_with_defaults(self, loaded_config: dict) -> dict:
        """Merge loaded config with defaults to ensure all keys exist."""
        merged = copy.deepcopy(self.DEFAULT_CONFIG)

        for section, values in loaded_config.items():
            if section in merged and isinstance(values, dict):
                merged[section].update(values)
            else:
                merged[section] = values

        return merged

    def validate_config(self) -> list[str]:
        """
        Validate the current configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        normalization = self.config.get('normalization', {})
        phrases = normalization.get('operator_phrases') or {}
        if not isinstance(phrases, dict):
            errors.append("operator_phrases must be a mapping of phrase -> operator")
        else:
            for phrase, operator in phrases.items():
                if operator not in CANONICAL_OPERATORS:
                    errors.append(f"Operator phrase '{phrase}' maps to non-canonical '{operator}'")

        parsing = self.config.get('parsing', {})
        keywords = parsing.get('vendor_keywords', [])
        if not isinstance(keywords, list) or not all(isinstance(k, str) for k in keywords):
            errors.append("vendor_keywords must be a list of strings")

        if not isinstance(parsing.get('apply_default_methods', False), bool):
            errors.append("apply_default_methods must be true or false")

        vocabulary = self.config.get('vocabulary', {})
        for table in ('method_casing', 'default_methods'):
            if not isinstance(vocabulary.get(table) or {}, dict):
                errors.append(f"{table} must be a mapping")

        max_chars = self.config.get('cli', {}).get('max_input_chars')
        if not isinstance(max_chars, int) or isinstance(max_chars, bool) or max_chars < 1:
            errors.append("max_input_chars must be a positive integer")

        return errors

"""
DepotView Configuration Management
==================================

Unified configuration for the DepotView import/export engine with support for:
- Message language (English or German validation messages and file names)
- Import and export encodings
- CLI preview limits
- Log level
- Environment variable loading (including ``.env`` files)
- A user config file at ``~/.depotview/config.json``
"""

import os
import json
from typing import Dict, List, Optional, Any
from pathlib import Path
from dotenv import load_dotenv

from .messages import available_languages

# Load environment variables from .env file if it exists
load_dotenv()

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


class DepotViewConfig:
    """
    Main configuration class for DepotView

    Sources are applied in order: defaults, ``config_dict``, environment
    variables, then the user config file.
    """

    def __init__(self, config_dict: Dict = None, config_path: Optional[str] = None):
        """
        Initialize DepotView configuration

        Parameters:
        -----------
        config_dict : Dict, optional
            Dictionary of configuration options
        config_path : str, optional
            Config file to load instead of ~/.depotview/config.json
        """

        self.config = {
            'messages': {
                'language': 'en',
            },

            'import': {
                'encoding': 'utf-8',
                'max_preview_rows': 20,
            },

            'export': {
                'encoding': 'utf-8',
            },

            'logging': {
                'level': 'WARNING',
            },
        }

        if config_dict:
            self._deep_update(self.config, config_dict)

        self._load_from_environment()

        self._load_from_config_file(config_path)

    def _deep_update(self, base_dict: Dict, update_dict: Dict):
        """Deep update nested dictionaries"""
        for key, value in update_dict.items():
            if isinstance(value, dict) and key in base_dict and isinstance(base_dict[key], dict):
                self._deep_update(base_dict[key], value)
            else:
                base_dict[key] = value

    def _load_from_environment(self):
        """Load configuration from environment variables"""

        env_mappings = {
            'DEPOTVIEW_LANGUAGE': ['messages', 'language'],
            'DEPOTVIEW_IMPORT_ENCODING': ['import', 'encoding'],
            'DEPOTVIEW_EXPORT_ENCODING': ['export', 'encoding'],
            'DEPOTVIEW_MAX_PREVIEW_ROWS': ['import', 'max_preview_rows'],
            'DEPOTVIEW_LOG_LEVEL': ['logging', 'level'],
        }

        for env_var, config_path in env_mappings.items():
            env_value = os.getenv(env_var)
            if env_value:
                try:
                    if config_path[-1] == 'max_preview_rows':
                        env_value = int(env_value)
                    self._set_nested_value(self.config, config_path, env_value)
                except (ValueError, TypeError):
                    pass  # Skip invalid values

    def _load_from_config_file(self, config_path: Optional[str] = None):
        """Load configuration from ~/.depotview/config.json if it exists"""
        path = Path(config_path) if config_path else Path.home() / '.depotview' / 'config.json'

        if path.exists():
            try:
                with open(path, 'r') as f:
                    file_config = json.load(f)
                self._deep_update(self.config, file_config)
            except (json.JSONDecodeError, IOError):
                pass  # Skip invalid config files

    def _set_nested_value(self, dictionary: Dict, keys: List[str], value: Any):
        """Set a value in a nested dictionary using a list of keys"""
        for key in keys[:-1]:
            dictionary = dictionary.setdefault(key, {})
        dictionary[keys[-1]] = value

    def get_language(self) -> str:
        """Get the message language code"""
        return str(self.config['messages'].get('language', 'en')).lower()

    def set_language(self, language: str):
        """Set the message language code"""
        self.config['messages']['language'] = language.lower()

    def get_log_level(self) -> str:
        """Get the log level name"""
        return str(self.config['logging'].get('level', 'WARNING')).upper()

    def get_import_encoding(self) -> str:
        return self.config['import']['encoding']

    def get_export_encoding(self) -> str:
        return self.config['export']['encoding']

    def get_max_preview_rows(self) -> int:
        return int(self.config['import']['max_preview_rows'])

    def save_to_file(self, config_path: str = None):
        """
        Save current configuration to file

        Parameters:
        -----------
        config_path : str, optional
            Path to save config file. Defaults to ~/.depotview/config.json
        """
        if config_path is None:
            config_dir = Path.home() / '.depotview'
            config_dir.mkdir(exist_ok=True)
            config_path = config_dir / 'config.json'

        with open(config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def validate_config(self) -> Dict[str, List[str]]:
        """
        Validate current configuration

        Returns:
        --------
        Dict with 'warnings' and 'errors' lists
        """
        warnings = []
        errors = []

        if self.get_language() not in available_languages():
            warnings.append(
                f"Unknown language '{self.get_language()}' - falling back to English messages"
            )

        if self.get_log_level() not in LOG_LEVELS:
            errors.append(f"Invalid log level '{self.get_log_level()}'")

        for section in ('import', 'export'):
            encoding = self.config[section]['encoding']
            try:
                ''.encode(encoding)
            except LookupError:
                errors.append(f"Unknown {section} encoding '{encoding}'")

        if self.get_max_preview_rows() < 1:
            errors.append("max_preview_rows must be at least 1")

        return {'warnings': warnings, 'errors': errors}

    def print_summary(self):
        """Print configuration summary"""
        print("🔧 DepotView Configuration Summary")
        print("=" * 60)

        print("\n🌐 Messages:")
        print(f"  Language: {self.get_language()}")

        print("\n📥 Import:")
        print(f"  Encoding: {self.get_import_encoding()}")
        print(f"  Preview Rows: {self.get_max_preview_rows()}")

        print("\n📤 Export:")
        print(f"  Encoding: {self.get_export_encoding()}")

        print("\n📝 Logging:")
        print(f"  Level: {self.get_log_level()}")

        validation = self.validate_config()
        if validation['warnings']:
            print(f"\n⚠️  Warnings:")
            for warning in validation['warnings']:
                print(f"  • {warning}")

        if validation['errors']:
            print(f"\n❌ Errors:")
            for error in validation['errors']:
                print(f"  • {error}")


# ============================================================================
# Global Instance & Convenience Functions
# ============================================================================

_global_config = None


def get_config() -> DepotViewConfig:
    """Get or create the global DepotView configuration instance"""
    global _global_config
    if _global_config is None:
        _global_config = DepotViewConfig()
    return _global_config


def reset_config():
    """Reset the global configuration to default"""
    global _global_config
    _global_config = None


def setup_depotview(language: str = None, log_level: str = None, **overrides) -> DepotViewConfig:
    """
    Create the global configuration with explicit overrides

    Parameters
    ----------
    language : str, optional
        'en' or 'de'
    log_level : str, optional
        Logging level name
    **overrides : dict
        Nested configuration sections, e.g. ``export={'encoding': 'utf-8-sig'}``

    Returns
    -------
    DepotViewConfig
        The new global configuration
    """
    global _global_config

    config_dict = dict(overrides)
    if language:
        config_dict.setdefault('messages', {})['language'] = language
    if log_level:
        config_dict.setdefault('logging', {})['level'] = log_level

    _global_config = DepotViewConfig(config_dict)

    # Explicit arguments win over environment and file values
    if language:
        _global_config.set_language(language)
    if log_level:
        _global_config.config['logging']['level'] = log_level

    return _global_config

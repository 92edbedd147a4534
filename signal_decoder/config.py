"""
Configuration management for the DBC signal decoder.

This module provides centralized configuration management, supporting:
- Loading from JSON config files
- Environment variable fallback
- Validation and type safety for all settings
"""

import os
import json
import logging
from dataclasses import dataclass, asdict
from typing import Optional, List
from pathlib import Path

from signal_decoder.constants import (
    SINGLE_BIT_POLICY_DEFAULT, PAD_SHORT_PAYLOADS_DEFAULT, LOG_LEVEL_DEFAULT
)
from signal_decoder.services.frame_decoder import FrameDecoder, SingleBitPolicy

logger = logging.getLogger(__name__)

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off'}


def _parse_bool(value) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


@dataclass
class DecoderSettings:
    """Frame decoder configuration settings.

    Attributes:
        single_bit_policy: 'literal' decodes 1-bit signals from their bit,
                           'constant' always yields 1.0
        pad_short_payloads: Zero-pad payloads shorter than the message length
    """
    single_bit_policy: str = SINGLE_BIT_POLICY_DEFAULT
    pad_short_payloads: bool = PAD_SHORT_PAYLOADS_DEFAULT

    def validate(self) -> List[str]:
        """Validate settings and return list of error messages (empty if valid)."""
        errors = []
        valid_policies = {p.value for p in SingleBitPolicy}
        if str(self.single_bit_policy).lower() not in valid_policies:
            errors.append(f"Single-bit policy must be one of {sorted(valid_policies)}")
        if not isinstance(self.pad_short_payloads, bool):
            errors.append("pad_short_payloads must be a boolean")
        return errors


@dataclass
class AppSettings:
    """Application-level configuration settings.

    Attributes:
        log_level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        dbc_dir: Directory holding DBC files loaded at startup
    """
    log_level: str = LOG_LEVEL_DEFAULT
    dbc_dir: Optional[str] = None

    def validate(self) -> List[str]:
        """Validate settings and return list of error messages (empty if valid)."""
        errors = []
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if str(self.log_level).upper() not in valid_levels:
            errors.append(f"Log level must be one of {valid_levels}")
        return errors

    def get_dbc_dir(self) -> str:
        """Get the DBC directory, using default if not set."""
        if self.dbc_dir:
            return os.path.abspath(self.dbc_dir)
        repo_root = Path(__file__).parent.parent
        return str(repo_root / 'data' / 'dbcs')


class ConfigManager:
    """Centralized configuration manager for the decoder.

    Configuration is loaded from multiple sources with priority:
    1. JSON config file (highest priority)
    2. Environment variables
    3. Default values (lowest priority)

    Attributes:
        decoder_settings: Frame decoder configuration
        app_settings: Application-level configuration
        _config_file: Path to JSON config file (if loaded)
    """

    def __init__(self, config_file: Optional[str] = None):
        """Initialize ConfigManager.

        Args:
            config_file: Optional path to JSON config file. If None, will try
                         ~/.signal_decoder/config.json
        """
        self.decoder_settings = DecoderSettings()
        self.app_settings = AppSettings()
        self._config_file: Optional[str] = config_file

        self._load_from_environment()
        if config_file:
            self._load_from_file(config_file)
        else:
            self._load_from_default_locations()

        errors = self.validate()
        if errors:
            logger.warning(f"Configuration validation errors: {errors}")

    def _load_from_environment(self) -> None:
        """Load configuration from environment variables."""
        policy = os.environ.get('DECODER_SINGLE_BIT_POLICY')
        if policy:
            self.decoder_settings.single_bit_policy = policy.lower()

        pad = os.environ.get('DECODER_PAD_SHORT_PAYLOADS')
        if pad:
            parsed = _parse_bool(pad)
            if parsed is None:
                logger.warning(f"Invalid DECODER_PAD_SHORT_PAYLOADS environment variable: {pad}")
            else:
                self.decoder_settings.pad_short_payloads = parsed

        log_level = os.environ.get('LOG_LEVEL')
        if log_level:
            self.app_settings.log_level = log_level.upper()

        dbc_dir = os.environ.get('DBCS_PATH')
        if dbc_dir:
            self.app_settings.dbc_dir = dbc_dir

    def _load_from_file(self, file_path: str) -> bool:
        """Load configuration from JSON file.

        Args:
            file_path: Path to JSON config file

        Returns:
            True if loaded successfully, False otherwise
        """
        if not os.path.exists(file_path):
            logger.debug(f"Config file not found: {file_path}")
            return False

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse config file {file_path}: {e}")
            return False
        except OSError as e:
            logger.error(f"Failed to read config file {file_path}: {e}", exc_info=True)
            return False

        if 'decoder_settings' in data:
            decoder_data = data['decoder_settings']
            if 'single_bit_policy' in decoder_data:
                self.decoder_settings.single_bit_policy = str(decoder_data['single_bit_policy']).lower()
            if 'pad_short_payloads' in decoder_data:
                parsed = _parse_bool(decoder_data['pad_short_payloads'])
                if parsed is None:
                    logger.warning(f"Invalid pad_short_payloads in config: {decoder_data['pad_short_payloads']}")
                else:
                    self.decoder_settings.pad_short_payloads = parsed

        if 'app_settings' in data:
            app_data = data['app_settings']
            if 'log_level' in app_data:
                self.app_settings.log_level = str(app_data['log_level']).upper()
            if 'dbc_dir' in app_data:
                self.app_settings.dbc_dir = app_data['dbc_dir']

        self._config_file = file_path
        logger.info(f"Loaded configuration from {file_path}")
        return True

    def _load_from_default_locations(self) -> None:
        """Try loading from the user config file."""
        user_config_file = Path.home() / '.signal_decoder' / 'config.json'
        if user_config_file.exists():
            self._load_from_file(str(user_config_file))

    def save_to_file(self, file_path: Optional[str] = None) -> bool:
        """Save current configuration to JSON file.

        Args:
            file_path: Optional path to save to. If None, uses _config_file or creates user config.

        Returns:
            True if saved successfully, False otherwise
        """
        save_path = file_path or self._config_file
        if not save_path:
            save_path = str(Path.home() / '.signal_decoder' / 'config.json')

        data = {
            'decoder_settings': asdict(self.decoder_settings),
            'app_settings': asdict(self.app_settings),
        }
        for section in data.values():
            for key in list(section.keys()):
                if section[key] is None:
                    del section[key]

        try:
            os.makedirs(os.path.dirname(os.path.abspath(save_path)), exist_ok=True)
            with open(save_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save config file {save_path}: {e}", exc_info=True)
            return False

        self._config_file = save_path
        logger.info(f"Saved configuration to {save_path}")
        return True

    def validate(self) -> List[str]:
        """Validate all configuration settings.

        Returns:
            List of error messages (empty if all valid)
        """
        errors = []
        errors.extend(self.decoder_settings.validate())
        errors.extend(self.app_settings.validate())
        return errors

    def build_decoder(self) -> FrameDecoder:
        """Create a FrameDecoder configured from decoder_settings.

        Raises:
            ConfigurationError: If the single-bit policy is invalid
        """
        return FrameDecoder(single_bit_policy=self.decoder_settings.single_bit_policy)

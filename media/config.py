"""
Media Configuration Handler

Reads optional YAML overrides for the media limits.
Provides defaults from config/settings.py and validation.

The result is always a frozen MediaLimits: the YAML file is read once at
process start and the limits never change afterwards.
"""

import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from config.settings import MEDIA_CONFIG_PATH
from media.constants import MediaLimits


class MediaConfig:
    """
    Media configuration with YAML file support.

    Reads from config/media.yaml if it exists, otherwise uses defaults.
    Unknown keys in the file are ignored with a warning.

    Usage:
        config = MediaConfig()
        limits = config.limits
        print(limits.compression_target_bytes)
    """

    DEFAULT_CONFIG_PATH = MEDIA_CONFIG_PATH

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file (None = use default)

        Raises:
            ValueError: If the file contains invalid limit values
        """
        self.logger = logging.getLogger(__name__)
        self.config_path = Path(config_path or self.DEFAULT_CONFIG_PATH)

        self._config = self._load_config()
        self._limits = self._build_limits(self._config)

        self.logger.info(f"Media config loaded from {self.config_path}")

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values from settings"""
        defaults = asdict(MediaLimits())
        defaults["supported_mime_types"] = sorted(defaults["supported_mime_types"])
        return defaults

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file or use defaults"""
        config = self._get_defaults()

        if not self.config_path.exists():
            self.logger.info(
                f"Config file not found at {self.config_path}. Using defaults.",
            )
            return config

        try:
            with open(self.config_path, "r") as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self.logger.warning(
                f"Failed to load config from {self.config_path}: {e}. "
                f"Using defaults.",
            )
            return config

        if not isinstance(file_config, dict):
            self.logger.warning(
                f"Config file {self.config_path} is not a mapping. Using defaults.",
            )
            return config

        known = {f.name for f in fields(MediaLimits)}
        for key, value in file_config.items():
            if key not in known:
                self.logger.warning(f"Ignoring unknown media config key: {key}")
                continue
            config[key] = value

        self.logger.info(f"Loaded config from {self.config_path}")
        return config

    def _build_limits(self, config: Dict[str, Any]) -> MediaLimits:
        """Freeze configuration into MediaLimits (validates values)"""
        return MediaLimits(
            max_file_size_bytes=int(config["max_file_size_bytes"]),
            supported_mime_types=frozenset(config["supported_mime_types"]),
            chunk_size_bytes=int(config["chunk_size_bytes"]),
            max_retries=int(config["max_retries"]),
            retry_delay_ms=int(config["retry_delay_ms"]),
            compression_target_bytes=int(config["compression_target_bytes"]),
            compression_quality=float(config["compression_quality"]),
            cache_ttl_ms=int(config["cache_ttl_ms"]),
            cache_max_entries=int(config["cache_max_entries"]),
        )

    @property
    def limits(self) -> MediaLimits:
        """Frozen media limits"""
        return self._limits

    def save_defaults(self) -> None:
        """Write the default configuration to config_path (operator helper)"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            yaml.dump(
                self._get_defaults(),
                f,
                default_flow_style=False,
                sort_keys=False,
                indent=2,
            )
        self.logger.info(f"Config saved to {self.config_path}")

    def to_dict(self) -> Dict[str, Any]:
        """Get configuration as dictionary"""
        return self._config.copy()

    def __repr__(self) -> str:
        return f"MediaConfig(path={self.config_path})"


def load_media_limits(config_path: Optional[Path] = None) -> MediaLimits:
    """Convenience: build MediaLimits from defaults + YAML overrides"""
    return MediaConfig(config_path).limits

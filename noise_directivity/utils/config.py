"""
Configuration management using Pydantic for validation.

This module provides type-safe configuration loading and validation
for the directivity engine.
"""
from pathlib import Path
from typing import Optional, Literal
from pydantic import BaseModel, Field, field_validator
import yaml
import os

from noise_directivity.utils.exceptions import ConfigurationError


class LoggingSettings(BaseModel):
    """Logging output settings."""
    level: str = Field("INFO", description="Logging level name")
    json_output: bool = Field(False, description="Emit JSON instead of console logs")
    log_file: Optional[Path] = Field(None, description="Optional log file path")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Accept only standard logging level names."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown logging level: {v}")
        return level

    @field_validator('log_file', mode='before')
    @classmethod
    def expand_env_vars(cls, v):
        """Expand environment variables in the log file path."""
        if isinstance(v, str):
            for var in ['DATA_ROOT', 'HOME', 'PWD']:
                if f'${{{var}}}' in v:
                    v = v.replace(f'${{{var}}}', os.environ.get(var, ''))
            return Path(v)
        return v


class DirectivityConfig(BaseModel):
    """Complete configuration for a directivity store."""
    interpolation: Literal["nearest", "bilinear"] = Field(
        "bilinear", description="Attenuation resolution method"
    )
    validate_frequencies: bool = Field(
        True, description="Reject malformed frequency axes at construction"
    )
    degrees: bool = Field(
        False, description="Tabular sample angles are given in degrees"
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


def load_config(config_path: Path) -> DirectivityConfig:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to YAML config file

    Returns:
        Validated DirectivityConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is malformed
        ConfigurationError: If the document root is not a mapping
        ValidationError: If config validation fails

    Example:
        >>> config = load_config(Path("config/directivity.yaml"))
        >>> print(config.interpolation)
        bilinear
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Config root must be a mapping, got {type(config_dict).__name__}"
        )

    return DirectivityConfig(**config_dict)


def get_default_config() -> DirectivityConfig:
    """
    Get default configuration.

    Returns:
        Default DirectivityConfig
    """
    return DirectivityConfig()

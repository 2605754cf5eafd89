"""
Configuration data models for sizecmp.

This module defines the settings read from a sizecmp YAML file: the
defaults applied to queries that leave arguments out, and logging options.
"""

import logging
from typing import Dict, List, Any
from pathlib import Path
from pydantic import BaseModel, Field, field_validator

from ..errors import InvalidOperator, InvalidSize
from ..tools.size_parser import parse_size
from .size_query import ComparisonOperator, DEFAULT_OPERATOR, DEFAULT_PATH, DEFAULT_SIZE


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class QueryDefaults(BaseModel):
    """
    Defaults for arguments a query leaves out.

    Attributes:
        path: Root directory to walk
        size: Size expression to compare against
        operator: Comparison operator name
    """

    path: str = Field(DEFAULT_PATH, min_length=1, description="Default root directory")
    size: str = Field(DEFAULT_SIZE, description="Default size expression")
    operator: str = Field(DEFAULT_OPERATOR, description="Default comparison operator")

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Expand a leading ~ in the default root."""
        if not v.strip():
            raise ValueError("Default path cannot be empty")
        return str(Path(v.strip()).expanduser())

    @field_validator('size', mode='before')
    @classmethod
    def validate_size(cls, v: Any) -> str:
        """Make sure the default size parses. YAML may hand over a bare number."""
        v = str(v).strip() if v is not None else ''
        v = v or DEFAULT_SIZE
        try:
            parse_size(v)
        except InvalidSize as e:
            raise ValueError(f"Invalid default size '{v}': {e}")
        return v

    @field_validator('operator')
    @classmethod
    def validate_operator(cls, v: str) -> str:
        """Make sure the default operator is a known one."""
        try:
            return ComparisonOperator.from_value((v or '').strip().lower()).value
        except InvalidOperator as e:
            raise ValueError(f"Invalid default operator: {e}")

    def get_threshold(self) -> int:
        """Get the default size in bytes."""
        return parse_size(self.size)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class LoggingConfig(BaseModel):
    """
    Logging settings used by the command-line entry point.

    Attributes:
        level: Name of the root log level
        format: logging format string
    """

    level: str = Field("INFO", description="Root log level")
    format: str = Field(DEFAULT_LOG_FORMAT, min_length=1, description="Log record format")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize the level name."""
        level = (v or '').strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {LOG_LEVELS}")
        return level

    def get_level(self) -> int:
        """Get the numeric logging level."""
        return logging.getLevelName(self.level)

    def hides_diagnostics(self) -> bool:
        """Diagnostics are logged at WARNING; a stricter level drops them."""
        return self.get_level() > logging.WARNING

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class SizeCmpConfig(BaseModel):
    """
    Main configuration class for sizecmp.

    Attributes:
        defaults: Defaults for query arguments
        logging: Logging settings
    """

    defaults: QueryDefaults = Field(default_factory=QueryDefaults, description="Query defaults")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    def validate_configuration(self) -> List[str]:
        """
        Check the configuration for problems that are not hard errors.

        Returns:
            List of warning messages
        """
        warnings = []

        default_root = Path(self.defaults.path)
        if not default_root.exists():
            warnings.append(f"Default path does not exist: {default_root}")
        elif not default_root.is_dir():
            warnings.append(f"Default path is not a directory: {default_root}")

        if self.logging.hides_diagnostics():
            warnings.append(f"Log level {self.logging.level} hides size_cmp diagnostics, which are logged at WARNING")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'defaults': self.defaults.to_dict(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SizeCmpConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Path: {self.defaults.path}"]
        parts.append(f"Size: {self.defaults.size}")
        parts.append(f"Operator: {self.defaults.operator}")
        parts.append(f"Log level: {self.logging.level}")
        return " | ".join(parts)

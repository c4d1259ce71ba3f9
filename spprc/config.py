"""
Configuration module for spprc.

This module provides library-wide settings: logging level, numerical
tolerances and the default search budget applied when a LabelingConfig
is not given explicitly.

Configuration can be set via:
1. Environment variables (SPPRC_*)
2. Config file (./spprc.toml or ~/.spprc/config.toml)
3. Programmatic API

Example:
    >>> from spprc.config import config
    >>> config.default_max_insertions = 100000
    >>> config.get_tolerance("reduced_cost")
    1e-06
"""

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from spprc.core.errors import ConfigurationError

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env_int(name: str, default: int) -> int:
    """Read a non-negative integer from the environment."""
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value}")
    return value


@dataclass
class SPPRCConfig:
    """
    Configuration for the spprc library.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        default_max_insertions: Insertion budget when none is given (0 = unlimited)
        default_max_steps: Scheduler step budget when none is given (0 = unlimited)
        tolerances: Numerical tolerances (reduced_cost: threshold used by
                    pricers to decide whether a column improves)
    """

    # Logging
    log_level: str = field(
        default_factory=lambda: os.environ.get('SPPRC_LOG_LEVEL', 'WARNING').upper()
    )

    # Search budget
    default_max_insertions: int = field(
        default_factory=lambda: _env_int('SPPRC_MAX_INSERTIONS', 0)
    )
    default_max_steps: int = field(
        default_factory=lambda: _env_int('SPPRC_MAX_STEPS', 0)
    )

    # Numerical tolerances
    tolerances: dict[str, float] = field(default_factory=lambda: {
        "reduced_cost": 1e-6,
    })

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
            raise ConfigurationError(f"Unknown log level {self.log_level!r}")
        if self.default_max_insertions < 0 or self.default_max_steps < 0:
            raise ConfigurationError("Default budgets must be >= 0")

    # =========================================================================
    # Tolerance helpers
    # =========================================================================

    def get_tolerance(self, name: str) -> float:
        """Get a tolerance value by name."""
        return self.tolerances.get(name, 1e-6)

    def set_tolerance(self, name: str, value: float) -> None:
        """Set a tolerance value."""
        if value < 0:
            raise ConfigurationError(f"Tolerance {name} must be >= 0, got {value}")
        self.tolerances[name] = value

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "log_level": self.log_level,
            "default_max_insertions": self.default_max_insertions,
            "default_max_steps": self.default_max_steps,
            "tolerances": self.tolerances.copy(),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'SPPRCConfig':
        """Create config from dictionary (missing keys keep their defaults)."""
        defaults = cls()
        tolerances = defaults.tolerances
        tolerances.update(d.get("tolerances", {}))
        return cls(
            log_level=d.get("log_level", defaults.log_level),
            default_max_insertions=int(
                d.get("default_max_insertions", defaults.default_max_insertions)
            ),
            default_max_steps=int(d.get("default_max_steps", defaults.default_max_steps)),
            tolerances=tolerances,
        )

    def save(self, path: Optional[Path] = None) -> None:
        """
        Save configuration to a TOML file.

        Args:
            path: Path to save to (default: ./spprc.toml)
        """
        if path is None:
            path = Path("spprc.toml")

        lines = [
            "# spprc configuration",
            "",
            "[general]",
            f'log_level = "{self.log_level}"',
            "",
            "[budget]",
            f"default_max_insertions = {self.default_max_insertions}",
            f"default_max_steps = {self.default_max_steps}",
            "",
            "[tolerances]",
        ]
        for name, value in self.tolerances.items():
            lines.append(f"{name} = {value}")

        Path(path).write_text("\n".join(lines) + "\n")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'SPPRCConfig':
        """
        Load configuration from a TOML file.

        Args:
            path: Path to load from (default: ./spprc.toml or ~/.spprc/config.toml)

        Returns:
            Loaded configuration (or default if file not found)
        """
        if path is None:
            local_config = Path("spprc.toml")
            user_config = Path.home() / ".spprc" / "config.toml"

            if local_config.exists():
                path = local_config
            elif user_config.exists():
                path = user_config
            else:
                return cls()

        path = Path(path)
        if not path.exists():
            return cls()

        # Simple TOML-like parsing of key = value lines grouped in sections
        config_dict: dict[str, Any] = {"tolerances": {}}
        current_section = None

        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if line.startswith("[") and line.endswith("]"):
                current_section = line[1:-1]
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip('"')

                if value.isdigit():
                    value = int(value)
                else:
                    try:
                        value = float(value)
                    except ValueError:
                        pass

                if current_section == "tolerances":
                    config_dict["tolerances"][key] = float(value)
                else:
                    config_dict[key] = value

        return cls.from_dict(config_dict)


# Global configuration instance
config = SPPRCConfig()


def configure_logging(level: Optional[str] = None, stream=None) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Args:
        level: Logging level name (default: config.log_level)
        stream: Output stream (default: sys.stderr)

    Returns:
        The 'spprc' logger
    """
    logger = logging.getLogger("spprc")
    logger.setLevel((level or config.log_level).upper())

    for handler in list(logger.handlers):
        if getattr(handler, '_spprc_handler', False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler._spprc_handler = True
    logger.addHandler(handler)
    return logger

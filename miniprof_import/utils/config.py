"""
Configuration management for miniprof-import.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass
from typing import Any

from dotenv import load_dotenv

from miniprof_import.output.file_write import FileCompression


@dataclass
class Config:
    """Application configuration."""

    # Output settings
    compression: FileCompression = FileCompression.FAST

    # Console
    show_progress: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create config from environment variables.

        Raises:
            ValueError: If MINIPROF_COMPRESSION is not a known level
        """
        load_dotenv()

        compression = os.getenv("MINIPROF_COMPRESSION", FileCompression.FAST.value)
        try:
            level = FileCompression(compression.strip().lower())
        except ValueError:
            choices = ", ".join(c.value for c in FileCompression)
            raise ValueError(
                f"Invalid MINIPROF_COMPRESSION '{compression}' (expected one of: {choices})"
            ) from None

        return cls(
            compression=level,
            show_progress=os.getenv("MINIPROF_PROGRESS", "1").lower() in ("1", "true", "yes"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "compression": self.compression.value,
            "show_progress": self.show_progress,
        }


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance; None reloads it on next use."""
    global _config
    _config = config

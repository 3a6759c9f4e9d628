"""Configuration management for stlview using Pydantic."""

from pathlib import Path
from typing import Literal, Optional

import tomli
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stlview.core.exceptions import ConfigurationError


class LoaderConfig(BaseModel):
    """Configuration for reading STL files from disk."""

    model_config = ConfigDict(frozen=True)

    max_file_size: int = Field(
        1_000_000_000, gt=0, description="Largest file (bytes) read into memory"
    )
    require_stl_extension: bool = Field(
        False, description="Reject paths whose suffix is not .stl"
    )


class ViewConfig(BaseModel):
    """Configuration for framing a loaded mesh."""

    model_config = ConfigDict(frozen=True)

    camera_distance_factor: float = Field(
        3.0, gt=0, description="Camera distance as a multiple of the bounding radius"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", description="Logging level"
    )
    format: Literal["json", "console"] = Field(
        "console", description="Log format"
    )
    timestamp_format: str = Field("iso", description="structlog timestamp format")
    colorize: bool = Field(True, description="Colour console output on a TTY")
    log_dir: Optional[Path] = Field(None, description="Directory for log files")
    log_to_file: bool = Field(False, description="Enable file logging")


class Config(BaseModel):
    """Main configuration for stlview."""

    model_config = ConfigDict(frozen=True)

    loader: LoaderConfig = Field(
        default_factory=LoaderConfig, description="Loader configuration"
    )
    view: ViewConfig = Field(
        default_factory=ViewConfig, description="View configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_toml(cls, path: Path | str) -> "Config":
        """Load configuration from TOML file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the TOML or its values are invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "rb") as f:
            try:
                data = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise ConfigurationError(
                    f"Invalid TOML in {path}: {e}", details={"path": str(path)}
                ) from e

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create configuration from dictionary.

        Raises:
            ConfigurationError: If a value fails validation
        """
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e.error_count()} error(s)",
                details={"errors": e.errors()},
            ) from e

    def to_dict(self) -> dict:
        """Convert configuration to a TOML-serialisable dictionary."""
        return self.model_dump(mode="json", exclude_none=True)

    def save_toml(self, path: Path | str) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save TOML file
        """
        import tomli_w

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            tomli_w.dump(self.to_dict(), f)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()


def load_config(path: Optional[Path | str] = None) -> Config:
    """Load configuration from file or return defaults.

    Args:
        path: Optional path to configuration file

    Returns:
        Config instance
    """
    if path:
        return Config.from_toml(path)
    return get_default_config()

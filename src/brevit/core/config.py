"""
Configuration management for Brevit.

Loads settings from environment variables and provides a centralized
configuration object for all components.

Configuration precedence (highest to lowest):
1. Explicit kwargs (passed to BrevitConfig)
2. Environment variables (BREVIT_* prefix)
3. .env file
4. pyproject.toml [tool.brevit] section
5. Hardcoded defaults
"""

import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

# Import tomllib for Python 3.11+, tomli for Python 3.10
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from ..models.enums import (
    ImageOptimizationMode,
    JsonOptimizationMode,
    LogLevel,
    TextOptimizationMode,
)

logger = logging.getLogger(__name__)


def load_pyproject_defaults() -> dict[str, Any]:
    """
    Load defaults from [tool.brevit] section in pyproject.toml.

    Precedence: kwargs > env vars > .env file > pyproject.toml > hardcoded defaults

    Returns:
        Dictionary of configuration overrides from pyproject.toml
    """
    pyproject_path = Path("pyproject.toml")

    if not pyproject_path.exists():
        return {}

    try:
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        logger.warning(f"Could not load pyproject.toml: {e}")
        return {}
    except tomllib.TOMLDecodeError as e:
        logger.warning(f"Could not parse pyproject.toml: {e}")
        return {}

    tool_config = data.get("tool", {}).get("brevit", {})

    if tool_config:
        logger.debug(f"Loaded {len(tool_config)} settings from pyproject.toml")

    return tool_config


class PyProjectTomlSettingsSource(PydanticBaseSettingsSource):
    """
    A pydantic-settings source that loads configuration from pyproject.toml.

    This custom settings source enables loading configuration from the [tool.brevit]
    section in pyproject.toml, following Python packaging standards.
    """

    def get_field_value(self, field_name: str, field_info: Any) -> tuple[Any, str, bool]:
        """Not used in this implementation."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load and return configuration from pyproject.toml."""
        return load_pyproject_defaults()


class BrevitConfig(BaseSettings):
    """
    Rules for the optimization pipeline.

    One instance is the base configuration of a BrevitClient. The automatic
    entry point derives a per-call copy with the winning strategy's
    overrides merged in; the base instance is never mutated.
    """

    model_config = SettingsConfigDict(
        env_prefix="BREVIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Optimization modes
    json_mode: JsonOptimizationMode = Field(
        default=JsonOptimizationMode.FLATTEN, description="JSON optimization mode"
    )
    text_mode: TextOptimizationMode = Field(
        default=TextOptimizationMode.CLEAN, description="Long text optimization mode"
    )
    image_mode: ImageOptimizationMode = Field(
        default=ImageOptimizationMode.OCR, description="Image optimization mode"
    )

    json_paths_to_keep: list[str] = Field(
        default_factory=list,
        description="Dotted JSON paths to keep in filter mode, e.g. 'user.name'",
    )
    long_text_threshold: int = Field(
        default=500, description="Strings longer than this many characters are long text"
    )

    # Abbreviation post-pass
    enable_abbreviations: bool = Field(
        default=False, description="Alias repeated top-level path segments"
    )
    abbreviation_threshold: int = Field(
        default=2, description="Minimum occurrences before a segment gets an alias"
    )

    # Text collaborators
    summary_stub_length: int = Field(
        default=150, description="Characters kept by the stub summarizer"
    )
    summarizer_fast_model: str = Field(
        default="gemini/gemini-1.5-flash-8b",
        description="LiteLLM model used for summarize_fast",
    )
    summarizer_quality_model: str = Field(
        default="gemini/gemini-2.0-flash-exp",
        description="LiteLLM model used for summarize_high_quality",
    )
    summarizer_max_tokens: int = Field(
        default=512, description="Maximum output tokens for LLM summaries"
    )

    # Logging
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    log_file: Path | None = Field(
        default=None,
        description="Path to application log file (set to None to disable file logging)",
    )
    log_max_bytes: int = Field(
        default=10 * 1024 * 1024, description="Maximum log file size before rotation"  # 10MB
    )
    log_backup_count: int = Field(default=5, description="Number of backup log files to keep")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize the sources and their priority for loading configuration.

        Returns:
            Tuple of settings sources in priority order
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            PyProjectTomlSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("long_text_threshold")
    @classmethod
    def validate_long_text_threshold(cls, v: int) -> int:
        """Ensure the long text threshold is a positive character count"""
        if v <= 0:
            raise ValueError(f"long_text_threshold must be positive, got {v}")
        return v

    @field_validator("abbreviation_threshold")
    @classmethod
    def validate_abbreviation_threshold(cls, v: int) -> int:
        """Ensure abbreviation threshold is at least one occurrence"""
        if v < 1:
            raise ValueError(f"abbreviation_threshold must be >= 1, got {v}")
        if v == 1:
            logger.warning(
                "abbreviation_threshold is 1; segments seen only once will also be aliased"
            )
        return v

    @field_validator("summary_stub_length", "summarizer_max_tokens")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Ensure length limits are positive"""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    def ensure_log_directory(self) -> None:
        """Ensure the log directory exists."""
        if self.log_file and self.log_file.parent:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)


# Global configuration instance
_config: BrevitConfig | None = None


def get_config() -> BrevitConfig:
    """
    Get the global configuration instance.

    Returns:
        BrevitConfig instance
    """
    global _config
    if _config is None:
        _config = BrevitConfig()
        _config.ensure_log_directory()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None

"""Configuration Management.

Generation and logging settings with validation. Values load from
environment variables (prefix ``DICOM_SYNTH_``) and an optional .env file.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from dicom_synth.core.constants import DEFAULT_IMAGE_HEIGHT, DEFAULT_IMAGE_WIDTH
from dicom_synth.output.layout import FileSystemLayout


class OutputMode(str, Enum):
    """Where generated images go.

    - FILES: one DICOM file per image
    - CSV: study/series/image tables, no DICOM files
    """

    FILES = "files"
    CSV = "csv"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GenerationConfig(BaseSettings):
    """Generator configuration.

    Controls which modalities are drawn, how many images may be emitted
    and where they are written.
    """

    model_config = SettingsConfigDict(env_prefix="DICOM_SYNTH_", extra="ignore")

    modalities: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Modality codes to generate (empty = all supported)",
    )
    max_images: int | None = Field(
        default=None, ge=0, description="Global image quota (None = unbounded)"
    )
    no_pixels: bool = Field(
        default=False, description="Write DICOM files without pixel data"
    )
    output_mode: OutputMode = Field(
        default=OutputMode.FILES, description="Output sink: files or csv"
    )
    layout: FileSystemLayout = Field(
        default=FileSystemLayout.STUDY_YEAR_MONTH_DAY,
        description="Directory layout for DICOM files",
    )
    seed: int | None = Field(default=None, description="Random seed")
    image_width: int = Field(
        default=DEFAULT_IMAGE_WIDTH, ge=1, le=4096, description="Placeholder width"
    )
    image_height: int = Field(
        default=DEFAULT_IMAGE_HEIGHT, ge=1, le=4096, description="Placeholder height"
    )

    @field_validator("modalities", mode="before")
    @classmethod
    def split_modalities(cls, v: object) -> object:
        """Accept "CT,MR" as well as a list, normalised to upper case."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            return [str(m).strip().upper() for m in v if str(m).strip()]
        return v


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="DICOM_SYNTH_", extra="ignore")

    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: str = Field(default="console", description="Log format: json or console")
    log_file: Path | None = Field(default=None, description="Optional log file")

    @field_validator("log_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "console"):
            raise ValueError(f"log_format must be 'json' or 'console', got {v!r}")
        return v


class Settings(BaseSettings):
    """Main application settings.

    Usage:
        from dicom_synth.core.config import get_settings
        settings = get_settings()
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


_settings: Settings | None = None


def get_settings(force_reload: bool = False) -> Settings:
    """Get application settings (singleton).

    Args:
        force_reload: Force reload settings from environment

    Returns:
        Settings instance

    """
    global _settings
    if _settings is None or force_reload:
        _settings = Settings()
    return _settings

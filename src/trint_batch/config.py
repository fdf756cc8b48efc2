"""Configuration loading and validation."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from trint_batch.errors import ConfigurationError

MIN_CONCURRENT = 1
MAX_CONCURRENT = 6

API_KEY_ID_ENV = "TRINT_API_KEY_ID"
API_KEY_SECRET_ENV = "TRINT_API_KEY_SECRET"


def _check_concurrent(value: int) -> int:
    if not MIN_CONCURRENT <= value <= MAX_CONCURRENT:
        raise ValueError(
            f"Concurrent uploads must be between {MIN_CONCURRENT} and {MAX_CONCURRENT}"
        )
    return value


class UploadDefaults(BaseModel):
    """Defaults read from an optional YAML config file."""

    model_config = ConfigDict(extra="forbid")

    server: str | None = None
    language: str | None = None
    concurrent: int = MIN_CONCURRENT
    timeout: float | None = None

    @field_validator("concurrent")
    @classmethod
    def validate_concurrent(cls, v: int) -> int:
        return _check_concurrent(v)


class UploadOptions(BaseModel):
    """A single batch upload request: credentials, file selection and run flags."""

    model_config = ConfigDict(frozen=True)

    api_key_id: str | None = None
    api_key_secret: str | None = None
    server: str | None = None
    files: list[str] = []
    patterns: list[str] = []
    pattern_files: list[Path] = []
    language: str | None = None
    concurrent: int = MIN_CONCURRENT
    timeout: float | None = None
    debug: bool = False
    dry_run: bool = False

    @field_validator("concurrent")
    @classmethod
    def validate_concurrent(cls, v: int) -> int:
        return _check_concurrent(v)

    @field_validator("pattern_files", mode="before")
    @classmethod
    def expand_paths(cls, v: list[str | Path]) -> list[Path]:
        """Expand environment variables and ~ in pattern file paths."""
        return [Path(os.path.expandvars(os.path.expanduser(str(p)))) for p in v]


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    loc = ".".join(str(part) for part in error["loc"])
    msg = error["msg"].removeprefix("Value error, ")
    return f"{loc}: {msg}" if loc else msg


def build_options(**values) -> UploadOptions:
    """Construct UploadOptions, reporting invalid values as ConfigurationError."""
    try:
        return UploadOptions(**values)
    except ValidationError as e:
        raise ConfigurationError(_first_error(e)) from e


def load_upload_config(config_path: Path) -> UploadDefaults:
    """Load upload defaults from a YAML file."""
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return UploadDefaults()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    try:
        return UploadDefaults.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"{config_path}: {_first_error(e)}") from e

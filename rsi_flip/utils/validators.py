"""YAML schema validation and config loading.

Validates the flip configuration (flip.v1.yaml) with pydantic:
    - directions: 1 (single image) or 4 (N/S/E/W sprite sheet)
    - workers: row-band threads used by the pixel transform
    - output: filename suffix and Pillow output format
    - logging: level, optional file, JSON mode, console color, file rotation

Fail-fast: bad values are rejected at load time with the offending file and
field in the message, before any image is touched.

Usage:
    from rsi_flip.utils import validators
    cfg = validators.load_flip_config()              # packaged default
    cfg = validators.load_flip_config("flip.yaml")   # explicit path
"""

import io
from pathlib import Path
from typing import Literal, Optional, Union

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "configs" / "flip.v1.yaml"

VALID_DIRECTIONS = (1, 4)
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
ROTATE_WHEN = ("S", "M", "H", "D", "MIDNIGHT", "W0", "W1", "W2", "W3", "W4", "W5", "W6")


# ============================================================================
# FLIP SCHEMA V1
# ============================================================================

class OutputConfig(BaseModel):
    """Output naming and encoding."""
    suffix: str = Field("-flipped", description="Appended to the source stem")
    format: str = Field("png", description="Pillow format name, case-insensitive")

    @field_validator('suffix')
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        if not v:
            raise ValueError("Output suffix must be non-empty (would overwrite the source)")
        if "/" in v or "\\" in v:
            raise ValueError(f"Output suffix must not contain path separators, got: {v!r}")
        return v

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        fmt = v.upper()
        Image.init()
        if fmt not in Image.SAVE:
            raise ValueError(f"Pillow cannot write format {v!r}")
        # Sprites carry alpha; formats such as JPEG refuse RGBA at save time
        try:
            Image.new("RGBA", (1, 1)).save(io.BytesIO(), format=fmt)
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise ValueError(f"Format {v!r} cannot store RGBA pixels: {e}") from e
        return fmt

    @property
    def extension(self) -> str:
        """File extension for the output format, without the dot."""
        Image.init()
        if Image.EXTENSION.get("." + self.format.lower()) == self.format:
            return self.format.lower()
        for ext, fmt in Image.EXTENSION.items():
            if fmt == self.format:
                return ext.lstrip(".")
        return self.format.lower()


class RotateConfig(BaseModel):
    """Log file rotation; unset fields fall back to setup_logging() defaults."""
    mode: Literal["size", "time"] = Field("size", description="Rotate by file size or by clock")
    max_bytes: Optional[int] = Field(None, ge=1, description="Size mode: bytes before rollover")
    backup_count: Optional[int] = Field(None, ge=0, description="Rotated files kept")
    when: Optional[str] = Field(None, description="Time mode: S, M, H, D, MIDNIGHT or W0-W6")
    interval: Optional[int] = Field(None, ge=1, description="Time mode: units of 'when' per rollover")

    @field_validator('when')
    @classmethod
    def validate_when(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        when = v.upper()
        if when not in ROTATE_WHEN:
            raise ValueError(f"Rotation 'when' must be one of {ROTATE_WHEN}, got: {v}")
        return when

    def as_handler_kwargs(self) -> dict:
        """Rotation dict in the shape setup_logging(rotate=...) expects."""
        return self.model_dump(exclude_none=True)


class LoggingConfig(BaseModel):
    """Logging options forwarded to logging_config.setup_logging()."""
    level: str = Field("INFO", description="Root log level")
    file: Optional[str] = Field(None, description="Optional log file path")
    json_format: bool = Field(False, alias="json", description="JSON lines in the log file")
    color: bool = Field(True, description="ANSI colors on the console")
    rotate: Optional[RotateConfig] = Field(None, description="Log file rotation, None for a plain file")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of {LOG_LEVELS}, got: {v}")
        return level


class FlipConfigV1(BaseModel):
    """Complete flip configuration (flip.v1.yaml schema)."""
    schema_version: str = Field("flip.v1", alias="schema", description="Schema version")
    directions: int = Field(4, description="Directions in the RSI state: 1 or 4")
    workers: int = Field(1, ge=1, le=256, description="Threads for the pixel transform")
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "flip.v1":
            raise ValueError(f"Expected schema 'flip.v1', got '{v}'")
        return v

    @field_validator('directions')
    @classmethod
    def validate_directions(cls, v: int) -> int:
        if v not in VALID_DIRECTIONS:
            raise ValueError(f"Directions must be 1 or 4, got {v}")
        return v


def load_flip_config(path: Optional[Union[str, Path]] = None) -> FlipConfigV1:
    """Load and validate flip config from YAML.

    Parameters
    ----------
    path : Union[str, Path], optional
        Path to a flip.v1.yaml file; None loads the packaged default

    Returns
    -------
    FlipConfigV1
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (message names the file and the offending field)
    """
    from . import fs

    path = DEFAULT_CONFIG_PATH if path is None else Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Flip config not found: {path}")

    data = fs.load_yaml(path) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Flip config at {path} must be a mapping, got {type(data).__name__}")

    try:
        return FlipConfigV1(**data)
    except ValidationError as e:
        raise ValueError(f"Flip config validation failed at {path}: {e}") from e

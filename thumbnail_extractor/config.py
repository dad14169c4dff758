"""Configuration models with Pydantic validation."""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

MAX_INT32 = 2**31 - 1


class ExtractionSettings(BaseModel):
    """Extraction settings for one run of the thumbnail extractor."""

    markers: List[str] = Field(
        default=["Image8"],
        min_length=1,
        description="Marker strings that precede an embedded image record",
    )
    delimiter_length: int = Field(
        default=1, ge=0, description="Bytes skipped between marker and dimensions"
    )
    max_width: int = Field(
        default=2000, ge=1, le=MAX_INT32, description="Largest accepted width"
    )
    max_height: int = Field(
        default=2000, ge=1, le=MAX_INT32, description="Largest accepted height"
    )
    output_format: str = Field(default="bmp", description="Output format (bmp, png)")
    channel_order: str = Field(
        default="bgr", description="Channel order of the embedded pixel data"
    )
    output_directory: Path = Field(
        default=Path("."), description="Directory extracted images are written to"
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(
        default=None, description="Optional file to mirror log output into"
    )
    chunk_size: int = Field(
        default=65536, ge=16, description="Read size used when scanning input"
    )

    @field_validator("markers")
    @classmethod
    def validate_markers(cls, v: List[str]) -> List[str]:
        """Markers must be non-empty and representable as single bytes."""
        for marker in v:
            if not marker:
                raise ValueError("Markers must not be empty")
            try:
                marker.encode("latin-1")
            except UnicodeEncodeError:
                raise ValueError(f"Marker {marker!r} is not latin-1 encodable")
        return v

    @field_validator("output_format")
    @classmethod
    def validate_output_format(cls, v: str) -> str:
        valid_formats = {"bmp", "png"}
        if v.lower() not in valid_formats:
            raise ValueError(f"output_format must be one of {valid_formats}")
        return v.lower()

    @field_validator("channel_order")
    @classmethod
    def validate_channel_order(cls, v: str) -> str:
        valid_orders = {"bgr", "rgb"}
        if v.lower() not in valid_orders:
            raise ValueError(f"channel_order must be one of {valid_orders}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @property
    def marker_bytes(self) -> List[bytes]:
        """Markers as the raw byte strings searched for in the input."""
        return [marker.encode("latin-1") for marker in self.markers]

    @classmethod
    def from_json(cls, config_path: Union[str, Path]) -> "ExtractionSettings":
        """Load settings from JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        return cls.model_validate(data)

    def to_json(self, config_path: Union[str, Path], indent: int = 2) -> None:
        """Save settings to JSON file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with config_path.open("w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=indent, default=str)

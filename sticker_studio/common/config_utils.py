"""
Sticker Studio - Configuration Utilities

Configuration dataclasses for segmentation, extraction, and the studio as a
whole. Values come from defaults, then environment variables, then an
optional YAML file; keys present in the YAML file win.
"""

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .constants import (
    DEFAULT_COLOR_TOLERANCE,
    DEFAULT_GRAYSCALE_PROBE_PIXELS,
    DEFAULT_MASK_THRESHOLD,
    DEFAULT_SEGMENT_TIMEOUT,
    DEFAULT_STORE_DIR,
    DEFAULT_TRIM_PADDING,
    SAM2_DEFAULT_CHECKPOINT,
    SAM2_DEFAULT_DEVICE,
)
from .exceptions import ValidationError

SEGMENTER_BACKENDS = ("flood_fill", "sam2")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# =============================================================================
# Component Configurations
# =============================================================================


@dataclass
class SegmenterConfig:
    """
    Configuration for the segmentation provider.

    Attributes:
        backend: "flood_fill" (reference, always available) or "sam2"
        tolerance: RGB distance a flood-fill neighbour may have from the seed
        sam2_checkpoint: Path to a SAM2 checkpoint (sam2 backend only)
        device: Torch device for SAM2 ("cpu", "cuda", "cuda:1", ...)
    """

    backend: str = "flood_fill"
    tolerance: float = DEFAULT_COLOR_TOLERANCE
    sam2_checkpoint: str = SAM2_DEFAULT_CHECKPOINT
    device: str = SAM2_DEFAULT_DEVICE

    def __post_init__(self):
        """Validate configuration."""
        if self.backend not in SEGMENTER_BACKENDS:
            raise ValidationError(
                f"Invalid segmenter backend: {self.backend}",
                field_name="backend",
                invalid_value=self.backend,
            )
        if self.tolerance < 0:
            raise ValidationError(
                "tolerance must be non-negative",
                field_name="tolerance",
                invalid_value=self.tolerance,
            )


@dataclass
class ExtractionConfig:
    """
    Configuration for compositing and trimming.

    Attributes:
        padding: Pixels added around the opaque bounding box
        threshold: Mask cells strictly above this are foreground
        grayscale_probe_pixels: Mask pixels sampled to detect grayscale RGBA masks
    """

    padding: int = DEFAULT_TRIM_PADDING
    threshold: int = DEFAULT_MASK_THRESHOLD
    grayscale_probe_pixels: int = DEFAULT_GRAYSCALE_PROBE_PIXELS

    def __post_init__(self):
        """Validate configuration."""
        if self.padding < 0:
            raise ValidationError(
                "padding must be non-negative",
                field_name="padding",
                invalid_value=self.padding,
            )
        if not 0 <= self.threshold <= 255:
            raise ValidationError(
                "threshold must be within 0-255",
                field_name="threshold",
                invalid_value=self.threshold,
            )
        if self.grayscale_probe_pixels < 1:
            raise ValidationError(
                "grayscale_probe_pixels must be at least 1",
                field_name="grayscale_probe_pixels",
                invalid_value=self.grayscale_probe_pixels,
            )


def get_sam2_model_config(checkpoint: str) -> str:
    """
    Determine SAM2 model config name from a checkpoint path.

    Args:
        checkpoint: Path to SAM2 model checkpoint file

    Returns:
        Config path string (e.g., "configs/sam2.1/sam2.1_hiera_b+.yaml")
    """
    name = Path(checkpoint).name.lower()

    if "large" in name or "_l." in name or "hiera_l" in name:
        return "configs/sam2.1/sam2.1_hiera_l.yaml"
    if "small" in name or "_s." in name or "hiera_s" in name:
        return "configs/sam2.1/sam2.1_hiera_s.yaml"
    if "tiny" in name or "_t." in name or "hiera_t" in name:
        return "configs/sam2.1/sam2.1_hiera_t.yaml"
    # base_plus and anything unrecognized
    return "configs/sam2.1/sam2.1_hiera_b+.yaml"


# =============================================================================
# Studio Configuration
# =============================================================================


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValidationError(
            f"Environment variable {name} must be a number",
            field_name=name,
            invalid_value=raw,
        ) from exc


def _env_int(name: str, default: int) -> int:
    return int(_env_float(name, default))


@dataclass
class StudioConfig:
    """
    Studio configuration with environment-aware defaults.

    Environment variables (all optional):
        STICKER_STUDIO_BACKEND, STICKER_STUDIO_TOLERANCE,
        STICKER_STUDIO_SAM2_CHECKPOINT, STICKER_STUDIO_DEVICE,
        STICKER_STUDIO_PADDING, STICKER_STUDIO_STORE_DIR,
        STICKER_STUDIO_SEGMENT_TIMEOUT, STICKER_STUDIO_LOG_LEVEL
    """

    segmenter: SegmenterConfig = field(default_factory=lambda: SegmenterConfig(
        backend=os.getenv("STICKER_STUDIO_BACKEND", "flood_fill"),
        tolerance=_env_float("STICKER_STUDIO_TOLERANCE", DEFAULT_COLOR_TOLERANCE),
        sam2_checkpoint=os.getenv("STICKER_STUDIO_SAM2_CHECKPOINT", SAM2_DEFAULT_CHECKPOINT),
        device=os.getenv("STICKER_STUDIO_DEVICE", SAM2_DEFAULT_DEVICE),
    ))
    extraction: ExtractionConfig = field(default_factory=lambda: ExtractionConfig(
        padding=_env_int("STICKER_STUDIO_PADDING", DEFAULT_TRIM_PADDING),
    ))
    store_dir: Path = field(default_factory=lambda: Path(
        os.getenv("STICKER_STUDIO_STORE_DIR", DEFAULT_STORE_DIR)
    ))
    segment_timeout: float = field(default_factory=lambda: _env_float(
        "STICKER_STUDIO_SEGMENT_TIMEOUT", DEFAULT_SEGMENT_TIMEOUT
    ))
    log_level: str = field(default_factory=lambda: os.getenv("STICKER_STUDIO_LOG_LEVEL", "INFO"))

    def __post_init__(self):
        """Normalize and validate values."""
        if isinstance(self.store_dir, str):
            self.store_dir = Path(self.store_dir)
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ValidationError(
                f"Invalid log level: {self.log_level}",
                field_name="log_level",
                invalid_value=self.log_level,
            )
        if self.segment_timeout < 0:
            raise ValidationError(
                "segment_timeout must be non-negative",
                field_name="segment_timeout",
                invalid_value=self.segment_timeout,
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display/debugging."""
        return {
            "segmenter": asdict(self.segmenter),
            "extraction": asdict(self.extraction),
            "store_dir": str(self.store_dir),
            "segment_timeout": self.segment_timeout,
            "log_level": self.log_level,
        }


def _merge_section(section_cls, base, overrides: Optional[Dict[str, Any]]):
    if not overrides:
        return base
    known = {f.name for f in fields(section_cls)}
    unknown = set(overrides) - known
    if unknown:
        raise ValidationError(
            f"Unknown {section_cls.__name__} keys: {sorted(unknown)}",
            field_name=section_cls.__name__,
            invalid_value=sorted(unknown),
        )
    values = asdict(base)
    values.update(overrides)
    return section_cls(**values)


def load_studio_config(path: Optional[Union[str, Path]] = None) -> StudioConfig:
    """
    Build a StudioConfig from environment defaults plus an optional YAML file.

    YAML layout:
        segmenter: {backend: flood_fill, tolerance: 30}
        extraction: {padding: 10}
        store_dir: data/stickers
        segment_timeout: 30
        log_level: INFO

    Args:
        path: YAML file path; None returns environment defaults

    Returns:
        StudioConfig instance

    Raises:
        ValidationError: if the file is missing, unreadable, not a mapping,
            or has unknown keys
    """
    config = StudioConfig()
    if path is None:
        return config

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise ValidationError(
            f"Cannot read studio config file: {e}",
            field_name="config_path",
            invalid_value=path,
        ) from e
    except yaml.YAMLError as e:
        raise ValidationError(
            f"Invalid YAML in studio config file: {e}",
            field_name="config_path",
            invalid_value=path,
        ) from e

    if not isinstance(data, dict):
        raise ValidationError(
            "Studio config file must contain a mapping",
            field_name=str(path),
        )

    return StudioConfig(
        segmenter=_merge_section(SegmenterConfig, config.segmenter, data.get("segmenter")),
        extraction=_merge_section(ExtractionConfig, config.extraction, data.get("extraction")),
        store_dir=Path(data.get("store_dir", config.store_dir)),
        segment_timeout=float(data.get("segment_timeout", config.segment_timeout)),
        log_level=str(data.get("log_level", config.log_level)),
    )


# Global configuration instance
_config: Optional[StudioConfig] = None


def get_config() -> StudioConfig:
    """
    Get the global configuration instance.

    Creates a new instance if one doesn't exist. If STICKER_STUDIO_CONFIG
    points to a YAML file, it is applied on top of the environment defaults.

    Returns:
        StudioConfig instance
    """
    global _config
    if _config is None:
        _config = load_studio_config(os.getenv("STICKER_STUDIO_CONFIG") or None)
    return _config


def reload_config() -> StudioConfig:
    """
    Reload configuration from environment.

    Use when environment variables may have changed.

    Returns:
        New StudioConfig instance
    """
    global _config
    _config = None
    return get_config()

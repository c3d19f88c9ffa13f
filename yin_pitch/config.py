"""Configuration loading for the YIN pitch detector."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields
from numbers import Integral, Real
from pathlib import Path

import yaml

from .constants import DEFAULT_BUFFER_SIZE, DEFAULT_OVERLAP, DEFAULT_THRESHOLD, SAMPLE_RATE
from .exceptions import ConfigFileError, InvalidConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectorConfig:
    sample_rate: float = SAMPLE_RATE  # Hz
    buffer_size: int = DEFAULT_BUFFER_SIZE  # Samples per detect() call
    threshold: float = DEFAULT_THRESHOLD  # YIN threshold, (0, 1)
    # Samples shared between frames when tracking; None = 3/4 of buffer_size
    overlap: int | None = None

    def __post_init__(self):
        if isinstance(self.sample_rate, bool) or not isinstance(self.sample_rate, Real):
            raise InvalidConfigurationError(
                f"sample_rate must be a number, got {type(self.sample_rate).__name__}"
            )
        if not (math.isfinite(self.sample_rate) and self.sample_rate > 0):
            raise InvalidConfigurationError(f"sample_rate must be positive and finite, got {self.sample_rate}")
        if isinstance(self.buffer_size, bool) or not isinstance(self.buffer_size, Integral):
            raise InvalidConfigurationError(
                f"buffer_size must be an integer, got {type(self.buffer_size).__name__}"
            )
        if self.buffer_size <= 0:
            raise InvalidConfigurationError(f"buffer_size must be positive, got {self.buffer_size}")
        if isinstance(self.threshold, bool) or not isinstance(self.threshold, Real):
            raise InvalidConfigurationError(
                f"threshold must be a number, got {type(self.threshold).__name__}"
            )
        # Chained comparison also rejects NaN
        if not 0.0 < self.threshold < 1.0:
            raise InvalidConfigurationError(f"threshold must be in (0, 1), got {self.threshold}")
        if self.overlap is None:
            # 1536 for the default 2048-sample buffer
            object.__setattr__(self, "overlap", self.buffer_size * DEFAULT_OVERLAP // DEFAULT_BUFFER_SIZE)
        elif isinstance(self.overlap, bool) or not isinstance(self.overlap, Integral):
            raise InvalidConfigurationError(
                f"overlap must be an integer, got {type(self.overlap).__name__}"
            )
        if not 0 <= self.overlap < self.buffer_size:
            raise InvalidConfigurationError(
                f"overlap must be in [0, {self.buffer_size}), got {self.overlap}"
            )

    @property
    def hop_size(self) -> int:
        """Samples between the starts of two consecutive frames."""
        return self.buffer_size - self.overlap

    @property
    def scratch_size(self) -> int:
        """Length of the detector's working buffer."""
        return self.buffer_size // 2

    @property
    def min_frequency(self) -> float:
        """Lowest frequency the detector can report (largest lag)."""
        if self.scratch_size < 2:
            return 0.0
        return self.sample_rate / (self.scratch_size - 1)


def load_config(path: Path | str) -> DetectorConfig:
    """Load detector configuration from a YAML file.

    The file must contain a ``detector`` mapping; missing keys take defaults.

    Args:
        path: Path to configuration file

    Returns:
        Validated DetectorConfig instance

    Raises:
        ConfigFileError: If the file is missing, unparsable or has unknown keys
        InvalidConfigurationError: If a value is out of range
    """
    path = Path(path)
    logger.info(f"Loading configuration from {path}")
    if not path.exists():
        logger.error(f"Configuration file not found: {path}")
        raise ConfigFileError(f"Configuration file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration: {e}")
        raise ConfigFileError(f"Failed to parse configuration file: {e}") from e

    section = data.get("detector") if isinstance(data, dict) else None
    if not isinstance(section, dict):
        logger.error(f"Missing 'detector' section in {path}")
        raise ConfigFileError(f"Missing 'detector' section in configuration file: {path}")

    known = {f.name for f in fields(DetectorConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        logger.error(f"Unknown detector configuration keys: {unknown}")
        raise ConfigFileError(f"Unknown detector configuration keys: {', '.join(unknown)}")

    config = DetectorConfig(**section)
    logger.debug(f"Loaded {config}")
    return config

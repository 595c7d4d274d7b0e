from dataclasses import dataclass, field

import numpy as np


def _empty_samples() -> np.ndarray:
    return np.empty(0, dtype=np.float32)


@dataclass(frozen=True)
class ChannelInfo:
    """A signal declared in the header, as exposed to callers."""

    id: int
    label: str
    sample_rate_hz: float
    unit: str


@dataclass(frozen=True, eq=False)
class WaveformWindow:
    """Decoded physical samples for one channel over a clamped time range."""

    start_seconds: float
    duration_seconds: float
    samples: np.ndarray = field(default_factory=_empty_samples)

    @property
    def sample_count(self) -> int:
        return int(self.samples.size)


@dataclass(frozen=True, eq=False)
class DownsampledWaveform:
    """Per-bucket extremes, in time order."""

    mins: np.ndarray = field(default_factory=_empty_samples)
    maxs: np.ndarray = field(default_factory=_empty_samples)

    def __len__(self) -> int:
        return int(self.mins.size)

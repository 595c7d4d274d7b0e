"""Synthetic waveform source for working on the viewer without a real file."""

import math
from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np

from edfview.core.config import Settings
from edfview.core.edf.models import ChannelInfo, WaveformWindow

DEFAULT_LABELS = ("Fp1-F7", "F7-T3", "T3-T5")


class MockEDFReader:
    """Serves a 9 Hz + 1.25 Hz sine mix on a few bipolar EEG channels."""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        duration_seconds: float = 120.0,
        sample_rate_hz: float = 256.0,
        labels: Sequence[str] = DEFAULT_LABELS,
    ):
        self.path = path
        self._duration = float(duration_seconds)
        self._channels = [
            ChannelInfo(id=index, label=label, sample_rate_hz=float(sample_rate_hz), unit="uV")
            for index, label in enumerate(labels)
        ]

    @classmethod
    def from_settings(
        cls, settings: Settings, path: Optional[Union[str, Path]] = None
    ) -> "MockEDFReader":
        return cls(
            path,
            duration_seconds=settings.mock_duration_seconds,
            sample_rate_hz=settings.mock_sample_rate_hz,
            labels=settings.mock_channel_labels,
        )

    @property
    def channels(self) -> List[ChannelInfo]:
        return list(self._channels)

    @property
    def file_duration_seconds(self) -> float:
        return self._duration

    async def read_window(
        self, channel_id: int, start_seconds: float, duration_seconds: float
    ) -> WaveformWindow:
        # Unknown ids fall back to 256 Hz; the mock does not validate channels.
        sample_rate = next(
            (ch.sample_rate_hz for ch in self._channels if ch.id == channel_id), 256.0
        )
        count = max(1, int(duration_seconds * sample_rate))
        t = start_seconds + np.arange(count, dtype=np.float64) / sample_rate
        values = 45 * np.sin(2 * math.pi * 9 * t) + 10 * np.sin(2 * math.pi * 1.25 * t)
        return WaveformWindow(
            start_seconds=start_seconds,
            duration_seconds=duration_seconds,
            samples=values.astype(np.float32),
        )

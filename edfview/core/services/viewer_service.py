"""Navigation state for an interactive single-channel waveform view."""

import inspect
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Union

from loguru import logger

from edfview.core.config import Settings, get_settings
from edfview.core.edf.models import ChannelInfo, DownsampledWaveform
from edfview.core.edf.source import WaveformSource
from edfview.core.signal_processing import downsample_min_max

ReaderFactory = Callable[
    [Union[str, Path]], Union[WaveformSource, Awaitable[WaveformSource]]
]


class ViewerSession:
    """Holds the open source, selected channel and visible time range.

    Every navigation call re-reads the visible window and stores the
    downsampled envelope in ``waveform``. Failures are reported through
    ``error_message`` rather than raised, so the view stays usable.
    """

    def __init__(self, make_reader: ReaderFactory, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._make_reader = make_reader
        self._reader: Optional[WaveformSource] = None

        self.channels: List[ChannelInfo] = []
        self.selected_channel_id: Optional[int] = None
        self.waveform = DownsampledWaveform()
        self.opened_path: Optional[Union[str, Path]] = None
        self.error_message: Optional[str] = None

        self.visible_start_seconds = 0.0
        self.visible_duration_seconds = self.settings.default_visible_duration_seconds

    @property
    def reader(self) -> Optional[WaveformSource]:
        return self._reader

    def _pixel_width(self, pixel_width: Optional[int]) -> int:
        return self.settings.default_pixel_width if pixel_width is None else pixel_width

    async def open_file(self, path: Union[str, Path], pixel_width: Optional[int] = None) -> None:
        """Open a file through the reader factory and show its first channel.

        Args:
            path: Path handed to the reader factory
            pixel_width: Display width used as the bucket budget
        """
        try:
            reader = self._make_reader(path)
            if inspect.isawaitable(reader):
                reader = await reader
        except Exception as e:
            logger.error(f"Failed to open {path}: {e}")
            self.error_message = f"Failed to open EDF/BDF file: {e}"
            return

        self._reader = reader
        self.channels = reader.channels
        self.selected_channel_id = self.channels[0].id if self.channels else None
        self.opened_path = path
        self.error_message = None
        logger.info(
            f"Opened {path}: {len(self.channels)} channels, "
            f"{reader.file_duration_seconds:.1f}s"
        )
        await self.refresh_waveform(pixel_width)

    async def zoom(self, factor: float, pixel_width: Optional[int] = None) -> None:
        self.visible_duration_seconds = max(
            self.settings.min_visible_duration_seconds,
            min(
                self.settings.max_visible_duration_seconds,
                self.visible_duration_seconds * factor,
            ),
        )
        await self.refresh_waveform(pixel_width)

    async def pan(self, delta_seconds: float, pixel_width: Optional[int] = None) -> None:
        self.visible_start_seconds = max(0.0, self.visible_start_seconds + delta_seconds)
        await self.refresh_waveform(pixel_width)

    async def select_channel(self, channel_id: int, pixel_width: Optional[int] = None) -> None:
        self.selected_channel_id = channel_id
        await self.refresh_waveform(pixel_width)

    async def refresh_waveform(self, pixel_width: Optional[int] = None) -> None:
        """Re-read the visible window and downsample it to the display width."""
        if self._reader is None or self.selected_channel_id is None:
            self.waveform = DownsampledWaveform()
            return

        try:
            window = await self._reader.read_window(
                self.selected_channel_id,
                self.visible_start_seconds,
                self.visible_duration_seconds,
            )
        except Exception as e:
            logger.error(f"Failed to read window for channel {self.selected_channel_id}: {e}")
            self.error_message = f"Failed to read signal window: {e}"
            return

        bucket_count = max(self.settings.min_bucket_count, self._pixel_width(pixel_width))
        self.waveform = downsample_min_max(window.samples, bucket_count)
        logger.debug(
            f"Channel {self.selected_channel_id}: {window.sample_count} samples "
            f"-> {len(self.waveform)} buckets"
        )

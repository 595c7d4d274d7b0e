"""Windowed sample reader for EDF and BDF files."""

import asyncio
import math
import operator
from pathlib import Path
from typing import List, Union

import numpy as np

from edfview.core.edf.header import EDFHeader, parse_header
from edfview.core.edf.layout import RecordLayout, build_layout, channel_catalog
from edfview.core.edf.models import ChannelInfo, WaveformWindow
from edfview.core.errors import InvalidChannelError, TruncatedDataError

# Keeps a record that starts exactly at the window end out of the range.
RECORD_END_EPSILON = 1e-12


def decode_edf_samples(raw: bytes) -> np.ndarray:
    """Decode 16-bit little-endian two's complement samples."""
    return np.frombuffer(raw, dtype="<i2").astype(np.int32)


def decode_bdf_samples(raw: bytes) -> np.ndarray:
    """Decode 24-bit little-endian two's complement samples.

    The top byte is read as a signed int8, which sign-extends it over the
    full int32 before the lower bytes are merged in.
    """
    unsigned = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
    top = np.frombuffer(raw, dtype=np.int8).reshape(-1, 3)[:, 2].astype(np.int32)
    return unsigned[:, 0] | (unsigned[:, 1] << 8) | (top << 16)


class EDFReader:
    """Reader over an EDF/BDF file held entirely in memory.

    The header, channel catalog and record layout are derived once at
    construction and never change, so concurrent reads need no locking.
    """

    def __init__(self, data: bytes):
        """Parse the header of an EDF/BDF buffer.

        Args:
            data: The complete file contents

        Raises:
            HeaderFormatError: If the header is malformed
        """
        self._data = bytes(data)
        self._header = parse_header(self._data)
        self._layout = build_layout(self._header)
        self._channels = channel_catalog(self._header)

    @classmethod
    def from_bytes(cls, data: bytes) -> "EDFReader":
        return cls(data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "EDFReader":
        return cls(Path(path).read_bytes())

    @classmethod
    async def open(cls, path: Union[str, Path]) -> "EDFReader":
        """Load and parse a file without blocking the running event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, cls.from_path, path)

    @property
    def channels(self) -> List[ChannelInfo]:
        return list(self._channels)

    @property
    def file_duration_seconds(self) -> float:
        return self._layout.file_duration_seconds

    @property
    def is_bdf(self) -> bool:
        return self._layout.is_bdf

    @property
    def header(self) -> EDFHeader:
        return self._header

    @property
    def layout(self) -> RecordLayout:
        return self._layout

    @property
    def size(self) -> int:
        return len(self._data)

    def channel(self, channel_id: int) -> ChannelInfo:
        return self._channels[self._channel_index(channel_id)]

    def _channel_index(self, channel_id: int) -> int:
        if isinstance(channel_id, (bool, np.bool_)):
            raise InvalidChannelError(channel_id)
        try:
            index = operator.index(channel_id)
        except TypeError:
            raise InvalidChannelError(channel_id) from None
        if not 0 <= index < len(self._channels):
            raise InvalidChannelError(channel_id)
        return index

    def _decode(self, raw: bytes) -> np.ndarray:
        if self._layout.is_bdf:
            return decode_bdf_samples(raw)
        return decode_edf_samples(raw)

    def read_window_sync(
        self, channel_id: int, start_seconds: float, duration_seconds: float
    ) -> WaveformWindow:
        """Decode one channel's physical samples over a time range.

        The range is clamped to the file; an empty or out-of-file range yields
        an empty window rather than an error.

        Args:
            channel_id: Channel id from the catalog
            start_seconds: Window start in seconds
            duration_seconds: Window length in seconds

        Returns:
            WaveformWindow with the clamped start and duration

        Raises:
            InvalidChannelError: If the channel id is unknown
            TruncatedDataError: If an overlapping record runs past the buffer
        """
        index = self._channel_index(channel_id)
        layout = self._layout
        param = layout.signals[index]
        sample_rate = self._channels[index].sample_rate_hz
        file_duration = layout.file_duration_seconds

        start = max(0.0, min(float(start_seconds), file_duration))
        end = min(start + duration_seconds, file_duration)
        span = end - start
        if span <= 0:
            return WaveformWindow(start_seconds=start, duration_seconds=0.0)

        record_duration = layout.record_duration
        first_record = math.floor(start / record_duration)
        last_record = min(
            layout.num_data_records - 1,
            math.floor((end - RECORD_END_EPSILON) / record_duration),
        )
        if first_record > last_record or first_record >= layout.num_data_records:
            return WaveformWindow(start_seconds=start, duration_seconds=span)

        chunks = []
        for record in range(first_record, last_record + 1):
            record_start = record * record_duration
            first_sample = math.floor(max(0.0, start - record_start) * sample_rate)
            last_sample = min(
                param.samples_per_record,
                math.ceil(min(record_duration, end - record_start) * sample_rate),
            )
            if first_sample >= last_sample:
                continue

            byte_start, byte_end = layout.sample_byte_range(
                index, record, first_sample, last_sample
            )
            if byte_end > len(self._data):
                raise TruncatedDataError(record)

            digital = self._decode(self._data[byte_start:byte_end])
            chunks.append(param.to_physical(digital.astype(np.float64)))

        if not chunks:
            return WaveformWindow(start_seconds=start, duration_seconds=span)
        samples = np.concatenate(chunks).astype(np.float32)
        return WaveformWindow(start_seconds=start, duration_seconds=span, samples=samples)

    async def read_window(
        self, channel_id: int, start_seconds: float, duration_seconds: float
    ) -> WaveformWindow:
        return self.read_window_sync(channel_id, start_seconds, duration_seconds)

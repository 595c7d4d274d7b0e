from dataclasses import dataclass
from typing import List, Tuple

from edfview.core.edf.header import EDFHeader, SignalHeader
from edfview.core.edf.models import ChannelInfo
from edfview.core.errors import HeaderFormatError


@dataclass(frozen=True)
class SignalParam:
    """Scaling and in-record placement of one channel."""

    samples_per_record: int
    bitvalue: float
    offset: float
    buf_offset: int
    bytes_per_sample: int

    @property
    def byte_size(self) -> int:
        return self.samples_per_record * self.bytes_per_sample

    def to_physical(self, digital):
        """Convert digital values (scalar or array) to physical units."""
        return self.bitvalue * (self.offset + digital)


@dataclass(frozen=True)
class RecordLayout:
    """Geometry of the data records that follow the header."""

    header_bytes: int
    record_size: int
    num_data_records: int
    record_duration: float
    is_bdf: bool
    signals: Tuple[SignalParam, ...]

    @property
    def bytes_per_sample(self) -> int:
        return 3 if self.is_bdf else 2

    @property
    def file_duration_seconds(self) -> float:
        return self.num_data_records * self.record_duration

    @property
    def data_bytes_expected(self) -> int:
        """Total file size implied by the header."""
        return self.header_bytes + self.num_data_records * self.record_size

    def sample_byte_range(
        self, channel_index: int, record: int, first_sample: int, last_sample: int
    ) -> Tuple[int, int]:
        """Absolute [start, end) byte range of samples first..last-1 of a record.

        Args:
            channel_index: Position of the channel in declaration order
            record: Data record index
            first_sample: First in-record sample index (inclusive)
            last_sample: Last in-record sample index (exclusive)

        Returns:
            Tuple of (start, end) byte offsets into the file buffer
        """
        param = self.signals[channel_index]
        start = (
            self.header_bytes
            + record * self.record_size
            + param.buf_offset
            + first_sample * param.bytes_per_sample
        )
        return start, start + (last_sample - first_sample) * param.bytes_per_sample


def scaling_for(signal: SignalHeader) -> Tuple[float, float]:
    """Return (bitvalue, offset) such that physical = bitvalue * (offset + digital).

    Channels with a zero digital or physical range decode with unit scale
    and no offset.
    """
    digital_range = signal.digital_maximum - signal.digital_minimum
    if digital_range == 0:
        return 1.0, 0.0
    bitvalue = (signal.physical_maximum - signal.physical_minimum) / digital_range
    if bitvalue == 0:
        return 1.0, 0.0
    offset = signal.physical_maximum / bitvalue - signal.digital_maximum
    return bitvalue, offset


def build_layout(header: EDFHeader) -> RecordLayout:
    """Derive per-channel parameters and record geometry from a header.

    Raises:
        HeaderFormatError: If a signal declares fewer than one sample per record
    """
    params = []
    buf_offset = 0
    for index, signal in enumerate(header.signals):
        if signal.samples_per_record < 1:
            raise HeaderFormatError(
                f"samples per record for signal {index} must be at least 1, "
                f"got {signal.samples_per_record}",
                field="samples_per_record",
                signal_index=index,
            )
        bitvalue, offset = scaling_for(signal)
        param = SignalParam(
            samples_per_record=signal.samples_per_record,
            bitvalue=bitvalue,
            offset=offset,
            buf_offset=buf_offset,
            bytes_per_sample=header.bytes_per_sample,
        )
        params.append(param)
        buf_offset += param.byte_size

    return RecordLayout(
        header_bytes=header.header_bytes,
        record_size=buf_offset,
        num_data_records=header.num_data_records,
        record_duration=header.record_duration,
        is_bdf=header.is_bdf,
        signals=tuple(params),
    )


def channel_catalog(header: EDFHeader) -> List[ChannelInfo]:
    return [
        ChannelInfo(
            id=index,
            label=signal.label,
            sample_rate_hz=signal.samples_per_record / header.record_duration,
            unit=signal.physical_dimension,
        )
        for index, signal in enumerate(header.signals)
    ]

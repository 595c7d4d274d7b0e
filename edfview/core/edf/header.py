"""EDF/BDF header parsing.

The file opens with a fixed 256-byte ASCII preamble. It is followed by the
signal header block, which is laid out field-major: the labels of all
signals, then the transducers of all signals, and so on. Each sub-block
therefore starts at the cumulative width of the sub-blocks before it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from edfview.core.errors import (
    FileTooShortError,
    HeaderFormatError,
    InvalidChannelCountError,
)

PREAMBLE_BYTES = 256
BDF_MARKER = 0xFF


@dataclass(frozen=True)
class FieldSpec:
    """One field of the signal header block, repeated once per signal."""

    name: str
    width: int
    kind: Optional[type] = None


SIGNAL_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("label", 16),
    FieldSpec("transducer", 80),
    FieldSpec("physical_dimension", 8),
    FieldSpec("physical_minimum", 8, float),
    FieldSpec("physical_maximum", 8, float),
    FieldSpec("digital_minimum", 8, int),
    FieldSpec("digital_maximum", 8, int),
    FieldSpec("prefilter", 80),
    FieldSpec("samples_per_record", 8, int),
)


@dataclass(frozen=True)
class SignalHeader:
    label: str
    transducer: str
    physical_dimension: str
    physical_minimum: float
    physical_maximum: float
    digital_minimum: int
    digital_maximum: int
    prefilter: str
    samples_per_record: int


@dataclass(frozen=True)
class EDFHeader:
    """Parsed preamble and signal headers of an EDF or BDF file."""

    is_bdf: bool
    version: str
    patient_id: str
    recording_id: str
    start_date: str
    start_time: str
    header_bytes: int
    num_data_records: int
    record_duration: float
    num_signals: int
    signals: Tuple[SignalHeader, ...]

    @property
    def bytes_per_sample(self) -> int:
        return 3 if self.is_bdf else 2

    @property
    def start_datetime(self) -> Optional[datetime]:
        """Recording start from the dd.mm.yy and hh.mm.ss preamble fields.

        Two-digit years follow the EDF clipping rule: 85-99 map to the 1900s,
        everything else to the 2000s. Returns None if either field is malformed.
        """
        try:
            day, month, year = (int(part) for part in self.start_date.split("."))
            hours, minutes, seconds = (int(part) for part in self.start_time.split("."))
            year += 1900 if year >= 85 else 2000
            return datetime(year, month, day, hours, minutes, seconds)
        except ValueError:
            return None


def field_offsets(num_signals: int) -> Dict[str, int]:
    """Absolute start offset of each signal-header sub-block.

    Args:
        num_signals: Number of signals declared in the preamble

    Returns:
        Mapping of field name to the byte offset of its first entry
    """
    offsets = {}
    cursor = PREAMBLE_BYTES
    for spec in SIGNAL_FIELDS:
        offsets[spec.name] = cursor
        cursor += spec.width * num_signals
    return offsets


def signal_block_bytes(num_signals: int) -> int:
    return sum(spec.width for spec in SIGNAL_FIELDS) * num_signals


def _ascii(data: bytes, start: int, end: int) -> str:
    return data[start:end].decode("ascii", errors="ignore").strip()


def _convert(text: str, kind: type):
    try:
        return kind(text)
    except ValueError:
        return None


def _fixed_field(data: bytes, start: int, end: int, kind: type, description: str, name: str):
    value = _convert(_ascii(data, start, end), kind)
    if value is None:
        raise HeaderFormatError(f"cannot parse {description}", field=name)
    return value


def parse_header(data: bytes) -> EDFHeader:
    """Parse the preamble and signal header block of an EDF/BDF buffer.

    Args:
        data: The complete file contents

    Returns:
        The parsed header

    Raises:
        FileTooShortError: If the buffer cannot hold the header
        InvalidChannelCountError: If the signal count is not positive
        HeaderFormatError: If any required field fails to parse
    """
    if len(data) < PREAMBLE_BYTES:
        raise FileTooShortError(len(data), PREAMBLE_BYTES)

    is_bdf = data[0] == BDF_MARKER

    header_bytes = _fixed_field(data, 184, 192, int, "header byte count", "header_bytes")
    num_records = _fixed_field(
        data, 236, 244, int, "number of data records", "num_data_records"
    )
    if num_records < 0:
        raise HeaderFormatError(
            f"number of data records must not be negative, got {num_records}",
            field="num_data_records",
        )
    record_duration = _fixed_field(
        data, 244, 252, float, "data record duration", "record_duration"
    )
    if not record_duration > 0:
        raise HeaderFormatError(
            f"data record duration must be positive, got {record_duration}",
            field="record_duration",
        )
    num_signals = _fixed_field(data, 252, 256, int, "number of signals", "num_signals")
    if num_signals <= 0:
        raise InvalidChannelCountError(num_signals)

    if len(data) < header_bytes:
        raise FileTooShortError(len(data), header_bytes)
    required = PREAMBLE_BYTES + signal_block_bytes(num_signals)
    if len(data) < required:
        raise FileTooShortError(len(data), required)

    columns: Dict[str, List] = {}
    for spec, offset in zip(SIGNAL_FIELDS, field_offsets(num_signals).values()):
        values = []
        for index in range(num_signals):
            start = offset + index * spec.width
            text = _ascii(data, start, start + spec.width)
            if spec.kind is None:
                values.append(text)
                continue
            value = _convert(text, spec.kind)
            if value is None:
                raise HeaderFormatError(
                    f"cannot parse {spec.name.replace('_', ' ')} for signal {index}",
                    field=spec.name,
                    signal_index=index,
                )
            values.append(value)
        columns[spec.name] = values

    signals = tuple(
        SignalHeader(**{name: column[index] for name, column in columns.items()})
        for index in range(num_signals)
    )

    return EDFHeader(
        is_bdf=is_bdf,
        version=_ascii(data, 1 if is_bdf else 0, 8),
        patient_id=_ascii(data, 8, 88),
        recording_id=_ascii(data, 88, 168),
        start_date=_ascii(data, 168, 176),
        start_time=_ascii(data, 176, 184),
        header_bytes=header_bytes,
        num_data_records=num_records,
        record_duration=record_duration,
        num_signals=num_signals,
        signals=signals,
    )

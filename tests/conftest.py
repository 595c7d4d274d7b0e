"""Common test fixtures and configuration."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np
import pytest
from fastapi.testclient import TestClient

from edfview.core.config import Settings, get_settings
from edfview.main import create_app
from edfview.routes.edf import clear_reader_cache


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without I/O beyond tmp files")
    config.addinivalue_line("markers", "integration: tests spanning several layers")


def _field(value, width: int) -> bytes:
    text = value if isinstance(value, bytes) else str(value).encode("ascii")
    if len(text) > width:
        raise ValueError(f"{value!r} does not fit in {width} bytes")
    return text.ljust(width, b" ")


def _number(value: float) -> str:
    return f"{value:g}"


def _encode(samples: np.ndarray, bdf: bool) -> bytes:
    if bdf:
        # Low three bytes of a little-endian int32 are the 24-bit two's complement.
        return np.asarray(samples, dtype="<i4").view(np.uint8).reshape(-1, 4)[:, :3].tobytes()
    return np.asarray(samples, dtype="<i2").tobytes()


def build_edf(
    channels: Sequence[Dict],
    record_duration: float = 1.0,
    bdf: bool = False,
    start_date: str = "01.02.23",
    start_time: str = "04.05.06",
) -> bytes:
    """Build an EDF (or BDF) file byte for byte.

    Each channel dict takes ``data`` (digital values, record after record)
    and ``samples_per_record``; ``label``, ``unit``, ``physical_min``,
    ``physical_max``, ``digital_min`` and ``digital_max`` are optional.
    """
    default_digital = (-8388608, 8388607) if bdf else (-32768, 32767)
    specs: List[Dict] = []
    for index, channel in enumerate(channels):
        spec = {
            "label": f"EEG {index}",
            "unit": "uV",
            "digital_min": default_digital[0],
            "digital_max": default_digital[1],
        }
        spec["physical_min"] = spec["digital_min"]
        spec["physical_max"] = spec["digital_max"]
        spec.update(channel)
        specs.append(spec)

    ns = len(specs)
    num_records = len(specs[0]["data"]) // specs[0]["samples_per_record"]

    header = b"".join(
        [
            b"\xffBIOSEMI" if bdf else _field("0", 8),
            _field("X X X X", 80),
            _field("Startdate X X X X", 80),
            _field(start_date, 8),
            _field(start_time, 8),
            _field(256 + 256 * ns, 8),
            _field("24BIT" if bdf else "", 44),
            _field(num_records, 8),
            _field(_number(record_duration), 8),
            _field(ns, 4),
        ]
    )
    columns = [
        ("label", 16),
        (None, 80),
        ("unit", 8),
        ("physical_min", 8),
        ("physical_max", 8),
        ("digital_min", 8),
        ("digital_max", 8),
        (None, 80),
        ("samples_per_record", 8),
        (None, 32),
    ]
    for key, width in columns:
        for spec in specs:
            value = "" if key is None else spec[key]
            if isinstance(value, float):
                value = _number(value)
            header += _field(value, width)

    records = []
    for record in range(num_records):
        for spec in specs:
            spr = spec["samples_per_record"]
            chunk = np.asarray(spec["data"][record * spr : (record + 1) * spr])
            records.append(_encode(chunk, bdf))
    return header + b"".join(records)


@pytest.fixture
def make_edf():
    """Factory fixture returning the byte-level EDF/BDF builder."""
    return build_edf


@pytest.fixture
def ramp_samples() -> np.ndarray:
    return np.linspace(-32768, 32767, 256).round().astype(np.int64)


@pytest.fixture
def ramp_edf_bytes(ramp_samples) -> bytes:
    """One channel, one 1 s record at 256 Hz ramping over the full 16-bit range."""
    return build_edf(
        [
            {
                "label": "EEG Fp1",
                "unit": "uV",
                "physical_min": -100,
                "physical_max": 100,
                "digital_min": -32768,
                "digital_max": 32767,
                "samples_per_record": 256,
                "data": ramp_samples,
            }
        ]
    )


@pytest.fixture
def data_dir(tmp_path) -> Path:
    directory = tmp_path / "data"
    directory.mkdir()
    return directory


@pytest.fixture
def ramp_edf_path(data_dir, ramp_edf_bytes) -> Path:
    path = data_dir / "test_1ch_1s.edf"
    path.write_bytes(ramp_edf_bytes)
    return path


@pytest.fixture
def settings(data_dir) -> Settings:
    return Settings(data_dir=str(data_dir))


@pytest.fixture
def client(settings):
    """Create a test client whose settings point at the temp data directory."""
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    clear_reader_cache()
    with TestClient(app) as test_client:
        yield test_client
    clear_reader_cache()


def ramp_channel(samples_per_record: int, num_records: int, start: int = 0, **extra) -> Dict:
    """Channel whose digital value equals its global sample index plus ``start``."""
    data = np.arange(samples_per_record * num_records) + start
    return {"samples_per_record": samples_per_record, "data": data, **extra}


@pytest.fixture
def make_ramp_channel():
    return ramp_channel


@pytest.fixture
def corrupt():
    """Overwrite a fixed-width ASCII field in an EDF buffer."""

    def _corrupt(data: bytes, offset: int, width: int, value: Optional[str]) -> bytes:
        buffer = bytearray(data)
        buffer[offset : offset + width] = _field(value or "", width)
        return bytes(buffer)

    return _corrupt

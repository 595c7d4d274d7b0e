"""Unit tests for the record layout model."""

import numpy as np
import pytest

from edfview.core.edf.header import field_offsets, parse_header
from edfview.core.edf.layout import build_layout, channel_catalog, scaling_for
from edfview.core.errors import HeaderFormatError


@pytest.fixture
def header(make_edf, make_ramp_channel):
    data = make_edf(
        [
            make_ramp_channel(128, 4, label="Fp1-F7"),
            make_ramp_channel(64, 4, label="F7-T3", unit="mV"),
            make_ramp_channel(1, 4, label="Resp"),
        ],
        record_duration=0.5,
    )
    return parse_header(data)


@pytest.mark.unit
def test_record_geometry(header):
    layout = build_layout(header)
    assert layout.record_size == (128 + 64 + 1) * 2
    assert layout.num_data_records == 4
    assert layout.file_duration_seconds == pytest.approx(2.0)
    assert layout.data_bytes_expected == header.header_bytes + 4 * layout.record_size


@pytest.mark.unit
def test_buffer_offsets_follow_declaration_order(header):
    layout = build_layout(header)
    assert [param.buf_offset for param in layout.signals] == [0, 256, 384]
    assert all(param.bytes_per_sample == 2 for param in layout.signals)


@pytest.mark.unit
def test_bdf_uses_three_bytes_per_sample(make_edf, make_ramp_channel):
    data = make_edf([make_ramp_channel(10, 2), make_ramp_channel(5, 2)], bdf=True)
    layout = build_layout(parse_header(data))
    assert layout.bytes_per_sample == 3
    assert layout.record_size == 45
    assert layout.signals[1].buf_offset == 30


@pytest.mark.unit
def test_sample_byte_range(header):
    layout = build_layout(header)
    start, end = layout.sample_byte_range(1, record=2, first_sample=10, last_sample=20)
    assert start == header.header_bytes + 2 * layout.record_size + 256 + 10 * 2
    assert end - start == 20


@pytest.mark.unit
def test_channel_catalog(header):
    channels = channel_catalog(header)
    assert [ch.id for ch in channels] == [0, 1, 2]
    assert [ch.label for ch in channels] == ["Fp1-F7", "F7-T3", "Resp"]
    assert [ch.sample_rate_hz for ch in channels] == [256.0, 128.0, 2.0]
    assert channels[1].unit == "mV"


@pytest.mark.unit
def test_scaling_reproduces_both_endpoints(make_edf, make_ramp_channel):
    data = make_edf(
        [
            make_ramp_channel(
                2,
                1,
                physical_min=-200.0,
                physical_max=500.0,
                digital_min=-2048,
                digital_max=2047,
            )
        ]
    )
    param = build_layout(parse_header(data)).signals[0]
    assert param.to_physical(-2048) == pytest.approx(-200.0, rel=1e-6)
    assert param.to_physical(2047) == pytest.approx(500.0, rel=1e-6)


@pytest.mark.unit
def test_scaling_matches_textbook_formula(make_edf, make_ramp_channel):
    """bitvalue * (offset + d) agrees with physMin + (d - digMin) * bitvalue."""
    data = make_edf(
        [
            make_ramp_channel(
                2, 1, physical_min=-3.2, physical_max=7.9, digital_min=-1000, digital_max=3000
            )
        ]
    )
    signal = parse_header(data).signals[0]
    bitvalue, offset = scaling_for(signal)
    digital = np.random.default_rng(7).integers(-1000, 3001, size=64).astype(np.float64)
    textbook = signal.physical_minimum + (digital - signal.digital_minimum) * bitvalue
    np.testing.assert_allclose(bitvalue * (offset + digital), textbook, rtol=1e-9, atol=1e-9)


@pytest.mark.unit
def test_degenerate_digital_range_uses_unit_scale(make_edf, make_ramp_channel):
    data = make_edf(
        [make_ramp_channel(2, 1, digital_min=0, digital_max=0, physical_min=-5, physical_max=5)]
    )
    param = build_layout(parse_header(data)).signals[0]
    assert (param.bitvalue, param.offset) == (1.0, 0.0)


@pytest.mark.unit
def test_degenerate_physical_range_uses_unit_scale(make_edf, make_ramp_channel):
    data = make_edf([make_ramp_channel(2, 1, physical_min=3, physical_max=3)])
    param = build_layout(parse_header(data)).signals[0]
    assert (param.bitvalue, param.offset) == (1.0, 0.0)


@pytest.mark.unit
def test_zero_samples_per_record_rejected(make_edf, make_ramp_channel, corrupt):
    data = make_edf([make_ramp_channel(2, 1), make_ramp_channel(2, 1)])
    data = corrupt(data, field_offsets(2)["samples_per_record"] + 8, 8, "0")
    with pytest.raises(HeaderFormatError) as excinfo:
        build_layout(parse_header(data))
    assert excinfo.value.signal_index == 1

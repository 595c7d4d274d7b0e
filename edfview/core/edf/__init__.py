"""EDF/BDF decoding for windowed waveform display."""

from .edf_reader import EDFReader
from .header import EDFHeader, parse_header
from .layout import RecordLayout, SignalParam, build_layout
from .mock_reader import MockEDFReader
from .models import ChannelInfo, DownsampledWaveform, WaveformWindow
from .source import WaveformSource

__all__ = [
    "ChannelInfo",
    "DownsampledWaveform",
    "EDFHeader",
    "EDFReader",
    "MockEDFReader",
    "RecordLayout",
    "SignalParam",
    "WaveformSource",
    "WaveformWindow",
    "build_layout",
    "parse_header",
]

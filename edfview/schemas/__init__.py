"""API schemas."""

from edfview.schemas.edf import ChannelSchema, EdfFileInfo, WaveformResponse

__all__ = [
    "ChannelSchema",
    "EdfFileInfo",
    "WaveformResponse",
]

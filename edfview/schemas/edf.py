from typing import List

from pydantic import BaseModel


class ChannelSchema(BaseModel):
    """A channel in the file's catalog."""

    id: int
    label: str
    sample_rate_hz: float
    unit: str

    class Config:
        from_attributes = True


class EdfFileInfo(BaseModel):
    """Information about an EDF/BDF file."""

    file_path: str
    format: str
    duration_seconds: float
    num_data_records: int
    record_duration_seconds: float
    channels: List[ChannelSchema]


class WaveformResponse(BaseModel):
    """Min/max envelope of one channel over a time window."""

    channel: int
    start_seconds: float
    duration_seconds: float
    sample_count: int
    mins: List[float]
    maxs: List[float]

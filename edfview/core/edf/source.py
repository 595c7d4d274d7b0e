from typing import List, Protocol, runtime_checkable

from edfview.core.edf.models import ChannelInfo, WaveformWindow


@runtime_checkable
class WaveformSource(Protocol):
    """Anything that can serve a channel catalog and windowed reads."""

    @property
    def channels(self) -> List[ChannelInfo]: ...

    @property
    def file_duration_seconds(self) -> float: ...

    async def read_window(
        self, channel_id: int, start_seconds: float, duration_seconds: float
    ) -> WaveformWindow: ...

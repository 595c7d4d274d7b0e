"""EDF file viewing endpoints."""

import asyncio
from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from edfview.core.config import Settings, get_settings
from edfview.core.edf.edf_reader import EDFReader
from edfview.core.errors import EDFError
from edfview.core.signal_processing import downsample_min_max
from edfview.schemas.edf import ChannelSchema, EdfFileInfo, WaveformResponse

router = APIRouter()


@lru_cache(maxsize=16)
def _load_reader(path: str, mtime_ns: int, size: int) -> EDFReader:
    # mtime_ns and size only key the cache so a rewritten file is reloaded.
    logger.info(f"Loading EDF/BDF file: {path} ({size} bytes)")
    return EDFReader.from_path(path)


def clear_reader_cache() -> None:
    _load_reader.cache_clear()


def _resolve(file_path: str, settings: Settings) -> Path:
    root = Path(settings.data_dir).resolve()
    path = (root / file_path).resolve()
    if not path.is_relative_to(root):
        raise HTTPException(status_code=400, detail=f"Path outside data directory: {file_path}")
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"File not found: {file_path}")
    return path


async def _get_reader(file_path: str, settings: Settings) -> EDFReader:
    path = _resolve(file_path, settings)
    stat = path.stat()
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(
            None, _load_reader, str(path), stat.st_mtime_ns, stat.st_size
        )
    except EDFError as e:
        logger.warning(f"Rejected {path}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/info")
async def get_edf_info(
    file_path: str, settings: Settings = Depends(get_settings)
) -> EdfFileInfo:
    """Get the channel catalog and geometry of an EDF/BDF file."""

    reader = await _get_reader(file_path, settings)
    layout = reader.layout

    return EdfFileInfo(
        file_path=file_path,
        format="BDF" if reader.is_bdf else "EDF",
        duration_seconds=reader.file_duration_seconds,
        num_data_records=layout.num_data_records,
        record_duration_seconds=layout.record_duration,
        channels=[ChannelSchema.model_validate(ch) for ch in reader.channels],
    )


@router.get("/window")
async def get_window(
    file_path: str,
    channel: int,
    start: float = 0.0,
    duration: float = Query(10.0, gt=0),
    buckets: Optional[int] = Query(None, ge=1),
    settings: Settings = Depends(get_settings),
) -> WaveformResponse:
    """Get the min/max envelope of one channel over a time window."""

    reader = await _get_reader(file_path, settings)
    try:
        window = await reader.read_window(channel, start, duration)
    except EDFError as e:
        logger.warning(f"Window read failed for {file_path}: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message)

    bucket_count = buckets if buckets is not None else settings.default_pixel_width
    waveform = downsample_min_max(window.samples, bucket_count)

    return WaveformResponse(
        channel=channel,
        start_seconds=window.start_seconds,
        duration_seconds=window.duration_seconds,
        sample_count=window.sample_count,
        mins=waveform.mins.tolist(),
        maxs=waveform.maxs.tolist(),
    )

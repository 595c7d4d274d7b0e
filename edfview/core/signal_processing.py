from typing import Sequence, Union

import numpy as np

from edfview.core.edf.models import DownsampledWaveform


def downsample_min_max(
    samples: Union[Sequence[float], np.ndarray], bucket_count: int
) -> DownsampledWaveform:
    """Reduce samples to per-bucket (min, max) pairs for display.

    Buckets hold ``max(1, len(samples) // bucket_count)`` consecutive samples;
    the last bucket takes whatever remains. Every sample lands in exactly one
    bucket, so the result may have fewer buckets than requested but never
    drops an extreme. Floating input keeps its precision; anything else is
    widened to float64.

    Args:
        samples: Sample values in time order
        bucket_count: Requested number of buckets (e.g. pixel width)

    Returns:
        DownsampledWaveform with equal-length mins and maxs
    """
    values = np.asarray(samples).ravel()
    if not np.issubdtype(values.dtype, np.floating):
        values = values.astype(np.float64)
    if values.size == 0 or bucket_count <= 0:
        return DownsampledWaveform()

    step = max(1, values.size // bucket_count)
    starts = np.arange(0, values.size, step)
    return DownsampledWaveform(
        mins=np.minimum.reduceat(values, starts),
        maxs=np.maximum.reduceat(values, starts),
    )

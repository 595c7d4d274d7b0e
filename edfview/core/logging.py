import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger


def configure_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> None:
    """Replace loguru's default sink with stderr and an optional rotating file."""
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(Path(log_file), rotation="10 MB", level="DEBUG")

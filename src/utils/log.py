from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[Union[str, int]] = None) -> None:
    """Configure root logging once; LOG_LEVEL from config when level is None."""
    if level is None:
        from src.utils.config import get_data_source_config

        level = get_data_source_config().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)

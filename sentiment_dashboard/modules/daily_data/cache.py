"""On-disk result cache for daily sentiment queries.

Entries are written with ``expire=<ttl seconds>`` and vanish on their own, so
the service never has to sweep stale ranges.
"""

from __future__ import annotations

import logging
from pathlib import Path

from diskcache import Cache

from sentiment_dashboard.config import AppConfig

logger = logging.getLogger(__name__)


def result_cache_dir(config: AppConfig) -> Path:
    if config.cache.directory is not None:
        return Path(config.cache.directory)
    return config.ensure_data_root() / "cache"


def open_result_cache(config: AppConfig) -> Cache:
    directory = result_cache_dir(config)
    directory.mkdir(parents=True, exist_ok=True)
    logger.debug("opening result cache at %s", directory)
    return Cache(str(directory))

"""FastAPI dependency factories for service injection."""

from __future__ import annotations

from diskcache import Cache
from fastapi import Depends, Request

from sentiment_dashboard.config import AppConfig
from sentiment_dashboard.modules.crawler_config.store import CrawlerConfigStore
from sentiment_dashboard.modules.daily_data.cache import open_result_cache
from sentiment_dashboard.modules.daily_data.service import DailySentimentService
from sentiment_dashboard.services.config_store import ConfigStore
from sentiment_dashboard.settings import AppSettings


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_config_store(request: Request) -> ConfigStore:
    return request.app.state.config_store


def get_config(request: Request) -> AppConfig:
    config_store: ConfigStore = request.app.state.config_store
    return config_store.load()


def get_result_cache(
    request: Request,
    config: AppConfig = Depends(get_config),
) -> Cache:
    # Opened on first use; the directory comes from the loaded config.
    cache = getattr(request.app.state, "result_cache", None)
    if cache is None:
        cache = open_result_cache(config)
        request.app.state.result_cache = cache
    return cache


def get_daily_data_service(
    config: AppConfig = Depends(get_config),
    cache: Cache = Depends(get_result_cache),
) -> DailySentimentService:
    return DailySentimentService(config=config, cache=cache)


def get_crawler_config_store(
    config: AppConfig = Depends(get_config),
) -> CrawlerConfigStore:
    return CrawlerConfigStore(config_path=config.crawler.config_path)


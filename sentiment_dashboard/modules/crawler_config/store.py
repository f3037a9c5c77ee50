from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from sentiment_dashboard.core.errors import ConfigStoreError
from sentiment_dashboard.modules.crawler_config.editing import clean_config
from sentiment_dashboard.modules.crawler_config.schemas import CrawlerConfig

logger = logging.getLogger(__name__)


def parse_config_text(text: str) -> CrawlerConfig:
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigStoreError(f"Invalid JSON format: {exc.msg}") from exc
    if not isinstance(raw, dict):
        raise ConfigStoreError("Crawler config must be a JSON object")
    sources = raw.get("source")
    if sources is None:
        sources = {}
    if not isinstance(sources, dict):
        raise ConfigStoreError("Crawler config 'source' must be an object")
    try:
        return CrawlerConfig.model_validate({"source": sources})
    except PydanticValidationError as exc:
        raise ConfigStoreError(f"Invalid crawler config: {exc}") from exc


def dump_config(config: CrawlerConfig) -> str:
    return json.dumps(clean_config(config), ensure_ascii=False, indent=2)


class CrawlerConfigStore:
    """Keeps the crawler keyword config as one JSON document on disk."""

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path

    def read_text(self) -> str:
        if not self.config_path.exists():
            logger.info("crawler config %s missing, serving empty config", self.config_path)
            return dump_config(CrawlerConfig())
        return self.config_path.read_text(encoding="utf-8")

    def write_text(self, text: str) -> CrawlerConfig:
        config = parse_config_text(text)
        self.save(config)
        return config

    def load(self) -> CrawlerConfig:
        return parse_config_text(self.read_text())

    def save(self, config: CrawlerConfig) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(dump_config(config), encoding="utf-8")
        logger.info(
            "saved crawler config to %s (%d reddit, %d steam keywords)",
            self.config_path,
            len(config.source.reddit),
            len(config.source.steam),
        )

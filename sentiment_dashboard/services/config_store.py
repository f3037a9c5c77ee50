from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from sentiment_dashboard.config import AppConfig, default_app_config

logger = logging.getLogger(__name__)

SECTIONS = ("database", "cache", "dashboard", "crawler")


class ConfigStore:
    """YAML file holding ``AppConfig``.

    A missing file is created from defaults and sections added since the file
    was written are filled in on load.
    """

    def __init__(self, config_path: Path) -> None:
        self.config_path = config_path

    def load(self) -> AppConfig:
        if not self.config_path.exists():
            logger.info("Config file missing, writing defaults to %s", self.config_path)
            return self.save(default_app_config())

        raw = self._read_raw()
        config = AppConfig.model_validate(raw).normalized()
        missing = [section for section in SECTIONS if not isinstance(raw.get(section), dict)]
        if missing:
            logger.info(
                "Backfilling config sections %s in %s",
                ", ".join(missing),
                self.config_path,
            )
            return self.save(config)
        config.ensure_data_root()
        return config

    def save(self, config: AppConfig) -> AppConfig:
        normalized = config.model_copy(update={"config_file": self.config_path}).normalized()
        normalized.ensure_data_root()
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(
            yaml.safe_dump(
                normalized.model_dump(mode="json"),
                allow_unicode=True,
                sort_keys=False,
            ),
            encoding="utf-8",
        )
        return normalized

    def patch(self, patch_data: Dict[str, Any]) -> AppConfig:
        """Merge ``patch_data`` into the stored config; nested sections merge key by key."""
        payload = self.load().model_dump(mode="python")
        for key, value in patch_data.items():
            current = payload.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                payload[key] = {**current, **value}
            else:
                payload[key] = value
        return self.save(AppConfig.model_validate(payload))

    def _read_raw(self) -> Dict[str, Any]:
        try:
            raw = yaml.safe_load(self.config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in config file {self.config_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config file content: {self.config_path}")
        return raw

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///data/sentiment_dashboard.db"


class CacheConfig(BaseModel):
    enabled: bool = True
    directory: Optional[Path] = None
    ttl_seconds: int = Field(default=12 * 60 * 60, ge=0)
    empty_ttl_seconds: int = Field(default=15 * 60, ge=0)


class DashboardConfig(BaseModel):
    default_range_days: int = Field(default=30, ge=1, le=365)
    leaderboard_limit: int = Field(default=20, ge=1, le=100)
    min_total_count: int = Field(default=20, ge=0)
    keyword_lookback_days: int = Field(default=30, ge=1, le=365)


class CrawlerConfigLocation(BaseModel):
    config_path: Path = Path("config/crawler.json")


class AppConfig(BaseModel):
    config_file: Path = Path("config/settings.yaml")
    timezone: str = "UTC"
    request_timeout_seconds: int = Field(default=20, ge=3, le=120)
    user_agent: str = "sentiment-dashboard/0.1"
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    dashboard: DashboardConfig = Field(default_factory=DashboardConfig)
    crawler: CrawlerConfigLocation = Field(default_factory=CrawlerConfigLocation)

    def ensure_data_root(self) -> Path:
        path = self.database.url
        if path.startswith("sqlite:///"):
            db_file = Path(path.replace("sqlite:///", "", 1))
            db_file.parent.mkdir(parents=True, exist_ok=True)
            return db_file.parent
        return Path("data")

    def normalized(self) -> "AppConfig":
        payload = self.model_dump(mode="python")
        payload["config_file"] = Path(payload["config_file"])
        payload["user_agent"] = str(payload.get("user_agent") or "").strip() or "sentiment-dashboard/0.1"
        return AppConfig.model_validate(payload)


def default_app_config() -> AppConfig:
    return AppConfig()

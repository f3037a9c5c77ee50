from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

RedditSort = Literal["relevance", "hot", "top", "new", "comments"]
RedditTimeFilter = Literal["all", "year", "month", "week", "day", "hour"]
SteamSort = Literal["created", "updated", "top"]
SteamTimeFilter = Literal["all", "year", "month", "week", "day"]
SourceName = Literal["reddit", "steam"]

SOURCE_NAMES = ("reddit", "steam")

REDDIT_DEFAULTS: Dict[str, object] = {
    "time_filter": "day",
    "sort": "top",
    "post_limit": 6,
    "top_comments_limit": 2,
}

STEAM_DEFAULTS: Dict[str, object] = {
    "time_filter": "day",
    "sort": "top",
    "post_limit": 8,
}


class RedditKeywordItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    source: Literal["reddit"] = "reddit"
    keyword: str = ""
    subreddits: Optional[List[str]] = None
    top_comments_limit: Optional[int] = Field(default=None, ge=0)
    time_filter: Optional[RedditTimeFilter] = None
    post_limit: Optional[int] = Field(default=None, ge=0)
    sort: Optional[RedditSort] = None


class SteamKeywordItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    source: Literal["steam"] = "steam"
    keyword: str = ""
    time_filter: Optional[SteamTimeFilter] = None
    sort: Optional[SteamSort] = None
    post_limit: Optional[int] = Field(default=None, ge=0)


KeywordItem = Annotated[
    Union[RedditKeywordItem, SteamKeywordItem],
    Field(discriminator="source"),
]


class CrawlerSources(BaseModel):
    reddit: List[RedditKeywordItem] = Field(default_factory=list)
    steam: List[SteamKeywordItem] = Field(default_factory=list)


class CrawlerConfig(BaseModel):
    source: CrawlerSources = Field(default_factory=CrawlerSources)

    def items(self, source: SourceName) -> List[Union[RedditKeywordItem, SteamKeywordItem]]:
        return list(getattr(self.source, source))


class ConfigDiff(BaseModel):
    added: Dict[str, List[str]] = Field(default_factory=dict)
    removed: Dict[str, List[str]] = Field(default_factory=dict)
    edited: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.edited)


class AdminStatus(BaseModel):
    loading: bool = False
    saving: bool = False
    error: str = ""
    success: bool = False


class AdminStatusAction(BaseModel):
    type: Literal["LOADING", "LOADED", "SAVING", "SAVED", "ERROR", "RESET"]
    error: str = ""


def defaults_for(source: SourceName) -> Dict[str, object]:
    return REDDIT_DEFAULTS if source == "reddit" else STEAM_DEFAULTS

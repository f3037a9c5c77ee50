"""Pure editing helpers for the crawler keyword configuration.

None of these functions mutate their inputs; list operations return a new
``CrawlerConfig``.  Cleaning strips every optional field that is unset,
blank, or equal to the per-source default so the stored JSON only carries
overrides.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from sentiment_dashboard.modules.crawler_config.schemas import (
    SOURCE_NAMES,
    AdminStatus,
    AdminStatusAction,
    ConfigDiff,
    CrawlerConfig,
    RedditKeywordItem,
    SourceName,
    SteamKeywordItem,
    defaults_for,
)

AnyKeywordItem = Union[RedditKeywordItem, SteamKeywordItem]


def parse_subreddits(raw: str) -> Optional[List[str]]:
    names = [part.strip() for part in (raw or "").split(",")]
    names = [name for name in names if name]
    return names or None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return False


def clean_item(item: AnyKeywordItem) -> Dict[str, Any]:
    defaults = defaults_for(item.source)
    cleaned: Dict[str, Any] = {}
    for key, value in item.model_dump(exclude={"source"}).items():
        if _is_blank(value):
            continue
        if key in defaults and value == defaults[key]:
            continue
        cleaned[key] = value
    cleaned["keyword"] = item.keyword
    return cleaned


def clean_config(config: CrawlerConfig) -> Dict[str, Any]:
    sources: Dict[str, List[Dict[str, Any]]] = {}
    for source in SOURCE_NAMES:
        cleaned = [clean_item(item) for item in config.items(source) if item.keyword]
        if cleaned:
            sources[source] = cleaned
    return {"source": sources}


def _by_keyword(items: Sequence[AnyKeywordItem]) -> Dict[str, AnyKeywordItem]:
    return {item.keyword: item for item in items if item.keyword}


def is_new(item: AnyKeywordItem, baseline: Sequence[AnyKeywordItem]) -> bool:
    return item.keyword not in _by_keyword(baseline)


def is_edited(item: AnyKeywordItem, baseline: Sequence[AnyKeywordItem]) -> bool:
    original = _by_keyword(baseline).get(item.keyword)
    if original is None:
        return False
    return clean_item(original) != clean_item(item)


def diff_config(baseline: CrawlerConfig, edited: CrawlerConfig) -> ConfigDiff:
    diff = ConfigDiff()
    for source in SOURCE_NAMES:
        before = baseline.items(source)
        after = edited.items(source)
        after_keywords = _by_keyword(after)

        added = [item.keyword for item in after if item.keyword and is_new(item, before)]
        removed = [
            item.keyword
            for item in before
            if item.keyword and item.keyword not in after_keywords
        ]
        changed = [item.keyword for item in after if item.keyword and is_edited(item, before)]

        if added:
            diff.added[source] = added
        if removed:
            diff.removed[source] = removed
        if changed:
            diff.edited[source] = changed
    return diff


def _with_items(
    config: CrawlerConfig, source: SourceName, items: List[AnyKeywordItem]
) -> CrawlerConfig:
    sources = config.source.model_copy(update={source: items})
    return config.model_copy(update={"source": sources})


def _check_item(source: SourceName, item: AnyKeywordItem) -> None:
    if item.source != source:
        raise ValueError(f"Cannot place a {item.source} item under {source}")
    if not item.keyword.strip():
        raise ValueError("keyword is required")


def _check_index(items: Sequence[AnyKeywordItem], index: int) -> None:
    if index < 0 or index >= len(items):
        raise IndexError(f"No keyword at position {index}")


def add_item(config: CrawlerConfig, source: SourceName, item: AnyKeywordItem) -> CrawlerConfig:
    """Insert ``item`` at the top of ``source``'s list."""
    _check_item(source, item)
    return _with_items(config, source, [item, *config.items(source)])


def replace_item(
    config: CrawlerConfig,
    source: SourceName,
    index: int,
    item: AnyKeywordItem,
) -> CrawlerConfig:
    _check_item(source, item)
    items = config.items(source)
    _check_index(items, index)
    items[index] = item
    return _with_items(config, source, items)


def remove_item(config: CrawlerConfig, source: SourceName, index: int) -> CrawlerConfig:
    items = config.items(source)
    _check_index(items, index)
    del items[index]
    return _with_items(config, source, items)


def filter_items(
    items: Sequence[AnyKeywordItem], term: str
) -> List[Tuple[int, AnyKeywordItem]]:
    """Case-insensitive keyword search; keeps each item's position in ``items``."""
    needle = (term or "").strip().lower()
    return [
        (index, item)
        for index, item in enumerate(items)
        if not needle or needle in item.keyword.lower()
    ]


def admin_status_reducer(state: AdminStatus, action: AdminStatusAction) -> AdminStatus:
    if action.type == "LOADING":
        return AdminStatus(loading=True)
    if action.type == "LOADED":
        return state.model_copy(update={"loading": False})
    if action.type == "SAVING":
        return state.model_copy(update={"saving": True, "error": "", "success": False})
    if action.type == "SAVED":
        return state.model_copy(update={"saving": False, "success": True})
    if action.type == "ERROR":
        return state.model_copy(
            update={
                "loading": False,
                "saving": False,
                "error": action.error,
                "success": False,
            }
        )
    if action.type == "RESET":
        return AdminStatus()
    return state

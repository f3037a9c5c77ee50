"""Consumer side of the dashboard: fetch daily rows over HTTP and keep every
derived view in a ``ListState``.

Each ``ListStateHolder`` numbers its fetches.  When a response arrives for a
request that is no longer the latest one issued, it is discarded, so a slow
answer for an old date range cannot overwrite a newer result.
"""

from __future__ import annotations

import logging
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

import httpx
from pydantic import ValidationError as PydanticValidationError

from sentiment_dashboard.core.dates import default_date_range, validate_date_range
from sentiment_dashboard.core.errors import DataSourceError
from sentiment_dashboard.core.list_state import (
    ListAction,
    ListState,
    derive_state,
    list_reducer,
)
from sentiment_dashboard.core.types import (
    ControversyListItem,
    DailySentimentData,
    DistributionPoint,
    PeriodAverage,
    SentimentDelta,
    SentimentListItem,
    TimeSeriesPoint,
)
from sentiment_dashboard.infra.http.client import HttpClient
from sentiment_dashboard.modules.analytics import (
    calculate_controversy_list,
    calculate_distribution,
    calculate_keywords_list,
    calculate_negative_list,
    calculate_period_averages,
    calculate_positive_list,
    calculate_time_series,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DashboardApiClient:
    def __init__(
        self,
        base_url: str,
        timeout_seconds: int = 20,
        user_agent: str = "sentiment-dashboard/0.1",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.transport = transport

    def _http_client(self) -> HttpClient:
        return HttpClient(
            timeout_seconds=self.timeout_seconds,
            user_agent=self.user_agent,
            base_url=self.base_url,
            transport=self.transport,
        )

    async def fetch_list(self, path: str, params: Optional[Dict[str, str]] = None) -> List[Any]:
        """Return the ``data`` array of an envelope response.

        Transport errors, non-2xx statuses, non-JSON bodies, envelope errors
        and non-array data all raise ``DataSourceError``.
        """
        try:
            async with self._http_client() as client:
                payload = await client.get_json(path, params=params)
        except httpx.HTTPStatusError as exc:
            raise DataSourceError(_status_error_message(exc.response)) from exc
        except httpx.HTTPError as exc:
            raise DataSourceError(f"Request to {path} failed: {exc}") from exc
        except ValueError as exc:
            raise DataSourceError(f"Invalid JSON received from {path}") from exc

        if not isinstance(payload, dict):
            raise DataSourceError("Invalid data format received from API.")
        if payload.get("error"):
            raise DataSourceError(str(payload.get("details") or payload["error"]))
        data = payload.get("data")
        if not isinstance(data, list):
            logger.warning("API returned non-array data for %s: %r", path, data)
            raise DataSourceError("Invalid data format received from API.")
        return data

    async def fetch_daily_data(self, start_date: str, end_date: str) -> List[DailySentimentData]:
        rows = await self.fetch_list(
            "/api/sentiment/data",
            params={"startDate": start_date, "endDate": end_date},
        )
        return _validate_rows(DailySentimentData, rows)

    async def fetch_keywords(self, days: int = 30) -> List[str]:
        rows = await self.fetch_list("/api/keywords", params={"days": str(days)})
        return [str(row) for row in rows]

    async def fetch_delta_list(
        self, start_date: str, end_date: str, limit: int = 20
    ) -> List[SentimentDelta]:
        rows = await self.fetch_list(
            "/api/sentiment/delta",
            params={"startDate": start_date, "endDate": end_date, "limit": str(limit)},
        )
        return _validate_rows(SentimentDelta, rows)


def _status_error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"API request failed with status {response.status_code}"


def _validate_rows(model: Any, rows: Sequence[Any]) -> List[Any]:
    try:
        return [model.model_validate(row) for row in rows]
    except PydanticValidationError as exc:
        raise DataSourceError(f"Malformed {model.__name__} row: {exc}") from exc


class CachedOutcome(NamedTuple):
    """Result of a finished fetch: rows on success, a message on failure."""

    data: Optional[List[Any]] = None
    error: Optional[str] = None


class ListStateHolder(Generic[T]):
    """Owns one ``ListState`` and drives it through fetches.

    The optional session cache keeps only fetch outcomes. A hit is replayed
    through the reducer, so a cached failure keeps whatever rows are on screen.
    """

    def __init__(self, cache: Optional[Dict[str, CachedOutcome]] = None) -> None:
        self.state: ListState[T] = ListState.initial(loading=True)
        self.cache = cache
        self._request_id = 0

    @property
    def request_id(self) -> int:
        return self._request_id

    def dispatch(self, action: ListAction[T]) -> ListState[T]:
        self.state = list_reducer(self.state, action)
        return self.state

    def reset(self) -> ListState[T]:
        self._request_id += 1
        self.state = ListState.initial(loading=False)
        return self.state

    def _replay(self, outcome: CachedOutcome) -> ListState[T]:
        if outcome.error is not None:
            return self.dispatch(ListAction.failure(outcome.error))
        return self.dispatch(ListAction.success(list(outcome.data or [])))

    async def run(
        self,
        key: Optional[str],
        fetcher: Callable[[], Awaitable[List[T]]],
    ) -> ListState[T]:
        self._request_id += 1
        request_id = self._request_id

        if key is not None and self.cache is not None and key in self.cache:
            return self._replay(self.cache[key])

        self.dispatch(ListAction.loading())
        try:
            data = await fetcher()
        except Exception as exc:
            if request_id != self._request_id:
                logger.debug("dropping stale failure for request %d", request_id)
                return self.state
            message = str(exc) or "An unknown error occurred"
            logger.warning("fetch failed for %s: %s", key or "<uncached>", message)
            outcome = CachedOutcome(error=message)
        else:
            if request_id != self._request_id:
                logger.debug("dropping stale response for request %d", request_id)
                return self.state
            outcome = CachedOutcome(data=list(data))

        if key is not None and self.cache is not None:
            self.cache[key] = outcome
        return self._replay(outcome)


class DailyDataController:
    """Dashboard state: date range, selected keyword, daily rows and every view
    derived from them.

    Derived states are memoized against the daily-data state object and the
    selected keyword; they inherit ``loading`` and ``error`` from the daily
    data. The delta leaderboard is the exception: it comes from
    ``/api/sentiment/delta`` through ``load_delta`` and has its own state.
    """

    def __init__(
        self,
        api: DashboardApiClient,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        leaderboard_limit: int = 20,
        min_total_count: int = 20,
        session_cache: Optional[Dict[str, CachedOutcome]] = None,
    ) -> None:
        default_start, default_end = default_date_range(days=30)
        self.api = api
        self.start_date = start_date or default_start
        self.end_date = end_date or default_end
        self.selected_keyword: Optional[str] = None
        self.leaderboard_limit = leaderboard_limit
        self.min_total_count = min_total_count
        self.session_cache = session_cache if session_cache is not None else {}
        self.daily = ListStateHolder[DailySentimentData](cache=self.session_cache)
        self.delta = ListStateHolder[SentimentDelta](cache=self.session_cache)
        self._memo: Dict[str, Tuple[ListState, Optional[str], ListState]] = {}

    def set_date_range(self, start_date: str, end_date: str) -> None:
        self.start_date, self.end_date = validate_date_range(start_date, end_date)

    def select_keyword(self, keyword: Optional[str]) -> None:
        self.selected_keyword = keyword or None

    def _cache_key(self, kind: str) -> str:
        return f"{kind}:{self.start_date}:{self.end_date}"

    async def load(self) -> ListState[DailySentimentData]:
        start_date, end_date = self.start_date, self.end_date
        return await self.daily.run(
            self._cache_key("daily"),
            lambda: self.api.fetch_daily_data(start_date, end_date),
        )

    async def load_delta(self) -> ListState[SentimentDelta]:
        start_date, end_date = self.start_date, self.end_date
        limit = self.leaderboard_limit
        return await self.delta.run(
            self._cache_key("delta"),
            lambda: self.api.fetch_delta_list(start_date, end_date, limit),
        )

    def _derived(self, name: str, keyed: bool, compute: Callable[[List[DailySentimentData]], List[Any]]) -> ListState:
        source = self.daily.state
        keyword = self.selected_keyword if keyed else None
        cached = self._memo.get(name)
        if cached is not None and cached[0] is source and cached[1] == keyword:
            return cached[2]
        state = derive_state(source, compute(source.data))
        self._memo[name] = (source, keyword, state)
        return state

    @property
    def keywords(self) -> ListState[str]:
        return self._derived("keywords", False, calculate_keywords_list)

    @property
    def time_series(self) -> ListState[TimeSeriesPoint]:
        return self._derived(
            "time_series",
            True,
            lambda data: calculate_time_series(data, self.selected_keyword),
        )

    @property
    def distribution(self) -> ListState[DistributionPoint]:
        return self._derived(
            "distribution",
            True,
            lambda data: calculate_distribution(data, self.selected_keyword),
        )

    @property
    def period_averages(self) -> ListState[PeriodAverage]:
        return self._derived(
            "period_averages",
            True,
            lambda data: calculate_period_averages(data, self.selected_keyword),
        )

    @property
    def positive_list(self) -> ListState[SentimentListItem]:
        return self._derived(
            "positive_list",
            False,
            lambda data: calculate_positive_list(
                data, limit=self.leaderboard_limit, min_total_count=self.min_total_count
            ),
        )

    @property
    def negative_list(self) -> ListState[SentimentListItem]:
        return self._derived(
            "negative_list",
            False,
            lambda data: calculate_negative_list(
                data, limit=self.leaderboard_limit, min_total_count=self.min_total_count
            ),
        )

    @property
    def controversy_list(self) -> ListState[ControversyListItem]:
        return self._derived(
            "controversy_list",
            False,
            lambda data: calculate_controversy_list(
                data, limit=self.leaderboard_limit, min_total_count=self.min_total_count
            ),
        )

    @property
    def delta_list(self) -> ListState[SentimentDelta]:
        return self.delta.state

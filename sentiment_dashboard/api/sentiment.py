"""Sentiment dashboard routes.

Every route loads the daily rows for the requested range through
``DailySentimentService`` (which owns validation and caching) and derives its
view with the pure analytics functions.
"""

from typing import Iterable, Literal, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from sentiment_dashboard.api.deps import get_config, get_daily_data_service
from sentiment_dashboard.api.errors import service_error_handler
from sentiment_dashboard.config import AppConfig
from sentiment_dashboard.modules.analytics import (
    calculate_controversy_list,
    calculate_delta_list,
    calculate_distribution,
    calculate_negative_list,
    calculate_period_averages,
    calculate_positive_list,
    calculate_time_series,
)
from sentiment_dashboard.modules.daily_data.service import DailySentimentService
from sentiment_dashboard.schemas import ApiResponse

router = APIRouter(prefix="/api", tags=["sentiment"])


def _envelope(items: Iterable[BaseModel]) -> ApiResponse:
    return ApiResponse(data=[item.model_dump(mode="json") for item in items])


def _limit(limit: Optional[int], config: AppConfig) -> int:
    return limit if limit is not None else config.dashboard.leaderboard_limit


@router.get("/sentiment/data", response_model=ApiResponse)
@service_error_handler()
async def daily_data(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    service: DailySentimentService = Depends(get_daily_data_service),
) -> ApiResponse:
    return _envelope(service.get_daily_data(start_date, end_date))


@router.get("/keywords", response_model=ApiResponse)
@service_error_handler()
async def keywords(
    days: Optional[int] = Query(None, ge=1, le=365),
    service: DailySentimentService = Depends(get_daily_data_service),
) -> ApiResponse:
    return ApiResponse(data=list(service.list_keywords(days)))


@router.get("/sentiment/timeseries", response_model=ApiResponse)
@service_error_handler()
async def time_series(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    keyword: Optional[str] = Query(None),
    service: DailySentimentService = Depends(get_daily_data_service),
) -> ApiResponse:
    rows = service.get_daily_data(start_date, end_date)
    return _envelope(calculate_time_series(rows, keyword or None))


@router.get("/sentiment/distribution", response_model=ApiResponse)
@service_error_handler()
async def distribution(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    keyword: Optional[str] = Query(None),
    service: DailySentimentService = Depends(get_daily_data_service),
) -> ApiResponse:
    rows = service.get_daily_data(start_date, end_date)
    return _envelope(calculate_distribution(rows, keyword or None))


@router.get("/sentiment", response_model=ApiResponse)
@service_error_handler()
async def leaderboard(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    metric: Literal["avg_pos", "avg_neg"] = Query("avg_neg"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    keyword: Optional[str] = Query(None),
    service: DailySentimentService = Depends(get_daily_data_service),
    config: AppConfig = Depends(get_config),
) -> ApiResponse:
    rows = service.get_daily_data(start_date, end_date)
    if keyword:
        return _envelope(calculate_period_averages(rows, keyword))
    calculate = calculate_positive_list if metric == "avg_pos" else calculate_negative_list
    return _envelope(
        calculate(
            rows,
            limit=_limit(limit, config),
            min_total_count=config.dashboard.min_total_count,
        )
    )


@router.get("/sentiment/controversy", response_model=ApiResponse)
@service_error_handler()
async def controversy(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    service: DailySentimentService = Depends(get_daily_data_service),
    config: AppConfig = Depends(get_config),
) -> ApiResponse:
    rows = service.get_daily_data(start_date, end_date)
    return _envelope(
        calculate_controversy_list(
            rows,
            limit=_limit(limit, config),
            min_total_count=config.dashboard.min_total_count,
        )
    )


@router.get("/sentiment/delta", response_model=ApiResponse)
@service_error_handler()
async def delta(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    service: DailySentimentService = Depends(get_daily_data_service),
    config: AppConfig = Depends(get_config),
) -> ApiResponse:
    rows = service.get_daily_data(start_date, end_date)
    return _envelope(
        calculate_delta_list(
            rows,
            limit=_limit(limit, config),
            min_total_count=config.dashboard.min_total_count,
        )
    )

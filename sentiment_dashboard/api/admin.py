"""Crawler configuration routes for the admin console."""

import json

from fastapi import APIRouter, Depends

from sentiment_dashboard.api.auth import CurrentUser, require_admin
from sentiment_dashboard.api.deps import get_crawler_config_store
from sentiment_dashboard.api.errors import service_error_handler
from sentiment_dashboard.modules.crawler_config.store import CrawlerConfigStore
from sentiment_dashboard.schemas import ApiResponse, CrawlerConfigSaveRequest

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/config", response_model=ApiResponse)
@service_error_handler()
async def get_crawler_config(
    store: CrawlerConfigStore = Depends(get_crawler_config_store),
    user: CurrentUser = Depends(require_admin),
) -> ApiResponse:
    return ApiResponse(data=[store.read_text()])


@router.post("/config", response_model=ApiResponse)
@service_error_handler()
async def save_crawler_config(
    payload: CrawlerConfigSaveRequest,
    store: CrawlerConfigStore = Depends(get_crawler_config_store),
    user: CurrentUser = Depends(require_admin),
) -> ApiResponse:
    if payload.json_text is not None:
        text = payload.json_text
    elif payload.config is not None:
        text = json.dumps(payload.config)
    else:
        raise ValueError("Request body must contain 'json' or 'config'")
    store.write_text(text)
    return ApiResponse(data=["ok"])

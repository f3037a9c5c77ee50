from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApiResponse(BaseModel):
    """Envelope returned by every dashboard and admin route."""

    data: Optional[List[Any]] = None
    error: Optional[str] = None
    details: Optional[str] = None


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class CrawlerConfigSaveRequest(BaseModel):
    """Either the raw JSON text under ``json`` or an already-parsed ``config``."""

    model_config = ConfigDict(populate_by_name=True)

    json_text: Optional[str] = Field(default=None, alias="json")
    config: Optional[Dict[str, Any]] = None


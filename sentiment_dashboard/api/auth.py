"""Admin session authentication.

Login issues a signed JWT and stores it in an HTTP-only cookie; API clients
may send the same token as a Bearer header instead.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from sentiment_dashboard.infra.db.repos import UserRepo
from sentiment_dashboard.infra.db.session import session_scope, verify_password
from sentiment_dashboard.schemas import ApiResponse, LoginRequest
from sentiment_dashboard.settings import AppSettings

router = APIRouter(prefix="/api/admin", tags=["auth"])
security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    user_id: int
    username: str
    is_admin: bool


def create_access_token(
    user_id: int,
    username: str,
    is_admin: bool,
    settings: AppSettings,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "username": username,
        "is_admin": is_admin,
        "type": "access",
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(
        payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm
    )


def _unauthorized(detail: str = "Unauthorized") -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def decode_token(token: str, settings: AppSettings) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as exc:
        raise _unauthorized("Session has expired") from exc
    except jwt.InvalidTokenError as exc:
        raise _unauthorized() from exc


def _get_settings(request: Request) -> AppSettings:
    return getattr(request.app.state, "settings", AppSettings())


def _get_db_url(request: Request) -> str:
    return request.app.state.config_store.load().database.url


def _resolve_token(
    request: Request,
    settings: AppSettings,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    # A Bearer header wins over the session cookie.
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.admin_cookie_name)


def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> CurrentUser:
    settings = _get_settings(request)
    if not settings.auth_enabled:
        return CurrentUser(user_id=0, username="anonymous", is_admin=True)

    token = _resolve_token(request, settings, credentials)
    if not token:
        raise _unauthorized()
    payload = decode_token(token, settings)
    if payload.get("type") != "access" or not str(payload.get("sub", "")).isdigit():
        raise _unauthorized()

    with session_scope(_get_db_url(request)) as session:
        user = UserRepo(session).get(int(payload["sub"]))
        if user is None or not user.is_active or not user.is_admin:
            raise _unauthorized()
        return CurrentUser(user_id=user.id, username=user.username, is_admin=user.is_admin)


@router.post("/login", response_model=ApiResponse)
async def login(request: Request, response: Response, payload: LoginRequest) -> ApiResponse:
    settings = _get_settings(request)

    with session_scope(_get_db_url(request)) as session:
        user_repo = UserRepo(session)
        user = user_repo.get_by_username(payload.username)
        if (
            user is None
            or not user.is_active
            or not user.is_admin
            or not verify_password(payload.password, user.password_hash)
        ):
            raise _unauthorized("Invalid credentials")
        user_repo.update_last_login(user)
        token = create_access_token(
            user_id=user.id,
            username=user.username,
            is_admin=user.is_admin,
            settings=settings,
        )

    response.set_cookie(
        key=settings.admin_cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        path="/",
        max_age=settings.jwt_access_token_expire_minutes * 60,
    )
    return ApiResponse(data=["ok"])


@router.post("/logout", response_model=ApiResponse)
async def logout(request: Request, response: Response) -> ApiResponse:
    settings = _get_settings(request)
    response.delete_cookie(key=settings.admin_cookie_name, path="/")
    return ApiResponse(data=["ok"])

"""Auth Dependencies.

FastAPI Depends용 인증 의존성입니다.
세션 토큰은 Authorization: Bearer 헤더 또는 ``token`` 쿠키로 전달됩니다.
"""

from __future__ import annotations

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from apps.social_auth.infrastructure.security import InvalidSessionTokenError
from apps.social_auth.presentation.http.auth.cookie_params import SESSION_COOKIE_NAME
from apps.social_auth.setup.dependencies import get_session_token_issuer

bearer_scheme = HTTPBearer(auto_error=False)


def _extract_token(
    credentials: HTTPAuthorizationCredentials | None, cookie_token: str | None
) -> str | None:
    if credentials and credentials.credentials:
        return credentials.credentials
    return cookie_token or None


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session_cookie: str | None = Cookie(None, alias=SESSION_COOKIE_NAME),
    issuer=Depends(get_session_token_issuer),
) -> str:
    """현재 인증된 사용자 ID.

    Raises:
        HTTPException: 인증 실패
    """
    token = _extract_token(credentials, session_cookie)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return issuer.decode(token)
    except InvalidSessionTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e


async def get_optional_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session_cookie: str | None = Cookie(None, alias=SESSION_COOKIE_NAME),
    issuer=Depends(get_session_token_issuer),
) -> str | None:
    """현재 사용자 ID (선택적).

    인증되지 않았거나 토큰이 유효하지 않으면 None 반환.
    """
    token = _extract_token(credentials, session_cookie)
    if not token:
        return None

    try:
        return issuer.decode(token)
    except InvalidSessionTokenError:
        return None

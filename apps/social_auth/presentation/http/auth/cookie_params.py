"""Cookie Parameters.

웹 로그인 완료 시 세션 쿠키를 설정합니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import Response

# Cookie name (웹 클라이언트와 일치해야 함)
SESSION_COOKIE_NAME = "token"
COOKIE_PATH = "/"


def get_cookie_params(*, production: bool, domain: str | None = None) -> dict:
    """쿠키 공통 파라미터.

    운영 환경에서는 크로스 사이트 리다이렉트 후에도 전송되도록 SameSite=None.
    """
    params = {
        "path": COOKIE_PATH,
        "httponly": True,
        "secure": production,
        "samesite": "none" if production else "lax",
    }
    if domain:
        params["domain"] = domain
    return params


def set_session_cookie(
    response: "Response",
    token: str,
    *,
    max_age_seconds: int,
    production: bool,
    domain: str | None = None,
) -> None:
    """세션 쿠키 설정."""
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=max_age_seconds,
        **get_cookie_params(production=production, domain=domain),
    )

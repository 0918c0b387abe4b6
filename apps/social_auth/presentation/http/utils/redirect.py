"""Redirect helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import Request

    from apps.social_auth.domain.enums import Provider

CALLBACK_ROUTE_NAME = "oauth_login_callback"


def build_callback_uri(
    request: "Request", provider: "Provider", public_base_url: str | None = None
) -> str:
    """서버 콜백 URI.

    프록시 뒤에서는 public_base_url 을 기준으로 만듭니다.
    """
    callback_url = request.url_for(CALLBACK_ROUTE_NAME, provider=provider.value)
    if not public_base_url:
        return str(callback_url)
    return f"{public_base_url.rstrip('/')}{callback_url.path}"

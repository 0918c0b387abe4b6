"""Return URL Policy.

로그인 완료 후 돌아갈 URL 을 화이트리스트로 제한합니다 (오픈 리다이렉트 방지).
"""

from __future__ import annotations

import logging
from typing import Iterable
from urllib.parse import urlsplit

from apps.social_auth.application.oauth.exceptions import InvalidReturnUrlError

logger = logging.getLogger(__name__)

APP_SCHEME = "stonetify://"
_DEFAULT_PORTS = {"http": 80, "https": 443}


def url_origin(url: str) -> str | None:
    """`scheme://host[:port]` 형태의 origin. 기본 포트는 생략합니다."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    if scheme not in _DEFAULT_PORTS or not parts.hostname:
        return None
    origin = f"{scheme}://{parts.hostname.lower()}"
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        origin = f"{origin}:{port}"
    return origin


def is_web_url(url: str) -> bool:
    return url.startswith("http://") or url.startswith("https://")


class ReturnUrlPolicy:
    """returnUrl 화이트리스트.

    - http(s): origin 이 허용 목록의 http(s) 항목과 정확히 일치
    - stonetify://: 허용 목록의 stonetify:// 항목으로 시작
    - 그 외 스킴, 또는 허용 목록이 비어있으면 거부
    """

    def __init__(self, allowed_origins: Iterable[str]) -> None:
        self._allowed = [item.strip() for item in allowed_origins if item and item.strip()]

    @property
    def allowed_origins(self) -> list[str]:
        return list(self._allowed)

    def is_allowed(self, return_url: str | None) -> bool:
        if not return_url or not isinstance(return_url, str):
            return False
        if not self._allowed:
            logger.warning("Return origins are not configured")
            return False

        if is_web_url(return_url):
            origin = url_origin(return_url)
            allowed = origin is not None and any(
                is_web_url(item) and origin == item.rstrip("/") for item in self._allowed
            )
        elif return_url.startswith(APP_SCHEME):
            allowed = any(
                item.startswith(APP_SCHEME) and return_url.startswith(item)
                for item in self._allowed
            )
        else:
            allowed = False

        if not allowed:
            logger.warning("Disallowed return URL", extra={"return_url": return_url})
        return allowed

    def ensure_allowed(self, return_url: str | None) -> str:
        """허용된 returnUrl 을 그대로 반환합니다.

        Raises:
            InvalidReturnUrlError: 누락되었거나 허용되지 않은 경우
        """
        if not self.is_allowed(return_url):
            raise InvalidReturnUrlError(return_url, self._allowed)
        return return_url  # type: ignore[return-value]

"""Spotify Web API HTTP 클라이언트.

SpotifyApiGateway 포트의 구현체입니다.

Clean Architecture:
- Port: SpotifyApiGateway (application/playback/ports)
- Adapter: SpotifyWebApiClient (이 파일)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from apps.social_auth.application.oauth.exceptions import DependencyError
from apps.social_auth.application.playback.exceptions import SpotifyApiError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class SpotifyWebApiClient:
    """Spotify Web API 클라이언트.

    Features:
    - Lazy connection (첫 호출 시 연결)
    - 타임아웃 설정
    - 4xx → SpotifyApiError, 5xx/타임아웃 → DependencyError
    """

    BASE_URL = "https://api.spotify.com/v1"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy HTTP 클라이언트 생성."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                timeout=self._timeout,
                transport=self._transport,
            )
            logger.info("Spotify Web API client created")
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        access_token: str,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        client = await self._get_client()
        try:
            response = await client.request(
                method,
                path,
                params=dict(params) if params else None,
                json=dict(json) if json is not None else None,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            try:
                body = e.response.json()
            except ValueError:
                body = e.response.text[:200] if e.response.text else None
            logger.error(
                "Spotify API HTTP error",
                extra={"status_code": status_code, "method": method, "path": path},
            )
            if status_code >= 500:
                raise DependencyError("spotify", f"upstream status {status_code}") from e
            raise SpotifyApiError(status_code, body) from e
        except httpx.TimeoutException as e:
            logger.error(
                "Spotify API timeout",
                extra={"method": method, "path": path, "timeout": self._timeout},
            )
            raise DependencyError("spotify", "timeout") from e
        except httpx.HTTPError as e:
            logger.error(
                "Spotify API request failed",
                extra={"method": method, "path": path, "error": str(e)},
            )
            raise DependencyError("spotify", str(e)) from e

        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {"items": data}

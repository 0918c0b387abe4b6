"""Spotify Web API Port."""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class SpotifyApiGateway(Protocol):
    """Spotify Web API 호출.

    Raises:
        SpotifyApiError: 4xx 응답 (401 포함)
        DependencyError: 타임아웃, 네트워크 오류, 5xx
    """

    async def request(
        self,
        access_token: str,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """응답 JSON (본문이 없으면 빈 dict)."""
        ...

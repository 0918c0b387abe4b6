"""Spotify Playback Service.

사용자의 Spotify access token 으로 Web API 재생 제어를 대행합니다.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from apps.social_auth.application.oauth.exceptions import DependencyError
from apps.social_auth.application.playback.dto import PlayRequest, SpotifyAccount
from apps.social_auth.application.playback.exceptions import (
    InvalidPlaybackRequestError,
    NoActiveDeviceError,
    SpotifyApiError,
)
from apps.social_auth.application.playback.ports import SpotifyApiGateway
from apps.social_auth.application.token.services import TokenRefreshService
from apps.social_auth.domain.enums import Provider

logger = logging.getLogger(__name__)

PLAYABLE_URI_PREFIXES = ("spotify:track:", "spotify:episode:")


def validate_playable_uris(uris: Iterable[str]) -> None:
    """재생 URI 형식을 검증합니다.

    문서 스토어 키처럼 보이는 ID(`-` 로 시작하거나 `_` 포함)는 거부합니다.

    Raises:
        InvalidPlaybackRequestError: 형식 오류
    """
    for uri in uris:
        if not isinstance(uri, str) or not uri.startswith(PLAYABLE_URI_PREFIXES):
            raise InvalidPlaybackRequestError(
                f"Invalid Spotify URI format: {uri}. "
                "Expected spotify:track:<id> or spotify:episode:<id>"
            )
        item_id = uri.split(":")[2]
        if item_id.startswith("-") or "_" in item_id:
            raise InvalidPlaybackRequestError(
                f"Invalid track ID format: {uri}. Use Spotify track IDs only."
            )


def select_device(devices: list[dict[str, Any]], requested: str | None) -> str | None:
    """요청 장치 → 활성 장치 → 첫 번째 장치 순으로 선택합니다."""
    if requested and any(device.get("id") == requested for device in devices):
        return requested
    active = next((device for device in devices if device.get("is_active")), None)
    if active is not None:
        return active.get("id")
    return devices[0].get("id") if devices else None


class SpotifyPlaybackService:
    """Spotify 재생 제어 프록시."""

    def __init__(self, tokens: TokenRefreshService, api: SpotifyApiGateway) -> None:
        self._tokens = tokens
        self._api = api

    async def _request(
        self,
        user_id: str,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        access_token = await self._tokens.get_access_token(user_id, Provider.SPOTIFY)
        try:
            return await self._api.request(access_token, method, path, params=params, json=json)
        except SpotifyApiError as e:
            if e.status_code != 401:
                raise
            logger.info("Spotify access token rejected, retrying", extra={"user_id": user_id})

        await self._tokens.invalidate_access_token(user_id, Provider.SPOTIFY)
        access_token = await self._tokens.get_access_token(user_id, Provider.SPOTIFY)
        return await self._api.request(access_token, method, path, params=params, json=json)

    async def get_account(self, user_id: str) -> SpotifyAccount:
        data = await self._request(user_id, "GET", "/me")
        return SpotifyAccount(
            id=data.get("id"),
            display_name=data.get("display_name"),
            product=data.get("product"),
        )

    async def get_state(self, user_id: str) -> dict[str, Any]:
        return await self._request(user_id, "GET", "/me/player")

    async def get_devices(self, user_id: str) -> dict[str, Any]:
        return await self._request(user_id, "GET", "/me/player/devices")

    async def play(self, user_id: str, request: PlayRequest) -> None:
        """재생을 시작합니다.

        uris 또는 context_uri 가 주어지면 장치 목록을 조회해 대상 장치를 정합니다.

        Raises:
            InvalidPlaybackRequestError: URI 형식 오류
            NoActiveDeviceError: 장치가 하나도 없음
        """
        validate_playable_uris(request.uris)

        target_device = request.device_id
        if request.uris or request.context_uri:
            target_device = await self._resolve_device(user_id, request.device_id)

        body: dict[str, Any] = {}
        if request.uris:
            body["uris"] = list(request.uris)
        if request.context_uri:
            body["context_uri"] = request.context_uri
        if request.position_ms is not None:
            body["position_ms"] = request.position_ms

        params = {"device_id": target_device} if target_device else None
        await self._request(user_id, "PUT", "/me/player/play", params=params, json=body)

    async def pause(self, user_id: str) -> None:
        await self._request(user_id, "PUT", "/me/player/pause")

    async def next_track(self, user_id: str) -> None:
        await self._request(user_id, "POST", "/me/player/next")

    async def previous_track(self, user_id: str) -> None:
        await self._request(user_id, "POST", "/me/player/previous")

    async def seek(self, user_id: str, position_ms: int) -> None:
        await self._request(
            user_id, "PUT", "/me/player/seek", params={"position_ms": position_ms}
        )

    async def set_volume(self, user_id: str, volume_percent: int) -> None:
        await self._request(
            user_id, "PUT", "/me/player/volume", params={"volume_percent": volume_percent}
        )

    async def transfer(self, user_id: str, device_id: str, *, play: bool = True) -> None:
        if not device_id:
            raise InvalidPlaybackRequestError("device_id required")
        await self._request(
            user_id,
            "PUT",
            "/me/player",
            json={"device_ids": [device_id], "play": bool(play)},
        )

    async def _resolve_device(self, user_id: str, requested: str | None) -> str | None:
        try:
            data = await self.get_devices(user_id)
        except (SpotifyApiError, DependencyError) as e:
            # 장치 조회 실패는 재생 요청을 막지 않음
            logger.warning(
                "Spotify device lookup failed",
                extra={"user_id": user_id, "error": str(e)},
            )
            return requested

        devices = data.get("devices") or []
        if not devices:
            raise NoActiveDeviceError()
        return select_device(devices, requested)

"""Playback Exceptions."""

from __future__ import annotations

from typing import Any

from apps.social_auth.application.common.exceptions.base import ApplicationError


class InvalidPlaybackRequestError(ApplicationError):
    """재생 요청 파라미터 오류."""

    code = "INVALID_REQUEST"


class NoActiveDeviceError(ApplicationError):
    """재생 가능한 Spotify 장치가 없음."""

    code = "NO_ACTIVE_DEVICE"

    def __init__(self) -> None:
        super().__init__("No active Spotify device. Open Spotify on a device first.")


class SpotifyApiError(ApplicationError):
    """Spotify Web API 4xx 응답."""

    def __init__(self, status_code: int, payload: Any = None) -> None:
        self.status_code = status_code
        self.payload = payload
        upstream = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(upstream, dict):
            upstream = upstream.get("message")
        super().__init__(str(upstream or f"Spotify API error ({status_code})"))

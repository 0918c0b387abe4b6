"""Spotify Playback Controller.

사용자의 Spotify 장치 재생 제어 프록시 엔드포인트입니다.
"""

from typing import Any

from fastapi import APIRouter, Depends

from apps.social_auth.application.playback.dto import PlayRequest
from apps.social_auth.application.playback.services import SpotifyPlaybackService
from apps.social_auth.presentation.http.auth import get_current_user_id
from apps.social_auth.presentation.http.schemas.spotify import (
    PlayBody,
    SeekBody,
    SuccessResponse,
    TransferBody,
    VolumeBody,
)
from apps.social_auth.setup.dependencies import get_playback_service

router = APIRouter()


@router.get("/playback/state", summary="현재 재생 상태")
async def get_state(
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> dict[str, Any]:
    return await playback.get_state(user_id)


@router.get("/me/devices", summary="재생 가능한 장치 목록")
async def get_devices(
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> dict[str, Any]:
    return await playback.get_devices(user_id)


@router.put("/playback/play", response_model=SuccessResponse, summary="재생")
async def play(
    body: PlayBody,
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> SuccessResponse:
    await playback.play(
        user_id,
        PlayRequest(
            uris=tuple(body.uris or ()),
            context_uri=body.context_uri,
            position_ms=body.position_ms,
            device_id=body.device_id,
        ),
    )
    return SuccessResponse()


@router.put("/playback/pause", response_model=SuccessResponse, summary="일시정지")
async def pause(
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> SuccessResponse:
    await playback.pause(user_id)
    return SuccessResponse()


@router.post("/playback/next", response_model=SuccessResponse, summary="다음 곡")
async def next_track(
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> SuccessResponse:
    await playback.next_track(user_id)
    return SuccessResponse()


@router.post("/playback/previous", response_model=SuccessResponse, summary="이전 곡")
async def previous_track(
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> SuccessResponse:
    await playback.previous_track(user_id)
    return SuccessResponse()


@router.put("/playback/seek", response_model=SuccessResponse, summary="재생 위치 이동")
async def seek(
    body: SeekBody,
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> SuccessResponse:
    await playback.seek(user_id, body.position_ms)
    return SuccessResponse()


@router.put("/playback/volume", response_model=SuccessResponse, summary="볼륨 조절")
async def set_volume(
    body: VolumeBody,
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> SuccessResponse:
    await playback.set_volume(user_id, body.volume_percent)
    return SuccessResponse()


@router.put("/playback/transfer", response_model=SuccessResponse, summary="재생 장치 전환")
async def transfer(
    body: TransferBody,
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> SuccessResponse:
    await playback.transfer(user_id, body.device_id, play=body.play)
    return SuccessResponse()

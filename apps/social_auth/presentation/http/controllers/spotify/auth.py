"""Spotify Auth Controller.

Spotify 계정 연결(PKCE 코드 교환), 토큰 갱신, 연결 해제 엔드포인트입니다.
"""

from fastapi import APIRouter, Depends

from apps.social_auth.application.playback.services import SpotifyPlaybackService
from apps.social_auth.application.token.services import TokenRefreshService
from apps.social_auth.domain.enums import Provider
from apps.social_auth.presentation.http.auth import get_current_user_id
from apps.social_auth.presentation.http.schemas.spotify import (
    PremiumStatusResponse,
    SpotifyProfileResponse,
    SpotifyRefreshBody,
    SpotifyRefreshResponse,
    SpotifyRevokeResponse,
    SpotifyTokenBody,
    SpotifyTokenResponse,
)
from apps.social_auth.setup.dependencies import get_playback_service, get_token_refresh_service

router = APIRouter()


@router.post(
    "/auth/token",
    response_model=SpotifyTokenResponse,
    summary="Spotify 코드 교환",
)
async def exchange_code(
    body: SpotifyTokenBody,
    user_id: str = Depends(get_current_user_id),
    token_service: TokenRefreshService = Depends(get_token_refresh_service),
) -> SpotifyTokenResponse:
    """PKCE authorization code 를 교환하고 refresh token 을 암호화 저장합니다.

    refresh token 암호문은 응답에 포함하지 않습니다.
    """
    result = await token_service.exchange_code(
        Provider.SPOTIFY,
        user_id=user_id,
        code=body.code,
        redirect_uri=body.redirect_uri,
        code_verifier=body.code_verifier,
        client_id=body.client_id,
    )
    return SpotifyTokenResponse(
        access_token=result.access_token,
        expires_in=result.expires_in,
        scope=result.scope,
        token_type=result.token_type,
        is_premium=False,
    )


@router.post(
    "/auth/refresh",
    response_model=SpotifyRefreshResponse,
    summary="Spotify access token 갱신",
)
async def refresh_token(
    body: SpotifyRefreshBody | None = None,
    user_id: str = Depends(get_current_user_id),
    token_service: TokenRefreshService = Depends(get_token_refresh_service),
) -> SpotifyRefreshResponse:
    result = await token_service.refresh(
        Provider.SPOTIFY,
        user_id=user_id,
        client_id=body.client_id if body else None,
    )
    return SpotifyRefreshResponse(
        access_token=result.access_token,
        expires_in=result.expires_in,
        scope=result.scope,
        token_type=result.token_type,
        version=result.version,
    )


@router.post(
    "/auth/revoke",
    response_model=SpotifyRevokeResponse,
    summary="Spotify 연결 해제",
)
async def revoke(
    user_id: str = Depends(get_current_user_id),
    token_service: TokenRefreshService = Depends(get_token_refresh_service),
) -> SpotifyRevokeResponse:
    await token_service.revoke(Provider.SPOTIFY, user_id=user_id)
    return SpotifyRevokeResponse()


@router.get(
    "/auth/premium-status",
    response_model=PremiumStatusResponse,
    summary="Spotify 프리미엄 여부",
)
async def premium_status(
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> PremiumStatusResponse:
    account = await playback.get_account(user_id)
    return PremiumStatusResponse(is_premium=account.is_premium, product=account.product)


@router.get(
    "/me",
    response_model=SpotifyProfileResponse,
    summary="Spotify 프로필",
)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    playback: SpotifyPlaybackService = Depends(get_playback_service),
) -> SpotifyProfileResponse:
    account = await playback.get_account(user_id)
    return SpotifyProfileResponse(
        id=account.id,
        display_name=account.display_name,
        product=account.product,
        is_premium=account.is_premium,
    )

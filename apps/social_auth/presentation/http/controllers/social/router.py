"""Social Account Router.

로그인한 사용자의 카카오/네이버 계정 연동 엔드포인트입니다.
"""

import logging

from fastapi import APIRouter, Depends, Request

from apps.social_auth.application.oauth.commands import LinkAccountInteractor
from apps.social_auth.application.oauth.dto import LinkAccountRequest
from apps.social_auth.application.oauth.ports import OAuthProfile
from apps.social_auth.application.token.services import TokenRefreshService
from apps.social_auth.domain.enums import Provider
from apps.social_auth.presentation.http.auth import get_current_user_id
from apps.social_auth.presentation.http.schemas.social import (
    ProviderUser,
    SocialProfileResponse,
    SocialRefreshResponse,
    SocialRevokeResponse,
    SocialTokenBody,
    SocialTokenResponse,
)
from apps.social_auth.presentation.http.utils.fingerprint import get_request_fingerprint
from apps.social_auth.setup.dependencies import (
    get_link_account_interactor,
    get_token_refresh_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _provider_user(profile: OAuthProfile | None) -> ProviderUser | None:
    if profile is None:
        return None
    return ProviderUser(
        id=profile.provider_user_id,
        email=profile.email,
        name=profile.nickname,
        profile_image=profile.profile_image_url,
    )


@router.post(
    "/{provider}/token",
    response_model=SocialTokenResponse,
    summary="소셜 계정 연동 (코드 교환)",
)
async def exchange_token(
    provider: str,
    body: SocialTokenBody,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    interactor: LinkAccountInteractor = Depends(get_link_account_interactor),
) -> SocialTokenResponse:
    social_provider = Provider.parse_social(provider)
    result = await interactor.execute(
        LinkAccountRequest(
            provider=social_provider,
            user_id=user_id,
            code=body.code,
            state=body.state,
            fingerprint=get_request_fingerprint(request),
            redirect_uri=body.redirect_uri,
        )
    )
    return SocialTokenResponse(
        provider=social_provider.value,
        access_token=result.access_token,
        expires_in=result.expires_in,
        provider_user=_provider_user(result.profile),
    )


@router.post(
    "/{provider}/refresh",
    response_model=SocialRefreshResponse,
    summary="소셜 access token 갱신",
)
async def refresh_token(
    provider: str,
    user_id: str = Depends(get_current_user_id),
    token_service: TokenRefreshService = Depends(get_token_refresh_service),
) -> SocialRefreshResponse:
    result = await token_service.refresh(Provider.parse_social(provider), user_id=user_id)
    return SocialRefreshResponse(access_token=result.access_token, expires_in=result.expires_in)


@router.post(
    "/{provider}/revoke",
    response_model=SocialRevokeResponse,
    summary="소셜 계정 연동 해제",
)
async def revoke(
    provider: str,
    user_id: str = Depends(get_current_user_id),
    token_service: TokenRefreshService = Depends(get_token_refresh_service),
) -> SocialRevokeResponse:
    social_provider = Provider.parse_social(provider)
    await token_service.revoke(social_provider, user_id=user_id)
    logger.info(
        "Social account unlinked",
        extra={"provider": social_provider.value, "user_id": user_id},
    )
    return SocialRevokeResponse()


@router.get(
    "/{provider}/me",
    response_model=SocialProfileResponse,
    summary="연동된 소셜 프로필 조회",
)
async def get_profile(
    provider: str,
    user_id: str = Depends(get_current_user_id),
    token_service: TokenRefreshService = Depends(get_token_refresh_service),
) -> SocialProfileResponse:
    social_provider = Provider.parse_social(provider)
    profile = await token_service.fetch_profile(social_provider, user_id=user_id)
    return SocialProfileResponse(
        provider=social_provider.value,
        provider_user=_provider_user(profile),
    )

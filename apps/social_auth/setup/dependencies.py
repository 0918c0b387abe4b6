"""Dependency Injection Setup.

FastAPI Depends를 사용한 의존성 주입 설정입니다.

state / 토큰 저장소와 토큰 레포지토리는 프로세스 싱글톤입니다.
(인메모리 저장소의 데이터와 사용자 별 쓰기 락을 요청 간에 공유해야 함)
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Depends

from apps.social_auth.setup.config import Settings, get_settings

if TYPE_CHECKING:
    from apps.social_auth.application.common.ports import DocumentStore, KeyValueStore
    from apps.social_auth.application.oauth.services import (
        OAuthStateService,
        OneTimeCodeService,
        RedirectUriResolver,
    )
    from apps.social_auth.application.token.services import (
        SocialTokenRepository,
        TokenRefreshService,
    )


# ============================================================
# Storage Dependencies (singletons)
# ============================================================


@lru_cache
def get_key_value_store() -> "KeyValueStore":
    """state / 일회용 코드 / access token 캐시 저장소."""
    settings = get_settings()
    if settings.storage_backend == "redis":
        from apps.social_auth.infrastructure.persistence_redis import (
            RedisKeyValueStore,
            get_ephemeral_redis,
        )

        return RedisKeyValueStore(get_ephemeral_redis())

    from apps.social_auth.infrastructure.persistence_memory import InMemoryKeyValueStore

    return InMemoryKeyValueStore()


@lru_cache
def get_document_store() -> "DocumentStore":
    """토큰 / 사용자 문서 저장소."""
    settings = get_settings()
    if settings.storage_backend == "redis":
        from apps.social_auth.infrastructure.persistence_redis import (
            RedisDocumentStore,
            get_document_redis,
        )

        return RedisDocumentStore(get_document_redis())

    from apps.social_auth.infrastructure.persistence_memory import InMemoryDocumentStore

    return InMemoryDocumentStore()


@lru_cache
def get_token_repository(collection: str) -> "SocialTokenRepository":
    """컬렉션 별 토큰 레포지토리 (싱글톤)."""
    from apps.social_auth.application.token.services import SocialTokenRepository
    from apps.social_auth.domain.value_objects import RotationPolicy
    from apps.social_auth.infrastructure.security import AesGcmTokenCipher

    settings = get_settings()
    return SocialTokenRepository(
        get_document_store(),
        AesGcmTokenCipher(settings.encryption_key),
        collection=collection,
        policy=RotationPolicy(
            history_limit=settings.token_history_limit,
            max_per_hour=settings.token_max_rotations_per_hour,
        ),
    )


@lru_cache
def get_spotify_api_client():
    """SpotifyWebApiClient 제공자 (싱글톤, 종료 시 close)."""
    from apps.social_auth.infrastructure.spotify import SpotifyWebApiClient

    return SpotifyWebApiClient(timeout=get_settings().upstream_timeout_seconds)


# ============================================================
# Service Dependencies (연주자)
# ============================================================


def get_state_service(
    store: "KeyValueStore" = Depends(get_key_value_store),
    settings: Settings = Depends(get_settings),
):
    """OAuthStateService 제공자."""
    from apps.social_auth.application.oauth.services import OAuthStateService

    return OAuthStateService(store, ttl_seconds=settings.oauth_state_ttl_seconds)


def get_one_time_code_service(
    store: "KeyValueStore" = Depends(get_key_value_store),
    settings: Settings = Depends(get_settings),
):
    """OneTimeCodeService 제공자."""
    from apps.social_auth.application.oauth.services import OneTimeCodeService

    return OneTimeCodeService(store, ttl_seconds=settings.one_time_code_ttl_seconds)


def get_redirect_resolver(settings: Settings = Depends(get_settings)):
    """RedirectUriResolver 제공자."""
    from apps.social_auth.application.oauth.services import (
        ProviderRedirectConfig,
        RedirectUriResolver,
        parse_uri_list,
    )
    from apps.social_auth.domain.enums import Provider

    return RedirectUriResolver(
        {
            Provider.KAKAO: ProviderRedirectConfig(
                default_uri=settings.kakao_redirect_uri,
                additional_allowed_uris=tuple(parse_uri_list(settings.kakao_allowed_redirect_uris)),
            ),
            Provider.NAVER: ProviderRedirectConfig(
                default_uri=settings.naver_redirect_uri,
                additional_allowed_uris=tuple(parse_uri_list(settings.naver_allowed_redirect_uris)),
            ),
        },
        expo_owner=settings.expo_owner,
        expo_slug=settings.expo_slug,
    )


def get_return_url_policy(settings: Settings = Depends(get_settings)):
    """ReturnUrlPolicy 제공자."""
    from apps.social_auth.application.oauth.services import ReturnUrlPolicy, parse_uri_list

    return ReturnUrlPolicy(parse_uri_list(settings.allowed_return_origins))


def get_oauth_provider_registry(settings: Settings = Depends(get_settings)):
    """OAuth ProviderRegistry 제공자."""
    from apps.social_auth.infrastructure.oauth import ProviderRegistry

    return ProviderRegistry.from_settings(settings)


def get_oauth_client(
    registry=Depends(get_oauth_provider_registry),
    settings: Settings = Depends(get_settings),
):
    """OAuthClientImpl 제공자."""
    from apps.social_auth.infrastructure.oauth import OAuthClientImpl

    return OAuthClientImpl(registry, settings.upstream_timeout_seconds)


def get_session_token_issuer(settings: Settings = Depends(get_settings)):
    """JwtSessionTokenIssuer 제공자."""
    from apps.social_auth.infrastructure.security import JwtSessionTokenIssuer

    return JwtSessionTokenIssuer(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_days=settings.session_token_exp_days,
    )


def get_user_account_gateway(store: "DocumentStore" = Depends(get_document_store)):
    """UserAccountGateway 제공자."""
    from apps.social_auth.infrastructure.persistence_documents import DocumentUserAccountGateway

    return DocumentUserAccountGateway(store)


def get_token_refresh_service(
    oauth_client=Depends(get_oauth_client),
    store: "KeyValueStore" = Depends(get_key_value_store),
    settings: Settings = Depends(get_settings),
):
    """TokenRefreshService 제공자."""
    from apps.social_auth.application.token.services import (
        SOCIAL_TOKENS_COLLECTION,
        SPOTIFY_TOKENS_COLLECTION,
        AccessTokenCache,
        TokenRefreshService,
    )

    return TokenRefreshService(
        oauth_client,
        social_tokens=get_token_repository(SOCIAL_TOKENS_COLLECTION),
        spotify_tokens=get_token_repository(SPOTIFY_TOKENS_COLLECTION),
        cache=AccessTokenCache(store, expiry_buffer_ms=settings.access_token_expiry_buffer_ms),
    )


def get_playback_service(
    token_service: "TokenRefreshService" = Depends(get_token_refresh_service),
    api_client=Depends(get_spotify_api_client),
):
    """SpotifyPlaybackService 제공자."""
    from apps.social_auth.application.playback.services import SpotifyPlaybackService

    return SpotifyPlaybackService(token_service, api_client)


# ============================================================
# UseCase Dependencies (지휘자)
# ============================================================


def get_issue_state_interactor(
    state_service: "OAuthStateService" = Depends(get_state_service),
    redirect_resolver: "RedirectUriResolver" = Depends(get_redirect_resolver),
):
    """IssueStateInteractor 제공자."""
    from apps.social_auth.application.oauth.commands import IssueStateInteractor

    return IssueStateInteractor(state_service, redirect_resolver)


def get_start_login_interactor(
    state_service: "OAuthStateService" = Depends(get_state_service),
    return_url_policy=Depends(get_return_url_policy),
    oauth_client=Depends(get_oauth_client),
):
    """StartLoginInteractor 제공자."""
    from apps.social_auth.application.oauth.commands import StartLoginInteractor

    return StartLoginInteractor(state_service, return_url_policy, oauth_client)


def get_login_callback_interactor(
    state_service: "OAuthStateService" = Depends(get_state_service),
    oauth_client=Depends(get_oauth_client),
    user_accounts=Depends(get_user_account_gateway),
    session_tokens=Depends(get_session_token_issuer),
    one_time_codes: "OneTimeCodeService" = Depends(get_one_time_code_service),
    settings: Settings = Depends(get_settings),
):
    """LoginCallbackInteractor 제공자."""
    from apps.social_auth.application.oauth.commands import LoginCallbackInteractor

    return LoginCallbackInteractor(
        state_service,
        oauth_client,
        user_accounts,
        session_tokens,
        one_time_codes,
        default_return_url=settings.default_return_url,
    )


def get_complete_login_interactor(
    one_time_codes: "OneTimeCodeService" = Depends(get_one_time_code_service),
):
    """CompleteLoginInteractor 제공자."""
    from apps.social_auth.application.oauth.commands import CompleteLoginInteractor

    return CompleteLoginInteractor(one_time_codes)


def get_link_account_interactor(
    state_service: "OAuthStateService" = Depends(get_state_service),
    redirect_resolver: "RedirectUriResolver" = Depends(get_redirect_resolver),
    token_service: "TokenRefreshService" = Depends(get_token_refresh_service),
):
    """LinkAccountInteractor 제공자."""
    from apps.social_auth.application.oauth.commands import LinkAccountInteractor

    return LinkAccountInteractor(state_service, redirect_resolver, token_service)

"""TokenRefreshService 단위 테스트."""

import pytest

from apps.social_auth.application.oauth.exceptions import (
    DependencyError,
    InvalidAuthorizationCodeError,
    InvalidGrantError,
    OAuthProviderError,
    ReauthRequiredError,
    RedirectUriMismatchError,
)
from apps.social_auth.application.oauth.ports import OAuthProfile, OAuthTokens
from apps.social_auth.application.token.exceptions import (
    MissingRefreshTokenError,
    SocialAccountNotLinkedError,
)
from apps.social_auth.application.token.services import (
    SPOTIFY_TOKENS_COLLECTION,
    SocialTokenRepository,
    TokenRefreshService,
)
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.exceptions import RotationRateLimitedError
from apps.social_auth.domain.value_objects import RotationPolicy, TokenUpdate

USER_ID = "user-1"


@pytest.fixture
def service(mock_provider_gateway, social_tokens, spotify_tokens, access_cache, clock):
    return TokenRefreshService(
        mock_provider_gateway,
        social_tokens=social_tokens,
        spotify_tokens=spotify_tokens,
        cache=access_cache,
        clock=clock.ms,
    )


async def _link_spotify(repository: SocialTokenRepository) -> None:
    await repository.upsert_token(
        USER_ID,
        Provider.SPOTIFY,
        TokenUpdate(access_token="stored-access", refresh_token="refresh-1"),
    )


class TestExchangeCode:
    """exchange_code 테스트."""

    @pytest.mark.asyncio
    async def test_spotify_exchange_stores_and_caches(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        mock_provider_gateway.exchange_code.return_value = OAuthTokens(
            access_token="access-1", refresh_token="refresh-1", expires_in=3600, scope="streaming"
        )

        result = await service.exchange_code(
            Provider.SPOTIFY,
            user_id=USER_ID,
            code="auth-code",
            redirect_uri="stonetify://spotify-callback",
            code_verifier="verifier",
            client_id="client-abc",
        )

        assert result.access_token == "access-1"
        assert result.version == 1
        assert result.profile is None
        mock_provider_gateway.fetch_profile.assert_not_called()

        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.client_id == "client-abc"
        assert spotify_tokens.decrypt_token(record).refresh_token == "refresh-1"

        # 캐시 적중: 업스트림 refresh 없음
        assert await service.get_access_token(USER_ID) == "access-1"
        mock_provider_gateway.refresh_access_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_first_connection_without_refresh_token(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        mock_provider_gateway.exchange_code.return_value = OAuthTokens(access_token="access-1")

        with pytest.raises(MissingRefreshTokenError):
            await service.exchange_code(
                Provider.SPOTIFY, user_id=USER_ID, code="c", redirect_uri="r"
            )

        assert await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY) is None

    @pytest.mark.asyncio
    async def test_reconnect_without_refresh_token_keeps_existing(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        await _link_spotify(spotify_tokens)
        mock_provider_gateway.exchange_code.return_value = OAuthTokens(access_token="access-2")

        result = await service.exchange_code(
            Provider.SPOTIFY, user_id=USER_ID, code="c", redirect_uri="r"
        )

        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert result.version == 1
        assert spotify_tokens.decrypt_token(record).refresh_token == "refresh-1"
        assert spotify_tokens.decrypt_token(record).access_token == "access-2"

    @pytest.mark.asyncio
    async def test_used_code_maps_to_invalid_authorization_code(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        await _link_spotify(spotify_tokens)
        mock_provider_gateway.exchange_code.side_effect = InvalidGrantError(
            "spotify", "invalid_grant", status_code=400
        )

        with pytest.raises(InvalidAuthorizationCodeError):
            await service.exchange_code(
                Provider.SPOTIFY, user_id=USER_ID, code="used", redirect_uri="r"
            )

        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.revoked is False

    @pytest.mark.asyncio
    async def test_redirect_uri_mismatch(self, service, mock_provider_gateway) -> None:
        mock_provider_gateway.exchange_code.side_effect = OAuthProviderError(
            "spotify", "bad redirect", status_code=400, error_code="redirect_uri_mismatch"
        )

        with pytest.raises(RedirectUriMismatchError):
            await service.exchange_code(
                Provider.SPOTIFY, user_id=USER_ID, code="c", redirect_uri="r"
            )

    @pytest.mark.asyncio
    async def test_social_exchange_fetches_profile(
        self, service, mock_provider_gateway, social_tokens
    ) -> None:
        mock_provider_gateway.exchange_code.return_value = OAuthTokens(
            access_token="kakao-access", refresh_token="kakao-refresh"
        )
        mock_provider_gateway.fetch_profile.return_value = OAuthProfile(
            provider=Provider.KAKAO,
            provider_user_id="12345",
            email="user@example.com",
            nickname="tester",
        )

        result = await service.exchange_code(
            Provider.KAKAO, user_id=USER_ID, code="c", redirect_uri="r"
        )

        assert result.profile.provider_user_id == "12345"
        record = await social_tokens.get_by_user(USER_ID, Provider.KAKAO)
        assert record.provider_user_id == "12345"
        assert record.provider_user_email == "user@example.com"
        assert record.provider_user_name == "tester"


class TestGetAccessToken:
    """get_access_token / refresh 테스트."""

    @pytest.mark.asyncio
    async def test_refresh_with_rotation(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        await _link_spotify(spotify_tokens)
        mock_provider_gateway.refresh_access_token.return_value = OAuthTokens(
            access_token="access-2", refresh_token="refresh-2"
        )

        token = await service.get_access_token(USER_ID)

        assert token == "access-2"
        mock_provider_gateway.refresh_access_token.assert_awaited_once_with(
            Provider.SPOTIFY, refresh_token="refresh-1", client_id=None
        )
        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.version == 2
        assert spotify_tokens.decrypt_token(record).refresh_token == "refresh-2"

    @pytest.mark.asyncio
    async def test_refresh_without_rotation_keeps_version(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        await _link_spotify(spotify_tokens)
        mock_provider_gateway.refresh_access_token.return_value = OAuthTokens(
            access_token="access-2", refresh_token="refresh-1"
        )

        await service.get_access_token(USER_ID)

        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.version == 1
        assert spotify_tokens.decrypt_token(record).access_token == "access-2"

    @pytest.mark.asyncio
    async def test_cache_expiry_triggers_refresh(
        self, service, mock_provider_gateway, spotify_tokens, clock
    ) -> None:
        await _link_spotify(spotify_tokens)
        mock_provider_gateway.refresh_access_token.return_value = OAuthTokens(
            access_token="access-2", expires_in=60
        )
        await service.get_access_token(USER_ID)

        clock.advance(56_000)
        await service.get_access_token(USER_ID)

        assert mock_provider_gateway.refresh_access_token.await_count == 2

    @pytest.mark.asyncio
    async def test_persist_failure_still_returns_token(
        self, mock_provider_gateway, document_store, cipher, access_cache, social_tokens, clock
    ) -> None:
        strict = SocialTokenRepository(
            document_store,
            cipher,
            collection=SPOTIFY_TOKENS_COLLECTION,
            policy=RotationPolicy(max_per_hour=1),
            clock=clock.ms,
        )
        service = TokenRefreshService(
            mock_provider_gateway,
            social_tokens=social_tokens,
            spotify_tokens=strict,
            cache=access_cache,
            clock=clock.ms,
        )
        await _link_spotify(strict)
        mock_provider_gateway.refresh_access_token.return_value = OAuthTokens(
            access_token="access-2", refresh_token="refresh-2"
        )

        token = await service.get_access_token(USER_ID)

        assert token == "access-2"
        record = await strict.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.version == 1

    @pytest.mark.asyncio
    async def test_explicit_refresh_propagates_rate_limit(
        self, mock_provider_gateway, document_store, cipher, access_cache, social_tokens, clock
    ) -> None:
        strict = SocialTokenRepository(
            document_store,
            cipher,
            collection=SPOTIFY_TOKENS_COLLECTION,
            policy=RotationPolicy(max_per_hour=1),
            clock=clock.ms,
        )
        service = TokenRefreshService(
            mock_provider_gateway,
            social_tokens=social_tokens,
            spotify_tokens=strict,
            cache=access_cache,
            clock=clock.ms,
        )
        await _link_spotify(strict)
        mock_provider_gateway.refresh_access_token.return_value = OAuthTokens(
            access_token="access-2", refresh_token="refresh-2"
        )

        with pytest.raises(RotationRateLimitedError):
            await service.refresh(Provider.SPOTIFY, user_id=USER_ID)

    @pytest.mark.asyncio
    async def test_invalid_grant_revokes_record(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        await _link_spotify(spotify_tokens)
        mock_provider_gateway.refresh_access_token.side_effect = InvalidGrantError(
            "spotify", "invalid_grant", status_code=400
        )

        with pytest.raises(ReauthRequiredError):
            await service.get_access_token(USER_ID)

        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.revoked is True
        assert record.refresh_token_enc is None
        assert record.access_token_enc is None

    @pytest.mark.asyncio
    async def test_invalid_grant_purges_cached_access_token(
        self, service, mock_provider_gateway, spotify_tokens, access_cache
    ) -> None:
        await _link_spotify(spotify_tokens)
        await access_cache.put(USER_ID, Provider.SPOTIFY, "cached-access", 3600)
        mock_provider_gateway.refresh_access_token.side_effect = InvalidGrantError(
            "spotify", "invalid_grant", status_code=400
        )

        with pytest.raises(ReauthRequiredError):
            await service.refresh(Provider.SPOTIFY, user_id=USER_ID)

        assert await access_cache.get(USER_ID, Provider.SPOTIFY) is None
        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.revoked is True
        assert record.access_token_enc is None

    @pytest.mark.asyncio
    async def test_transient_failure_keeps_record(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        await _link_spotify(spotify_tokens)
        mock_provider_gateway.refresh_access_token.side_effect = DependencyError(
            "spotify", "timeout"
        )

        with pytest.raises(DependencyError):
            await service.get_access_token(USER_ID)

        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.revoked is False

    @pytest.mark.asyncio
    async def test_not_linked(self, service) -> None:
        with pytest.raises(SocialAccountNotLinkedError):
            await service.get_access_token(USER_ID)

    @pytest.mark.asyncio
    async def test_revoked_record_requires_reauth(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        await _link_spotify(spotify_tokens)
        await spotify_tokens.revoke(USER_ID, Provider.SPOTIFY)

        with pytest.raises(ReauthRequiredError):
            await service.refresh(Provider.SPOTIFY, user_id=USER_ID)

        mock_provider_gateway.refresh_access_token.assert_not_called()


class TestRevoke:
    """revoke 테스트."""

    @pytest.mark.asyncio
    async def test_revoke_calls_upstream(
        self, service, mock_provider_gateway, spotify_tokens
    ) -> None:
        await _link_spotify(spotify_tokens)

        await service.revoke(Provider.SPOTIFY, user_id=USER_ID)

        mock_provider_gateway.revoke_upstream.assert_awaited_once_with(
            Provider.SPOTIFY, access_token="stored-access"
        )
        record = await spotify_tokens.get_by_user(USER_ID, Provider.SPOTIFY)
        assert record.revoked is True

    @pytest.mark.asyncio
    async def test_upstream_failure_still_revokes_locally(
        self, service, mock_provider_gateway, social_tokens
    ) -> None:
        await social_tokens.upsert_token(
            USER_ID, Provider.KAKAO, TokenUpdate(access_token="a", refresh_token="r")
        )
        mock_provider_gateway.revoke_upstream.side_effect = DependencyError("kakao", "down")

        await service.revoke(Provider.KAKAO, user_id=USER_ID)

        record = await social_tokens.get_by_user(USER_ID, Provider.KAKAO)
        assert record.revoked is True

    @pytest.mark.asyncio
    async def test_revoke_clears_cache(
        self, service, mock_provider_gateway, spotify_tokens, access_cache
    ) -> None:
        await _link_spotify(spotify_tokens)
        await access_cache.put(USER_ID, Provider.SPOTIFY, "cached", 3600)

        await service.revoke(Provider.SPOTIFY, user_id=USER_ID)

        assert await access_cache.get(USER_ID, Provider.SPOTIFY) is None

    @pytest.mark.asyncio
    async def test_revoke_without_record(self, service, mock_provider_gateway) -> None:
        await service.revoke(Provider.NAVER, user_id=USER_ID)

        mock_provider_gateway.revoke_upstream.assert_not_called()


class TestFetchProfile:
    @pytest.mark.asyncio
    async def test_expired_access_token(
        self, service, mock_provider_gateway, social_tokens
    ) -> None:
        await social_tokens.upsert_token(
            USER_ID, Provider.NAVER, TokenUpdate(access_token="a", refresh_token="r")
        )
        mock_provider_gateway.fetch_profile.side_effect = InvalidGrantError(
            "naver", None, status_code=401
        )

        with pytest.raises(ReauthRequiredError) as exc_info:
            await service.fetch_profile(Provider.NAVER, user_id=USER_ID)

        assert exc_info.value.code == "TOKEN_EXPIRED"

    @pytest.mark.asyncio
    async def test_not_linked(self, service) -> None:
        with pytest.raises(SocialAccountNotLinkedError):
            await service.fetch_profile(Provider.KAKAO, user_id=USER_ID)

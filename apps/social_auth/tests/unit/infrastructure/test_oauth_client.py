"""OAuthClientImpl 테스트 (httpx.MockTransport)."""

from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from apps.social_auth.application.oauth.exceptions import (
    DependencyError,
    InvalidGrantError,
    OAuthProviderError,
)
from apps.social_auth.domain.enums import Provider
from apps.social_auth.infrastructure.oauth import (
    KakaoOAuthProvider,
    NaverOAuthProvider,
    OAuthClientImpl,
    ProviderRegistry,
    SpotifyOAuthProvider,
)

REGISTRY = ProviderRegistry(
    [
        KakaoOAuthProvider(
            client_id="kakao-client",
            client_secret="kakao-secret",
            redirect_uri="https://api.stonetify.com/kakao/callback",
        ),
        NaverOAuthProvider(
            client_id="naver-client",
            client_secret="naver-secret",
            redirect_uri="https://api.stonetify.com/naver/callback",
        ),
        SpotifyOAuthProvider(client_id="spotify-client", client_secret=None, redirect_uri=None),
    ]
)


def _client(handler) -> OAuthClientImpl:
    return OAuthClientImpl(REGISTRY, 5.0, transport=httpx.MockTransport(handler))


def _form(request: httpx.Request) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


class TestAuthorizationUrl:
    def test_kakao_pkce(self) -> None:
        url = _client(lambda request: httpx.Response(200)).get_authorization_url(
            Provider.KAKAO,
            redirect_uri="stonetify://kakao-callback",
            state="state-1",
            code_verifier="verifier",
        )

        query = parse_qs(urlparse(url).query)
        assert url.startswith("https://kauth.kakao.com/oauth/authorize?")
        assert query["state"] == ["state-1"]
        assert query["redirect_uri"] == ["stonetify://kakao-callback"]
        assert query["code_challenge_method"] == ["S256"]
        assert "=" not in query["code_challenge"][0]

    def test_naver_has_no_pkce(self) -> None:
        url = _client(lambda request: httpx.Response(200)).get_authorization_url(
            Provider.NAVER, redirect_uri="", state="state-1", code_verifier="verifier"
        )

        query = parse_qs(urlparse(url).query)
        assert "code_challenge" not in query
        assert query["redirect_uri"] == ["https://api.stonetify.com/naver/callback"]


class TestExchangeCode:
    """토큰 교환 및 오류 분류 테스트."""

    @pytest.mark.asyncio
    async def test_kakao_success(self) -> None:
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured.update(_form(request))
            return httpx.Response(
                200,
                json={
                    "access_token": "access",
                    "refresh_token": "refresh",
                    "token_type": "bearer",
                    "expires_in": 21599,
                },
            )

        tokens = await _client(handler).exchange_code(
            Provider.KAKAO, code="auth-code", redirect_uri="stonetify://kakao-callback"
        )

        assert tokens.access_token == "access"
        assert tokens.refresh_token == "refresh"
        assert tokens.expires_in == 21599
        assert captured["grant_type"] == "authorization_code"
        assert captured["client_secret"] == "kakao-secret"
        assert "code_verifier" not in captured

    @pytest.mark.asyncio
    async def test_spotify_client_id_override(self) -> None:
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured.update(_form(request))
            captured["authorization"] = request.headers.get("authorization")
            return httpx.Response(200, json={"access_token": "a", "refresh_token": "r"})

        await _client(handler).exchange_code(
            Provider.SPOTIFY,
            code="c",
            redirect_uri="stonetify://spotify-callback",
            code_verifier="verifier",
            client_id="app-client",
        )

        assert captured["client_id"] == "app-client"
        assert captured["code_verifier"] == "verifier"
        assert captured["authorization"] is None

    @pytest.mark.asyncio
    async def test_missing_access_token(self) -> None:
        client = _client(lambda request: httpx.Response(200, json={"token_type": "bearer"}))

        with pytest.raises(OAuthProviderError):
            await client.exchange_code(Provider.KAKAO, code="c", redirect_uri="r")

    @pytest.mark.asyncio
    async def test_invalid_grant(self) -> None:
        client = _client(
            lambda request: httpx.Response(400, json={"error": "invalid_grant"})
        )

        with pytest.raises(InvalidGrantError) as exc_info:
            await client.exchange_code(Provider.KAKAO, code="c", redirect_uri="r")

        assert exc_info.value.error_code == "invalid_grant"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_unauthorized_is_invalid_grant_for_kakao(self) -> None:
        client = _client(lambda request: httpx.Response(401, json={"msg": "unauthorized"}))

        with pytest.raises(InvalidGrantError):
            await client.refresh_access_token(Provider.KAKAO, refresh_token="r")

    @pytest.mark.asyncio
    async def test_server_error_is_dependency_error(self) -> None:
        client = _client(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(DependencyError):
            await client.refresh_access_token(Provider.SPOTIFY, refresh_token="r")

    @pytest.mark.asyncio
    async def test_naver_error_in_200_body(self) -> None:
        client = _client(
            lambda request: httpx.Response(
                200, json={"error": "invalid_request", "error_description": "no token"}
            )
        )

        with pytest.raises(InvalidGrantError):
            await client.refresh_access_token(Provider.NAVER, refresh_token="r")

    @pytest.mark.asyncio
    async def test_other_client_error(self) -> None:
        client = _client(
            lambda request: httpx.Response(
                400, json={"error": "invalid_client", "error_description": "bad client"}
            )
        )

        with pytest.raises(OAuthProviderError) as exc_info:
            await client.exchange_code(Provider.SPOTIFY, code="c", redirect_uri="r")

        assert not isinstance(exc_info.value, InvalidGrantError)
        assert exc_info.value.error_code == "invalid_client"

    @pytest.mark.asyncio
    async def test_timeout_is_dependency_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(DependencyError):
            await _client(handler).exchange_code(Provider.KAKAO, code="c", redirect_uri="r")

    @pytest.mark.asyncio
    async def test_non_json_body_is_dependency_error(self) -> None:
        client = _client(lambda request: httpx.Response(200, text="<html>gateway</html>"))

        with pytest.raises(DependencyError) as exc_info:
            await client.refresh_access_token(Provider.KAKAO, refresh_token="r")

        assert exc_info.value.retryable is True


class TestProfileAndRevoke:
    @pytest.mark.asyncio
    async def test_kakao_profile(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["authorization"] == "Bearer access"
            return httpx.Response(
                200,
                json={
                    "id": 12345,
                    "kakao_account": {
                        "email": "user@example.com",
                        "profile": {"nickname": "tester"},
                    },
                },
            )

        profile = await _client(handler).fetch_profile(Provider.KAKAO, access_token="access")

        assert profile.provider_user_id == "12345"
        assert profile.email == "user@example.com"
        assert profile.nickname == "tester"

    @pytest.mark.asyncio
    async def test_spotify_profile_product(self) -> None:
        client = _client(
            lambda request: httpx.Response(
                200, json={"id": "sp-1", "display_name": "tester", "product": "premium"}
            )
        )

        profile = await client.fetch_profile(Provider.SPOTIFY, access_token="access")

        assert profile.product == "premium"

    @pytest.mark.asyncio
    async def test_naver_revoke_uses_delete_grant(self) -> None:
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured.update(_form(request))
            return httpx.Response(200, json={"access_token": "access", "result": "success"})

        await _client(handler).revoke_upstream(Provider.NAVER, access_token="access")

        assert captured["grant_type"] == "delete"
        assert captured["service_provider"] == "NAVER"

    @pytest.mark.asyncio
    async def test_spotify_revoke_is_noop(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no upstream call expected")

        await _client(handler).revoke_upstream(Provider.SPOTIFY, access_token="access")

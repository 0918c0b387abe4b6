"""HTTP API 테스트 (FastAPI TestClient).

lifespan(만료 스위퍼)은 실행하지 않도록 with 블록 없이 TestClient 를 사용합니다.
"""

from unittest.mock import AsyncMock, MagicMock
from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from apps.social_auth.application.oauth.exceptions import ReauthRequiredError
from apps.social_auth.application.oauth.ports import OAuthProfile, OAuthTokens
from apps.social_auth.application.playback.dto import SpotifyAccount
from apps.social_auth.application.playback.exceptions import (
    NoActiveDeviceError,
    SpotifyApiError,
)
from apps.social_auth.application.token.services import TokenRefreshService
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.exceptions import RotationRateLimitedError
from apps.social_auth.infrastructure.persistence_memory import (
    InMemoryDocumentStore,
    InMemoryKeyValueStore,
)
from apps.social_auth.infrastructure.security import JwtSessionTokenIssuer
from apps.social_auth.main import create_app
from apps.social_auth.setup.config import get_settings
from apps.social_auth.setup.dependencies import (
    get_document_store,
    get_key_value_store,
    get_oauth_client,
    get_playback_service,
    get_session_token_issuer,
    get_token_refresh_service,
)

SECRET = "http-test-secret"
KAKAO_REDIRECT = "https://api.stonetify.com/kakao/callback"
API = "/api/v1"


@pytest.fixture
def issuer() -> JwtSessionTokenIssuer:
    return JwtSessionTokenIssuer(secret_key=SECRET)


@pytest.fixture
def auth_headers(issuer) -> dict[str, str]:
    return {"Authorization": f"Bearer {issuer.issue('user-1')}"}


@pytest.fixture
def token_service(mock_provider_gateway, social_tokens, spotify_tokens, access_cache, clock):
    return TokenRefreshService(
        mock_provider_gateway,
        social_tokens=social_tokens,
        spotify_tokens=spotify_tokens,
        cache=access_cache,
        clock=clock.ms,
    )


@pytest.fixture
def mock_playback() -> MagicMock:
    playback = MagicMock()
    for name in (
        "get_account",
        "get_state",
        "get_devices",
        "play",
        "pause",
        "next_track",
        "previous_track",
        "seek",
        "set_volume",
        "transfer",
    ):
        setattr(playback, name, AsyncMock(return_value=None))
    return playback


@pytest.fixture
def app(mock_provider_gateway, issuer, token_service, mock_playback):
    settings = get_settings().model_copy(
        update={
            "environment": "test",
            "allowed_return_origins": "https://stonetify.com,stonetify://oauth-finish",
            "kakao_redirect_uri": KAKAO_REDIRECT,
            "public_base_url": None,
        }
    )
    kv_store = InMemoryKeyValueStore()
    document_store = InMemoryDocumentStore()

    application = create_app()
    application.dependency_overrides.update(
        {
            get_settings: lambda: settings,
            get_key_value_store: lambda: kv_store,
            get_document_store: lambda: document_store,
            get_oauth_client: lambda: mock_provider_gateway,
            get_session_token_issuer: lambda: issuer,
            get_token_refresh_service: lambda: token_service,
            get_playback_service: lambda: mock_playback,
        }
    )
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


class TestHealth:
    def test_health(self, client) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestSocialState:
    """POST /auth/social/state 테스트."""

    def test_issue_state(self, client, auth_headers) -> None:
        response = client.post(
            f"{API}/auth/social/state", json={"provider": "kakao"}, headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["expiresInMs"] == 300_000
        assert len(data["state"]) == 48

    def test_anonymous_state(self, client) -> None:
        response = client.post(f"{API}/auth/social/state", json={"provider": "kakao"})

        assert response.status_code == 200

    def test_invalid_redirect_uri(self, client, auth_headers) -> None:
        response = client.post(
            f"{API}/auth/social/state",
            json={"provider": "kakao", "redirectUri": "https://evil.example/cb"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "INVALID_REDIRECT_URI"
        assert KAKAO_REDIRECT in data["allowedRedirectUris"]
        assert "stonetify://kakao-callback" in data["allowedRedirectUris"]

    def test_unsupported_provider(self, client, auth_headers) -> None:
        response = client.post(
            f"{API}/auth/social/state", json={"provider": "spotify"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "UNSUPPORTED_PROVIDER"


class TestServerLogin:
    """서버 주도 로그인 (start → callback → complete) 테스트."""

    def _start(self, client, mock_provider_gateway, return_url: str) -> str:
        response = client.get(
            f"{API}/auth/kakao/start",
            params={"returnUrl": return_url},
            follow_redirects=False,
        )
        assert response.status_code == 302
        assert response.headers["location"].startswith("https://kauth.kakao.com/")
        return mock_provider_gateway.get_authorization_url.call_args.kwargs["state"]

    def _prepare_provider(self, mock_provider_gateway) -> None:
        mock_provider_gateway.exchange_code.return_value = OAuthTokens(access_token="kakao-access")
        mock_provider_gateway.fetch_profile.return_value = OAuthProfile(
            provider=Provider.KAKAO, provider_user_id="12345", nickname="tester"
        )

    def test_start_rejects_unlisted_return_url(self, client, mock_provider_gateway) -> None:
        response = client.get(
            f"{API}/auth/kakao/start",
            params={"returnUrl": "https://evil.example/"},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert response.json()["allowedOrigins"] == [
            "https://stonetify.com",
            "stonetify://oauth-finish",
        ]
        mock_provider_gateway.get_authorization_url.assert_not_called()

    def test_start_passes_callback_uri(self, client, mock_provider_gateway) -> None:
        self._start(client, mock_provider_gateway, "https://stonetify.com/home")

        kwargs = mock_provider_gateway.get_authorization_url.call_args.kwargs
        assert kwargs["redirect_uri"] == "http://testserver/api/v1/auth/kakao/callback"

    def test_web_login_sets_cookie(self, client, mock_provider_gateway, issuer) -> None:
        self._prepare_provider(mock_provider_gateway)
        state = self._start(client, mock_provider_gateway, "https://stonetify.com/home")

        response = client.get(
            f"{API}/auth/kakao/callback",
            params={"code": "auth-code", "state": state},
            follow_redirects=False,
        )

        assert response.status_code == 302
        assert response.headers["location"] == "https://stonetify.com/home"
        assert "httponly" in response.headers["set-cookie"].lower()
        assert issuer.decode(response.cookies["token"])

    def test_app_login_and_complete(self, client, mock_provider_gateway) -> None:
        self._prepare_provider(mock_provider_gateway)
        state = self._start(client, mock_provider_gateway, "stonetify://oauth-finish")

        callback = client.get(
            f"{API}/auth/kakao/callback",
            params={"code": "auth-code", "state": state},
            follow_redirects=False,
        )
        location = callback.headers["location"]
        code = parse_qs(urlparse(location).query)["code"][0]

        first = client.post(f"{API}/auth/complete", json={"code": code})
        second = client.post(f"{API}/auth/complete", json={"code": code})

        assert location.startswith("stonetify://oauth-finish?code=")
        assert first.status_code == 200
        assert first.json()["provider"] == "kakao"
        assert first.headers["cache-control"].startswith("no-store")
        assert second.status_code == 400
        assert second.json()["error"] == "INVALID_CODE"

    def test_callback_state_replay(self, client, mock_provider_gateway) -> None:
        self._prepare_provider(mock_provider_gateway)
        state = self._start(client, mock_provider_gateway, "https://stonetify.com/home")
        params = {"code": "auth-code", "state": state}
        client.get(f"{API}/auth/kakao/callback", params=params, follow_redirects=False)

        response = client.get(f"{API}/auth/kakao/callback", params=params, follow_redirects=False)

        assert response.status_code == 400
        assert "text/html" in response.headers["content-type"]

    def test_callback_provider_error(self, client) -> None:
        response = client.get(
            f"{API}/auth/kakao/callback",
            params={"error": "access_denied"},
            follow_redirects=False,
        )

        assert response.status_code == 400
        assert "access_denied" in response.text

    def test_callback_escapes_error(self, client) -> None:
        response = client.get(
            f"{API}/auth/kakao/callback",
            params={"error": "<script>"},
            follow_redirects=False,
        )

        assert "<script>" not in response.text


class TestSocialLink:
    def test_link_account_flow(self, client, auth_headers, mock_provider_gateway) -> None:
        mock_provider_gateway.exchange_code.return_value = OAuthTokens(
            access_token="kakao-access", refresh_token="kakao-refresh", expires_in=21599
        )
        mock_provider_gateway.fetch_profile.return_value = OAuthProfile(
            provider=Provider.KAKAO,
            provider_user_id="12345",
            email="user@example.com",
        )
        state = client.post(
            f"{API}/auth/social/state", json={"provider": "kakao"}, headers=auth_headers
        ).json()["state"]

        response = client.post(
            f"{API}/social/kakao/token",
            json={"code": "auth-code", "state": state},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["accessToken"] == "kakao-access"
        assert data["expiresIn"] == 21599
        assert data["providerUser"]["id"] == "12345"
        assert mock_provider_gateway.exchange_code.call_args.kwargs["redirect_uri"] == KAKAO_REDIRECT

    def test_link_with_unknown_state(self, client, auth_headers) -> None:
        response = client.post(
            f"{API}/social/kakao/token",
            json={"code": "auth-code", "state": "unknown"},
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_STATE"

    def test_profile_not_linked(self, client, auth_headers) -> None:
        response = client.get(f"{API}/social/naver/me", headers=auth_headers)

        assert response.status_code == 404


class TestSpotifyAuth:
    """Spotify 토큰 엔드포인트 테스트."""

    def test_requires_authentication(self, client) -> None:
        response = client.post(f"{API}/spotify/auth/refresh")

        assert response.status_code == 401

    def test_invalid_session_token(self, client) -> None:
        response = client.post(
            f"{API}/spotify/auth/refresh", headers={"Authorization": "Bearer broken"}
        )

        assert response.status_code == 401

    def test_exchange_returns_camel_case(self, client, auth_headers, mock_provider_gateway) -> None:
        mock_provider_gateway.exchange_code.return_value = OAuthTokens(
            access_token="sp-access", refresh_token="sp-refresh", scope="streaming"
        )

        response = client.post(
            f"{API}/spotify/auth/token",
            json={
                "code": "auth-code",
                "code_verifier": "verifier",
                "redirect_uri": "stonetify://spotify-callback",
            },
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["accessToken"] == "sp-access"
        assert data["expiresIn"] == 3600
        assert data["tokenType"] == "bearer"
        assert "refreshToken" not in data
        assert "refreshTokenEnc" not in data

    def test_refresh_not_linked(self, client, auth_headers) -> None:
        response = client.post(f"{API}/spotify/auth/refresh", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "TOKEN_NOT_FOUND"

    def test_refresh_rate_limited(self, app, client, auth_headers) -> None:
        limited = MagicMock()
        limited.refresh = AsyncMock(side_effect=RotationRateLimitedError(12))
        app.dependency_overrides[get_token_refresh_service] = lambda: limited

        response = client.post(f"{API}/spotify/auth/refresh", headers=auth_headers)

        assert response.status_code == 429
        assert response.json()["error"] == "TOO_MANY_REQUESTS"

    def test_premium_status(self, client, auth_headers, mock_playback) -> None:
        mock_playback.get_account.return_value = SpotifyAccount(
            id="sp-1", display_name="tester", product="premium"
        )

        response = client.get(f"{API}/spotify/auth/premium-status", headers=auth_headers)

        assert response.json() == {"isPremium": True, "product": "premium"}


class TestSpotifyPlayback:
    """재생 제어 오류 매핑 테스트."""

    def test_play(self, client, auth_headers, mock_playback) -> None:
        response = client.put(
            f"{API}/spotify/playback/play",
            json={"uris": ["spotify:track:4uLU6hMCjMI75M1A2tKUQC"]},
            headers=auth_headers,
        )

        assert response.status_code == 200
        request = mock_playback.play.await_args.args[1]
        assert request.uris == ("spotify:track:4uLU6hMCjMI75M1A2tKUQC",)

    def test_no_active_device(self, client, auth_headers, mock_playback) -> None:
        mock_playback.play.side_effect = NoActiveDeviceError()

        response = client.put(f"{API}/spotify/playback/play", json={}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "NO_ACTIVE_DEVICE"

    def test_spotify_404(self, client, auth_headers, mock_playback) -> None:
        mock_playback.pause.side_effect = SpotifyApiError(404, {"error": {"status": 404}})

        response = client.put(f"{API}/spotify/playback/pause", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["spotifyError"] == {"error": {"status": 404}}

    def test_spotify_403(self, client, auth_headers, mock_playback) -> None:
        mock_playback.next_track.side_effect = SpotifyApiError(403)

        response = client.post(f"{API}/spotify/playback/next", headers=auth_headers)

        assert response.status_code == 403

    def test_reauth_required(self, client, auth_headers, mock_playback) -> None:
        mock_playback.get_state.side_effect = ReauthRequiredError(
            "spotify", "Token revoked, re-authentication required"
        )

        response = client.get(f"{API}/spotify/playback/state", headers=auth_headers)

        assert response.status_code == 401
        data = response.json()
        assert data["requiresReauth"] is True
        assert data["error"] == "TOKEN_REVOKED"

    def test_volume_validation(self, client, auth_headers) -> None:
        response = client.put(
            f"{API}/spotify/playback/volume",
            json={"volume_percent": 150},
            headers=auth_headers,
        )

        assert response.status_code == 422

"""Spotify OAuth Provider.

모바일 앱이 PKCE 로 받은 authorization code 를 서버가 교환합니다.
client_id 는 앱 빌드마다 다를 수 있어 요청 단위로 덮어쓸 수 있습니다.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

import httpx

from apps.social_auth.application.oauth.ports import OAuthProfile
from apps.social_auth.domain.enums import Provider
from apps.social_auth.infrastructure.oauth.providers.base import OAuthProvider

SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_PROFILE_URL = "https://api.spotify.com/v1/me"


class SpotifyOAuthProvider(OAuthProvider):
    """Spotify OAuth 프로바이더 (PKCE)."""

    name = Provider.SPOTIFY
    token_url = SPOTIFY_TOKEN_URL
    supports_pkce = True

    @property
    def default_scopes(self) -> tuple[str, ...]:
        return (
            "user-read-email",
            "user-read-private",
            "user-read-playback-state",
            "user-modify-playback-state",
        )

    def build_authorization_url(
        self,
        *,
        state: str,
        code_challenge: str | None,
        scope: str | None,
        redirect_uri: str | None,
    ) -> str:
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri or self.redirect_uri,
            "response_type": "code",
            "state": state,
            "scope": scope or " ".join(self.default_scopes),
        }
        if code_challenge:
            params["code_challenge"] = code_challenge
            params["code_challenge_method"] = "S256"
        return f"{SPOTIFY_AUTH_URL}?{urlencode(params)}"

    def _auth(self) -> httpx.BasicAuth | None:
        if self.client_secret:
            return httpx.BasicAuth(self.client_id, self.client_secret)
        return None

    async def exchange_code(
        self,
        *,
        client: httpx.AsyncClient,
        code: str,
        code_verifier: str | None,
        redirect_uri: str,
        state: str | None,
        client_id: str | None = None,
    ) -> dict[str, Any]:
        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "client_id": client_id or self.client_id,
            "code_verifier": code_verifier,
        }
        auth = self._auth()
        if auth is not None:
            return await self._post_form(client, SPOTIFY_TOKEN_URL, data, auth=auth)
        return await self._post_form(client, SPOTIFY_TOKEN_URL, data)

    async def refresh(
        self,
        *,
        client: httpx.AsyncClient,
        refresh_token: str,
        client_id: str | None = None,
    ) -> dict[str, Any]:
        data = {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": client_id or self.client_id,
        }
        auth = self._auth()
        if auth is not None:
            return await self._post_form(client, SPOTIFY_TOKEN_URL, data, auth=auth)
        return await self._post_form(client, SPOTIFY_TOKEN_URL, data)

    async def fetch_profile(
        self,
        *,
        client: httpx.AsyncClient,
        access_token: str,
    ) -> OAuthProfile:
        payload = await self._get_json(client, SPOTIFY_PROFILE_URL, access_token)
        images = payload.get("images") or []
        return OAuthProfile(
            provider=self.name,
            provider_user_id=str(payload.get("id")),
            email=payload.get("email"),
            nickname=payload.get("display_name"),
            profile_image_url=images[0].get("url") if images else None,
            product=payload.get("product"),
        )

"""Kakao OAuth Provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from apps.social_auth.application.oauth.ports import OAuthProfile
from apps.social_auth.domain.enums import Provider
from apps.social_auth.infrastructure.oauth.providers.base import OAuthProvider

if TYPE_CHECKING:
    import httpx

KAKAO_AUTH_URL = "https://kauth.kakao.com/oauth/authorize"
KAKAO_TOKEN_URL = "https://kauth.kakao.com/oauth/token"
KAKAO_PROFILE_URL = "https://kapi.kakao.com/v2/user/me"
KAKAO_UNLINK_URL = "https://kapi.kakao.com/v1/user/unlink"


class KakaoOAuthProvider(OAuthProvider):
    """Kakao OAuth 프로바이더."""

    name = Provider.KAKAO
    token_url = KAKAO_TOKEN_URL
    supports_pkce = True
    reauth_on_unauthorized = True

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
        }
        if scope:
            params["scope"] = scope
        if code_challenge:
            params["code_challenge"] = code_challenge
            params["code_challenge_method"] = "S256"
        return f"{KAKAO_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(
        self,
        *,
        client: "httpx.AsyncClient",
        code: str,
        code_verifier: str | None,
        redirect_uri: str,
        state: str | None,
        client_id: str | None = None,
    ) -> dict[str, Any]:
        return await self._post_form(
            client,
            KAKAO_TOKEN_URL,
            {
                "grant_type": "authorization_code",
                "client_id": client_id or self.client_id,
                "client_secret": self.client_secret or None,
                "redirect_uri": redirect_uri,
                "code": code,
                "code_verifier": code_verifier,
            },
        )

    async def refresh(
        self,
        *,
        client: "httpx.AsyncClient",
        refresh_token: str,
        client_id: str | None = None,
    ) -> dict[str, Any]:
        return await self._post_form(
            client,
            KAKAO_TOKEN_URL,
            {
                "grant_type": "refresh_token",
                "client_id": client_id or self.client_id,
                "client_secret": self.client_secret or None,
                "refresh_token": refresh_token,
            },
        )

    async def fetch_profile(
        self,
        *,
        client: "httpx.AsyncClient",
        access_token: str,
    ) -> OAuthProfile:
        payload = await self._get_json(client, KAKAO_PROFILE_URL, access_token)
        kakao_account = payload.get("kakao_account") or {}
        profile = kakao_account.get("profile") or {}
        return OAuthProfile(
            provider=self.name,
            provider_user_id=str(payload.get("id")),
            email=kakao_account.get("email"),
            nickname=profile.get("nickname"),
            profile_image_url=profile.get("profile_image_url"),
        )

    async def revoke(self, *, client: "httpx.AsyncClient", access_token: str) -> None:
        response = await client.post(
            KAKAO_UNLINK_URL, headers={"Authorization": f"Bearer {access_token}"}
        )
        response.raise_for_status()

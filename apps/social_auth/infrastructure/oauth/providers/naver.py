"""Naver OAuth Provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from apps.social_auth.application.oauth.ports import OAuthProfile
from apps.social_auth.domain.enums import Provider
from apps.social_auth.infrastructure.oauth.providers.base import OAuthProvider

if TYPE_CHECKING:
    import httpx

NAVER_AUTH_URL = "https://nid.naver.com/oauth2.0/authorize"
NAVER_TOKEN_URL = "https://nid.naver.com/oauth2.0/token"
NAVER_PROFILE_URL = "https://openapi.naver.com/v1/nid/me"


class NaverOAuthProvider(OAuthProvider):
    """Naver OAuth 프로바이더.

    네이버 토큰 엔드포인트는 실패 시에도 200 OK 와 함께 ``error`` 필드를 반환합니다.
    refresh 응답에는 새 refresh token 이 포함되지 않습니다.
    """

    name = Provider.NAVER
    token_url = NAVER_TOKEN_URL
    reauth_error_codes = frozenset({"invalid_grant", "invalid_request"})
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
        scope_values = scope or " ".join(self.default_scopes)
        if scope_values:
            params["scope"] = scope_values
        return f"{NAVER_AUTH_URL}?{urlencode(params)}"

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
            NAVER_TOKEN_URL,
            {
                "grant_type": "authorization_code",
                "client_id": client_id or self.client_id,
                "client_secret": self.client_secret,
                "redirect_uri": redirect_uri,
                "code": code,
                "state": state or "",
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
            NAVER_TOKEN_URL,
            {
                "grant_type": "refresh_token",
                "client_id": client_id or self.client_id,
                "client_secret": self.client_secret,
                "refresh_token": refresh_token,
            },
        )

    async def fetch_profile(
        self,
        *,
        client: "httpx.AsyncClient",
        access_token: str,
    ) -> OAuthProfile:
        body = await self._get_json(client, NAVER_PROFILE_URL, access_token)
        response_data = body.get("response") or {}
        return OAuthProfile(
            provider=self.name,
            provider_user_id=str(response_data.get("id")),
            email=response_data.get("email"),
            nickname=response_data.get("name") or response_data.get("nickname"),
            profile_image_url=response_data.get("profile_image"),
        )

    async def revoke(self, *, client: "httpx.AsyncClient", access_token: str) -> None:
        await self._post_form(
            client,
            NAVER_TOKEN_URL,
            {
                "grant_type": "delete",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "access_token": access_token,
                "service_provider": "NAVER",
            },
        )

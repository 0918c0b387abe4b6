"""OAuth Provider Base Class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from apps.social_auth.application.oauth.ports import OAuthProfile
    from apps.social_auth.domain.enums import Provider


class OAuthProvider(ABC):
    """OAuth 프로바이더 추상 클래스.

    각 메서드는 응답 본문(dict)을 그대로 반환하고, HTTP 오류는
    ``raise_for_status`` 로 올려 게이트웨이에서 일괄 변환합니다.
    """

    name: "Provider"
    token_url: str
    supports_pkce: bool = False
    # 이 오류 코드를 받으면 grant 가 무효화된 것으로 판단
    reauth_error_codes: frozenset[str] = frozenset({"invalid_grant"})
    reauth_on_unauthorized: bool = False

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str | None,
        redirect_uri: str | None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

    @property
    def default_scopes(self) -> tuple[str, ...]:
        """기본 스코프."""
        return ()

    @abstractmethod
    def build_authorization_url(
        self,
        *,
        state: str,
        code_challenge: str | None,
        scope: str | None,
        redirect_uri: str | None,
    ) -> str:
        """인증 URL 생성."""
        raise NotImplementedError

    @abstractmethod
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
        """인증 코드로 토큰 교환."""
        raise NotImplementedError

    @abstractmethod
    async def refresh(
        self,
        *,
        client: "httpx.AsyncClient",
        refresh_token: str,
        client_id: str | None = None,
    ) -> dict[str, Any]:
        """refresh token 으로 access token 갱신."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_profile(
        self,
        *,
        client: "httpx.AsyncClient",
        access_token: str,
    ) -> "OAuthProfile":
        """사용자 프로필 조회."""
        raise NotImplementedError

    async def revoke(self, *, client: "httpx.AsyncClient", access_token: str) -> None:
        """업스트림 토큰 폐기. 지원하지 않는 프로바이더는 아무 일도 하지 않습니다."""
        return None

    async def _post_form(
        self,
        client: "httpx.AsyncClient",
        url: str,
        data: dict[str, Any],
        **kwargs: Any,
    ) -> dict[str, Any]:
        response = await client.post(
            url, data={key: value for key, value in data.items() if value is not None}, **kwargs
        )
        response.raise_for_status()
        return response.json() if response.content else {}

    async def _get_json(
        self, client: "httpx.AsyncClient", url: str, access_token: str
    ) -> dict[str, Any]:
        response = await client.get(url, headers={"Authorization": f"Bearer {access_token}"})
        response.raise_for_status()
        return response.json()

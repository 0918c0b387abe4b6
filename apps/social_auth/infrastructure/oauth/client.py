"""OAuth Client Implementation.

OAuthProviderGateway 포트의 구현체입니다.

HTTP 오류 변환:
    - invalid_grant 계열 응답 (프로바이더 별 코드, 401) → InvalidGrantError
    - 타임아웃 / 네트워크 오류 / 5xx → DependencyError
    - 그 외 4xx 또는 200 본문의 error 필드 → OAuthProviderError
"""

from __future__ import annotations

import base64
import hashlib
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, TypeVar

import httpx

from apps.social_auth.application.oauth.exceptions import (
    DependencyError,
    InvalidGrantError,
    OAuthError,
    OAuthProviderError,
)
from apps.social_auth.application.oauth.ports import OAuthProfile, OAuthTokens
from apps.social_auth.domain.enums import Provider

if TYPE_CHECKING:
    from apps.social_auth.infrastructure.oauth.providers import OAuthProvider
    from apps.social_auth.infrastructure.oauth.registry import ProviderRegistry

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 3600

T = TypeVar("T")


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class OAuthClientImpl:
    """OAuth 클라이언트 구현체.

    OAuthProviderGateway 구현체.
    """

    def __init__(
        self,
        registry: "ProviderRegistry",
        timeout_seconds: float,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            registry: OAuth 프로바이더 레지스트리
            timeout_seconds: HTTP 클라이언트 타임아웃 (설정에서 주입)
            transport: 테스트용 httpx transport
        """
        self._registry = registry
        self._timeout = timeout_seconds
        self._transport = transport

    def _compute_code_challenge(self, code_verifier: str) -> str:
        """PKCE code_challenge 생성 (S256)."""
        digest = hashlib.sha256(code_verifier.encode()).digest()
        return base64.urlsafe_b64encode(digest).rstrip(b"=").decode()

    def get_authorization_url(
        self,
        provider: Provider,
        *,
        redirect_uri: str,
        state: str,
        scope: str | None = None,
        code_verifier: str | None = None,
    ) -> str:
        """인증 URL 생성."""
        oauth_provider = self._registry.get(provider)

        code_challenge = None
        if code_verifier and oauth_provider.supports_pkce:
            code_challenge = self._compute_code_challenge(code_verifier)

        return oauth_provider.build_authorization_url(
            state=state,
            code_challenge=code_challenge,
            scope=scope,
            redirect_uri=redirect_uri or oauth_provider.redirect_uri,
        )

    async def exchange_code(
        self,
        provider: Provider,
        *,
        code: str,
        redirect_uri: str,
        state: str | None = None,
        code_verifier: str | None = None,
        client_id: str | None = None,
    ) -> OAuthTokens:
        """authorization code → 토큰."""
        oauth_provider = self._registry.get(provider)
        payload = await self._call(
            oauth_provider,
            "exchange_code",
            lambda client: oauth_provider.exchange_code(
                client=client,
                code=code,
                code_verifier=code_verifier if oauth_provider.supports_pkce else None,
                redirect_uri=redirect_uri,
                state=state,
                client_id=client_id,
            ),
        )
        return self._to_tokens(oauth_provider, payload)

    async def refresh_access_token(
        self,
        provider: Provider,
        *,
        refresh_token: str,
        client_id: str | None = None,
    ) -> OAuthTokens:
        """refresh token → 새 access token (및 회전된 refresh token)."""
        oauth_provider = self._registry.get(provider)
        payload = await self._call(
            oauth_provider,
            "refresh",
            lambda client: oauth_provider.refresh(
                client=client, refresh_token=refresh_token, client_id=client_id
            ),
        )
        return self._to_tokens(oauth_provider, payload)

    async def fetch_profile(self, provider: Provider, *, access_token: str) -> OAuthProfile:
        """프로필 조회."""
        oauth_provider = self._registry.get(provider)
        return await self._call(
            oauth_provider,
            "fetch_profile",
            lambda client: oauth_provider.fetch_profile(client=client, access_token=access_token),
        )

    async def revoke_upstream(self, provider: Provider, *, access_token: str) -> None:
        """업스트림 연결 해제."""
        oauth_provider = self._registry.get(provider)
        await self._call(
            oauth_provider,
            "revoke",
            lambda client: oauth_provider.revoke(client=client, access_token=access_token),
        )

    async def _call(
        self,
        oauth_provider: "OAuthProvider",
        operation: str,
        func: Callable[[httpx.AsyncClient], Awaitable[T]],
    ) -> T:
        name = oauth_provider.name.value
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                result = await func(client)
        except httpx.TimeoutException as e:
            logger.warning(
                "OAuth request timed out",
                extra={"provider": name, "operation": operation},
            )
            raise DependencyError(name, f"{operation} timed out") from e
        except httpx.HTTPStatusError as e:
            error = self._classify(oauth_provider, e.response.status_code, _response_body(e.response))
            logger.warning(
                "OAuth API error",
                extra={
                    "provider": name,
                    "operation": operation,
                    "status_code": e.response.status_code,
                    "error": getattr(error, "error_code", None),
                },
            )
            raise error from e
        except httpx.HTTPError as e:
            logger.warning(
                "OAuth request failed",
                extra={"provider": name, "operation": operation, "error": str(e)},
            )
            raise DependencyError(name, str(e)) from e
        except ValueError as e:
            # 게이트웨이 HTML 등 JSON 이 아닌 본문
            logger.warning(
                "OAuth response is not JSON",
                extra={"provider": name, "operation": operation},
            )
            raise DependencyError(name, "invalid upstream response") from e

        if isinstance(result, dict) and result.get("error"):
            raise self._classify(oauth_provider, 200, result)
        return result

    def _classify(self, oauth_provider: "OAuthProvider", status_code: int, body: Any) -> OAuthError:
        name = oauth_provider.name.value
        error_code = body.get("error") if isinstance(body, dict) else None
        if not isinstance(error_code, str):
            error_code = None

        if error_code in oauth_provider.reauth_error_codes or (
            status_code == 401 and oauth_provider.reauth_on_unauthorized
        ):
            return InvalidGrantError(name, error_code, status_code=status_code)
        if status_code >= 500:
            return DependencyError(name, f"upstream status {status_code}")

        description = body.get("error_description") if isinstance(body, dict) else None
        return OAuthProviderError(
            name,
            description or error_code or f"API error: {status_code}",
            status_code=status_code,
            error_code=error_code,
        )

    def _to_tokens(self, oauth_provider: "OAuthProvider", payload: dict[str, Any]) -> OAuthTokens:
        access_token = payload.get("access_token")
        if not access_token:
            raise OAuthProviderError(oauth_provider.name.value, "missing access token")
        return OAuthTokens(
            access_token=access_token,
            refresh_token=payload.get("refresh_token") or None,
            token_type=payload.get("token_type") or "bearer",
            expires_in=int(payload.get("expires_in") or DEFAULT_EXPIRES_IN),
            scope=payload.get("scope"),
        )

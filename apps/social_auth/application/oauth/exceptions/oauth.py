"""OAuth Exceptions.

호출자는 `code` 문자열이 아닌 예외 타입으로 분기합니다.
"""

from __future__ import annotations

from typing import Sequence

from apps.social_auth.application.common.exceptions.base import ApplicationError


class OAuthError(ApplicationError):
    """OAuth 흐름 예외의 기본 클래스."""

    code = "OAUTH_ERROR"


class InvalidStateError(OAuthError):
    """state 검증 실패 (없음, 만료, 사용됨, 소유자 불일치)."""

    code = "INVALID_STATE"

    def __init__(self, reason: str = "Invalid or expired state") -> None:
        super().__init__(reason)


class StateOwnerRequiredError(OAuthError):
    """state 발급 시 사용자 ID 와 fingerprint 가 모두 없는 경우."""

    code = "STATE_OWNER_REQUIRED"

    def __init__(self) -> None:
        super().__init__("Either user_id or fingerprint is required to issue a state")


class InvalidRedirectUriError(OAuthError):
    """허용 목록에 없는 redirect URI."""

    code = "INVALID_REDIRECT_URI"

    def __init__(self, provider: str, requested_uri: str, allowed_list: Sequence[str]) -> None:
        self.provider = provider
        self.requested_uri = requested_uri
        self.allowed_list = list(allowed_list)
        super().__init__(f"Redirect URI not allowed for {provider}: {requested_uri}")


class MissingRedirectConfigError(OAuthError):
    """redirect URI 설정이 비어 있는 경우."""

    code = "MISSING_REDIRECT_URI"

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Redirect URI is not configured for {provider}")


class InvalidReturnUrlError(OAuthError):
    """허용되지 않은 returnUrl."""

    code = "INVALID_RETURN_URL"

    def __init__(self, return_url: str | None, allowed_origins: Sequence[str]) -> None:
        self.return_url = return_url
        self.allowed_origins = list(allowed_origins)
        super().__init__("Invalid return URL")


class InvalidOneTimeCodeError(OAuthError):
    """일회용 코드가 없거나 만료/사용된 경우."""

    code = "INVALID_CODE"

    def __init__(self) -> None:
        super().__init__("Invalid or expired code")


class OAuthProviderError(OAuthError):
    """프로바이더가 요청을 거절한 경우 (재시도 무의미)."""

    code = "OAUTH_PROVIDER_ERROR"

    def __init__(
        self,
        provider: str,
        reason: str,
        *,
        status_code: int | None = None,
        error_code: str | None = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(f"OAuth provider error ({provider}): {reason}")


class InvalidGrantError(OAuthProviderError):
    """프로바이더가 grant 를 더 이상 인정하지 않는 경우 (invalid_grant 계열)."""

    code = "INVALID_GRANT"

    def __init__(
        self, provider: str, error_code: str | None, *, status_code: int | None = None
    ) -> None:
        super().__init__(
            provider,
            f"grant rejected ({error_code or status_code})",
            status_code=status_code,
            error_code=error_code,
        )


class DependencyError(OAuthError):
    """업스트림 일시 장애 (타임아웃, 네트워크, 5xx). 재시도 가능."""

    code = "DEPENDENCY_ERROR"
    retryable = True

    def __init__(self, dependency: str, reason: str) -> None:
        self.dependency = dependency
        super().__init__(f"Upstream dependency unavailable ({dependency}): {reason}")


class ReauthRequiredError(OAuthError):
    """사용자가 다시 OAuth 동의를 거쳐야 하는 경우."""

    code = "TOKEN_REVOKED"

    def __init__(self, provider: str, reason: str, *, code: str | None = None) -> None:
        self.provider = provider
        if code:
            self.code = code
        super().__init__(reason)


class InvalidAuthorizationCodeError(OAuthError):
    """authorization code 가 만료되었거나 이미 사용된 경우."""

    code = "INVALID_GRANT"

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__("Authorization code expired or already used")


class RedirectUriMismatchError(OAuthError):
    """토큰 교환 시 redirect URI 가 인가 요청과 다른 경우."""

    code = "REDIRECT_URI_MISMATCH"

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__("Redirect URI mismatch")

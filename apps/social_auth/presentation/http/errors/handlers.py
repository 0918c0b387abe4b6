"""Exception Handlers.

도메인/애플리케이션 예외를 HTTP 응답으로 변환합니다.

응답 본문은 기존 클라이언트가 사용하는 형태를 따릅니다.
    {"message": ..., "error": ..., "requiresReauth"?: true, ...}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from apps.social_auth.application.common.exceptions import (
    ApplicationError,
    DecryptionError,
    EncryptionConfigError,
)
from apps.social_auth.application.oauth.exceptions import (
    DependencyError,
    InvalidAuthorizationCodeError,
    InvalidOneTimeCodeError,
    InvalidRedirectUriError,
    InvalidReturnUrlError,
    InvalidStateError,
    MissingRedirectConfigError,
    OAuthError,
    OAuthProviderError,
    ReauthRequiredError,
    RedirectUriMismatchError,
    StateOwnerRequiredError,
)
from apps.social_auth.application.playback.exceptions import (
    InvalidPlaybackRequestError,
    NoActiveDeviceError,
    SpotifyApiError,
)
from apps.social_auth.application.token.exceptions import (
    MissingRefreshTokenError,
    SocialAccountNotLinkedError,
)
from apps.social_auth.domain.exceptions import (
    DomainError,
    RefreshTokenRequiredError,
    RotationRateLimitedError,
    TokenRevokedError,
    UnsupportedProviderError,
)
from apps.social_auth.infrastructure.security import InvalidSessionTokenError

logger = logging.getLogger(__name__)

REAUTH_MESSAGE = "소셜 계정 연결이 만료되었거나 회수되었습니다. 계정을 다시 연결해주세요."
NO_DEVICE_MESSAGE = "활성화된 Spotify 장치를 찾지 못했습니다."
NO_DEVICE_DETAIL = "휴대전화, 컴퓨터 등에서 Spotify 앱을 먼저 실행해주세요."
FORBIDDEN_PLAYBACK_MESSAGE = "재생 권한이 없습니다."
FORBIDDEN_PLAYBACK_DETAIL = "Spotify 프리미엄이 아니거나 해당 장치에서 재생이 제한되었을 수 있습니다."


def _error(status_code: int, message: str, error: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "error": error, **extra},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """예외 핸들러 등록."""

    # ----- 400: 요청 / state / redirect 검증 -----

    @app.exception_handler(InvalidStateError)
    async def invalid_state_handler(request: Request, exc: InvalidStateError):
        return _error(400, "잘못된 또는 만료된 state 파라미터입니다.", exc.code)

    @app.exception_handler(StateOwnerRequiredError)
    async def state_owner_required_handler(request: Request, exc: StateOwnerRequiredError):
        return _error(400, exc.message, exc.code)

    @app.exception_handler(InvalidRedirectUriError)
    async def invalid_redirect_uri_handler(request: Request, exc: InvalidRedirectUriError):
        return _error(
            400,
            exc.message,
            exc.code,
            requestedUri=exc.requested_uri,
            allowedRedirectUris=exc.allowed_list,
        )

    @app.exception_handler(InvalidReturnUrlError)
    async def invalid_return_url_handler(request: Request, exc: InvalidReturnUrlError):
        return _error(
            400,
            "Invalid returnUrl. Only whitelisted origins are allowed.",
            exc.code,
            allowedOrigins=exc.allowed_origins or ["Not configured"],
        )

    @app.exception_handler(InvalidOneTimeCodeError)
    async def invalid_one_time_code_handler(request: Request, exc: InvalidOneTimeCodeError):
        return _error(400, exc.message, exc.code)

    @app.exception_handler(InvalidAuthorizationCodeError)
    async def invalid_authorization_code_handler(
        request: Request, exc: InvalidAuthorizationCodeError
    ):
        return _error(400, "인증 코드가 만료되었거나 이미 사용되었습니다.", exc.code)

    @app.exception_handler(RedirectUriMismatchError)
    async def redirect_uri_mismatch_handler(request: Request, exc: RedirectUriMismatchError):
        return _error(400, "Redirect URI가 인가 요청과 일치하지 않습니다.", exc.code)

    @app.exception_handler(MissingRefreshTokenError)
    async def missing_refresh_token_handler(request: Request, exc: MissingRefreshTokenError):
        return _error(400, exc.message, exc.code)

    @app.exception_handler(RefreshTokenRequiredError)
    async def refresh_token_required_handler(request: Request, exc: RefreshTokenRequiredError):
        return _error(400, exc.message, "MISSING_REFRESH_TOKEN")

    @app.exception_handler(UnsupportedProviderError)
    async def unsupported_provider_handler(request: Request, exc: UnsupportedProviderError):
        return _error(400, exc.message, "UNSUPPORTED_PROVIDER")

    @app.exception_handler(InvalidPlaybackRequestError)
    async def invalid_playback_request_handler(
        request: Request, exc: InvalidPlaybackRequestError
    ):
        return _error(400, exc.message, exc.code)

    @app.exception_handler(NoActiveDeviceError)
    async def no_active_device_handler(request: Request, exc: NoActiveDeviceError):
        return _error(400, exc.message, exc.code, details=NO_DEVICE_DETAIL)

    # ----- 401: 재인증 필요 -----

    @app.exception_handler(ReauthRequiredError)
    async def reauth_required_handler(request: Request, exc: ReauthRequiredError):
        return _error(401, REAUTH_MESSAGE, exc.code, requiresReauth=True, provider=exc.provider)

    @app.exception_handler(TokenRevokedError)
    async def token_revoked_handler(request: Request, exc: TokenRevokedError):
        return _error(401, REAUTH_MESSAGE, "TOKEN_REVOKED", requiresReauth=True)

    @app.exception_handler(DecryptionError)
    async def decryption_error_handler(request: Request, exc: DecryptionError):
        logger.warning("Stored token could not be decrypted", extra={"path": request.url.path})
        return _error(
            401,
            "인증 정보가 손상되었습니다. 계정을 다시 연결해주세요.",
            "TOKEN_REVOKED",
            requiresReauth=True,
        )

    @app.exception_handler(InvalidSessionTokenError)
    async def invalid_session_token_handler(request: Request, exc: InvalidSessionTokenError):
        return _error(401, exc.message, "AUTHENTICATION_FAILED")

    # ----- 404 / 429 -----

    @app.exception_handler(SocialAccountNotLinkedError)
    async def not_linked_handler(request: Request, exc: SocialAccountNotLinkedError):
        return _error(404, "연결된 계정이 없습니다.", exc.code, provider=exc.provider)

    @app.exception_handler(RotationRateLimitedError)
    async def rotation_rate_limited_handler(request: Request, exc: RotationRateLimitedError):
        return _error(
            429,
            "토큰 갱신 속도 제한을 초과했습니다. 잠시 후 다시 시도해주세요.",
            exc.code,
        )

    # ----- 5xx: 업스트림 / 설정 -----

    @app.exception_handler(OAuthProviderError)
    async def oauth_provider_handler(request: Request, exc: OAuthProviderError):
        return _error(502, exc.message, exc.code, provider=exc.provider)

    @app.exception_handler(DependencyError)
    async def dependency_error_handler(request: Request, exc: DependencyError):
        return _error(503, exc.message, exc.code, retryable=True)

    @app.exception_handler(MissingRedirectConfigError)
    async def missing_redirect_config_handler(request: Request, exc: MissingRedirectConfigError):
        logger.error("Redirect URI not configured", extra={"provider": exc.provider})
        return _error(500, f"{exc.provider} Redirect URI 설정을 확인해주세요.", exc.code)

    @app.exception_handler(EncryptionConfigError)
    async def encryption_config_handler(request: Request, exc: EncryptionConfigError):
        logger.error("Token encryption is not configured", extra={"error": exc.message})
        return _error(500, "서버 암호화 설정 오류입니다.", "ENCRYPTION_CONFIG_ERROR")

    # ----- Spotify Web API -----

    @app.exception_handler(SpotifyApiError)
    async def spotify_api_handler(request: Request, exc: SpotifyApiError):
        if exc.status_code == 404:
            return _error(
                404,
                NO_DEVICE_MESSAGE,
                "NO_ACTIVE_DEVICE",
                details=NO_DEVICE_DETAIL,
                spotifyError=exc.payload,
            )
        if exc.status_code == 403:
            return _error(
                403,
                FORBIDDEN_PLAYBACK_MESSAGE,
                "PLAYBACK_FORBIDDEN",
                details=FORBIDDEN_PLAYBACK_DETAIL,
                spotifyError=exc.payload,
            )
        return _error(exc.status_code, exc.message, "SPOTIFY_API_ERROR", spotifyError=exc.payload)

    # ----- Fallbacks -----

    @app.exception_handler(OAuthError)
    async def oauth_error_handler(request: Request, exc: OAuthError):
        return _error(400, exc.message, exc.code)

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return _error(400, exc.message, "DOMAIN_ERROR")

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        return _error(400, exc.message, "APPLICATION_ERROR")

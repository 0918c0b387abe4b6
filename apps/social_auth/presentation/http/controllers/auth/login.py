"""Login Controller.

서버 주도 소셜 로그인(시작 / 콜백) 엔드포인트입니다.
"""

import html
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from apps.social_auth.application.oauth.commands import (
    LoginCallbackInteractor,
    StartLoginInteractor,
)
from apps.social_auth.application.oauth.dto import LoginCallbackRequest, StartLoginRequest
from apps.social_auth.application.oauth.exceptions import (
    InvalidAuthorizationCodeError,
    InvalidStateError,
)
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.exceptions import UnsupportedProviderError
from apps.social_auth.presentation.http.auth.cookie_params import set_session_cookie
from apps.social_auth.presentation.http.utils.fingerprint import get_request_fingerprint
from apps.social_auth.presentation.http.utils.redirect import (
    CALLBACK_ROUTE_NAME,
    build_callback_uri,
)
from apps.social_auth.setup.config import Settings, get_settings
from apps.social_auth.setup.dependencies import (
    get_login_callback_interactor,
    get_start_login_interactor,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SECONDS_PER_DAY = 24 * 60 * 60


def render_failure_page(message: str, status_code: int) -> HTMLResponse:
    """로그인 실패 안내 페이지."""
    body = (
        "<!DOCTYPE html>"
        '<html lang="ko"><head><meta charset="utf-8"><title>로그인 실패</title></head>'
        "<body><h1>로그인에 실패했습니다</h1>"
        f"<p>{html.escape(message)}</p>"
        "<p>앱으로 돌아가 다시 시도해주세요.</p>"
        "</body></html>"
    )
    return HTMLResponse(content=body, status_code=status_code)


@router.get("/{provider}/start", summary="소셜 로그인 시작")
async def start_login(
    provider: str,
    request: Request,
    return_url: str | None = Query(None, alias="returnUrl", description="로그인 후 돌아갈 URL"),
    interactor: StartLoginInteractor = Depends(get_start_login_interactor),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse:
    """returnUrl 을 검증하고 프로바이더 인가 페이지로 리다이렉트합니다."""
    social_provider = Provider.parse_social(provider)
    result = await interactor.execute(
        StartLoginRequest(
            provider=social_provider,
            fingerprint=get_request_fingerprint(request),
            callback_uri=build_callback_uri(request, social_provider, settings.public_base_url),
            return_url=return_url,
        )
    )
    return RedirectResponse(url=result.authorization_url, status_code=302)


@router.get(
    "/{provider}/callback",
    name=CALLBACK_ROUTE_NAME,
    summary="소셜 로그인 콜백",
    response_model=None,
)
async def login_callback(
    provider: str,
    request: Request,
    code: str | None = Query(None, description="OAuth 인증 코드"),
    state: str | None = Query(None, description="상태 값"),
    error: str | None = Query(None, description="프로바이더 오류"),
    interactor: LoginCallbackInteractor = Depends(get_login_callback_interactor),
    settings: Settings = Depends(get_settings),
) -> RedirectResponse | HTMLResponse:
    """프로바이더 콜백을 처리합니다.

    1. state 검증 (fingerprint)
    2. 코드 교환 및 프로필 조회
    3. 사용자 조회/생성, 세션 토큰 발급
    4. 웹: 쿠키 설정 후 리다이렉트 / 앱: 일회용 코드를 붙여 딥링크로 리다이렉트
    """
    if error:
        logger.warning("Provider returned an error", extra={"provider": provider, "error": error})
        return render_failure_page(f"Provider error: {error}", 400)
    if not code or not state:
        return render_failure_page("code and state are required", 400)

    try:
        social_provider = Provider.parse_social(provider)
        result = await interactor.execute(
            LoginCallbackRequest(
                provider=social_provider,
                code=code,
                state=state,
                fingerprint=get_request_fingerprint(request),
                callback_uri=build_callback_uri(
                    request, social_provider, settings.public_base_url
                ),
            )
        )
    except (UnsupportedProviderError, InvalidStateError, InvalidAuthorizationCodeError) as e:
        logger.warning(
            "Social login callback rejected",
            extra={"provider": provider, "error": type(e).__name__},
        )
        return render_failure_page(e.message, 400)
    except Exception as e:
        logger.error(
            f"{provider} login callback failed: {type(e).__name__}",
            exc_info=True,
        )
        return render_failure_page("로그인 처리 중 오류가 발생했습니다.", 500)

    response = RedirectResponse(url=result.redirect_url, status_code=302)
    if result.is_web:
        set_session_cookie(
            response,
            result.session_token,
            max_age_seconds=settings.session_token_exp_days * SECONDS_PER_DAY,
            production=settings.is_production,
            domain=settings.cookie_domain,
        )
    return response

"""LoginCallback Command.

프로바이더 콜백 처리 Use Case입니다.

Architecture:
    - UseCase(지휘자): LoginCallbackInteractor
    - Services(연주자): OAuthStateService, OneTimeCodeService
    - Ports: OAuthProviderGateway, UserAccountGateway, SessionTokenIssuer
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import quote

from apps.social_auth.application.oauth.dto import LoginCallbackRequest, LoginCallbackResponse
from apps.social_auth.application.oauth.exceptions import (
    InvalidAuthorizationCodeError,
    InvalidGrantError,
    InvalidStateError,
)
from apps.social_auth.application.oauth.services import is_web_url

if TYPE_CHECKING:
    from apps.social_auth.application.oauth.ports import (
        OAuthProviderGateway,
        SessionTokenIssuer,
        UserAccountGateway,
    )
    from apps.social_auth.application.oauth.services import (
        OAuthStateService,
        OneTimeCodeService,
    )

logger = logging.getLogger(__name__)

DEFAULT_RETURN_URL = "stonetify://oauth-finish"


class LoginCallbackInteractor:
    """로그인 콜백 Interactor.

    Workflow:
        1. state 검증 (요청 fingerprint)
        2. authorization code 교환
        3. 프로필 조회 → 로컬 사용자 조회/생성
        4. 세션 토큰 발급
        5. 웹: 쿠키용 토큰 반환 / 앱: 일회용 코드를 붙인 딥링크 반환
    """

    def __init__(
        self,
        state_service: "OAuthStateService",
        provider_gateway: "OAuthProviderGateway",
        user_accounts: "UserAccountGateway",
        session_tokens: "SessionTokenIssuer",
        one_time_codes: "OneTimeCodeService",
        *,
        default_return_url: str = DEFAULT_RETURN_URL,
    ) -> None:
        self._state_service = state_service
        self._provider_gateway = provider_gateway
        self._user_accounts = user_accounts
        self._session_tokens = session_tokens
        self._one_time_codes = one_time_codes
        self._default_return_url = default_return_url

    async def execute(self, request: LoginCallbackRequest) -> LoginCallbackResponse:
        """
        Raises:
            InvalidStateError: state 검증 실패
            InvalidAuthorizationCodeError: 코드 만료/재사용
        """
        entry = await self._state_service.consume_state(
            request.provider,
            request.state,
            fingerprint=request.fingerprint,
        )
        if entry is None:
            raise InvalidStateError()

        try:
            tokens = await self._provider_gateway.exchange_code(
                request.provider,
                code=request.code,
                redirect_uri=request.callback_uri,
                state=request.state,
            )
        except InvalidGrantError as e:
            raise InvalidAuthorizationCodeError(request.provider.value) from e

        profile = await self._provider_gateway.fetch_profile(
            request.provider, access_token=tokens.access_token
        )
        user_id = await self._user_accounts.get_or_create_from_oauth(profile)
        session_token = self._session_tokens.issue(user_id)

        return_url = entry.metadata.get("returnUrl") or self._default_return_url
        if is_web_url(return_url):
            logger.info(
                "Social login completed (web)",
                extra={"provider": request.provider.value, "user_id": user_id},
            )
            return LoginCallbackResponse(
                user_id=user_id,
                redirect_url=return_url,
                session_token=session_token,
                is_web=True,
            )

        code = await self._one_time_codes.issue_code(session_token, request.provider)
        separator = "&" if "?" in return_url else "?"
        logger.info(
            "Social login completed (app)",
            extra={"provider": request.provider.value, "user_id": user_id},
        )
        return LoginCallbackResponse(
            user_id=user_id,
            redirect_url=f"{return_url}{separator}code={quote(code, safe='')}",
            session_token=session_token,
            is_web=False,
        )

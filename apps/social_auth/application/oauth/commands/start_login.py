"""StartLogin Command.

서버 주도 소셜 로그인의 시작 Use Case입니다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from apps.social_auth.application.oauth.dto import StartLoginRequest, StartLoginResponse
from apps.social_auth.domain.enums import Provider

if TYPE_CHECKING:
    from apps.social_auth.application.oauth.ports import OAuthProviderGateway
    from apps.social_auth.application.oauth.services import OAuthStateService, ReturnUrlPolicy

logger = logging.getLogger(__name__)

LOGIN_SCOPES: dict[Provider, str] = {
    Provider.KAKAO: "profile_nickname,account_email",
}


class StartLoginInteractor:
    """로그인 시작 Interactor.

    Workflow:
        1. returnUrl 화이트리스트 검증
        2. fingerprint 바인딩 state 발급 (metadata.returnUrl)
        3. 프로바이더 인가 URL 생성
    """

    def __init__(
        self,
        state_service: "OAuthStateService",
        return_url_policy: "ReturnUrlPolicy",
        provider_gateway: "OAuthProviderGateway",
    ) -> None:
        self._state_service = state_service
        self._return_url_policy = return_url_policy
        self._provider_gateway = provider_gateway

    async def execute(self, request: StartLoginRequest) -> StartLoginResponse:
        return_url = self._return_url_policy.ensure_allowed(request.return_url)

        state = await self._state_service.issue_state(
            request.provider,
            fingerprint=request.fingerprint,
            redirect_uri=request.callback_uri,
            metadata={"returnUrl": return_url},
        )

        authorization_url = self._provider_gateway.get_authorization_url(
            request.provider,
            redirect_uri=request.callback_uri,
            state=state,
            scope=LOGIN_SCOPES.get(request.provider),
        )

        logger.info(
            "Social login started",
            extra={"provider": request.provider.value, "return_url": return_url},
        )
        return StartLoginResponse(authorization_url=authorization_url, state=state)

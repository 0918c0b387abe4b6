"""IssueState Command.

계정 연동(앱 내 로그인)용 OAuth state 발급 Use Case입니다.

Architecture:
    - UseCase(지휘자): IssueStateInteractor
    - Services(연주자): RedirectUriResolver, OAuthStateService
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.social_auth.application.oauth.dto import IssueStateRequest, IssueStateResponse

if TYPE_CHECKING:
    from apps.social_auth.application.oauth.services import (
        OAuthStateService,
        RedirectUriResolver,
    )


class IssueStateInteractor:
    """state 발급 Interactor.

    Workflow:
        1. redirect URI 검증 (허용 목록)
        2. 사용자 또는 fingerprint 에 바인딩된 state 발급
    """

    def __init__(
        self,
        state_service: "OAuthStateService",
        redirect_resolver: "RedirectUriResolver",
    ) -> None:
        self._state_service = state_service
        self._redirect_resolver = redirect_resolver

    async def execute(self, request: IssueStateRequest) -> IssueStateResponse:
        """
        Raises:
            InvalidRedirectUriError: 허용되지 않은 redirect URI
            MissingRedirectConfigError: redirect URI 설정 없음
            StateOwnerRequiredError: user_id / fingerprint 모두 없음
        """
        resolved = self._redirect_resolver.resolve(request.provider, request.redirect_uri)

        state = await self._state_service.issue_state(
            request.provider,
            user_id=request.user_id,
            fingerprint=request.fingerprint,
            redirect_uri=resolved.redirect_uri,
        )
        return IssueStateResponse(state=state, expires_in_ms=self._state_service.ttl_ms)

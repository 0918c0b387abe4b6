"""LinkAccount Command.

인증된 사용자의 소셜 계정 연동 Use Case입니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.social_auth.application.oauth.dto import LinkAccountRequest
from apps.social_auth.application.oauth.exceptions import InvalidStateError

if TYPE_CHECKING:
    from apps.social_auth.application.oauth.services import (
        OAuthStateService,
        RedirectUriResolver,
    )
    from apps.social_auth.application.token.dto import ExchangeResult
    from apps.social_auth.application.token.services import TokenRefreshService


class LinkAccountInteractor:
    """계정 연동 Interactor.

    Workflow:
        1. state 소비 (user_id + fingerprint)
        2. redirect URI 결정 (state 에 기록된 값 우선)
        3. code 교환 및 토큰 저장
    """

    def __init__(
        self,
        state_service: "OAuthStateService",
        redirect_resolver: "RedirectUriResolver",
        token_service: "TokenRefreshService",
    ) -> None:
        self._state_service = state_service
        self._redirect_resolver = redirect_resolver
        self._token_service = token_service

    async def execute(self, request: LinkAccountRequest) -> "ExchangeResult":
        entry = await self._state_service.consume_state(
            request.provider,
            request.state,
            user_id=request.user_id,
            fingerprint=request.fingerprint,
        )
        if entry is None:
            raise InvalidStateError()

        resolved = self._redirect_resolver.resolve(
            request.provider, entry.redirect_uri or request.redirect_uri
        )

        return await self._token_service.exchange_code(
            request.provider,
            user_id=request.user_id,
            code=request.code,
            redirect_uri=resolved.redirect_uri,
            state=request.state,
        )

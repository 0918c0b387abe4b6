"""CompleteLogin Command.

앱이 딥링크로 받은 일회용 코드를 세션 토큰으로 교환합니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apps.social_auth.application.oauth.dto import OneTimeCodePayload
from apps.social_auth.application.oauth.exceptions import InvalidOneTimeCodeError

if TYPE_CHECKING:
    from apps.social_auth.application.oauth.services import OneTimeCodeService


class CompleteLoginInteractor:
    """일회용 코드 교환 Interactor."""

    def __init__(self, one_time_codes: "OneTimeCodeService") -> None:
        self._one_time_codes = one_time_codes

    async def execute(self, code: str | None) -> OneTimeCodePayload:
        payload = await self._one_time_codes.consume_code(code)
        if payload is None:
            raise InvalidOneTimeCodeError()
        return payload

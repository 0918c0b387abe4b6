"""Session Token Issuer Port."""

from __future__ import annotations

from typing import Protocol


class SessionTokenIssuer(Protocol):
    """앱 세션 토큰 (JWT) 발급/검증."""

    def issue(self, user_id: str) -> str:
        ...

    def decode(self, token: str) -> str:
        """토큰에서 사용자 ID 추출."""
        ...

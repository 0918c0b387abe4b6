"""User Account Gateway Port."""

from __future__ import annotations

from typing import Protocol

from apps.social_auth.application.oauth.ports.provider_gateway import OAuthProfile


class UserAccountGateway(Protocol):
    """소셜 프로필로 로컬 사용자를 찾거나 생성합니다."""

    async def get_or_create_from_oauth(self, profile: OAuthProfile) -> str:
        """로컬 사용자 ID 반환."""
        ...

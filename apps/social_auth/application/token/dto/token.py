"""Token DTOs."""

from __future__ import annotations

from dataclasses import dataclass

from apps.social_auth.application.oauth.ports import OAuthProfile
from apps.social_auth.domain.enums import Provider


@dataclass(frozen=True, slots=True)
class DecryptedTokens:
    """복호화된 토큰 (없으면 None)."""

    access_token: str | None
    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class ExchangeResult:
    """authorization code 교환 결과."""

    provider: Provider
    access_token: str
    expires_in: int
    token_type: str
    version: int
    scope: str | None = None
    profile: OAuthProfile | None = None


@dataclass(frozen=True, slots=True)
class RefreshResult:
    """access token 갱신 결과."""

    provider: Provider
    access_token: str
    expires_in: int
    token_type: str
    version: int
    scope: str | None = None

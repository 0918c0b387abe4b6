"""Token Update Value Object."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TokenUpdate:
    """토큰 레코드 부분 갱신 값.

    None 은 "제공되지 않음"을 의미하며 기존 값이 유지됩니다.
    refresh_token 이 주어지면 회전(rotation)으로 처리됩니다.
    """

    access_token: str | None = None
    refresh_token: str | None = None
    token_type: str | None = None
    expires_at: int | None = None
    scope: str | None = None
    provider_user_id: str | None = None
    provider_user_email: str | None = None
    provider_user_name: str | None = None
    provider_user_profile: str | None = None
    client_id: str | None = None

    @property
    def rotates_refresh_token(self) -> bool:
        return bool(self.refresh_token)

"""Social Token Entity."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from apps.social_auth.domain.enums import Provider


@dataclass(slots=True)
class RotationWindow:
    """고정 윈도우 회전 카운터."""

    count: int
    window_start: int

    def to_dict(self) -> dict[str, int]:
        return {"count": self.count, "window_start": self.window_start}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "RotationWindow | None":
        if not data:
            return None
        return cls(
            count=int(data.get("count") or 0),
            window_start=int(data.get("window_start") or 0),
        )


@dataclass(slots=True)
class SocialToken:
    """사용자-프로바이더 별 OAuth 토큰 레코드.

    토큰 값은 항상 암호문(`*_enc`)으로만 보관합니다.
    revoked 가 True 이면 두 암호문은 모두 None 입니다.
    """

    id: str | None
    user_id: str
    provider: Provider
    access_token_enc: str | None = None
    refresh_token_enc: str | None = None
    token_type: str = "bearer"
    expires_at: int = 0
    scope: str = ""
    provider_user_id: str = ""
    provider_user_email: str = ""
    provider_user_name: str = ""
    provider_user_profile: str = ""
    client_id: str | None = None
    version: int = 1
    history: list[str] = field(default_factory=list)
    revoked: bool = False
    rotation_count_window: RotationWindow | None = None
    created_at: int = 0
    updated_at: int = 0
    last_rotation_at: int | None = None

    def to_document(self) -> dict[str, Any]:
        """문서 스토어에 기록할 dict (id 제외)."""
        return {
            "user_id": self.user_id,
            "provider": self.provider.value,
            "access_token_enc": self.access_token_enc,
            "refresh_token_enc": self.refresh_token_enc,
            "token_type": self.token_type,
            "expires_at": self.expires_at,
            "scope": self.scope,
            "provider_user_id": self.provider_user_id,
            "provider_user_email": self.provider_user_email,
            "provider_user_name": self.provider_user_name,
            "provider_user_profile": self.provider_user_profile,
            "client_id": self.client_id,
            "version": self.version,
            "history": list(self.history),
            "revoked": self.revoked,
            "rotation_count_window": (
                self.rotation_count_window.to_dict() if self.rotation_count_window else None
            ),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "last_rotation_at": self.last_rotation_at,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "SocialToken":
        return cls(
            id=data.get("id"),
            user_id=str(data["user_id"]),
            provider=Provider.parse(data.get("provider")),
            access_token_enc=data.get("access_token_enc"),
            refresh_token_enc=data.get("refresh_token_enc"),
            token_type=data.get("token_type") or "bearer",
            expires_at=int(data.get("expires_at") or 0),
            scope=data.get("scope") or "",
            provider_user_id=data.get("provider_user_id") or "",
            provider_user_email=data.get("provider_user_email") or "",
            provider_user_name=data.get("provider_user_name") or "",
            provider_user_profile=data.get("provider_user_profile") or "",
            client_id=data.get("client_id"),
            version=int(data.get("version") or 1),
            history=list(data.get("history") or []),
            revoked=bool(data.get("revoked", False)),
            rotation_count_window=RotationWindow.from_dict(data.get("rotation_count_window")),
            created_at=int(data.get("created_at") or 0),
            updated_at=int(data.get("updated_at") or 0),
            last_rotation_at=data.get("last_rotation_at"),
        )

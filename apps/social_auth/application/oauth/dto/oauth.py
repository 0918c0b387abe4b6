"""OAuth DTOs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from apps.social_auth.domain.enums import Provider


@dataclass(frozen=True, slots=True)
class OAuthStateEntry:
    """발급된 OAuth state 엔트리."""

    provider: Provider
    expires_at: int
    user_id: str | None = None
    fingerprint: str | None = None
    redirect_uri: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider.value,
            "user_id": self.user_id,
            "fingerprint": self.fingerprint,
            "redirect_uri": self.redirect_uri,
            "metadata": dict(self.metadata),
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OAuthStateEntry":
        return cls(
            provider=Provider.parse(data.get("provider")),
            user_id=data.get("user_id"),
            fingerprint=data.get("fingerprint"),
            redirect_uri=data.get("redirect_uri"),
            metadata=dict(data.get("metadata") or {}),
            expires_at=int(data.get("expires_at") or 0),
        )


@dataclass(frozen=True, slots=True)
class OneTimeCodePayload:
    """일회용 코드로 교환되는 세션 토큰."""

    token: str
    provider: Provider


@dataclass(frozen=True, slots=True)
class ResolvedRedirect:
    """검증된 redirect URI 와 허용 목록."""

    redirect_uri: str
    allowed_list: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class IssueStateRequest:
    """state 발급 요청 (계정 연동용)."""

    provider: Provider
    user_id: str | None = None
    fingerprint: str | None = None
    redirect_uri: str | None = None


@dataclass(frozen=True, slots=True)
class IssueStateResponse:
    """state 발급 응답."""

    state: str
    expires_in_ms: int


@dataclass(frozen=True, slots=True)
class StartLoginRequest:
    """서버 주도 로그인 시작 요청."""

    provider: Provider
    fingerprint: str
    callback_uri: str
    return_url: str | None = None


@dataclass(frozen=True, slots=True)
class StartLoginResponse:
    """프로바이더 인가 URL."""

    authorization_url: str
    state: str


@dataclass(frozen=True, slots=True)
class LoginCallbackRequest:
    """프로바이더 콜백 요청."""

    provider: Provider
    code: str
    state: str
    fingerprint: str
    callback_uri: str


@dataclass(frozen=True, slots=True)
class LoginCallbackResponse:
    """로그인 완료 후 리다이렉트 정보.

    is_web 이면 session_token 을 쿠키로 설정하고,
    아니면 redirect_url 에 일회용 코드가 포함됩니다.
    """

    user_id: str
    redirect_url: str
    session_token: str
    is_web: bool


@dataclass(frozen=True, slots=True)
class LinkAccountRequest:
    """인증된 사용자의 소셜 계정 연동 요청."""

    provider: Provider
    user_id: str
    code: str
    state: str
    fingerprint: str | None = None
    redirect_uri: str | None = None

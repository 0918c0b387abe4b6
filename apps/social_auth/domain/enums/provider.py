"""Provider Enum."""

from __future__ import annotations

from enum import Enum

from apps.social_auth.domain.exceptions.provider import UnsupportedProviderError


class Provider(str, Enum):
    """연동 가능한 OAuth 프로바이더.

    kakao / naver 는 소셜 로그인, spotify 는 음악 재생 연동에 사용됩니다.
    """

    KAKAO = "kakao"
    NAVER = "naver"
    SPOTIFY = "spotify"

    @property
    def is_social_login(self) -> bool:
        return self in SOCIAL_LOGIN_PROVIDERS

    @classmethod
    def parse(cls, value: "str | Provider | None") -> "Provider":
        """문자열을 Provider로 변환합니다.

        Raises:
            UnsupportedProviderError: 알 수 없는 프로바이더
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            raise UnsupportedProviderError(value) from None

    @classmethod
    def parse_social(cls, value: "str | Provider | None") -> "Provider":
        """소셜 로그인 프로바이더(kakao, naver)만 허용합니다."""
        provider = cls.parse(value)
        if not provider.is_social_login:
            raise UnsupportedProviderError(value)
        return provider


SOCIAL_LOGIN_PROVIDERS = frozenset({Provider.KAKAO, Provider.NAVER})

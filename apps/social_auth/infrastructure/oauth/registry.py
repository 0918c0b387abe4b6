"""OAuth Provider Registry."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.exceptions import UnsupportedProviderError
from apps.social_auth.infrastructure.oauth.providers import (
    KakaoOAuthProvider,
    NaverOAuthProvider,
    OAuthProvider,
    SpotifyOAuthProvider,
)

if TYPE_CHECKING:
    from apps.social_auth.setup.config import Settings


class ProviderRegistry:
    """Provider → OAuthProvider 매핑."""

    def __init__(self, providers: Iterable[OAuthProvider]) -> None:
        self._providers = {provider.name: provider for provider in providers}

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ProviderRegistry":
        return cls(
            [
                KakaoOAuthProvider(
                    client_id=settings.kakao_client_id,
                    client_secret=settings.kakao_client_secret,
                    redirect_uri=settings.kakao_redirect_uri,
                ),
                NaverOAuthProvider(
                    client_id=settings.naver_client_id,
                    client_secret=settings.naver_client_secret,
                    redirect_uri=settings.naver_redirect_uri,
                ),
                SpotifyOAuthProvider(
                    client_id=settings.spotify_client_id,
                    client_secret=settings.spotify_client_secret,
                    redirect_uri=None,
                ),
            ]
        )

    def get(self, provider: Provider) -> OAuthProvider:
        try:
            return self._providers[provider]
        except KeyError:
            raise UnsupportedProviderError(provider) from None

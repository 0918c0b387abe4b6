"""OAuth Provider Implementations."""

from apps.social_auth.infrastructure.oauth.client import OAuthClientImpl
from apps.social_auth.infrastructure.oauth.providers import (
    KakaoOAuthProvider,
    NaverOAuthProvider,
    OAuthProvider,
    SpotifyOAuthProvider,
)
from apps.social_auth.infrastructure.oauth.registry import ProviderRegistry

__all__ = [
    "OAuthProvider",
    "KakaoOAuthProvider",
    "NaverOAuthProvider",
    "SpotifyOAuthProvider",
    "ProviderRegistry",
    "OAuthClientImpl",
]

"""OAuth Providers."""

from apps.social_auth.infrastructure.oauth.providers.base import OAuthProvider
from apps.social_auth.infrastructure.oauth.providers.kakao import KakaoOAuthProvider
from apps.social_auth.infrastructure.oauth.providers.naver import NaverOAuthProvider
from apps.social_auth.infrastructure.oauth.providers.spotify import SpotifyOAuthProvider

__all__ = [
    "OAuthProvider",
    "KakaoOAuthProvider",
    "NaverOAuthProvider",
    "SpotifyOAuthProvider",
]

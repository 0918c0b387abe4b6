"""Token Services."""

from apps.social_auth.application.token.services.access_token_cache import AccessTokenCache
from apps.social_auth.application.token.services.token_refresh_service import (
    TokenRefreshService,
)
from apps.social_auth.application.token.services.token_repository import (
    SOCIAL_TOKENS_COLLECTION,
    SPOTIFY_TOKENS_COLLECTION,
    SocialTokenRepository,
)

__all__ = [
    "AccessTokenCache",
    "SOCIAL_TOKENS_COLLECTION",
    "SPOTIFY_TOKENS_COLLECTION",
    "SocialTokenRepository",
    "TokenRefreshService",
]

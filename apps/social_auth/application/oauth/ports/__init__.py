"""OAuth Ports."""

from apps.social_auth.application.oauth.ports.provider_gateway import (
    OAuthProfile,
    OAuthProviderGateway,
    OAuthTokens,
)
from apps.social_auth.application.oauth.ports.session_token_issuer import SessionTokenIssuer
from apps.social_auth.application.oauth.ports.user_account_gateway import UserAccountGateway

__all__ = [
    "OAuthProfile",
    "OAuthProviderGateway",
    "OAuthTokens",
    "SessionTokenIssuer",
    "UserAccountGateway",
]

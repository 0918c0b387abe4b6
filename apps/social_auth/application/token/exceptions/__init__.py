"""Token Exceptions."""

from apps.social_auth.application.token.exceptions.token import (
    MissingRefreshTokenError,
    SocialAccountNotLinkedError,
)

__all__ = ["MissingRefreshTokenError", "SocialAccountNotLinkedError"]

"""Domain Exceptions."""

from apps.social_auth.domain.exceptions.base import DomainError
from apps.social_auth.domain.exceptions.provider import UnsupportedProviderError
from apps.social_auth.domain.exceptions.token import (
    RefreshTokenRequiredError,
    RotationRateLimitedError,
    TokenRevokedError,
)

__all__ = [
    "DomainError",
    "UnsupportedProviderError",
    "RefreshTokenRequiredError",
    "RotationRateLimitedError",
    "TokenRevokedError",
]

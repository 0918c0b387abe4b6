"""Domain Enums."""

from apps.social_auth.domain.enums.provider import SOCIAL_LOGIN_PROVIDERS, Provider

__all__ = ["Provider", "SOCIAL_LOGIN_PROVIDERS"]

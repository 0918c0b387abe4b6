"""Domain Entities."""

from apps.social_auth.domain.entities.social_token import RotationWindow, SocialToken

__all__ = ["RotationWindow", "SocialToken"]

"""Domain Services."""

from apps.social_auth.domain.services.token_rotation import (
    apply_update,
    create_token,
    next_rotation_window,
    revoke_token,
)

__all__ = ["apply_update", "create_token", "next_rotation_window", "revoke_token"]

"""Token DTOs."""

from apps.social_auth.application.token.dto.token import (
    DecryptedTokens,
    ExchangeResult,
    RefreshResult,
)

__all__ = ["DecryptedTokens", "ExchangeResult", "RefreshResult"]

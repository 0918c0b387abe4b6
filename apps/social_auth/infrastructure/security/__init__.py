"""Security Infrastructure."""

from apps.social_auth.infrastructure.security.jwt_session_issuer import (
    InvalidSessionTokenError,
    JwtSessionTokenIssuer,
)
from apps.social_auth.infrastructure.security.token_cipher import (
    AesGcmTokenCipher,
    parse_encryption_key,
)

__all__ = [
    "AesGcmTokenCipher",
    "InvalidSessionTokenError",
    "JwtSessionTokenIssuer",
    "parse_encryption_key",
]

"""Social Token Exceptions."""

from apps.social_auth.domain.exceptions.base import DomainError


class RefreshTokenRequiredError(DomainError):
    """최초 연결 시 refresh token 누락."""

    def __init__(self) -> None:
        super().__init__("Refresh token required for initial connection")


class RotationRateLimitedError(DomainError):
    """refresh token 회전 빈도 제한 초과."""

    code = "TOO_MANY_REQUESTS"

    def __init__(self, max_per_hour: int) -> None:
        self.max_per_hour = max_per_hour
        super().__init__("Refresh token rotation rate exceeded")


class TokenRevokedError(DomainError):
    """폐기된 레코드에 refresh token 없이 토큰을 기록하려는 경우."""

    def __init__(self) -> None:
        super().__init__("Token record is revoked; a new refresh token is required")

"""Domain Exceptions Base."""


class DomainError(Exception):
    """도메인 규칙 위반의 기본 예외."""

    def __init__(self, message: str = "Domain error") -> None:
        self.message = message
        super().__init__(message)

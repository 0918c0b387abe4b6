"""Provider Exceptions."""

from apps.social_auth.domain.exceptions.base import DomainError


class UnsupportedProviderError(DomainError):
    """지원하지 않는 프로바이더."""

    def __init__(self, provider: object) -> None:
        self.provider = provider
        super().__init__(f"Unsupported provider: {provider}")

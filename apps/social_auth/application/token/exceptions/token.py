"""Token Exceptions."""

from apps.social_auth.application.oauth.exceptions.oauth import OAuthError


class SocialAccountNotLinkedError(OAuthError):
    """연결된 토큰 레코드가 없거나 refresh token 이 없는 경우."""

    code = "TOKEN_NOT_FOUND"

    def __init__(self, provider: str, *, code: str | None = None) -> None:
        self.provider = provider
        if code:
            self.code = code
        super().__init__(f"{provider} account is not linked")


class MissingRefreshTokenError(OAuthError):
    """최초 연결 시 프로바이더가 refresh token 을 주지 않은 경우."""

    code = "MISSING_REFRESH_TOKEN"

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__("Provider did not return a refresh token")

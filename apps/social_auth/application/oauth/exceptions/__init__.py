"""OAuth Exceptions."""

from apps.social_auth.application.oauth.exceptions.oauth import (
    DependencyError,
    InvalidAuthorizationCodeError,
    InvalidGrantError,
    InvalidOneTimeCodeError,
    InvalidRedirectUriError,
    InvalidReturnUrlError,
    InvalidStateError,
    MissingRedirectConfigError,
    OAuthError,
    OAuthProviderError,
    ReauthRequiredError,
    RedirectUriMismatchError,
    StateOwnerRequiredError,
)

__all__ = [
    "OAuthError",
    "InvalidStateError",
    "StateOwnerRequiredError",
    "InvalidRedirectUriError",
    "MissingRedirectConfigError",
    "InvalidReturnUrlError",
    "InvalidOneTimeCodeError",
    "OAuthProviderError",
    "InvalidGrantError",
    "DependencyError",
    "ReauthRequiredError",
    "InvalidAuthorizationCodeError",
    "RedirectUriMismatchError",
]

"""OAuth Services (연주자)."""

from apps.social_auth.application.oauth.services.one_time_code_service import (
    OneTimeCodeService,
)
from apps.social_auth.application.oauth.services.redirect_resolver import (
    ProviderRedirectConfig,
    RedirectUriResolver,
    build_allowed_list,
    parse_uri_list,
    resolve_redirect_uri,
)
from apps.social_auth.application.oauth.services.return_url_policy import (
    ReturnUrlPolicy,
    is_web_url,
)
from apps.social_auth.application.oauth.services.state_service import OAuthStateService

__all__ = [
    "OAuthStateService",
    "OneTimeCodeService",
    "ProviderRedirectConfig",
    "RedirectUriResolver",
    "ReturnUrlPolicy",
    "build_allowed_list",
    "is_web_url",
    "parse_uri_list",
    "resolve_redirect_uri",
]

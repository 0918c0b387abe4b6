"""OAuth DTOs."""

from apps.social_auth.application.oauth.dto.oauth import (
    IssueStateRequest,
    IssueStateResponse,
    LinkAccountRequest,
    LoginCallbackRequest,
    LoginCallbackResponse,
    OAuthStateEntry,
    OneTimeCodePayload,
    ResolvedRedirect,
    StartLoginRequest,
    StartLoginResponse,
)

__all__ = [
    "OAuthStateEntry",
    "OneTimeCodePayload",
    "ResolvedRedirect",
    "IssueStateRequest",
    "IssueStateResponse",
    "StartLoginRequest",
    "StartLoginResponse",
    "LoginCallbackRequest",
    "LoginCallbackResponse",
    "LinkAccountRequest",
]

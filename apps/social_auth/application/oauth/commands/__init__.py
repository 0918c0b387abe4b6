"""OAuth Commands (지휘자)."""

from apps.social_auth.application.oauth.commands.complete_login import CompleteLoginInteractor
from apps.social_auth.application.oauth.commands.issue_state import IssueStateInteractor
from apps.social_auth.application.oauth.commands.link_account import LinkAccountInteractor
from apps.social_auth.application.oauth.commands.login_callback import LoginCallbackInteractor
from apps.social_auth.application.oauth.commands.start_login import StartLoginInteractor

__all__ = [
    "CompleteLoginInteractor",
    "IssueStateInteractor",
    "LinkAccountInteractor",
    "LoginCallbackInteractor",
    "StartLoginInteractor",
]

"""HTTP Error Handlers."""

from apps.social_auth.presentation.http.errors.handlers import register_exception_handlers

__all__ = ["register_exception_handlers"]

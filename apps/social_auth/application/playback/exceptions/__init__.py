"""Playback Exceptions."""

from apps.social_auth.application.playback.exceptions.playback import (
    InvalidPlaybackRequestError,
    NoActiveDeviceError,
    SpotifyApiError,
)

__all__ = ["InvalidPlaybackRequestError", "NoActiveDeviceError", "SpotifyApiError"]

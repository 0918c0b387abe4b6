"""Playback Services."""

from apps.social_auth.application.playback.services.playback_service import (
    SpotifyPlaybackService,
    select_device,
    validate_playable_uris,
)

__all__ = ["SpotifyPlaybackService", "select_device", "validate_playable_uris"]

"""Playback DTOs."""

from apps.social_auth.application.playback.dto.playback import PlayRequest, SpotifyAccount

__all__ = ["PlayRequest", "SpotifyAccount"]

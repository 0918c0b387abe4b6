"""Playback Ports."""

from apps.social_auth.application.playback.ports.spotify_api import SpotifyApiGateway

__all__ = ["SpotifyApiGateway"]

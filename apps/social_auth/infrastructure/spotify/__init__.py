"""Spotify Web API Integration."""

from apps.social_auth.infrastructure.spotify.web_api_client import SpotifyWebApiClient

__all__ = ["SpotifyWebApiClient"]

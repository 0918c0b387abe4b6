"""Spotify Controllers."""

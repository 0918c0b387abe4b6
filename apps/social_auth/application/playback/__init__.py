"""Spotify playback proxy."""

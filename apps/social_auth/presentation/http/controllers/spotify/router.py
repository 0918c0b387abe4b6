"""Spotify Router."""

from fastapi import APIRouter

from apps.social_auth.presentation.http.controllers.spotify.auth import router as auth_router
from apps.social_auth.presentation.http.controllers.spotify.playback import (
    router as playback_router,
)

router = APIRouter()

router.include_router(auth_router)
router.include_router(playback_router)

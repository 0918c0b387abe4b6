"""API v1 Router."""

from fastapi import APIRouter

from apps.social_auth.presentation.http.controllers.auth.router import router as auth_router
from apps.social_auth.presentation.http.controllers.social.router import (
    router as social_router,
)
from apps.social_auth.presentation.http.controllers.spotify.router import (
    router as spotify_router,
)

router = APIRouter()

# 로그인 / state
router.include_router(auth_router, prefix="/auth", tags=["auth"])

# 소셜 계정 연동
router.include_router(social_router, prefix="/social", tags=["social"])

# Spotify 연결 / 재생
router.include_router(spotify_router, prefix="/spotify", tags=["spotify"])

"""Auth Router.

로그인 관련 엔드포인트를 통합합니다.
"""

from fastapi import APIRouter

from apps.social_auth.presentation.http.controllers.auth.complete import (
    router as complete_router,
)
from apps.social_auth.presentation.http.controllers.auth.login import router as login_router
from apps.social_auth.presentation.http.controllers.auth.state import router as state_router

router = APIRouter()

# /social/state, /complete 가 /{provider}/... 보다 먼저 매칭되어야 함
router.include_router(state_router)
router.include_router(complete_router)
router.include_router(login_router)

"""Social Auth API Application Entry Point.

Clean Architecture 기반 소셜 로그인 / 토큰 수명주기 서비스입니다.

- 카카오/네이버 소셜 로그인 및 계정 연동
- Spotify 계정 연결, access token 발급, 재생 제어 프록시
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.social_auth.presentation.http.controllers import root_router
from apps.social_auth.presentation.http.errors import register_exception_handlers
from apps.social_auth.setup.config import get_settings
from apps.social_auth.setup.dependencies import get_key_value_store, get_spotify_api_client
from apps.social_auth.setup.logging import setup_logging
from apps.social_auth.setup.sweeper import run_expiry_sweeper

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 생명주기 관리."""
    settings = get_settings()

    # Startup
    logger.info(
        "Starting Social Auth API",
        extra={"environment": settings.environment, "storage": settings.storage_backend},
    )
    sweeper = asyncio.create_task(
        run_expiry_sweeper(get_key_value_store(), settings.sweep_interval_seconds)
    )

    yield

    # Shutdown
    logger.info("Shutting down Social Auth API")
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    await get_spotify_api_client().close()


def create_app() -> FastAPI:
    """FastAPI 애플리케이션 팩토리."""
    settings = get_settings()

    # 로깅 설정
    setup_logging("DEBUG" if settings.environment == "local" else "INFO")

    app = FastAPI(
        title=settings.app_name,
        description="소셜 로그인 / OAuth 토큰 수명주기 서비스",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS 설정
    cors_origins = (
        [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
        if settings.cors_origins
        else ["http://localhost:8081", "http://localhost:19006"]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 예외 핸들러 등록
    register_exception_handlers(app)

    # 라우터 등록
    app.include_router(root_router)

    # Health check (루트)
    @app.get("/health")
    async def root_health():
        return {"status": "healthy", "service": "social-auth-api", "version": "1.0.0"}

    return app


# 애플리케이션 인스턴스
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "apps.social_auth.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )

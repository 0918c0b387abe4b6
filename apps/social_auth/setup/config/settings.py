"""Application Settings.

env_prefix="SOCIAL_AUTH_" 를 사용하며, 기존 Stonetify 백엔드의 환경변수
(ENCRYPTION_KEY, KAKAO_REST_API_KEY 등)도 AliasChoices 로 그대로 인식합니다.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _env(name: str, legacy: str) -> AliasChoices:
    return AliasChoices(f"SOCIAL_AUTH_{name}", legacy)


class Settings(BaseSettings):
    """애플리케이션 설정.

    예시:
        SOCIAL_AUTH_STORAGE_BACKEND → storage_backend
        KAKAO_REST_API_KEY (또는 SOCIAL_AUTH_KAKAO_CLIENT_ID) → kakao_client_id
    """

    # Service
    app_name: str = "Social Auth API"
    environment: str = "local"
    cors_origins: Optional[str] = None
    public_base_url: Optional[str] = None  # 프록시 뒤에서 콜백 URI 생성용

    # Storage (memory: 단일 인스턴스 전용)
    storage_backend: str = "memory"
    redis_ephemeral_url: str = "redis://localhost:6379/3"
    redis_document_url: str = "redis://localhost:6379/4"

    # OAuth state / one-time code
    oauth_state_ttl_seconds: int = 5 * 60
    one_time_code_ttl_seconds: int = 60
    sweep_interval_seconds: int = 5 * 60
    upstream_timeout_seconds: float = 10.0

    # Token lifecycle
    access_token_expiry_buffer_ms: int = 5000
    token_history_limit: int = 5
    token_max_rotations_per_hour: int = 12
    encryption_key: Optional[str] = Field(
        default=None, validation_alias=_env("ENCRYPTION_KEY", "ENCRYPTION_KEY")
    )

    # Session JWT
    jwt_secret_key: str = Field(
        default="change-me", validation_alias=_env("JWT_SECRET_KEY", "JWT_SECRET")
    )
    jwt_algorithm: str = "HS256"
    session_token_exp_days: int = 30
    cookie_domain: Optional[str] = None

    # Return URL
    allowed_return_origins: str = Field(
        default="", validation_alias=_env("ALLOWED_RETURN_ORIGINS", "ALLOWED_RETURN_ORIGINS")
    )
    default_return_url: str = "stonetify://oauth-finish"

    # Expo auth proxy
    expo_owner: Optional[str] = Field(default=None, validation_alias=_env("EXPO_OWNER", "EXPO_OWNER"))
    expo_slug: Optional[str] = Field(default=None, validation_alias=_env("EXPO_SLUG", "EXPO_SLUG"))

    # OAuth Providers - Kakao
    kakao_client_id: str = Field(
        default="", validation_alias=_env("KAKAO_CLIENT_ID", "KAKAO_REST_API_KEY")
    )
    kakao_client_secret: Optional[str] = Field(
        default=None, validation_alias=_env("KAKAO_CLIENT_SECRET", "KAKAO_CLIENT_SECRET")
    )
    kakao_redirect_uri: Optional[str] = Field(
        default=None, validation_alias=_env("KAKAO_REDIRECT_URI", "KAKAO_REDIRECT_URI")
    )
    kakao_allowed_redirect_uris: str = Field(
        default="",
        validation_alias=_env("KAKAO_ALLOWED_REDIRECT_URIS", "KAKAO_ALLOWED_REDIRECT_URIS"),
    )

    # OAuth Providers - Naver
    naver_client_id: str = Field(
        default="", validation_alias=_env("NAVER_CLIENT_ID", "NAVER_CLIENT_ID")
    )
    naver_client_secret: Optional[str] = Field(
        default=None, validation_alias=_env("NAVER_CLIENT_SECRET", "NAVER_CLIENT_SECRET")
    )
    naver_redirect_uri: Optional[str] = Field(
        default=None, validation_alias=_env("NAVER_REDIRECT_URI", "NAVER_REDIRECT_URI")
    )
    naver_allowed_redirect_uris: str = Field(
        default="",
        validation_alias=_env("NAVER_ALLOWED_REDIRECT_URIS", "NAVER_ALLOWED_REDIRECT_URIS"),
    )

    # Spotify
    spotify_client_id: str = Field(
        default="", validation_alias=_env("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_ID")
    )
    spotify_client_secret: Optional[str] = Field(
        default=None, validation_alias=_env("SPOTIFY_CLIENT_SECRET", "SPOTIFY_CLIENT_SECRET")
    )

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_AUTH_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @field_validator(
        "kakao_redirect_uri",
        "naver_redirect_uri",
        "kakao_client_secret",
        "naver_client_secret",
        "spotify_client_secret",
        "encryption_key",
        mode="before",
    )
    @classmethod
    def _empty_string_to_none(cls, value: Optional[str]):
        """빈 문자열을 None으로 변환."""
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("storage_backend")
    @classmethod
    def _validate_storage_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("memory", "redis"):
            raise ValueError("storage_backend must be 'memory' or 'redis'")
        return value


@lru_cache
def get_settings() -> Settings:
    """캐시된 Settings 인스턴스 반환 (FastAPI 공식 패턴)."""
    return Settings()

"""Settings 테스트."""

import pytest
from pydantic import ValidationError

from apps.social_auth.setup.config import Settings


class TestSettings:
    def test_legacy_env_names(self, monkeypatch) -> None:
        monkeypatch.delenv("SOCIAL_AUTH_KAKAO_CLIENT_ID", raising=False)
        monkeypatch.setenv("KAKAO_REST_API_KEY", "legacy-kakao")
        monkeypatch.setenv("ALLOWED_RETURN_ORIGINS", "https://stonetify.com")

        settings = Settings()

        assert settings.kakao_client_id == "legacy-kakao"
        assert settings.allowed_return_origins == "https://stonetify.com"

    def test_prefixed_env_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("SOCIAL_AUTH_KAKAO_CLIENT_ID", "prefixed")
        monkeypatch.setenv("KAKAO_REST_API_KEY", "legacy-kakao")

        assert Settings().kakao_client_id == "prefixed"

    def test_blank_secret_is_none(self, monkeypatch) -> None:
        monkeypatch.setenv("SOCIAL_AUTH_KAKAO_CLIENT_SECRET", "  ")

        assert Settings().kakao_client_secret is None

    def test_storage_backend_validation(self, monkeypatch) -> None:
        monkeypatch.setenv("SOCIAL_AUTH_STORAGE_BACKEND", "postgres")

        with pytest.raises(ValidationError):
            Settings()

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.setenv("SOCIAL_AUTH_STORAGE_BACKEND", "Redis")

        settings = Settings()

        assert settings.storage_backend == "redis"
        assert settings.oauth_state_ttl_seconds == 300
        assert settings.one_time_code_ttl_seconds == 60
        assert settings.token_max_rotations_per_hour == 12

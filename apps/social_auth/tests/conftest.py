"""Test Configuration and Fixtures.

pytest 설정 및 공통 픽스처.
"""

from __future__ import annotations

import os
from typing import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from apps.social_auth.application.oauth.services import (
    OAuthStateService,
    OneTimeCodeService,
)
from apps.social_auth.application.token.services import (
    SPOTIFY_TOKENS_COLLECTION,
    AccessTokenCache,
    SocialTokenRepository,
)
from apps.social_auth.infrastructure.persistence_memory import (
    InMemoryDocumentStore,
    InMemoryKeyValueStore,
)
from apps.social_auth.infrastructure.security import AesGcmTokenCipher

TEST_ENCRYPTION_KEY = "0123456789abcdef" * 4
START_MS = 1_700_000_000_000


# ============================================================
# Environment
# ============================================================


@pytest.fixture(scope="session", autouse=True)
def _test_env() -> Generator[None, None, None]:
    """Set test environment variables."""
    original = os.environ.copy()
    os.environ.update(
        {
            "SOCIAL_AUTH_ENVIRONMENT": "test",
            "SOCIAL_AUTH_STORAGE_BACKEND": "memory",
            "SOCIAL_AUTH_JWT_SECRET_KEY": "test-secret-key-for-testing-only",
            "SOCIAL_AUTH_ENCRYPTION_KEY": TEST_ENCRYPTION_KEY,
        }
    )
    yield
    os.environ.clear()
    os.environ.update(original)


# ============================================================
# Clock
# ============================================================


class FakeClock:
    """수동으로 진행시키는 시계.

    서비스는 epoch ms(`ms`), 인메모리 저장소는 초(`seconds`)를 사용합니다.
    """

    def __init__(self, start_ms: int = START_MS) -> None:
        self.now = start_ms

    def ms(self) -> int:
        return self.now

    def seconds(self) -> float:
        return self.now / 1000

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ============================================================
# Storage Fixtures
# ============================================================


@pytest.fixture
def kv_store(clock: FakeClock) -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore(clock=clock.seconds)


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def cipher() -> AesGcmTokenCipher:
    return AesGcmTokenCipher(TEST_ENCRYPTION_KEY)


# ============================================================
# Service Fixtures
# ============================================================


@pytest.fixture
def state_service(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> OAuthStateService:
    return OAuthStateService(kv_store, clock=clock.ms)


@pytest.fixture
def one_time_codes(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> OneTimeCodeService:
    return OneTimeCodeService(kv_store, clock=clock.ms)


@pytest.fixture
def social_tokens(
    document_store: InMemoryDocumentStore, cipher: AesGcmTokenCipher, clock: FakeClock
) -> SocialTokenRepository:
    return SocialTokenRepository(document_store, cipher, clock=clock.ms)


@pytest.fixture
def spotify_tokens(
    document_store: InMemoryDocumentStore, cipher: AesGcmTokenCipher, clock: FakeClock
) -> SocialTokenRepository:
    return SocialTokenRepository(
        document_store, cipher, collection=SPOTIFY_TOKENS_COLLECTION, clock=clock.ms
    )


@pytest.fixture
def access_cache(kv_store: InMemoryKeyValueStore, clock: FakeClock) -> AccessTokenCache:
    return AccessTokenCache(kv_store, clock=clock.ms)


# ============================================================
# Mock Gateway Fixtures
# ============================================================


@pytest.fixture
def mock_provider_gateway() -> MagicMock:
    """Mock OAuthProviderGateway."""
    gateway = MagicMock()
    gateway.get_authorization_url.return_value = "https://kauth.kakao.com/oauth/authorize?x=1"
    gateway.exchange_code = AsyncMock()
    gateway.refresh_access_token = AsyncMock()
    gateway.fetch_profile = AsyncMock()
    gateway.revoke_upstream = AsyncMock()
    return gateway

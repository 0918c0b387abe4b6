"""DocumentUserAccountGateway 테스트."""

import pytest

from apps.social_auth.application.oauth.ports import OAuthProfile
from apps.social_auth.domain.enums import Provider
from apps.social_auth.infrastructure.persistence_documents import DocumentUserAccountGateway


@pytest.fixture
def gateway(document_store, clock) -> DocumentUserAccountGateway:
    return DocumentUserAccountGateway(document_store, clock=clock.ms)


class TestGetOrCreateFromOAuth:
    """사용자 매칭 테스트."""

    @pytest.mark.asyncio
    async def test_creates_user_with_generated_email(self, gateway, document_store) -> None:
        user_id = await gateway.get_or_create_from_oauth(
            OAuthProfile(provider=Provider.KAKAO, provider_user_id="987654321")
        )

        user = await document_store.get_by_id("users", user_id)
        assert user["email"] == "kakao_987654321@stonetify.app"
        assert user["display_name"] == "카카오사용자4321"
        assert user["kakao_id"] == "987654321"
        assert user["password"] is None

    @pytest.mark.asyncio
    async def test_returns_same_user_on_second_login(self, gateway) -> None:
        profile = OAuthProfile(provider=Provider.NAVER, provider_user_id="n-1", nickname="tester")

        first = await gateway.get_or_create_from_oauth(profile)
        second = await gateway.get_or_create_from_oauth(profile)

        assert first == second

    @pytest.mark.asyncio
    async def test_links_existing_user_by_email(self, gateway, document_store) -> None:
        existing = await document_store.create(
            "users", {"email": "user@example.com", "display_name": "기존"}
        )

        user_id = await gateway.get_or_create_from_oauth(
            OAuthProfile(
                provider=Provider.KAKAO,
                provider_user_id="12345",
                email="user@example.com",
                profile_image_url="https://img.example/1.png",
            )
        )

        user = await document_store.get_by_id("users", existing)
        assert user_id == existing
        assert user["kakao_id"] == "12345"
        assert user["profile_image"] == "https://img.example/1.png"

    @pytest.mark.asyncio
    async def test_fills_missing_profile_image(self, gateway, document_store) -> None:
        user_id = await gateway.get_or_create_from_oauth(
            OAuthProfile(provider=Provider.KAKAO, provider_user_id="1")
        )

        await gateway.get_or_create_from_oauth(
            OAuthProfile(
                provider=Provider.KAKAO,
                provider_user_id="1",
                profile_image_url="https://img.example/2.png",
            )
        )

        user = await document_store.get_by_id("users", user_id)
        assert user["profile_image"] == "https://img.example/2.png"

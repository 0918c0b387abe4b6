"""Document User Account Gateway.

UserAccountGateway 포트의 구현체입니다.

매칭 순서:
    1. ``{provider}_id`` 가 같은 사용자
    2. 이메일이 같은 사용자 → 소셜 ID 연결
    3. 새 사용자 생성 (이메일이 없으면 ``{provider}_{id}@stonetify.app``)
"""

from __future__ import annotations

import logging

from apps.social_auth.application.common.ports import DocumentStore
from apps.social_auth.application.oauth.ports import OAuthProfile
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.value_objects import Clock, now_ms

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
GENERATED_EMAIL_DOMAIN = "stonetify.app"
DISPLAY_NAME_PREFIX = {
    Provider.KAKAO: "카카오사용자",
    Provider.NAVER: "네이버사용자",
    Provider.SPOTIFY: "Spotify사용자",
}


class DocumentUserAccountGateway:
    """문서 스토어 기반 사용자 조회/생성."""

    def __init__(
        self,
        store: DocumentStore,
        *,
        collection: str = USERS_COLLECTION,
        clock: Clock = now_ms,
    ) -> None:
        self._store = store
        self._collection = collection
        self._clock = clock

    async def get_or_create_from_oauth(self, profile: OAuthProfile) -> str:
        id_field = f"{profile.provider.value}_id"
        provider_user_id = profile.provider_user_id
        email = profile.email or (
            f"{profile.provider.value}_{provider_user_id}@{GENERATED_EMAIL_DOMAIN}"
        )
        profile_image = profile.profile_image_url

        linked = await self._store.query_by_field(self._collection, id_field, provider_user_id)
        if linked:
            user = linked[0]
            if profile_image and not user.get("profile_image"):
                await self._store.update(
                    self._collection, user["id"], {"profile_image": profile_image}
                )
            return user["id"]

        by_email = await self._store.query_by_field(self._collection, "email", email)
        if by_email:
            user = by_email[0]
            await self._store.update(
                self._collection,
                user["id"],
                {
                    id_field: provider_user_id,
                    "profile_image": profile_image or user.get("profile_image"),
                },
            )
            logger.info(
                "Social account linked to existing user",
                extra={"provider": profile.provider.value, "user_id": user["id"]},
            )
            return user["id"]

        display_name = profile.nickname or (
            f"{DISPLAY_NAME_PREFIX[profile.provider]}{provider_user_id[-4:]}"
        )
        user_id = await self._store.create(
            self._collection,
            {
                "email": email,
                "display_name": display_name,
                "profile_image": profile_image,
                id_field: provider_user_id,
                "password": None,
                "created_at": self._clock(),
            },
        )
        logger.info(
            "User created from social login",
            extra={"provider": profile.provider.value, "user_id": user_id},
        )
        return user_id

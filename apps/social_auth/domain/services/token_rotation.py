"""Token Rotation Domain Service.

토큰 레코드 생성과 부분 갱신 규칙을 담은 순수 함수 모음입니다.
암호화는 호출자가 수행하고, 여기서는 암호문만 다룹니다.
"""

from __future__ import annotations

import dataclasses

from apps.social_auth.domain.entities import RotationWindow, SocialToken
from apps.social_auth.domain.enums import Provider
from apps.social_auth.domain.exceptions import (
    RefreshTokenRequiredError,
    RotationRateLimitedError,
    TokenRevokedError,
)
from apps.social_auth.domain.value_objects import RotationPolicy, TokenUpdate


def next_rotation_window(
    current: RotationWindow | None,
    now: int,
    policy: RotationPolicy,
) -> RotationWindow:
    """다음 회전 카운터를 계산합니다.

    윈도우가 없거나 만료되었으면 now 에서 새 윈도우를 시작합니다.

    Raises:
        RotationRateLimitedError: 윈도우 내 회전 횟수가 max_per_hour 초과
    """
    if current is None or now - current.window_start > policy.window_ms:
        window = RotationWindow(count=0, window_start=now)
    else:
        window = RotationWindow(count=current.count, window_start=current.window_start)

    window.count += 1
    if window.count > policy.max_per_hour:
        raise RotationRateLimitedError(policy.max_per_hour)
    return window


def create_token(
    *,
    user_id: str,
    provider: Provider,
    update: TokenUpdate,
    access_token_enc: str | None,
    refresh_token_enc: str | None,
    now: int,
) -> SocialToken:
    """최초 연결 레코드를 생성합니다.

    Raises:
        RefreshTokenRequiredError: refresh token 암호문이 없는 경우
    """
    if not refresh_token_enc:
        raise RefreshTokenRequiredError()

    return SocialToken(
        id=None,
        user_id=user_id,
        provider=provider,
        access_token_enc=access_token_enc,
        refresh_token_enc=refresh_token_enc,
        token_type=update.token_type or "bearer",
        expires_at=update.expires_at or 0,
        scope=update.scope or "",
        provider_user_id=update.provider_user_id or "",
        provider_user_email=update.provider_user_email or "",
        provider_user_name=update.provider_user_name or "",
        provider_user_profile=update.provider_user_profile or "",
        client_id=update.client_id,
        version=1,
        history=[],
        revoked=False,
        rotation_count_window=RotationWindow(count=1, window_start=now),
        created_at=now,
        updated_at=now,
        last_rotation_at=now,
    )


def apply_update(
    existing: SocialToken,
    update: TokenUpdate,
    *,
    access_token_enc: str | None,
    refresh_token_enc: str | None,
    now: int,
    policy: RotationPolicy,
) -> SocialToken:
    """기존 레코드에 부분 갱신을 적용한 새 레코드를 반환합니다.

    existing 은 변경하지 않습니다. 회전 한도 초과 시 예외가 발생하므로
    호출자는 아무것도 기록하지 않게 됩니다.

    Raises:
        RotationRateLimitedError: 회전 빈도 제한 초과
        TokenRevokedError: 폐기된 레코드에 refresh token 없이 access token 기록
    """
    record = dataclasses.replace(existing, history=list(existing.history))

    if refresh_token_enc:
        record.rotation_count_window = next_rotation_window(
            existing.rotation_count_window, now, policy
        )
        previous = [existing.refresh_token_enc] if existing.refresh_token_enc else []
        record.history = (previous + list(existing.history))[: policy.history_limit]
        record.refresh_token_enc = refresh_token_enc
        record.version = existing.version + 1
        record.revoked = False
        record.last_rotation_at = now
    elif existing.revoked and access_token_enc:
        raise TokenRevokedError()

    if access_token_enc is not None:
        record.access_token_enc = access_token_enc
    if update.token_type is not None:
        record.token_type = update.token_type
    if update.expires_at is not None:
        record.expires_at = update.expires_at
    if update.scope is not None:
        record.scope = update.scope
    if update.provider_user_id is not None:
        record.provider_user_id = update.provider_user_id
    if update.provider_user_email is not None:
        record.provider_user_email = update.provider_user_email
    if update.provider_user_name is not None:
        record.provider_user_name = update.provider_user_name
    if update.provider_user_profile is not None:
        record.provider_user_profile = update.provider_user_profile
    if update.client_id is not None:
        record.client_id = update.client_id

    record.updated_at = now
    return record


def revoke_token(existing: SocialToken, now: int) -> SocialToken:
    """레코드를 폐기 상태로 전환합니다. 이미 폐기된 경우에도 동일한 결과."""
    record = dataclasses.replace(existing, history=list(existing.history))
    record.revoked = True
    record.access_token_enc = None
    record.refresh_token_enc = None
    record.updated_at = now
    return record

"""Rotation Policy Value Object."""

from __future__ import annotations

from dataclasses import dataclass

from apps.social_auth.domain.value_objects.timestamps import HOUR_MS

DEFAULT_HISTORY_LIMIT = 5
DEFAULT_MAX_ROTATIONS_PER_HOUR = 12


@dataclass(frozen=True, slots=True)
class RotationPolicy:
    """refresh token 회전 정책.

    Attributes:
        history_limit: 보관할 이전 refresh token 암호문 개수
        max_per_hour: 윈도우 당 허용되는 최대 회전 횟수
        window_ms: 회전 카운터 윈도우 길이
    """

    history_limit: int = DEFAULT_HISTORY_LIMIT
    max_per_hour: int = DEFAULT_MAX_ROTATIONS_PER_HOUR
    window_ms: int = HOUR_MS

    def __post_init__(self) -> None:
        if self.history_limit < 0:
            raise ValueError("history_limit must be >= 0")
        if self.max_per_hour < 1:
            raise ValueError("max_per_hour must be >= 1")

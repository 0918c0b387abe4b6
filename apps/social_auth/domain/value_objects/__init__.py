"""Domain Value Objects."""

from apps.social_auth.domain.value_objects.rotation_policy import (
    DEFAULT_HISTORY_LIMIT,
    DEFAULT_MAX_ROTATIONS_PER_HOUR,
    RotationPolicy,
)
from apps.social_auth.domain.value_objects.timestamps import (
    HOUR_MS,
    MINUTE_MS,
    SECOND_MS,
    Clock,
    now_ms,
)
from apps.social_auth.domain.value_objects.token_update import TokenUpdate

__all__ = [
    "Clock",
    "DEFAULT_HISTORY_LIMIT",
    "DEFAULT_MAX_ROTATIONS_PER_HOUR",
    "HOUR_MS",
    "MINUTE_MS",
    "SECOND_MS",
    "RotationPolicy",
    "TokenUpdate",
    "now_ms",
]

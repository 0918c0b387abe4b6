"""Epoch millisecond timestamps.

토큰 레코드와 state 엔트리는 기존 문서 스토어 데이터와 호환되도록
epoch milliseconds 정수로 시각을 기록합니다.
"""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS


def now_ms() -> int:
    """현재 시각 (epoch ms)."""
    return int(time.time() * 1000)

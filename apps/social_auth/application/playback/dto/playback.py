"""Playback DTOs."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class PlayRequest:
    """재생 요청."""

    uris: tuple[str, ...] = field(default_factory=tuple)
    context_uri: str | None = None
    position_ms: int | None = None
    device_id: str | None = None


@dataclass(frozen=True, slots=True)
class SpotifyAccount:
    """Spotify 사용자 계정 요약."""

    id: str | None
    display_name: str | None
    product: str | None

    @property
    def is_premium(self) -> bool:
        return self.product == "premium"

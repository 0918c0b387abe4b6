"""Redirect URI Resolver.

클라이언트가 요청한 redirect URI 를 프로바이더 별 허용 목록에 대해 검증합니다.
허용 목록 = 기본 URI ∪ 추가 허용 URI (CSV) ∪ 앱 딥링크/Expo 프록시 URI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from apps.social_auth.application.oauth.dto import ResolvedRedirect
from apps.social_auth.application.oauth.exceptions import (
    InvalidRedirectUriError,
    MissingRedirectConfigError,
)
from apps.social_auth.domain.enums import Provider

APP_SCHEME = "stonetify://"
EXPO_AUTH_PROXY = "https://auth.expo.io"


def parse_uri_list(value: str | Iterable[str] | None) -> list[str]:
    """CSV 문자열 또는 목록을 trim 된 비어있지 않은 URI 목록으로 변환."""
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


def build_allowed_list(
    default_uri: str | None,
    additional_allowed_uris: str | Iterable[str] | None = None,
    extra_allowed_uris: Iterable[str] = (),
) -> list[str]:
    """순서를 유지하며 중복을 제거한 허용 목록."""
    candidates = []
    if default_uri and default_uri.strip():
        candidates.append(default_uri.strip())
    candidates.extend(parse_uri_list(additional_allowed_uris))
    candidates.extend(parse_uri_list(list(extra_allowed_uris)))
    return list(dict.fromkeys(candidates))


def _matches(requested: str, allowed: str) -> bool:
    return (
        requested == allowed
        or requested.startswith(f"{allowed}?")
        or requested.startswith(f"{allowed}#")
    )


def resolve_redirect_uri(
    *,
    provider: Provider,
    requested_uri: str | None,
    default_uri: str | None,
    additional_allowed_uris: str | Iterable[str] | None = None,
    extra_allowed_uris: Iterable[str] = (),
) -> ResolvedRedirect:
    """redirect URI 를 결정합니다.

    요청 URI 가 있으면 허용 목록 항목과 정확히 같거나, 항목 뒤에 `?` 또는 `#`
    가 붙은 경우에만 허용합니다. 없으면 허용 목록의 첫 항목(기본 URI)을 사용합니다.

    Raises:
        InvalidRedirectUriError: 허용되지 않은 요청 URI
        MissingRedirectConfigError: 요청 URI 도 없고 허용 목록도 비어있음
    """
    allowed_list = build_allowed_list(default_uri, additional_allowed_uris, extra_allowed_uris)
    requested = (requested_uri or "").strip()

    if requested:
        if any(_matches(requested, allowed) for allowed in allowed_list):
            return ResolvedRedirect(redirect_uri=requested, allowed_list=tuple(allowed_list))
        raise InvalidRedirectUriError(provider.value, requested, allowed_list)

    if not allowed_list:
        raise MissingRedirectConfigError(provider.value)

    return ResolvedRedirect(redirect_uri=allowed_list[0], allowed_list=tuple(allowed_list))


@dataclass(frozen=True, slots=True)
class ProviderRedirectConfig:
    """프로바이더 별 redirect 설정."""

    default_uri: str | None = None
    additional_allowed_uris: tuple[str, ...] = field(default_factory=tuple)


class RedirectUriResolver:
    """설정 기반 redirect URI 검증기."""

    def __init__(
        self,
        configs: Mapping[Provider, ProviderRedirectConfig],
        *,
        expo_owner: str | None = None,
        expo_slug: str | None = None,
    ) -> None:
        self._configs = dict(configs)
        self._expo_owner = expo_owner
        self._expo_slug = expo_slug

    def extra_allowed_uris(self, provider: Provider) -> list[str]:
        """앱 딥링크와 Expo 인증 프록시 URI."""
        extras = [f"{APP_SCHEME}{provider.value}-callback"]
        if self._expo_owner and self._expo_slug:
            extras.append(f"{EXPO_AUTH_PROXY}/@{self._expo_owner}/{self._expo_slug}")
        return extras

    def resolve(self, provider: Provider, requested_uri: str | None = None) -> ResolvedRedirect:
        config = self._configs.get(provider) or ProviderRedirectConfig()
        return resolve_redirect_uri(
            provider=provider,
            requested_uri=requested_uri,
            default_uri=config.default_uri,
            additional_allowed_uris=config.additional_allowed_uris,
            extra_allowed_uris=self.extra_allowed_uris(provider),
        )

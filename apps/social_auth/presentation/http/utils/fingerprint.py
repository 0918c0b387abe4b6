"""Request Fingerprint.

OAuth state 를 요청 주체에 느슨하게 바인딩하기 위한 fingerprint 입니다.

``{client_ip}|{user-agent}|{accept-language}``

보안 경계가 아닌 약한 바인딩입니다. 같은 NAT 뒤에서 같은 브라우저를 쓰는
사용자끼리는 충돌할 수 있고, 네트워크가 바뀌면(모바일 Wi-Fi ↔ LTE)
같은 사용자의 fingerprint 도 달라질 수 있습니다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from fastapi import Request


def get_client_ip(headers: Mapping[str, str], peer_host: str | None) -> str:
    """X-Forwarded-For 의 첫 번째 비어있지 않은 값, 없으면 피어 주소."""
    forwarded = headers.get("x-forwarded-for") or ""
    for part in forwarded.split(","):
        if part.strip():
            return part.strip()
    return peer_host or ""


def build_request_fingerprint(headers: Mapping[str, str], peer_host: str | None) -> str:
    ip = get_client_ip(headers, peer_host)
    user_agent = headers.get("user-agent") or ""
    accept_language = headers.get("accept-language") or ""
    return f"{ip}|{user_agent}|{accept_language}".strip()


def get_request_fingerprint(request: "Request") -> str:
    """FastAPI Request 에서 fingerprint 계산."""
    peer_host = request.client.host if request.client else None
    return build_request_fingerprint(request.headers, peer_host)

"""Document Store Port."""

from __future__ import annotations

from typing import Any, Mapping, Protocol


class DocumentStore(Protocol):
    """컬렉션 단위 JSON 문서 저장소.

    조회 결과 문서에는 문서 식별자가 "id" 키로 포함됩니다.
    """

    async def create(self, collection: str, document: Mapping[str, Any]) -> str:
        """문서 생성 후 식별자 반환."""
        ...

    async def get_by_id(self, collection: str, document_id: str) -> dict[str, Any] | None:
        """식별자로 문서 조회."""
        ...

    async def query_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        """단일 필드 일치 조회."""
        ...

    async def query_by_fields(
        self, collection: str, conditions: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        """모든 필드가 일치하는 문서 조회."""
        ...

    async def update(
        self, collection: str, document_id: str, changes: Mapping[str, Any]
    ) -> None:
        """문서 필드 병합 갱신."""
        ...

    async def delete(self, collection: str, document_id: str) -> None:
        """문서 삭제."""
        ...

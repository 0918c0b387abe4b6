"""In-Memory Document Store.

DocumentStore 포트의 구현체입니다. 로컬 개발과 테스트에 사용합니다.
"""

from __future__ import annotations

import copy
import uuid
from typing import Any, Mapping


class InMemoryDocumentStore:
    """컬렉션 → {id: document} dict 저장소."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    def _export(self, document_id: str, document: dict[str, Any]) -> dict[str, Any]:
        exported = copy.deepcopy(document)
        exported["id"] = document_id
        return exported

    async def create(self, collection: str, document: Mapping[str, Any]) -> str:
        document_id = uuid.uuid4().hex
        stored = copy.deepcopy(dict(document))
        stored.pop("id", None)
        self._collection(collection)[document_id] = stored
        return document_id

    async def get_by_id(self, collection: str, document_id: str) -> dict[str, Any] | None:
        document = self._collection(collection).get(document_id)
        return self._export(document_id, document) if document is not None else None

    async def query_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[dict[str, Any]]:
        return await self.query_by_fields(collection, {field: value})

    async def query_by_fields(
        self, collection: str, conditions: Mapping[str, Any]
    ) -> list[dict[str, Any]]:
        return [
            self._export(document_id, document)
            for document_id, document in self._collection(collection).items()
            if all(document.get(field) == value for field, value in conditions.items())
        ]

    async def update(
        self, collection: str, document_id: str, changes: Mapping[str, Any]
    ) -> None:
        documents = self._collection(collection)
        if document_id not in documents:
            raise KeyError(f"{collection}/{document_id} not found")
        merged = copy.deepcopy(dict(changes))
        merged.pop("id", None)
        documents[document_id].update(merged)

    async def delete(self, collection: str, document_id: str) -> None:
        self._collection(collection).pop(document_id, None)

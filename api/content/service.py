"""
Generic content business logic.

`EntityService` implements list/get/create/update/delete once; it is
instantiated per request for one `EntityKind` with that kind's repository
and the Blob Store.

Order of checks for writes:
1) schema validation (done by FastAPI before we get here)
2) non-empty update body
3) every referenced blob exists
4) one store statement
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core.db import StoreError
from files.storage import BlobStore

from .kinds import EntityKind
from .repository import TableRepository
from .schemas import CreateModel, UpdateModel

logger = logging.getLogger(__name__)


def _blob_names(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


class EntityService:
    def __init__(self, kind: EntityKind, repository: TableRepository, blob_store: BlobStore) -> None:
        self.kind = kind
        self.repository = repository
        self.blob_store = blob_store

    def _render(self, row: dict[str, Any]) -> dict[str, Any]:
        return self.kind.read_schema.model_validate(row).model_dump(mode="json")

    def _not_found(self) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{self.kind.label} not found",
        )

    def _store_failure(self, verb: str, exc: StoreError) -> HTTPException:
        # Must be called from inside the `except` block so the traceback is logged.
        logger.exception("store_failed kind=%s op=%s error=%s", self.kind.slug, verb, exc)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {verb} {self.kind.label.lower()}",
        )

    def require_blobs(self, values: dict[str, Any]) -> None:
        for field_name in self.kind.blob_fields:
            for name in _blob_names(values.get(field_name)):
                if not self.blob_store.exists(name):
                    raise HTTPException(
                        status_code=status.HTTP_404_NOT_FOUND,
                        detail=f"File not found: {name}",
                    )

    async def list_all(self) -> list[dict[str, Any]]:
        try:
            rows = await self.repository.list_all()
        except StoreError as exc:
            raise self._store_failure("fetch", exc) from exc
        return [self._render(r) for r in rows]

    async def list_where(self, column: str, value: Any, *, order_by: str) -> list[dict[str, Any]]:
        try:
            rows = await self.repository.list_where(column, value, order_by=order_by)
        except StoreError as exc:
            raise self._store_failure("fetch", exc) from exc
        return [self._render(r) for r in rows]

    async def get(self, record_id: int) -> dict[str, Any]:
        try:
            row = await self.repository.get(record_id)
        except StoreError as exc:
            raise self._store_failure("fetch", exc) from exc
        if row is None:
            raise self._not_found()
        return self._render(row)

    async def create(self, payload: CreateModel) -> dict[str, Any]:
        values = payload.model_dump()
        self.require_blobs(values)

        try:
            row = await self.repository.insert(values)
        except StoreError as exc:
            raise self._store_failure("create", exc) from exc

        logger.info("created kind=%s id=%s", self.kind.slug, row.get("id"))
        return self._render(row)

    async def update(self, record_id: int, payload: UpdateModel) -> dict[str, Any]:
        values = payload.changes()
        if not values:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="At least one field is required for update",
            )
        self.require_blobs(values)

        try:
            row = await self.repository.update(record_id, values)
        except StoreError as exc:
            raise self._store_failure("update", exc) from exc
        if row is None:
            raise self._not_found()

        logger.info("updated kind=%s id=%s fields=%s", self.kind.slug, record_id, sorted(values))
        return self._render(row)

    async def delete(self, record_id: int) -> dict[str, Any]:
        # Referenced files stay in the Blob Store.
        try:
            row = await self.repository.delete(record_id)
        except StoreError as exc:
            raise self._store_failure("delete", exc) from exc
        if row is None:
            raise self._not_found()

        logger.info("deleted kind=%s id=%s", self.kind.slug, record_id)
        return self._render(row)

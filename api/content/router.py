"""
Content API endpoints.

`build_router(kind)` produces the five-endpoint CRUD surface for one entity
kind; carousel images additionally get the by-row listing.

No `from __future__ import annotations` here: the endpoint signatures close
over per-kind schema classes and FastAPI must see them as real objects.
"""

from fastapi import APIRouter, Depends, Path, status

from core.dependencies import get_blob_store, get_repositories
from files.storage import BlobStore

from .kinds import ALL_KINDS, CAROUSEL_IMAGES, EntityKind
from .schemas import INT4_MAX
from .service import EntityService


def service_dependency(kind: EntityKind):
    def get_service(
        repositories: dict = Depends(get_repositories),
        blob_store: BlobStore = Depends(get_blob_store),
    ) -> EntityService:
        return EntityService(kind, repositories[kind.table.name], blob_store)

    return get_service


def build_router(kind: EntityKind) -> APIRouter:
    router = APIRouter(prefix=f"/{kind.slug}", tags=[kind.slug])
    get_service = service_dependency(kind)
    create_schema = kind.create_schema
    update_schema = kind.update_schema
    table = kind.table.name

    @router.get("", name=f"list_{table}")
    async def list_records(service: EntityService = Depends(get_service)) -> dict:
        return {"data": await service.list_all()}

    @router.get("/{record_id}", name=f"get_{table}")
    async def get_record(
        record_id: int = Path(..., ge=1, le=INT4_MAX),
        service: EntityService = Depends(get_service),
    ) -> dict:
        return {"data": await service.get(record_id)}

    @router.post("", name=f"create_{table}", status_code=status.HTTP_201_CREATED)
    async def create_record(
        payload: create_schema,
        service: EntityService = Depends(get_service),
    ) -> dict:
        data = await service.create(payload)
        return {"message": f"{kind.label} created successfully", "data": data}

    @router.patch("/{record_id}", name=f"update_{table}")
    async def update_record(
        payload: update_schema,
        record_id: int = Path(..., ge=1, le=INT4_MAX),
        service: EntityService = Depends(get_service),
    ) -> dict:
        data = await service.update(record_id, payload)
        return {"message": f"{kind.label} updated successfully", "data": data}

    @router.delete("/{record_id}", name=f"delete_{table}")
    async def delete_record(
        record_id: int = Path(..., ge=1, le=INT4_MAX),
        service: EntityService = Depends(get_service),
    ) -> dict:
        data = await service.delete(record_id)
        return {"message": f"{kind.label} deleted successfully", "data": data}

    return router


carousel_images_router = build_router(CAROUSEL_IMAGES)


@carousel_images_router.get("/row/{row_id}", name="list_carousel_images_by_row")
async def list_carousel_images_by_row(
    row_id: int = Path(..., ge=1, le=INT4_MAX),
    service: EntityService = Depends(service_dependency(CAROUSEL_IMAGES)),
) -> dict:
    """
    Carousel images of one row, in display order (ascending `index`).
    """
    return {"data": await service.list_where("row", row_id, order_by="index")}


routers: list[APIRouter] = [carousel_images_router] + [
    build_router(kind) for kind in ALL_KINDS if kind is not CAROUSEL_IMAGES
]

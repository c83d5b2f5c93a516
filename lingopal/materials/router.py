"""
API router for the material resource library.
"""

from fastapi import APIRouter, Depends, Query, status

from lingopal.database.session import DbSession
from lingopal.middleware.security import api_route_limit

from .schemas import MaterialCreate, MaterialEnvelope, MaterialResponse, MaterialUpdate, MessageResponse
from .service import MaterialService


router = APIRouter(
    prefix="/api/material-resource", tags=["material-resource"], dependencies=[Depends(api_route_limit)]
)


@router.get("")
async def list_materials(
    session: DbSession,
    type: str | None = Query(default=None, description="Material type"),  # noqa: A002
    search: str | None = Query(default=None, description="Substring of the title"),
) -> list[MaterialResponse]:
    """Retrieve materials filtered by type and title."""
    materials = await MaterialService(session).search(type, search)
    return [MaterialResponse.model_validate(m) for m in materials]


@router.post("/admin/create", status_code=status.HTTP_201_CREATED)
async def create_material(data: MaterialCreate, session: DbSession) -> MaterialEnvelope:
    """Create a material."""
    material = await MaterialService(session).create(data)
    return MaterialEnvelope(message="New material created successfully", data=MaterialResponse.model_validate(material))


@router.put("/admin/update")
async def update_material(data: MaterialUpdate, session: DbSession) -> MaterialEnvelope:
    """Update a material selected by ``id``."""
    material = await MaterialService(session).update(data)
    return MaterialEnvelope(message="Material updated successfully", data=MaterialResponse.model_validate(material))


@router.delete("/admin/delete/{material_id}")
async def delete_material(material_id: int, session: DbSession) -> MessageResponse:
    """Delete a material."""
    await MaterialService(session).delete(material_id)
    return MessageResponse(message="Material deleted successfully.")

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lingopal.exceptions import ResourceNotFoundError, ValidationError

from .models import MaterialResource
from .schemas import MaterialCreate, MaterialUpdate


logger = logging.getLogger(__name__)


class MaterialService:
    """CRUD over the material resource library."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def search(self, type_: str | None = None, search: str | None = None) -> list[MaterialResource]:
        """List materials, filtered by exact type and a title substring (case-sensitive)."""
        query = select(MaterialResource).order_by(MaterialResource.id)
        if type_:
            query = query.where(MaterialResource.type == type_)
        if search:
            query = query.where(MaterialResource.title.contains(search, autoescape=True))
        result = await self._session.execute(query)
        return list(result.scalars().all())

    async def create(self, data: MaterialCreate) -> MaterialResource:
        material = MaterialResource(**data.model_dump())
        self._session.add(material)
        await self._session.commit()
        await self._session.refresh(material)
        logger.info("Created material %s", material.id)
        return material

    async def get(self, material_id: int) -> MaterialResource:
        material = await self._session.get(MaterialResource, material_id)
        if material is None:
            msg = "Material"
            raise ResourceNotFoundError(msg, str(material_id))
        return material

    async def update(self, data: MaterialUpdate) -> MaterialResource:
        if data.id is None:
            msg = "ID is required in the request body"
            raise ValidationError(msg)

        material = await self.get(data.id)
        for key, value in data.model_dump(exclude_unset=True, exclude={"id"}).items():
            setattr(material, key, value)

        await self._session.commit()
        return material

    async def delete(self, material_id: int) -> None:
        material = await self.get(material_id)
        await self._session.delete(material)
        await self._session.commit()
        logger.info("Deleted material %s", material_id)

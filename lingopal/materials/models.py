from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Identity, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from lingopal.database.base import Base


class MaterialResource(Base):
    """Reading/listening material shown in the resource library."""

    __tablename__ = "m_material_resource"

    id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str | None] = mapped_column(String(64), index=True)
    category: Mapped[str | None] = mapped_column(String(128))
    source: Mapped[str | None] = mapped_column(String)
    cover: Mapped[str | None] = mapped_column(String)
    content: Mapped[str | None] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=text("NOW()"))

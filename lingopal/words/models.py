from sqlalchemy import BigInteger, Identity, String
from sqlalchemy.orm import Mapped, mapped_column

from lingopal.database.base import Base


class Word(Base):
    __tablename__ = "m_word"

    word_id: Mapped[int] = mapped_column(BigInteger, Identity(), primary_key=True)
    word: Mapped[str] = mapped_column(String(128), nullable=False)
    alphabet: Mapped[str] = mapped_column(String(8), nullable=False, index=True)

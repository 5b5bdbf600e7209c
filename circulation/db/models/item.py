from sqlalchemy import Column, Date, Enum, Integer, String

from circulation.db.base import Base
from circulation.domain.enums import ItemState


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String(32), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False, index=True)
    author = Column(String(255), nullable=False, index=True)
    publication_date = Column(Date, nullable=True)
    state = Column(
        Enum(ItemState, native_enum=False, length=20),
        nullable=False,
        default=ItemState.AVAILABLE,
    )
    # Both set iff state is CHECKED_OUT; only the item service writes these
    holder = Column(String(320), nullable=True, index=True)
    due_date = Column(Date, nullable=True)

from datetime import date

from sqlalchemy import Column, Date, Enum, Integer, String

from circulation.db.base import Base
from circulation.domain.enums import MembershipTier


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(320), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    tier = Column(
        Enum(MembershipTier, native_enum=False, length=20),
        nullable=False,
        default=MembershipTier.REGULAR,
    )
    member_since = Column(Date, nullable=False, default=date.today)
    checked_out_count = Column(Integer, nullable=False, default=0)

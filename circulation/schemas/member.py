from datetime import date
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from circulation.domain.enums import MembershipTier


class Member(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    tier: MembershipTier
    member_since: date
    checked_out_count: int


class MemberCreate(BaseModel):
    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    tier: MembershipTier = MembershipTier.REGULAR

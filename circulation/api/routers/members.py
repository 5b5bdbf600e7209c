from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from circulation.api.deps import get_db
import circulation.services.item as item_service
import circulation.services.member as member_service
from circulation.schemas.item import Item
from circulation.schemas.member import Member, MemberCreate

router = APIRouter(prefix="/members", tags=["members"])


@router.post("", response_model=Member, status_code=status.HTTP_201_CREATED)
def register_new_member(
    member_data: MemberCreate,
    db: Session = Depends(get_db),
):
    """
    Register a new member. Tier defaults to REGULAR.
    """
    member = member_service.register_member(
        db,
        email=member_data.email,
        name=member_data.name,
        tier=member_data.tier,
    )
    return Member.model_validate(member)


@router.get("/{email}", response_model=Member)
def get_member_by_email(
    email: str,
    db: Session = Depends(get_db),
):
    return Member.model_validate(member_service.get_by_email(db, email))


@router.get("/{email}/items", response_model=list[Item])
def get_member_items(
    email: str,
    db: Session = Depends(get_db),
):
    """
    List the items a member currently holds, soonest due first.
    """
    member = member_service.get_by_email(db, email)
    return [Item.model_validate(item) for item in item_service.find_held_by(db, member.email)]

from datetime import date
from sqlalchemy import case, func
from sqlalchemy.orm import Session

from circulation.db.models.member import Member as MemberModel
from circulation.domain.enums import MembershipTier


def get_member_by_email(db: Session, email: str) -> MemberModel | None:
    """Get a member by email, ignoring case. Emails are stored as registered."""
    return (
        db.query(MemberModel)
        .filter(func.lower(MemberModel.email) == email.strip().lower())
        .first()
    )


def count_members(db: Session) -> int:
    return db.query(MemberModel).count()


def create_member(
    db: Session,
    email: str,
    name: str,
    tier: MembershipTier = MembershipTier.REGULAR,
    member_since: date | None = None,
) -> MemberModel:
    """Create a new member in the database. Pure data access - no business logic."""
    db_member = MemberModel(
        email=email,
        name=name,
        tier=tier,
        member_since=member_since or date.today(),
        checked_out_count=0,
    )
    db.add(db_member)
    db.commit()
    db.refresh(db_member)
    return db_member


def increment_checked_out_count(db: Session, member: MemberModel) -> MemberModel:
    """Add one to the member's count in a single UPDATE."""
    db.query(MemberModel).filter(MemberModel.id == member.id).update(
        {MemberModel.checked_out_count: MemberModel.checked_out_count + 1},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(member)
    return member


def decrement_checked_out_count(db: Session, member: MemberModel) -> MemberModel:
    """Subtract one from the member's count in a single UPDATE, floored at zero."""
    db.query(MemberModel).filter(MemberModel.id == member.id).update(
        {
            MemberModel.checked_out_count: case(
                (MemberModel.checked_out_count > 0, MemberModel.checked_out_count - 1),
                else_=0,
            )
        },
        synchronize_session=False,
    )
    db.commit()
    db.refresh(member)
    return member

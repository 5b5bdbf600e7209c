from sqlalchemy.orm import Session

import circulation.repositories.member as member_repo
from circulation.db.models.member import Member as MemberModel
from circulation.domain.enums import MembershipTier
from circulation.errors import DuplicateResourceError, NotFoundError


def get_by_email(db: Session, email: str) -> MemberModel:
    """
    Get a member by email.

    Raises:
        NotFoundError: If no member has this email
    """
    member = member_repo.get_member_by_email(db, email)
    if not member:
        raise NotFoundError(f"Member with email {email} not found")
    return member


def register_member(
    db: Session,
    email: str,
    name: str,
    tier: MembershipTier = MembershipTier.REGULAR,
) -> MemberModel:
    """
    Register a new member with an empty checked-out count.

    Raises:
        DuplicateResourceError: If the email is already registered
    """
    if member_repo.get_member_by_email(db, email):
        raise DuplicateResourceError(f"A member with email {email} already exists")
    return member_repo.create_member(db, email=email, name=name, tier=tier)


def increment_count(db: Session, member: MemberModel) -> MemberModel:
    return member_repo.increment_checked_out_count(db, member)


def decrement_count(db: Session, member: MemberModel) -> MemberModel:
    """Decrement the held-items count. Calling this at zero leaves it at zero."""
    return member_repo.decrement_checked_out_count(db, member)


def count_members(db: Session) -> int:
    return member_repo.count_members(db)

from datetime import date
from sqlalchemy.orm import Session

import circulation.repositories.item as item_repo
from circulation.db.models.item import Item as ItemModel
from circulation.db.models.member import Member as MemberModel
from circulation.domain.enums import ItemState
from circulation.errors import DuplicateResourceError, InvalidStateError, NotFoundError

NOT_AVAILABLE = "Item is not available"
NOT_CHECKED_OUT = "Item is not checked out"


def get_by_code(db: Session, code: str) -> ItemModel:
    """
    Get an item by catalog code.

    Raises:
        NotFoundError: If no item has this code
    """
    item = item_repo.get_item_by_code(db, code)
    if not item:
        raise NotFoundError(f"Item with code {code} not found")
    return item


def create_item(
    db: Session,
    code: str,
    title: str,
    author: str,
    publication_date: date | None = None,
) -> ItemModel:
    """
    Seed a new item into the catalog. Items always start out available.

    Raises:
        DuplicateResourceError: If an item with this code already exists
    """
    if item_repo.get_item_by_code(db, code):
        raise DuplicateResourceError(f"An item with code {code} already exists")
    return item_repo.create_item(
        db,
        code=code,
        title=title,
        author=author,
        publication_date=publication_date,
    )


def mark_checked_out(
    db: Session, item: ItemModel, member: MemberModel, due_date: date
) -> ItemModel:
    """
    Move an available item to CHECKED_OUT, held by member until due_date.

    Raises:
        InvalidStateError: If the item is not available, including when another
            request checked it out between the read and the write
    """
    if item.state != ItemState.AVAILABLE:
        raise InvalidStateError(NOT_AVAILABLE)

    if not item_repo.transition_item(
        db,
        item,
        expected_state=ItemState.AVAILABLE,
        new_state=ItemState.CHECKED_OUT,
        holder=member.email,
        due_date=due_date,
    ):
        raise InvalidStateError(NOT_AVAILABLE)
    return item


def mark_returned(db: Session, item: ItemModel) -> ItemModel:
    """
    Move a checked-out item back to AVAILABLE, clearing holder and due date.

    Raises:
        InvalidStateError: If the item is not checked out
    """
    if item.state != ItemState.CHECKED_OUT:
        raise InvalidStateError(NOT_CHECKED_OUT)

    if not item_repo.transition_item(
        db,
        item,
        expected_state=ItemState.CHECKED_OUT,
        new_state=ItemState.AVAILABLE,
        holder=None,
        due_date=None,
    ):
        raise InvalidStateError(NOT_CHECKED_OUT)
    return item


def find_overdue(db: Session, as_of: date) -> list[ItemModel]:
    """
    Items whose due date is strictly before as_of.

    State is not filtered here; callers that only want items still out must
    check ``item.state`` themselves.
    """
    return item_repo.get_items_due_before(db, as_of)


def find_held_by(db: Session, email: str) -> list[ItemModel]:
    return item_repo.get_items_by_holder(db, email)


def count_by_state(db: Session, state: ItemState) -> int:
    return item_repo.count_items_by_state(db, state)

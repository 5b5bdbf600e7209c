from datetime import date
from sqlalchemy import func
from sqlalchemy.orm import Session

from circulation.db.models.item import Item as ItemModel
from circulation.domain.enums import ItemState


def get_item_by_code(db: Session, code: str) -> ItemModel | None:
    """Get an item by its catalog code."""
    return db.query(ItemModel).filter(ItemModel.code == code).first()


def get_items_by_author(db: Session, author: str) -> list[ItemModel]:
    """Get items whose author matches exactly."""
    return (
        db.query(ItemModel)
        .filter(ItemModel.author == author)
        .order_by(ItemModel.title)
        .all()
    )


def get_items_by_title_containing(db: Session, term: str) -> list[ItemModel]:
    """Get items whose title contains the term, ignoring case."""
    return (
        db.query(ItemModel)
        .filter(func.lower(ItemModel.title).contains(term.lower(), autoescape=True))
        .order_by(ItemModel.title)
        .all()
    )


def get_items_due_before(db: Session, as_of: date) -> list[ItemModel]:
    """Get items with a due date strictly before as_of. State is not filtered."""
    return (
        db.query(ItemModel)
        .filter(ItemModel.due_date.isnot(None), ItemModel.due_date < as_of)
        .order_by(ItemModel.due_date, ItemModel.code)
        .all()
    )


def get_items_by_holder(db: Session, holder: str) -> list[ItemModel]:
    """Get items currently held by a member."""
    return (
        db.query(ItemModel)
        .filter(ItemModel.holder == holder)
        .order_by(ItemModel.due_date, ItemModel.code)
        .all()
    )


def count_items_by_state(db: Session, state: ItemState) -> int:
    return db.query(ItemModel).filter(ItemModel.state == state).count()


def get_all_items_paginated(
    db: Session,
    page: int = 1,
    page_size: int = 100,
    state: ItemState | None = None,
) -> tuple[list[ItemModel], int]:
    """
    Get all items with pagination and an optional state filter.

    Returns:
        Tuple of (list of items, total count)
    """
    query = db.query(ItemModel)
    if state is not None:
        query = query.filter(ItemModel.state == state)

    total = query.count()
    skip = (page - 1) * page_size
    items = query.order_by(ItemModel.code).offset(skip).limit(page_size).all()
    return items, total


def create_item(
    db: Session,
    code: str,
    title: str,
    author: str,
    publication_date: date | None = None,
) -> ItemModel:
    """Create a new, available item in the database. Pure data access - no business logic."""
    db_item = ItemModel(
        code=code,
        title=title,
        author=author,
        publication_date=publication_date,
        state=ItemState.AVAILABLE,
        holder=None,
        due_date=None,
    )
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item


def transition_item(
    db: Session,
    item: ItemModel,
    expected_state: ItemState,
    new_state: ItemState,
    holder: str | None,
    due_date: date | None,
) -> bool:
    """
    Conditionally write state, holder and due_date together.

    The UPDATE only matches while the row is still in expected_state, so a
    concurrent transition that got there first makes this a no-op.

    Returns:
        True if the row was updated, False if its state had already changed.
    """
    updated = (
        db.query(ItemModel)
        .filter(ItemModel.id == item.id, ItemModel.state == expected_state)
        .update(
            {
                ItemModel.state: new_state,
                ItemModel.holder: holder,
                ItemModel.due_date: due_date,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    db.refresh(item)
    return updated == 1

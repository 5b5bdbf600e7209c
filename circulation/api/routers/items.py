from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from circulation.api.deps import get_circulation, get_db
import circulation.repositories.item as item_repo
import circulation.services.item as item_service
from circulation.domain.enums import ItemState
from circulation.schemas.item import Item, ItemCreate
from circulation.schemas.pagination import PaginatedResponse
from circulation.services.facade import CirculationFacade

router = APIRouter(prefix="/items", tags=["items"])


@router.post("", response_model=Item, status_code=status.HTTP_201_CREATED)
def create_new_item(
    item_data: ItemCreate,
    db: Session = Depends(get_db),
):
    """
    Seed a new item into the catalog. New items are always available.
    """
    item = item_service.create_item(
        db,
        code=item_data.code,
        title=item_data.title,
        author=item_data.author,
        publication_date=item_data.publication_date,
    )
    return Item.model_validate(item)


@router.get("", response_model=PaginatedResponse[Item])
def get_all_items(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(100, ge=1, le=1000, description="Number of items per page"),
    state: ItemState | None = Query(None, description="Filter by availability state"),
    db: Session = Depends(get_db),
):
    """
    Get all catalog items with pagination and an optional state filter.
    """
    items, total = item_repo.get_all_items_paginated(
        db, page=page, page_size=page_size, state=state
    )
    return PaginatedResponse(
        items=[Item.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/search", response_model=list[Item])
def search_items(
    term: str = Query(..., min_length=1, description="Search term"),
    kind: str = Query(..., description="Search kind: title, author or code"),
    circulation: CirculationFacade = Depends(get_circulation),
):
    """
    Search the catalog.

    - title: case-insensitive substring
    - author: exact match
    - code (or isbn): exact match
    """
    return [Item.model_validate(item) for item in circulation.search_items(term, kind)]


@router.get("/{code}", response_model=Item)
def get_item_by_code(
    code: str,
    db: Session = Depends(get_db),
):
    return Item.model_validate(item_service.get_by_code(db, code))

"""Catalog search, dispatched by search kind.

Each strategy declares the kinds it answers for. Adding a kind means adding a
strategy to ``default_search_dispatcher``; the dispatcher itself never changes.
"""

from typing import Iterable, Protocol

from sqlalchemy.orm import Session

import circulation.repositories.item as item_repo
from circulation.db.models.item import Item as ItemModel
from circulation.errors import InvalidArgumentError


class SearchStrategy(Protocol):
    def supports(self, kind: str) -> bool: ...

    def search(self, db: Session, term: str) -> list[ItemModel]: ...


class _KindMatcher:
    kinds: tuple[str, ...] = ()

    def supports(self, kind: str) -> bool:
        return kind.lower() in self.kinds


class TitleSearch(_KindMatcher):
    """Case-insensitive substring match on title."""

    kinds = ("title",)

    def search(self, db: Session, term: str) -> list[ItemModel]:
        return item_repo.get_items_by_title_containing(db, term)


class AuthorSearch(_KindMatcher):
    """Exact match on author."""

    kinds = ("author",)

    def search(self, db: Session, term: str) -> list[ItemModel]:
        return item_repo.get_items_by_author(db, term)


class CodeSearch(_KindMatcher):
    """Exact match on catalog code. Returns zero or one item."""

    kinds = ("code", "isbn")

    def search(self, db: Session, term: str) -> list[ItemModel]:
        item = item_repo.get_item_by_code(db, term)
        return [item] if item else []


class SearchDispatcher:
    def __init__(self, strategies: Iterable[SearchStrategy]):
        self._strategies = tuple(strategies)

    def search(self, db: Session, term: str, kind: str) -> list[ItemModel]:
        """
        Run the strategy registered for kind.

        Raises:
            InvalidArgumentError: If no strategy supports kind
        """
        for strategy in self._strategies:
            if strategy.supports(kind):
                return strategy.search(db, term)
        raise InvalidArgumentError(f"Unsupported search kind: {kind}")


def default_search_dispatcher() -> SearchDispatcher:
    return SearchDispatcher([TitleSearch(), AuthorSearch(), CodeSearch()])

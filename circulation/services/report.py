"""Plain-text circulation reports, dispatched by report kind."""

from datetime import date
from typing import Callable, Iterable, Protocol

from sqlalchemy.orm import Session

import circulation.services.item as item_service
import circulation.services.member as member_service
from circulation.db.models.item import Item as ItemModel
from circulation.domain.enums import ItemState
from circulation.errors import InvalidArgumentError

OVERDUE_HEADER = "OVERDUE ITEMS REPORT"


class ReportGenerator(Protocol):
    def supports(self, kind: str) -> bool: ...

    def generate(self, db: Session) -> str: ...


class AvailableItemsReport:
    kind = "available"

    def supports(self, kind: str) -> bool:
        return kind.lower() == self.kind

    def generate(self, db: Session) -> str:
        count = item_service.count_by_state(db, ItemState.AVAILABLE)
        return f"Available items: {count}"


class MemberCountReport:
    kind = "members"

    def supports(self, kind: str) -> bool:
        return kind.lower() == self.kind

    def generate(self, db: Session) -> str:
        return f"Total members: {member_service.count_members(db)}"


def format_overdue_line(item: ItemModel) -> str:
    return (
        f"{item.title} by {item.author} — due {item.due_date.isoformat()} "
        f"(held by {item.holder})"
    )


class OverdueItemsReport:
    """Items past their due date that are still checked out."""

    kind = "overdue"

    def __init__(self, clock: Callable[[], date] = date.today):
        self._clock = clock

    def supports(self, kind: str) -> bool:
        return kind.lower() == self.kind

    def generate(self, db: Session) -> str:
        overdue = [
            item
            for item in item_service.find_overdue(db, self._clock())
            if item.state == ItemState.CHECKED_OUT
        ]
        lines = [OVERDUE_HEADER]
        lines.extend(format_overdue_line(item) for item in overdue)
        return "\n".join(lines)


class ReportDispatcher:
    def __init__(self, generators: Iterable[ReportGenerator]):
        self._generators = tuple(generators)

    def generate(self, db: Session, kind: str) -> str:
        """
        Run the generator registered for kind.

        Raises:
            InvalidArgumentError: If no generator supports kind
        """
        for generator in self._generators:
            if generator.supports(kind):
                return generator.generate(db)
        raise InvalidArgumentError(f"Unsupported report kind: {kind}")


def default_report_dispatcher(clock: Callable[[], date] = date.today) -> ReportDispatcher:
    return ReportDispatcher(
        [AvailableItemsReport(), OverdueItemsReport(clock), MemberCountReport()]
    )

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Callable

from sqlalchemy.orm import Session

import circulation.services.item as item_service
import circulation.services.member as member_service
from circulation.db.models.item import Item as ItemModel
from circulation.db.models.member import Member as MemberModel
from circulation.domain.checkout_policy import CheckoutPolicyRegistry
from circulation.domain.enums import ItemState
from circulation.domain.late_fee import LateFeeCalculatorRegistry
from circulation.errors import InvalidStateError
from circulation.services.notification import Notifier
from circulation.services.report import ReportDispatcher
from circulation.services.search import SearchDispatcher

logger = logging.getLogger(__name__)

LIMIT_REACHED = "Member has reached checkout limit"
RETURNED = "Item returned successfully"


class CirculationFacade:
    """
    Checkout and return workflows over one database session.

    Each transition writes the item first, then the member, then notifies.
    A failing notifier is logged and never undoes the writes.

    NotFoundError for a missing item or member is propagated to the caller;
    unavailable items and checkout limits come back as result messages.
    """

    def __init__(
        self,
        db: Session,
        policies: CheckoutPolicyRegistry,
        fees: LateFeeCalculatorRegistry,
        searches: SearchDispatcher,
        reports: ReportDispatcher,
        notifier: Notifier,
        clock: Callable[[], date] = date.today,
    ):
        self.db = db
        self.policies = policies
        self.fees = fees
        self.searches = searches
        self.reports = reports
        self.notifier = notifier
        self.clock = clock

    def checkout_item(self, code: str, member_email: str) -> str:
        item = item_service.get_by_code(self.db, code)
        if item.state != ItemState.AVAILABLE:
            logger.info(f"Checkout of {code} refused: item is {item.state.value}")
            return item_service.NOT_AVAILABLE

        member = member_service.get_by_email(self.db, member_email)

        policy = self.policies.resolve(member.tier)
        if not policy.can_checkout(member.checked_out_count):
            logger.info(
                f"Checkout of {code} refused: {member_email} holds "
                f"{member.checked_out_count}/{policy.max_items} items"
            )
            return LIMIT_REACHED

        due_date = self.clock() + timedelta(days=policy.loan_period_days)
        try:
            item = item_service.mark_checked_out(self.db, item, member, due_date)
        except InvalidStateError as exc:
            logger.info(f"Checkout of {code} lost a race: {exc}")
            return str(exc)
        member = member_service.increment_count(self.db, member)
        logger.info(f"Item {code} checked out to {member_email}, due {due_date}")

        self._notify_checkout(member, item)
        return f"Item checked out successfully. Due date: {due_date.isoformat()}"

    def return_item(self, code: str) -> str:
        item = item_service.get_by_code(self.db, code)
        if item.state != ItemState.CHECKED_OUT:
            logger.info(f"Return of {code} refused: item is {item.state.value}")
            return item_service.NOT_CHECKED_OUT

        member = member_service.get_by_email(self.db, item.holder)

        # Must run before mark_returned clears the due date
        fee = self.fees.resolve(member.tier).calculate(item, member, self.clock())

        try:
            item = item_service.mark_returned(self.db, item)
        except InvalidStateError as exc:
            logger.info(f"Return of {code} lost a race: {exc}")
            return str(exc)
        member = member_service.decrement_count(self.db, member)
        logger.info(f"Item {code} returned by {member.email}, late fee {fee:.2f}")

        self._notify_return(member, item, fee)
        if fee > 0:
            return f"Item returned. Late fee: ${fee:.2f}"
        return RETURNED

    def search_items(self, term: str, kind: str) -> list[ItemModel]:
        return self.searches.search(self.db, term, kind)

    def generate_report(self, kind: str) -> str:
        return self.reports.generate(self.db, kind)

    def _notify_checkout(self, member: MemberModel, item: ItemModel) -> None:
        try:
            self.notifier.notify_checkout(member, item)
        except Exception:
            logger.exception(f"Checkout notification to {member.email} failed")

    def _notify_return(self, member: MemberModel, item: ItemModel, fee: Decimal) -> None:
        try:
            self.notifier.notify_return(member, item, fee)
        except Exception:
            logger.exception(f"Return notification to {member.email} failed")

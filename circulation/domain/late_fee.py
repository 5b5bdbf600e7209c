from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from circulation.core.config import Settings
from circulation.db.models.item import Item
from circulation.db.models.member import Member
from circulation.domain.enums import MembershipTier
from circulation.errors import UnknownTierError

NO_FEE = Decimal("0")


@dataclass(frozen=True, slots=True)
class LateFeeCalculator:
    """Per-diem late fee for a single membership tier.

    Semantics:
    - No fee when the item has no due date, or is returned on/before it.
    - Otherwise whole days late times the tier's rate. No partial days.
    """

    tier: MembershipTier
    per_diem_rate: Decimal

    def supports(self, tier: MembershipTier) -> bool:
        return self.tier == tier

    def fee_for(self, due_date: date | None, return_date: date) -> Decimal:
        if due_date is None or return_date <= due_date:
            return NO_FEE
        days_late = return_date.toordinal() - due_date.toordinal()
        return days_late * self.per_diem_rate

    def calculate(self, item: Item, member: Member, return_date: date) -> Decimal:
        return self.fee_for(item.due_date, return_date)


class LateFeeCalculatorRegistry:
    """Resolves the late-fee calculator for a tier. Read-only after construction."""

    def __init__(self, calculators: Iterable[LateFeeCalculator]):
        self._calculators = tuple(calculators)

    def resolve(self, tier: MembershipTier) -> LateFeeCalculator:
        for calculator in self._calculators:
            if calculator.supports(tier):
                return calculator
        raise UnknownTierError(f"No late fee calculator registered for tier {tier}")


def build_fee_registry(settings: Settings) -> LateFeeCalculatorRegistry:
    return LateFeeCalculatorRegistry(
        [
            LateFeeCalculator(MembershipTier.REGULAR, settings.regular_late_fee_per_day),
            LateFeeCalculator(MembershipTier.STUDENT, settings.student_late_fee_per_day),
            LateFeeCalculator(MembershipTier.PREMIUM, settings.premium_late_fee_per_day),
        ]
    )

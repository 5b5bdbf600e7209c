from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from circulation.core.config import Settings
from circulation.domain.enums import MembershipTier
from circulation.errors import UnknownTierError


@dataclass(frozen=True, slots=True)
class CheckoutPolicy:
    """Borrowing rules for a single membership tier.

    The limit is enforced at checkout time only: a member may hold more than
    ``max_items`` if the policy was tightened after they borrowed.
    """

    tier: MembershipTier
    max_items: int
    loan_period_days: int

    def supports(self, tier: MembershipTier) -> bool:
        return self.tier == tier

    def can_checkout(self, current_count: int) -> bool:
        return current_count < self.max_items


class CheckoutPolicyRegistry:
    """Resolves the checkout policy for a tier. Read-only after construction."""

    def __init__(self, policies: Iterable[CheckoutPolicy]):
        self._policies = tuple(policies)

    def resolve(self, tier: MembershipTier) -> CheckoutPolicy:
        for policy in self._policies:
            if policy.supports(tier):
                return policy
        raise UnknownTierError(f"No checkout policy registered for tier {tier}")


def build_policy_registry(settings: Settings) -> CheckoutPolicyRegistry:
    """Build the registry for the built-in tiers from the tier table in settings."""
    return CheckoutPolicyRegistry(
        [
            CheckoutPolicy(
                tier=MembershipTier.REGULAR,
                max_items=settings.regular_max_items,
                loan_period_days=settings.regular_loan_period_days,
            ),
            CheckoutPolicy(
                tier=MembershipTier.STUDENT,
                max_items=settings.student_max_items,
                loan_period_days=settings.student_loan_period_days,
            ),
            CheckoutPolicy(
                tier=MembershipTier.PREMIUM,
                max_items=settings.premium_max_items,
                loan_period_days=settings.premium_loan_period_days,
            ),
        ]
    )

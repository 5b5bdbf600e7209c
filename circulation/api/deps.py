from fastapi import Depends
from sqlalchemy.orm import Session

from circulation.core.config import settings
from circulation.db.base import SessionLocal
from circulation.domain.checkout_policy import build_policy_registry
from circulation.domain.late_fee import build_fee_registry
from circulation.services.facade import CirculationFacade
from circulation.services.notification import Notifier, build_notifier
from circulation.services.report import default_report_dispatcher
from circulation.services.search import default_search_dispatcher

# Process-wide, read-only after startup
policy_registry = build_policy_registry(settings)
fee_registry = build_fee_registry(settings)
search_dispatcher = default_search_dispatcher()
report_dispatcher = default_report_dispatcher()
notifier = build_notifier(settings)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_notifier() -> Notifier:
    return notifier


def get_circulation(
    db: Session = Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> CirculationFacade:
    """Build a facade bound to the request's session."""
    return CirculationFacade(
        db,
        policies=policy_registry,
        fees=fee_registry,
        searches=search_dispatcher,
        reports=report_dispatcher,
        notifier=notifier,
    )

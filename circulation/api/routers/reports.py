from fastapi import APIRouter, Depends

from circulation.api.deps import get_circulation
from circulation.schemas.circulation import Report
from circulation.services.facade import CirculationFacade

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/{kind}", response_model=Report)
def generate_report(
    kind: str,
    circulation: CirculationFacade = Depends(get_circulation),
):
    """
    Generate a plain-text report: available, overdue or members.
    """
    return Report(kind=kind, report=circulation.generate_report(kind))

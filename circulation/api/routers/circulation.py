from fastapi import APIRouter, Depends

from circulation.api.deps import get_circulation
from circulation.schemas.circulation import CheckoutRequest, CirculationResult, ReturnRequest
from circulation.services.facade import CirculationFacade

router = APIRouter(prefix="/circulation", tags=["circulation"])


@router.post("/checkout", response_model=CirculationResult)
def checkout_item(
    request: CheckoutRequest,
    circulation: CirculationFacade = Depends(get_circulation),
):
    """
    Check an item out to a member.

    Unavailable items and members at their limit are reported in the message
    with a 200; a missing item or member is a 404.
    """
    message = circulation.checkout_item(request.code, request.member_email)
    return CirculationResult(message=message)


@router.post("/return", response_model=CirculationResult)
def return_item(
    request: ReturnRequest,
    circulation: CirculationFacade = Depends(get_circulation),
):
    """
    Return a checked-out item. The message includes the late fee, if any.
    """
    return CirculationResult(message=circulation.return_item(request.code))

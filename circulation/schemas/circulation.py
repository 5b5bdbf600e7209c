from pydantic import BaseModel, Field


class CheckoutRequest(BaseModel):
    code: str = Field(..., min_length=1)
    member_email: str = Field(..., min_length=1)


class ReturnRequest(BaseModel):
    code: str = Field(..., min_length=1)


class CirculationResult(BaseModel):
    """Outcome of a checkout or return, as a human-readable message."""

    message: str


class Report(BaseModel):
    kind: str
    report: str

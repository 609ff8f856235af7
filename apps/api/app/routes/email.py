"""Contact email routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.routes.dependencies import get_contact_email_service, rate_limited
from app.schemas.email import ContactEmailRequest, ContactEmailResponse
from app.schemas.error import ErrorResponse, RateLimitError
from app.services.email import ContactEmailService

router = APIRouter(prefix="/email", tags=["Email"])


# Public endpoint; the strict limit is its only abuse protection.
@router.post(
    "",
    response_model=ContactEmailResponse,
    responses={429: {"model": RateLimitError}, 500: {"model": ErrorResponse}},
    dependencies=[Depends(rate_limited(5, 60, scope="email"))],
)
def send_contact_email(
    payload: ContactEmailRequest,
    service: Annotated[ContactEmailService, Depends(get_contact_email_service)],
) -> ContactEmailResponse:
    service.send_contact_emails(payload)
    return ContactEmailResponse(message="Emails sent successfully")

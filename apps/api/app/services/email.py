"""Contact form email service."""

from __future__ import annotations

import logging

from app.adapters.email import EmailDeliveryError, EmailSender, TemplateEmail
from app.core.config import Settings
from app.errors import ApiError
from app.schemas.email import ContactEmailRequest

logger = logging.getLogger(__name__)

_NOT_PROVIDED = "No proporcionado"


class ContactEmailService:
    """Notifies the site owner of a contact request and confirms receipt to the requester."""

    def __init__(self, sender: EmailSender, settings: Settings) -> None:
        self._sender = sender
        self._settings = settings

    def send_contact_emails(self, payload: ContactEmailRequest) -> None:
        sender_address = self._settings.smtp_from
        owner_address = self._settings.owner_email or sender_address
        if not sender_address or not owner_address:
            logger.error(
                "email.config_missing smtp_from_configured=%s owner_configured=%s",
                bool(sender_address),
                bool(owner_address),
            )
            raise ApiError(
                status_code=500,
                code="EMAIL_NOT_CONFIGURED",
                message="Sender and owner addresses must be configured",
            )

        full_name = f"{payload.first_name} {payload.last_name}"
        dni_or_id = payload.dni_or_id or _NOT_PROVIDED
        messages = (
            TemplateEmail(
                to=owner_address,
                from_email=sender_address,
                reply_to=payload.email,
                template_id=self._settings.owner_template_id,
                data={
                    "name": full_name,
                    "first_name": payload.first_name,
                    "last_name": payload.last_name,
                    "phone_number": payload.phone_number,
                    "email": payload.email,
                    "dni_orid": dni_or_id,
                    "nationality": payload.nationality,
                    "consultation_request": payload.consultation_request,
                },
            ),
            TemplateEmail(
                to=payload.email,
                from_email=sender_address,
                reply_to=self._settings.smtp_reply_to or sender_address,
                template_id=self._settings.confirmation_template_id,
                data={
                    "first_name": payload.first_name,
                    "last_name": payload.last_name,
                    "email": payload.email,
                    "phone_number": payload.phone_number,
                    "consultation_reason": payload.consultation_request,
                    "dni_or_id": dni_or_id,
                    "nationality": payload.nationality,
                },
            ),
        )

        for message in messages:
            try:
                self._sender.send_template(message)
            except EmailDeliveryError as exc:
                logger.error("email.failed template_id=%s error=%s", message.template_id, exc)
                raise ApiError(
                    status_code=500,
                    code="EMAIL_DELIVERY_FAILED",
                    message=str(exc) or "Email delivery failed",
                    details={"provider_detail": exc.provider_detail} if exc.provider_detail is not None else None,
                ) from exc
            logger.info("email.sent template_id=%s", message.template_id)

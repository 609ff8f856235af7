"""SendGrid dynamic template email adapter."""

from __future__ import annotations

from app.adapters.email.base import EmailDeliveryError, EmailSender, TemplateEmail


class SendGridEmailSender(EmailSender):
    def __init__(self, api_key: str | None) -> None:
        self._api_key = api_key

    def send_template(self, message: TemplateEmail) -> None:
        if not self._api_key:
            raise EmailDeliveryError("GALILEA_SENDGRID_API_KEY is not configured")

        try:
            from sendgrid import SendGridAPIClient
            from sendgrid.helpers.mail import Mail
        except ImportError as exc:  # pragma: no cover - depends on optional package
            raise EmailDeliveryError("SendGrid client library is unavailable") from exc

        mail = Mail(from_email=message.from_email, to_emails=message.to)
        mail.template_id = message.template_id
        mail.dynamic_template_data = message.data
        if message.reply_to:
            mail.reply_to = message.reply_to

        try:
            response = SendGridAPIClient(self._api_key).send(mail)
        except Exception as exc:  # pragma: no cover - provider exception surface
            raise EmailDeliveryError(str(exc) or "Email delivery failed", provider_detail=getattr(exc, "body", None)) from exc

        status_code = getattr(response, "status_code", 202)
        if status_code >= 400:
            raise EmailDeliveryError(
                f"Email provider returned status {status_code}",
                provider_detail=getattr(response, "body", None),
            )


__all__ = ["SendGridEmailSender"]

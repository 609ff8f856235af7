"""Email sender that records messages in the in-memory store."""

from app.adapters.email.base import EmailDeliveryError, EmailSender, TemplateEmail
from app.repositories.memory import InMemoryStore


class MemoryEmailSender(EmailSender):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def send_template(self, message: TemplateEmail) -> None:
        if self._store.email_failure_message is not None:
            raise EmailDeliveryError(self._store.email_failure_message, provider_detail={"to": message.to})
        self._store.sent_emails.append(message)


__all__ = ["MemoryEmailSender"]

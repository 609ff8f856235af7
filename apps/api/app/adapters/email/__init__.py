"""Email sender adapters."""

from .base import EmailDeliveryError, EmailSender, TemplateEmail
from .memory_email import MemoryEmailSender
from .sendgrid_email import SendGridEmailSender

__all__ = [
    "EmailDeliveryError",
    "EmailSender",
    "MemoryEmailSender",
    "SendGridEmailSender",
    "TemplateEmail",
]

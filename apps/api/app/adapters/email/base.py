"""Transactional email interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class EmailDeliveryError(Exception):
    """Raised when the email provider refuses or fails a send."""

    def __init__(self, message: str, provider_detail: Any = None) -> None:
        self.provider_detail = provider_detail
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class TemplateEmail:
    to: str
    from_email: str
    template_id: str
    data: dict[str, Any]
    reply_to: str | None = None


class EmailSender(ABC):
    @abstractmethod
    def send_template(self, message: TemplateEmail) -> None:
        """Send a templated message."""


__all__ = ["EmailDeliveryError", "EmailSender", "TemplateEmail"]

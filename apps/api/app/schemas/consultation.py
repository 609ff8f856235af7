"""Consultation API schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class CreateConsultationRequest(BaseModel):
    dni_or_id: str | None = None
    email: EmailStr | None = None
    consultation_reason: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    nationality: str | None = None
    status: str | None = None


class UpdateConsultationRequest(BaseModel):
    consultation_reason: str | None = None
    status: str | None = Field(default=None, min_length=1)
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    nationality: str | None = None


class Consultation(BaseModel):
    id: str
    dni_or_id: str | None = None
    email: str | None = None
    consultation_reason: str | None = None
    status: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    nationality: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

"""Contact email API schemas."""

from pydantic import BaseModel, EmailStr, Field


class ContactEmailRequest(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone_number: str = Field(min_length=1)
    dni_or_id: str | None = None
    nationality: str = Field(min_length=1)
    consultation_request: str = Field(min_length=1)


class ContactEmailResponse(BaseModel):
    message: str

"""Consultation routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.domain.roles import Role
from app.routes.dependencies import get_consultation_service, rate_limited, require_role
from app.schemas.consultation import Consultation, CreateConsultationRequest, UpdateConsultationRequest
from app.schemas.error import ErrorResponse, ForbiddenError, NoLeakNotFoundError, RateLimitError
from app.services.consultations import ConsultationService

router = APIRouter(prefix="/consultations", tags=["Consultations"])

_moderator_or_above = require_role(Role.MODERATOR)
_admin_only = require_role(Role.ADMIN)
_GUARDED_RESPONSES = {401: {"model": ErrorResponse}, 403: {"model": ForbiddenError}}


@router.post(
    "",
    response_model=Consultation,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 429: {"model": RateLimitError}},
    dependencies=[Depends(rate_limited(5, 60, scope="consultations"))],
)
def create_consultation(
    payload: CreateConsultationRequest,
    service: Annotated[ConsultationService, Depends(get_consultation_service)],
) -> Consultation:
    return service.create_consultation(payload)


@router.get(
    "",
    response_model=list[Consultation],
    responses=_GUARDED_RESPONSES,
    dependencies=[Depends(_moderator_or_above)],
)
def list_consultations(
    service: Annotated[ConsultationService, Depends(get_consultation_service)],
    search: Annotated[str | None, Query()] = None,
    email: Annotated[str | None, Query(alias="user_email")] = None,
    dni_or_id: Annotated[str | None, Query(alias="user_dni")] = None,
    consultation_status: Annotated[str | None, Query(alias="status")] = None,
    order_by: Annotated[str | None, Query(alias="orderBy")] = None,
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
    offset: Annotated[int | None, Query(ge=0)] = None,
) -> list[Consultation]:
    return service.list_consultations(
        search=search,
        email=email,
        dni_or_id=dni_or_id,
        status=consultation_status,
        order_by=order_by,
        limit=limit,
        offset=offset,
    )


@router.get(
    "/{consultationId}",
    response_model=Consultation,
    responses={**_GUARDED_RESPONSES, 404: {"model": NoLeakNotFoundError}},
    dependencies=[Depends(_moderator_or_above)],
)
def get_consultation(
    consultation_id: Annotated[str, Path(alias="consultationId")],
    service: Annotated[ConsultationService, Depends(get_consultation_service)],
) -> Consultation:
    return service.get_consultation(consultation_id)


@router.put(
    "/{consultationId}",
    response_model=Consultation,
    responses={**_GUARDED_RESPONSES, 404: {"model": NoLeakNotFoundError}},
    dependencies=[Depends(_moderator_or_above)],
)
def update_consultation(
    consultation_id: Annotated[str, Path(alias="consultationId")],
    payload: UpdateConsultationRequest,
    service: Annotated[ConsultationService, Depends(get_consultation_service)],
) -> Consultation:
    return service.update_consultation(consultation_id, payload)


@router.delete(
    "/{consultationId}",
    response_model=Consultation,
    responses={**_GUARDED_RESPONSES, 404: {"model": NoLeakNotFoundError}},
    dependencies=[Depends(_admin_only)],
)
def delete_consultation(
    consultation_id: Annotated[str, Path(alias="consultationId")],
    service: Annotated[ConsultationService, Depends(get_consultation_service)],
) -> Consultation:
    return service.delete_consultation(consultation_id)

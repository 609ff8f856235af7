"""Consultation service layer."""

import logging

from app.adapters.records import RecordQuery, RecordStore
from app.core.logging_safety import safe_log_identifier
from app.schemas.consultation import Consultation, CreateConsultationRequest, UpdateConsultationRequest
from app.services.records import RecordService, parse_order_by
from app.services.users import UserService

logger = logging.getLogger(__name__)

_ORDERABLE_COLUMNS = frozenset({"created_at", "updated_at", "status", "email", "first_name"})
_SEARCH_COLUMNS = ("consultation_reason", "first_name", "email")


class ConsultationService(RecordService):
    table = "consultations"

    def __init__(self, store: RecordStore) -> None:
        super().__init__(store)
        self._users = UserService(store)

    def list_consultations(
        self,
        *,
        search: str | None = None,
        email: str | None = None,
        dni_or_id: str | None = None,
        status: str | None = None,
        order_by: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Consultation]:
        column, descending = parse_order_by(order_by, default="created_at desc", allowed=_ORDERABLE_COLUMNS)
        filters = {
            name: value
            for name, value in (("email", email), ("dni_or_id", dni_or_id), ("status", status))
            if value
        }
        query = RecordQuery(
            filters=filters,
            search=search or None,
            search_columns=_SEARCH_COLUMNS,
            order_by=column,
            descending=descending,
            limit=limit,
            offset=offset,
        )
        return [Consultation.model_validate(record) for record in self._select(query)]

    def get_consultation(self, consultation_id: str) -> Consultation:
        return Consultation.model_validate(self._get(consultation_id))

    def create_consultation(self, payload: CreateConsultationRequest) -> Consultation:
        self._users.find_or_create_user(
            dni=payload.dni_or_id,
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone_number,
        )
        consultation = Consultation.model_validate(self._insert(payload.model_dump(exclude_none=True)))
        logger.info(
            "consultation.created consultation_id=%s",
            safe_log_identifier(consultation.id, prefix="cons"),
        )
        return consultation

    def update_consultation(self, consultation_id: str, payload: UpdateConsultationRequest) -> Consultation:
        return Consultation.model_validate(self._update(consultation_id, payload.model_dump(exclude_unset=True)))

    def delete_consultation(self, consultation_id: str) -> Consultation:
        return Consultation.model_validate(self._delete(consultation_id))

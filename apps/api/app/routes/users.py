"""User routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.domain.roles import Role
from app.routes.dependencies import get_user_service, require_role
from app.schemas.error import ErrorResponse, ForbiddenError
from app.schemas.user import CreateUserRequest, User
from app.services.users import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}, 403: {"model": ForbiddenError}},
    dependencies=[Depends(require_role(Role.EDITOR))],
)
def create_user(
    payload: CreateUserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> User:
    return service.create_user(payload)

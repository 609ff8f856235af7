"""Category routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.domain.roles import Role
from app.routes.dependencies import get_category_service, require_role
from app.schemas.category import Category, CategoryWrite
from app.schemas.error import ErrorResponse, ForbiddenError, NoLeakNotFoundError
from app.services.categories import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])

_admin_only = require_role(Role.ADMIN)
_GUARDED_RESPONSES = {401: {"model": ErrorResponse}, 403: {"model": ForbiddenError}}


@router.get("", response_model=list[Category])
def list_categories(service: Annotated[CategoryService, Depends(get_category_service)]) -> list[Category]:
    return service.list_categories()


@router.get("/{categoryId}", response_model=Category, responses={404: {"model": NoLeakNotFoundError}})
def get_category(
    category_id: Annotated[int, Path(alias="categoryId")],
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> Category:
    return service.get_category(category_id)


@router.post(
    "",
    response_model=Category,
    status_code=status.HTTP_201_CREATED,
    responses=_GUARDED_RESPONSES,
    dependencies=[Depends(_admin_only)],
)
def create_category(
    payload: CategoryWrite,
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> Category:
    return service.create_category(payload)


@router.put(
    "/{categoryId}",
    response_model=Category,
    responses={**_GUARDED_RESPONSES, 404: {"model": NoLeakNotFoundError}},
    dependencies=[Depends(_admin_only)],
)
def update_category(
    category_id: Annotated[int, Path(alias="categoryId")],
    payload: CategoryWrite,
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> Category:
    return service.update_category(category_id, payload)


@router.delete(
    "/{categoryId}",
    response_model=Category,
    responses={**_GUARDED_RESPONSES, 404: {"model": NoLeakNotFoundError}},
    dependencies=[Depends(_admin_only)],
)
def delete_category(
    category_id: Annotated[int, Path(alias="categoryId")],
    service: Annotated[CategoryService, Depends(get_category_service)],
) -> Category:
    return service.delete_category(category_id)

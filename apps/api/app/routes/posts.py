"""Post routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.domain.roles import Role
from app.routes.dependencies import get_post_service, require_role
from app.schemas.auth import AuthPrincipal
from app.schemas.error import ErrorResponse, ForbiddenError, NoLeakNotFoundError
from app.schemas.post import CreatePostRequest, Post, UpdatePostRequest
from app.services.posts import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])

_editor_or_above = require_role(Role.EDITOR)
_moderator_or_above = require_role(Role.MODERATOR)
_GUARDED_RESPONSES = {401: {"model": ErrorResponse}, 403: {"model": ForbiddenError}}


@router.get("", response_model=list[Post], responses={400: {"model": ErrorResponse}})
def list_posts(
    service: Annotated[PostService, Depends(get_post_service)],
    search: Annotated[str | None, Query()] = None,
    author_id: Annotated[str | None, Query()] = None,
    category_id: Annotated[int | None, Query()] = None,
    order_by: Annotated[str | None, Query(alias="orderBy")] = None,
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
    offset: Annotated[int | None, Query(ge=0)] = None,
) -> list[Post]:
    return service.list_posts(
        search=search,
        author_id=author_id,
        category_id=category_id,
        order_by=order_by,
        limit=limit,
        offset=offset,
    )


@router.get("/{postId}", response_model=Post, responses={404: {"model": NoLeakNotFoundError}})
def get_post(
    post_id: Annotated[str, Path(alias="postId")],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.get_post(post_id)


@router.post("", response_model=Post, status_code=status.HTTP_201_CREATED, responses=_GUARDED_RESPONSES)
def create_post(
    payload: CreatePostRequest,
    principal: Annotated[AuthPrincipal, Depends(_editor_or_above)],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.create_post(author_id=principal.user_id, payload=payload)


@router.put(
    "/{postId}",
    response_model=Post,
    responses={**_GUARDED_RESPONSES, 404: {"model": NoLeakNotFoundError}},
    dependencies=[Depends(_editor_or_above)],
)
def update_post(
    post_id: Annotated[str, Path(alias="postId")],
    payload: UpdatePostRequest,
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.update_post(post_id, payload)


@router.delete(
    "/{postId}",
    response_model=Post,
    responses={**_GUARDED_RESPONSES, 404: {"model": NoLeakNotFoundError}},
    dependencies=[Depends(_moderator_or_above)],
)
def delete_post(
    post_id: Annotated[str, Path(alias="postId")],
    service: Annotated[PostService, Depends(get_post_service)],
) -> Post:
    return service.delete_post(post_id)

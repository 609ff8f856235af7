"""Image upload routes."""

import time
from typing import Annotated

from fastapi import APIRouter, Depends, File, Path, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.domain.roles import Role
from app.errors import ApiError
from app.routes.dependencies import get_upload_service, require_role
from app.schemas.error import ErrorResponse, ForbiddenError, NoLeakNotFoundError
from app.schemas.upload import DeletedImage, StoredImage, UploadedImage
from app.services.uploads import UploadService

router = APIRouter(prefix="/uploads", tags=["Upload"])

_editor_or_above = require_role(Role.EDITOR)
_GUARDED_RESPONSES = {401: {"model": ErrorResponse}, 403: {"model": ForbiddenError}}


@router.post(
    "",
    response_model=UploadedImage,
    responses={**_GUARDED_RESPONSES, 400: {"model": ErrorResponse}},
    dependencies=[Depends(_editor_or_above)],
)
async def upload_image(
    service: Annotated[UploadService, Depends(get_upload_service)],
    file: Annotated[UploadFile | None, File()] = None,
) -> UploadedImage:
    if file is None or not file.filename:
        raise ApiError(status_code=400, code="VALIDATION_ERROR", message="No file uploaded")
    content = await file.read()
    return await run_in_threadpool(
        service.upload_image,
        filename=file.filename,
        content=content,
        content_type=file.content_type,
        now=time.time(),
    )


@router.get(
    "",
    response_model=list[StoredImage],
    responses=_GUARDED_RESPONSES,
    dependencies=[Depends(_editor_or_above)],
)
def list_images(
    service: Annotated[UploadService, Depends(get_upload_service)],
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[StoredImage]:
    return service.list_images(limit=limit, offset=offset)


@router.delete(
    "/{path:path}",
    response_model=DeletedImage,
    responses={**_GUARDED_RESPONSES, 404: {"model": NoLeakNotFoundError}},
    dependencies=[Depends(require_role(Role.ADMIN))],
)
def delete_image(
    path: Annotated[str, Path(min_length=1)],
    service: Annotated[UploadService, Depends(get_upload_service)],
) -> DeletedImage:
    return service.delete_image(path)

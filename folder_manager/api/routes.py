from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..domain.client_id import ParsedClientId, parse_client_id
from ..logging_conf import get_logger
from ..service import FolderService
from .models import CreateFoldersRequest, ErrorDetail, ErrorResponse, FoldersResponse

router = APIRouter(prefix="/folders", tags=["folders"])
logger = get_logger("api")

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def get_folder_service(request: Request) -> FolderService:
    """Return the service instance built by create_app()."""
    return request.app.state.folder_service


def _error(status_code: int, error_code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorDetail(error_code=error_code, error_message=message).model_dump(),
    )


def _parse_or_400(client_id: str | None) -> ParsedClientId:
    parsed = parse_client_id(client_id)
    if parsed is None:
        logger.info(
            "client_id.invalid",
            extra={"event": "client_id_invalid", "client_id": client_id},
        )
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            "invalid_client_id",
            f"Invalid client id '{client_id}'",
        )
    return parsed


def _backend_failure(exc: Exception, client_id: str | None) -> HTTPException:
    logger.exception(
        "folders.backend_error",
        extra={"event": "folders_backend_error", "client_id": client_id},
    )
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", str(exc))


@router.get(
    "/{client_id}",
    response_model=FoldersResponse,
    responses={**_ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
    summary="Look up a client's folders",
)
async def get_folders(
    client_id: str, service: FolderService = Depends(get_folder_service)
) -> FoldersResponse:
    """Return the unrestricted and restricted folders for a client id."""
    parsed = _parse_or_400(client_id)
    try:
        folders = await service.resolve_folders(parsed.year, parsed.serial)
    except Exception as e:
        raise _backend_failure(e, client_id) from e
    if folders is None:
        raise _error(
            status.HTTP_404_NOT_FOUND,
            "not_found",
            f"No folders found for client id '{client_id}'",
        )
    return FoldersResponse(folders=folders)


@router.post(
    "",
    response_model=FoldersResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
    summary="Create a client's folders",
)
async def create_folders(
    response: Response,
    req: CreateFoldersRequest | None = None,
    service: FolderService = Depends(get_folder_service),
) -> FoldersResponse:
    """Create the folder pair for a new client id."""
    req = req or CreateFoldersRequest()
    client_id = req.client_id
    parsed = _parse_or_400(client_id)
    try:
        folders = await service.create_folders(parsed.year, parsed.serial)
    except Exception as e:
        raise _backend_failure(e, client_id) from e
    if folders is None:
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            "already_exists",
            f"client id '{client_id}' already exists",
        )
    response.headers["Location"] = f"{router.prefix}/{client_id}"
    return FoldersResponse(folders=folders)

"""Netflix Shows API

CRUD endpoints over show records. Create and update bodies pass through
NetflixShowsValidator before the engine is touched; every response uses
the ``{status, message, data}`` envelope.
"""
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.database import get_db
from core.errors import not_found, raise_error, raise_result, required_field
from core.logging import api_logger
from core.schema import ApiResponse
from engines.netflix_shows import NetflixShowsService
from engines.validators import NetflixShowsValidator, get_validator
from schemas.netflix_show import NetflixShowDTO

log = api_logger()

router = APIRouter()


def get_service(db: AsyncSession = Depends(get_db)) -> NetflixShowsService:
    return NetflixShowsService(db)


def _require_valid(show: NetflixShowDTO | None, validator: NetflixShowsValidator) -> NetflixShowDTO:
    """Reject a missing body or a body failing the field rules."""
    if show is None:
        raise_error(required_field("NetflixShow", origin="api.netflix_shows").error)

    result = validator.validate(show)
    if not result.is_valid:
        log.info("validation_rejected", fields=result.fields, error_count=len(result.errors))
        raise_error(result.to_app_error(origin="api.netflix_shows"))
    return show


@router.post("", response_model=ApiResponse[NetflixShowDTO], status_code=status.HTTP_201_CREATED)
async def create_netflix_show(
    show: NetflixShowDTO | None = Body(default=None),
    validator: NetflixShowsValidator = Depends(get_validator),
    service: NetflixShowsService = Depends(get_service),
):
    """Create a show record."""
    result = await service.create(_require_valid(show, validator))
    raise_result(result)
    return ApiResponse.of(status.HTTP_201_CREATED, "NetflixShow created successfully", result.unwrap())


@router.get("", response_model=ApiResponse[list[NetflixShowDTO]])
async def get_all_netflix_shows(
    service: NetflixShowsService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    """List every show ordered by id.

    An empty table answers 404 unless EMPTY_LIST_NOT_FOUND is disabled.
    """
    result = await service.list_all()
    raise_result(result)
    shows = result.unwrap()
    if not shows and settings.EMPTY_LIST_NOT_FOUND:
        raise_error(not_found("NetflixShow", origin="api.netflix_shows", message="No NetflixShows found").error)
    return ApiResponse.of(status.HTTP_200_OK, "NetflixShows retrieved successfully", shows)


@router.get("/{show_id}", response_model=ApiResponse[NetflixShowDTO])
async def get_netflix_show(show_id: int, service: NetflixShowsService = Depends(get_service)):
    """Get a show by id."""
    result = await service.get(show_id)
    raise_result(result)
    return ApiResponse.of(status.HTTP_200_OK, "NetflixShow retrieved successfully", result.unwrap())


@router.put("/{show_id}", response_model=ApiResponse[NetflixShowDTO])
async def update_netflix_show(
    show_id: int,
    show: NetflixShowDTO | None = Body(default=None),
    validator: NetflixShowsValidator = Depends(get_validator),
    service: NetflixShowsService = Depends(get_service),
):
    """Replace every field of an existing show."""
    result = await service.update(show_id, _require_valid(show, validator))
    raise_result(result)
    return ApiResponse.of(status.HTTP_200_OK, "NetflixShow updated successfully", result.unwrap())


@router.delete("/{show_id}", response_model=ApiResponse[None])
async def delete_netflix_show(show_id: int, service: NetflixShowsService = Depends(get_service)):
    """Delete a show by id."""
    result = await service.delete(show_id)
    raise_result(result)
    if not result.unwrap():
        raise_error(not_found("NetflixShow", show_id, origin="api.netflix_shows").error)
    return ApiResponse.of(status.HTTP_200_OK, "NetflixShow deleted successfully")

"""Netflix Shows Engine

CRUD operations over the ``netflix_shows`` table. Every method returns a
Result; persistence failures arrive as AppError values whose message names
the failed operation.
"""
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import (
    create_entity,
    delete_entity,
    fetch_all,
    fetch_one,
    update_entity,
)
from core.errors import AppError, Err, Ok, Result, map_db_errors
from core.logging import db_logger
from models.netflix_show import NetflixShow, ShowType
from schemas.netflix_show import NetflixShowDTO

log = db_logger()

ENTITY = "NetflixShow"
ORIGIN = "netflix_shows"


def _apply(show: NetflixShow, dto: NetflixShowDTO) -> NetflixShow:
    """Copy every mutable column from the DTO onto the entity."""
    show.show_type = ShowType[dto.show_type]
    show.title = dto.title
    show.director = dto.director
    show.cast_members = dto.cast_members
    show.country = dto.country
    show.date_added = dto.date_added
    show.release_year = dto.release_year
    show.rating = dto.rating
    show.duration_in_minute = dto.duration_in_minute
    show.listed_in = dto.listed_in
    show.description = dto.description
    return show


class NetflixShowsService:
    """Request-scoped service over one AsyncSession.

    Callers validate DTOs before ``create``/``update``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @map_db_errors(ORIGIN, "create netflix show")
    async def create(self, dto: NetflixShowDTO) -> Result[NetflixShowDTO, AppError]:
        show = _apply(NetflixShow(), dto)
        result = await create_entity(self.session, show, action="create netflix show")
        if result.is_ok():
            log.info("netflix_show_created", show_id=show.id, title=show.title)
        return result.map(NetflixShowDTO.from_entity)

    @map_db_errors(ORIGIN, "get all netflix shows")
    async def list_all(self) -> Result[list[NetflixShowDTO], AppError]:
        result = await fetch_all(
            self.session, NetflixShow, order_by=NetflixShow.id.asc(), action="get all netflix shows",
        )
        return result.map(lambda shows: [NetflixShowDTO.from_entity(s) for s in shows])

    @map_db_errors(ORIGIN, "get netflix show by id")
    async def get(self, show_id: int) -> Result[NetflixShowDTO, AppError]:
        result = await fetch_one(self.session, NetflixShow, show_id, ENTITY, action="get netflix show by id")
        return result.map(NetflixShowDTO.from_entity)

    @map_db_errors(ORIGIN, "update netflix show")
    async def update(self, show_id: int, dto: NetflixShowDTO) -> Result[NetflixShowDTO, AppError]:
        found = await fetch_one(self.session, NetflixShow, show_id, ENTITY, action="update netflix show")
        if found.is_err():
            return found
        show = _apply(found.unwrap(), dto)
        result = await update_entity(self.session, show, action="update netflix show")
        if result.is_ok():
            log.info("netflix_show_updated", show_id=show_id)
        return result.map(NetflixShowDTO.from_entity)

    @map_db_errors(ORIGIN, "delete netflix show")
    async def delete(self, show_id: int) -> Result[bool, AppError]:
        """Ok(True) when a row was deleted, Ok(False) when none existed."""
        match await fetch_one(self.session, NetflixShow, show_id, ENTITY, action="delete netflix show"):
            case Err(error) if error.status == 404:
                return Ok(False)
            case Err(error):
                return Err(error)
            case Ok(show):
                result = await delete_entity(self.session, show, action="delete netflix show")
                if result.is_ok():
                    log.info("netflix_show_deleted", show_id=show_id)
                return result.map(lambda _: True)


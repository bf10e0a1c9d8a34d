from __future__ import annotations

from datetime import date

from pydantic import StrictInt

from core.schema import BaseSchema
from models.netflix_show import NetflixShow


class NetflixShowDTO(BaseSchema):
    """Show record as exchanged with clients.

    Every field is optional at the parsing stage; presence and format are
    checked by NetflixShowsValidator so that all problems are reported at
    once.
    """
    id: int | None = None
    show_type: str | None = None
    title: str | None = None
    director: str | None = None
    cast_members: str | None = None
    country: str | None = None
    date_added: date | None = None
    release_year: int | None = None
    # strict: JSON true must not pass as 1
    rating: StrictInt | None = None
    duration_in_minute: int | None = None
    listed_in: str | None = None
    description: str | None = None

    @classmethod
    def from_entity(cls, show: NetflixShow) -> NetflixShowDTO:
        return cls(
            id=show.id,
            show_type=show.show_type.name if show.show_type is not None else None,
            title=show.title,
            director=show.director,
            cast_members=show.cast_members,
            country=show.country,
            date_added=show.date_added,
            release_year=show.release_year,
            rating=show.rating,
            duration_in_minute=show.duration_in_minute,
            listed_in=show.listed_in,
            description=show.description,
        )

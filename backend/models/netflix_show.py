import enum

from sqlalchemy import Column, Date, Enum, Integer, String, Text

from core.database import Base


class ShowType(str, enum.Enum):
    """Catalog entry kinds, stored by name."""
    MOVIE = "MOVIE"
    TV_SHOW = "TV_SHOW"


class NetflixShow(Base):
    """A Netflix catalog entry"""
    __tablename__ = "netflix_shows"

    id = Column(Integer, primary_key=True, autoincrement=True)
    show_type = Column("type", Enum(ShowType, native_enum=False, length=7), nullable=False)
    title = Column(Text, nullable=False)
    director = Column(Text)
    cast_members = Column(Text)
    country = Column(String(60), nullable=False)
    date_added = Column(Date, nullable=False)
    release_year = Column(Integer, nullable=False)
    rating = Column(Integer)
    duration_in_minute = Column(Integer)
    listed_in = Column(Text)
    description = Column(Text)

    def __repr__(self) -> str:
        return f"<NetflixShow id={self.id} title={self.title!r}>"

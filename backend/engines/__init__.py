from engines.netflix_shows import NetflixShowsService
from engines.validators import NetflixShowsValidator, get_validator

__all__ = [
    "NetflixShowsService",
    "NetflixShowsValidator",
    "get_validator",
]

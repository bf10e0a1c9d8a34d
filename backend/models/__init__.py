from models.netflix_show import NetflixShow, ShowType

__all__ = [
    "NetflixShow", "ShowType",
]

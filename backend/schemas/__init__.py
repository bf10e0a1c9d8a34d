from schemas.netflix_show import NetflixShowDTO

__all__ = ["NetflixShowDTO"]

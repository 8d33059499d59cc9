import logging
from typing import Dict, Iterable, List, Optional

from schemas import Movie, ReplayInput
from users import User, UserDirectory

logger = logging.getLogger(__name__)


class Database:
    """In-memory catalog and account store shared by one replay.

    Movies are keyed by name and keep insertion order. Pages and users hold
    references to the Movie objects kept here.
    """

    def __init__(self, movies: Iterable[Movie] = (), users: Optional[UserDirectory] = None) -> None:
        self._movies: Dict[str, Movie] = {}
        self.users = users if users is not None else UserDirectory()
        for movie in movies:
            if not self.add_movie(movie):
                logger.warning("Skipping duplicate movie in catalog: %s", movie.name)

    @classmethod
    def from_input(cls, data: ReplayInput) -> "Database":
        db = cls(data.movies)
        for entry in data.users:
            if db.users.register(entry.credentials) is None:
                logger.warning("Skipping duplicate user: %s", entry.credentials.name)
        return db

    def get_movies(self) -> List[Movie]:
        return list(self._movies.values())

    def get_movie(self, name: str) -> Optional[Movie]:
        return self._movies.get(name)

    def add_movie(self, movie: Optional[Movie]) -> bool:
        if movie is None or movie.name in self._movies:
            return False
        self._movies[movie.name] = movie
        for user in self.users:
            if user.is_subscribed_to(movie) and not movie.is_banned_in(user.country):
                user.notify(movie.name, "ADD")
        return True

    def delete_movie(self, name: Optional[str]) -> bool:
        movie = self._movies.pop(name, None) if name is not None else None
        if movie is None:
            return False
        refunded = sum(1 for user in self.users if user.refund(movie))
        logger.debug("Deleted %s, refunded %d user(s)", name, refunded)
        return True

    def available_movies(self, user: Optional[User]) -> List[Movie]:
        country = user.country if user is not None else None
        return [movie for movie in self._movies.values() if not movie.is_banned_in(country)]


def search_movies(movies: Iterable[Movie], prefix: Optional[str]) -> List[Movie]:
    prefix = prefix or ""
    return [movie for movie in movies if movie.name.startswith(prefix)]


def find_movie(movies: Optional[Iterable[Movie]], name: Optional[str]) -> Optional[Movie]:
    if not movies or name is None:
        return None
    return next((movie for movie in movies if movie.name == name), None)

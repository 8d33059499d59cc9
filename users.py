import logging
from collections import Counter
from typing import Any, Dict, List, Optional

from passlib.context import CryptContext
from pydantic import BaseModel, ConfigDict, Field

import config
from schemas import Credentials, Movie, Notification

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=[config.PASSWORD_SCHEME], deprecated="auto")

NO_RECOMMENDATION = "No recommendation"


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


class User(BaseModel):
    """Session-side view of an account: wallet, movie lists and inbox.

    The movie lists hold the catalog's own Movie objects, so likes and ratings
    recorded here are visible everywhere the movie is shown.
    """

    model_config = ConfigDict(populate_by_name=True)

    credentials: Credentials
    tokens_count: int = Field(0, alias="tokensCount")
    num_free_premium_movies: int = Field(config.FREE_PREMIUM_MOVIES, alias="numFreePremiumMovies")
    purchased_movies: List[Movie] = Field(default_factory=list, alias="purchasedMovies")
    watched_movies: List[Movie] = Field(default_factory=list, alias="watchedMovies")
    liked_movies: List[Movie] = Field(default_factory=list, alias="likedMovies")
    rated_movies: List[Movie] = Field(default_factory=list, alias="ratedMovies")
    notifications: List[Notification] = Field(default_factory=list)
    subscribed_genres: List[str] = Field(default_factory=list, alias="subscribedGenres")
    scores: Dict[str, int] = Field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.credentials.name

    @property
    def country(self) -> Optional[str]:
        return self.credentials.country

    @property
    def is_premium(self) -> bool:
        return self.credentials.is_premium

    def buy_movie(self, movie: Optional[Movie]) -> bool:
        if movie is None or movie in self.purchased_movies:
            return False
        if self.is_premium and self.num_free_premium_movies > 0:
            self.num_free_premium_movies -= 1
        elif self.tokens_count >= config.MOVIE_PRICE_TOKENS:
            self.tokens_count -= config.MOVIE_PRICE_TOKENS
        else:
            return False
        self.purchased_movies.append(movie)
        return True

    def watch_movie(self, movie: Optional[Movie]) -> bool:
        if movie is None or movie not in self.purchased_movies:
            return False
        if movie not in self.watched_movies:
            self.watched_movies.append(movie)
        return True

    def like_movie(self, movie: Optional[Movie]) -> bool:
        if movie is None or movie not in self.watched_movies or movie in self.liked_movies:
            return False
        movie.like()
        self.liked_movies.append(movie)
        return True

    def rate_movie(self, movie: Optional[Movie], score: Optional[int]) -> bool:
        if movie is None or score is None:
            return False
        if not config.MIN_RATING <= score <= config.MAX_RATING:
            return False
        if movie not in self.watched_movies:
            return False
        previous = self.scores.get(movie.name)
        if previous is None:
            movie.rate(score)
            self.rated_movies.append(movie)
        else:
            movie.rate_again(score, previous)
        self.scores[movie.name] = score
        return True

    def subscribe_movie(self, movie: Optional[Movie], genre: Optional[str]) -> bool:
        if movie is None or genre is None:
            return False
        if not movie.has_genre(genre) or genre in self.subscribed_genres:
            return False
        self.subscribed_genres.append(genre)
        return True

    def buy_premium_account(self) -> bool:
        if self.is_premium or self.tokens_count < config.PREMIUM_PRICE_TOKENS:
            return False
        self.tokens_count -= config.PREMIUM_PRICE_TOKENS
        self.credentials.account_type = "premium"
        return True

    def buy_tokens(self, count: Optional[int]) -> bool:
        if count is None or count <= 0 or self.credentials.balance < count:
            return False
        self.credentials.balance -= count
        self.tokens_count += count
        return True

    def is_subscribed_to(self, movie: Movie) -> bool:
        return any(movie.has_genre(genre) for genre in self.subscribed_genres)

    def notify(self, movie_name: str, message: str) -> None:
        self.notifications.append(Notification(movie_name=movie_name, message=message))

    def refund(self, movie: Movie) -> bool:
        """Drop a removed movie from every list, paying back its purchase."""
        if movie not in self.purchased_movies:
            return False
        for movies in (self.purchased_movies, self.watched_movies, self.liked_movies, self.rated_movies):
            if movie in movies:
                movies.remove(movie)
        self.scores.pop(movie.name, None)
        if self.is_premium:
            self.num_free_premium_movies += 1
        else:
            self.tokens_count += config.MOVIE_PRICE_TOKENS
        self.notify(movie.name, "DELETE")
        return True

    def compute_recommendation(self, available: List[Movie]) -> Notification:
        """Pick the most liked unwatched movie from the user's favourite genre.

        Genres rank by how many liked movies carry them, ties by name. Inside a
        genre, candidates rank by their like count with catalog order kept on
        ties.
        """
        genre_likes = Counter(genre for movie in self.liked_movies for genre in movie.genres)
        ranked_genres = sorted(genre_likes, key=lambda genre: (-genre_likes[genre], genre))
        by_likes = sorted(available, key=lambda movie: movie.num_likes, reverse=True)

        chosen = NO_RECOMMENDATION
        for genre in ranked_genres:
            match = next(
                (m for m in by_likes if m.has_genre(genre) and m not in self.watched_movies),
                None,
            )
            if match is not None:
                chosen = match.name
                break
        logger.debug("Recommendation for %s: %s", self.name, chosen)
        self.notify(chosen, "Recommendation")
        return self.notifications[-1]

    def to_output(self) -> Dict[str, Any]:
        return {
            "credentials": self.credentials.model_dump(by_alias=True),
            "tokensCount": self.tokens_count,
            "numFreePremiumMovies": self.num_free_premium_movies,
            "purchasedMovies": [m.to_output() for m in self.purchased_movies],
            "watchedMovies": [m.to_output() for m in self.watched_movies],
            "likedMovies": [m.to_output() for m in self.liked_movies],
            "ratedMovies": [m.to_output() for m in self.rated_movies],
            "notifications": [n.model_dump(by_alias=True) for n in self.notifications],
        }


class UserDirectory:
    """Credential store: accounts by name with hashed passwords."""

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}
        self._password_hashes: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self):
        return iter(self._users.values())

    def get(self, name: str) -> Optional[User]:
        return self._users.get(name)

    def register(self, credentials: Optional[Credentials]) -> Optional[User]:
        if credentials is None:
            return None
        if credentials.name in self._users:
            logger.debug("Name already registered: %s", credentials.name)
            return None
        user = User(credentials=credentials.model_copy())
        self._users[credentials.name] = user
        self._password_hashes[credentials.name] = get_password_hash(credentials.password)
        return user

    def login(self, credentials: Optional[Credentials]) -> Optional[User]:
        if credentials is None:
            return None
        user = self._users.get(credentials.name)
        if user is None:
            return None
        if not verify_password(credentials.password, self._password_hashes[credentials.name]):
            logger.debug("Invalid credentials for %s", credentials.name)
            return None
        return user

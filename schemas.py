"""
Data schemas for MovieVerse Replay

Each Pydantic model mirrors a record of the replay input or output JSON.
Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from typing import Any, Dict, List, Literal, Optional

AccountType = Literal["standard", "premium"]
SortDirection = Literal["ascending", "descending"]

_DIRECTION_ALIASES = {"increasing": "ascending", "decreasing": "descending"}


class Credentials(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., description="Unique account name")
    password: str
    account_type: AccountType = Field("standard", alias="accountType")
    country: Optional[str] = None
    balance: int = Field(0, ge=0, description="Money available for buying tokens")

    @field_serializer("balance")
    def _balance_as_text(self, balance: int) -> str:
        return str(balance)

    @property
    def is_premium(self) -> bool:
        return self.account_type == "premium"


class Movie(BaseModel):
    """A catalog entry with its running like and rating aggregates.

    Two movies are equal when their names are equal, so a movie can be looked
    up in any list by name alone.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    year: str = ""
    duration: int = Field(0, ge=0, description="Length in minutes")
    genres: List[str] = Field(default_factory=list)
    actors: List[str] = Field(default_factory=list)
    countries_banned: List[str] = Field(default_factory=list, alias="countriesBanned")
    num_likes: int = Field(0, alias="numLikes")
    num_ratings: int = Field(0, alias="numRatings")
    rating_sum: int = Field(0, alias="ratingSum")

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Movie):
            return other.name == self.name
        if isinstance(other, str):
            return other == self.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    @property
    def rating(self) -> float:
        if self.num_ratings > 0:
            return self.rating_sum / self.num_ratings
        return 0.0

    def like(self) -> None:
        self.num_likes += 1

    def rate(self, score: int) -> None:
        self.rating_sum += score
        self.num_ratings += 1

    def rate_again(self, score: int, previous: int) -> None:
        self.rating_sum += score - previous

    def is_banned_in(self, country: Optional[str]) -> bool:
        return country is not None and country in self.countries_banned

    def has_genre(self, genre: str) -> bool:
        return genre in self.genres

    def to_output(self) -> Dict[str, Any]:
        data = self.model_dump(by_alias=True, exclude={"rating_sum"})
        data["rating"] = self.rating
        return data


class Notification(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    movie_name: str = Field(..., alias="movieName")
    message: str = Field(..., description="ADD | DELETE | Recommendation")


class SortCriteria(BaseModel):
    rating: Optional[SortDirection] = None
    duration: Optional[SortDirection] = None

    @field_validator("rating", "duration", mode="before")
    @classmethod
    def _normalize_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _DIRECTION_ALIASES.get(value, value)
        return value


class ContainsCriteria(BaseModel):
    genre: List[str] = Field(default_factory=list)
    actors: List[str] = Field(default_factory=list)


class Filters(BaseModel):
    model_config = ConfigDict(extra="ignore")

    year: Optional[str] = None
    country: Optional[str] = Field(None, description="Drop movies banned in this country")
    genre: Optional[str] = None
    contains: Optional[ContainsCriteria] = None
    sort: Optional[SortCriteria] = None

    @field_validator("year", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class Action(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str
    page: Optional[str] = None
    feature: Optional[str] = None
    credentials: Optional[Credentials] = None
    starts_with: Optional[str] = Field(None, alias="startsWith")
    filters: Optional[Filters] = None
    movie: Optional[str] = None
    rate: Optional[int] = None
    count: Optional[int] = None
    subscribed_genre: Optional[str] = Field(None, alias="subscribedGenre")
    added_movie: Optional[Movie] = Field(None, alias="addedMovie")
    deleted_movie: Optional[str] = Field(None, alias="deletedMovie")


class UserEntry(BaseModel):
    credentials: Credentials


class ReplayInput(BaseModel):
    users: List[UserEntry] = Field(default_factory=list)
    movies: List[Movie] = Field(default_factory=list)
    actions: List[Action] = Field(default_factory=list)

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from schemas import Movie
from users import User


class PageKind(str, Enum):
    LOGOUT = "logout"
    LOGIN = "login"
    REGISTER = "register"
    HOMEPAGE = "homepage"
    MOVIES = "movies"
    SEE_DETAILS = "see details"
    UPGRADES = "upgrades"

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["PageKind"]:
        try:
            return cls(name)
        except ValueError:
            return None


# Page kind -> kinds reachable with a "change page" action
LINKS: Dict[PageKind, FrozenSet[PageKind]] = {
    PageKind.LOGOUT: frozenset({PageKind.LOGIN, PageKind.REGISTER}),
    PageKind.LOGIN: frozenset(),
    PageKind.REGISTER: frozenset(),
    PageKind.HOMEPAGE: frozenset({PageKind.MOVIES, PageKind.UPGRADES, PageKind.LOGOUT}),
    PageKind.MOVIES: frozenset({PageKind.HOMEPAGE, PageKind.MOVIES, PageKind.SEE_DETAILS, PageKind.LOGOUT}),
    PageKind.SEE_DETAILS: frozenset({PageKind.HOMEPAGE, PageKind.MOVIES, PageKind.UPGRADES, PageKind.LOGOUT}),
    PageKind.UPGRADES: frozenset({PageKind.HOMEPAGE, PageKind.MOVIES, PageKind.LOGOUT}),
}

# Page kind -> features usable with an "on page" action
FEATURES: Dict[PageKind, FrozenSet[str]] = {
    PageKind.LOGOUT: frozenset(),
    PageKind.LOGIN: frozenset({"login"}),
    PageKind.REGISTER: frozenset({"register"}),
    PageKind.HOMEPAGE: frozenset(),
    PageKind.MOVIES: frozenset({"search", "filter"}),
    PageKind.SEE_DETAILS: frozenset({"purchase", "watch", "like", "rate", "subscribe"}),
    PageKind.UPGRADES: frozenset({"buy premium account", "buy tokens"}),
}


@dataclass
class Page:
    """The single live navigation position of a session.

    At most one of ``movie`` and ``movies`` is set. ``user`` is None on the
    logged-out side (LOGOUT, LOGIN, REGISTER) and set everywhere else.
    """

    kind: PageKind = PageKind.LOGOUT
    user: Optional[User] = None
    movie: Optional[Movie] = None
    movies: Optional[List[Movie]] = None

    @property
    def allowed_transitions(self) -> FrozenSet[PageKind]:
        return LINKS[self.kind]

    @property
    def allowed_features(self) -> FrozenSet[str]:
        return FEATURES[self.kind]

    def has_link_to(self, target: PageKind) -> bool:
        return target in self.allowed_transitions

    def has_feature(self, name: str) -> bool:
        return name in self.allowed_features

    def show(self, kind: PageKind, movie: Optional[Movie] = None, movies: Optional[List[Movie]] = None) -> None:
        self.kind = kind
        self.movie = movie
        self.movies = movies

    def log_out(self) -> None:
        self.show(PageKind.LOGOUT)
        self.user = None

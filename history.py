import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple

import config
from page import Page, PageKind
from schemas import Movie
from users import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageSnapshot:
    kind: PageKind
    user: Optional[User]
    movie: Optional[Movie]
    movies: Optional[Tuple[Movie, ...]]

    @classmethod
    def of(cls, page: Page) -> "PageSnapshot":
        movies = tuple(page.movies) if page.movies is not None else None
        return cls(kind=page.kind, user=page.user, movie=page.movie, movies=movies)


class PageHistory:
    """LIFO stack of page snapshots behind the "back" action.

    Snapshots copy the page's fields, so later changes to the live page never
    leak into a saved state. With ``max_depth`` set, the oldest snapshot is
    dropped once the stack is full.
    """

    def __init__(self, max_depth: int = config.HISTORY_MAX_DEPTH) -> None:
        self._stack: Deque[PageSnapshot] = deque(maxlen=max_depth or None)

    def __len__(self) -> int:
        return len(self._stack)

    def save_state(self, page: Page) -> PageSnapshot:
        snapshot = PageSnapshot.of(page)
        self._stack.append(snapshot)
        logger.debug("Saved %s (depth %d)", snapshot.kind.value, len(self._stack))
        return snapshot

    def restore_last_state(self, page: Page) -> bool:
        if not self._stack:
            return False
        snapshot = self._stack.pop()
        page.kind = snapshot.kind
        page.user = snapshot.user
        page.movie = snapshot.movie
        page.movies = list(snapshot.movies) if snapshot.movies is not None else None
        logger.debug("Restored %s (depth %d)", snapshot.kind.value, len(self._stack))
        return True

    def clear(self) -> None:
        self._stack.clear()

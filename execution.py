"""Replay of an action log against one session.

Each action is checked against the current page before anything changes.
Illegal or rejected actions emit the error record, unknown names are logged
and skipped, and nothing raised by a handler escapes ``handle``.
"""

import logging
from typing import Callable, Dict, Iterable, Optional

import filters
from database import Database, find_movie, search_movies
from history import PageHistory
from output import OutputWriter
from page import Page, PageKind
from schemas import Action, Movie
from users import User

logger = logging.getLogger(__name__)

Handler = Callable[[Action], None]


class Execution:
    def __init__(self, database: Database, writer: Optional[OutputWriter] = None,
                 history: Optional[PageHistory] = None) -> None:
        self.db = database
        self.writer = writer if writer is not None else OutputWriter()
        self.history = history if history is not None else PageHistory()
        self.page = Page()

        self._action_handlers: Dict[str, Handler] = {
            "change page": self._change_page,
            "on page": self._on_page,
            "database": self._database,
            "back": self._back,
        }
        self._page_handlers: Dict[PageKind, Handler] = {
            PageKind.LOGIN: self._to_login,
            PageKind.REGISTER: self._to_register,
            PageKind.LOGOUT: self._to_logout,
            PageKind.HOMEPAGE: self._to_homepage,
            PageKind.MOVIES: self._to_movies,
            PageKind.SEE_DETAILS: self._to_see_details,
            PageKind.UPGRADES: self._to_upgrades,
        }
        self._feature_handlers: Dict[str, Handler] = {
            "login": self._login,
            "register": self._register,
            "search": self._search,
            "filter": self._filter,
            "purchase": self._purchase,
            "watch": self._watch,
            "like": self._like,
            "rate": self._rate,
            "subscribe": self._subscribe,
            "buy premium account": self._buy_premium,
            "buy tokens": self._buy_tokens,
        }
        self._database_handlers: Dict[str, Handler] = {
            "add": self._add_movie,
            "delete": self._delete_movie,
        }

    @property
    def user(self) -> Optional[User]:
        return self.page.user

    def run(self, actions: Iterable[Action]) -> OutputWriter:
        for action in actions:
            self.handle(action)
        self.finish()
        return self.writer

    def handle(self, action: Action) -> None:
        handler = self._action_handlers.get(action.type)
        if handler is None:
            logger.warning("Invalid action type: %r", action.type)
            return
        try:
            handler(action)
        except Exception:
            logger.exception("Action %r failed on page %s", action.type, self.page.kind.value)
            self.writer.write()

    def finish(self) -> None:
        user = self.user
        if user is None or not user.is_premium:
            return
        user.compute_recommendation(self.db.available_movies(user))
        self.writer.write_recommendation(user)

    def _reject(self, reason: str, *args) -> None:
        logger.debug(reason, *args)
        self.writer.write()

    # Change page

    def _change_page(self, action: Action) -> None:
        target = PageKind.parse(action.page)
        if target is None:
            logger.warning("Invalid change page action: %r", action.page)
            return
        if not self.page.has_link_to(target):
            self._reject("No link from %s to %s", self.page.kind.value, target.value)
            return
        self._page_handlers[target](action)

    def _to_login(self, action: Action) -> None:
        self.page.show(PageKind.LOGIN)

    def _to_register(self, action: Action) -> None:
        self.page.show(PageKind.REGISTER)

    def _to_logout(self, action: Action) -> None:
        self.page.log_out()
        self.history.clear()

    def _to_homepage(self, action: Action) -> None:
        self.history.save_state(self.page)
        self.page.show(PageKind.HOMEPAGE)

    def _to_movies(self, action: Action) -> None:
        self.history.save_state(self.page)
        movies = self.db.available_movies(self.user)
        self.page.show(PageKind.MOVIES, movies=movies)
        self.writer.write_movies(movies, self.user)

    def _to_see_details(self, action: Action) -> None:
        movie = find_movie(self.page.movies, action.movie)
        if movie is None:
            self._reject("Movie not on page: %r", action.movie)
            return
        self.history.save_state(self.page)
        self.page.show(PageKind.SEE_DETAILS, movie=movie)
        self.writer.write_movies([movie], self.user)

    def _to_upgrades(self, action: Action) -> None:
        self.history.save_state(self.page)
        self.page.show(PageKind.UPGRADES)

    # On page

    def _on_page(self, action: Action) -> None:
        handler = self._feature_handlers.get(action.feature)
        if handler is None:
            logger.warning("Invalid on page action: %r", action.feature)
            return
        if not self.page.has_feature(action.feature):
            self._reject("Feature %r not available on %s", action.feature, self.page.kind.value)
            return
        handler(action)

    def _enter(self, user: Optional[User]) -> None:
        if user is None:
            self.page.log_out()
            self._reject("Authentication failed")
            return
        self.page.user = user
        self.page.show(PageKind.HOMEPAGE)
        self.writer.write_user(user)

    def _login(self, action: Action) -> None:
        self._enter(self.db.users.login(action.credentials))

    def _register(self, action: Action) -> None:
        self._enter(self.db.users.register(action.credentials))

    def _show_list(self, movies) -> None:
        self.page.show(PageKind.MOVIES, movies=movies)
        self.writer.write_movies(movies, self.user)

    def _search(self, action: Action) -> None:
        self._show_list(search_movies(self.db.available_movies(self.user), action.starts_with))

    def _filter(self, action: Action) -> None:
        self._show_list(filters.apply(action.filters, self.db.available_movies(self.user)))

    def _movie_result(self, done: bool, movie: Optional[Movie]) -> None:
        if done:
            self.writer.write_movies([movie], self.user)
        else:
            self._reject("Rejected on %r", movie.name if movie is not None else None)

    def _purchase(self, action: Action) -> None:
        self._movie_result(self.user.buy_movie(self.page.movie), self.page.movie)

    def _watch(self, action: Action) -> None:
        self._movie_result(self.user.watch_movie(self.page.movie), self.page.movie)

    def _like(self, action: Action) -> None:
        self._movie_result(self.user.like_movie(self.page.movie), self.page.movie)

    def _rate(self, action: Action) -> None:
        self._movie_result(self.user.rate_movie(self.page.movie, action.rate), self.page.movie)

    def _subscribe(self, action: Action) -> None:
        if not self.user.subscribe_movie(self.page.movie, action.subscribed_genre):
            self._reject("Cannot subscribe to %r", action.subscribed_genre)

    def _buy_premium(self, action: Action) -> None:
        if not self.user.buy_premium_account():
            self._reject("Cannot buy premium account for %s", self.user.name)

    def _buy_tokens(self, action: Action) -> None:
        if not self.user.buy_tokens(action.count):
            self._reject("Cannot buy %r tokens for %s", action.count, self.user.name)

    # Database

    def _database(self, action: Action) -> None:
        handler = self._database_handlers.get(action.feature)
        if handler is None:
            logger.warning("Invalid database action: %r", action.feature)
            return
        handler(action)

    def _add_movie(self, action: Action) -> None:
        if not self.db.add_movie(action.added_movie):
            self._reject("Cannot add movie")

    def _on_screen(self, name: Optional[str]) -> bool:
        if self.page.movie is not None and self.page.movie.name == name:
            return True
        return find_movie(self.page.movies, name) is not None

    def _delete_movie(self, action: Action) -> None:
        if self._on_screen(action.deleted_movie):
            self._reject("Movie %r is shown on %s", action.deleted_movie, self.page.kind.value)
            return
        if not self.db.delete_movie(action.deleted_movie):
            self._reject("Cannot delete movie %r", action.deleted_movie)

    # Back

    def _back(self, action: Action) -> None:
        if not self.history.restore_last_state(self.page):
            self._reject("History is empty")
            return
        if self.page.kind is PageKind.SEE_DETAILS:
            self.writer.write_movies([self.page.movie], self.user)
        elif self.page.kind is PageKind.MOVIES:
            self._show_list(self.db.available_movies(self.user))

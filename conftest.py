import pytest

from database import Database
from execution import Execution
from schemas import Action, Credentials, Movie


def make_movie(name, duration=100, year="2000", genres=(), actors=(), banned=()):
    return Movie(name=name, duration=duration, year=year, genres=list(genres),
                 actors=list(actors), countries_banned=list(banned))


def catalog():
    return [
        make_movie("Inception", 148, "2010", ["Action", "Sci-Fi"], ["Leonardo DiCaprio", "Elliot Page"]),
        make_movie("Interstellar", 169, "2014", ["Sci-Fi", "Drama"], ["Matthew McConaughey"], ["Germany"]),
        make_movie("Heat", 170, "1995", ["Action", "Crime"], ["Al Pacino", "Robert De Niro"]),
        make_movie("Amelie", 122, "2001", ["Comedy", "Romance"], ["Audrey Tautou"], ["Romania"]),
    ]


ALICE = Credentials(name="alice", password="pw-alice", account_type="standard", country="Romania", balance=50)
BOB = Credentials(name="bob", password="pw-bob", account_type="premium", country="Germany", balance=20)


def act(type, **fields):
    return Action(type=type, **fields)


def change(page, **fields):
    return act("change page", page=page, **fields)


def on_page(feature, **fields):
    return act("on page", feature=feature, **fields)


def login_actions(credentials):
    return [change("login"), on_page("login", credentials=credentials)]


@pytest.fixture
def movies():
    return catalog()


@pytest.fixture
def db(movies):
    database = Database(movies)
    database.users.register(ALICE)
    database.users.register(BOB)
    return database


@pytest.fixture
def execution(db):
    return Execution(db)

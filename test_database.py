from conftest import ALICE, make_movie
from database import Database, find_movie, search_movies
from schemas import ReplayInput


def test_movies_keep_catalog_order(db):
    assert [m.name for m in db.get_movies()] == ["Inception", "Interstellar", "Heat", "Amelie"]
    assert db.get_movie("Heat").duration == 170
    assert db.get_movie("heat") is None


def test_add_duplicate_fails(db):
    assert not db.add_movie(make_movie("Heat", duration=1))
    assert db.get_movie("Heat").duration == 170
    assert db.add_movie(make_movie("Ronin"))
    assert db.get_movies()[-1].name == "Ronin"


def test_delete_missing_fails(db):
    assert not db.delete_movie("Ronin")
    assert not db.delete_movie(None)
    assert db.delete_movie("Heat")
    assert db.get_movie("Heat") is None


def test_available_movies_hide_banned(db):
    alice = db.users.get("alice")
    assert [m.name for m in db.available_movies(alice)] == ["Inception", "Interstellar", "Heat"]
    assert len(db.available_movies(None)) == 4


def test_add_notifies_subscribers(db):
    alice = db.users.get("alice")
    alice.subscribe_movie(db.get_movie("Interstellar"), "Drama")

    db.add_movie(make_movie("Whiplash", genres=["Drama", "Music"]))
    db.add_movie(make_movie("Dogville", genres=["Drama"], banned=["Romania"]))
    db.add_movie(make_movie("Ronin", genres=["Action"]))

    assert [(n.movie_name, n.message) for n in alice.notifications] == [("Whiplash", "ADD")]
    assert db.users.get("bob").notifications == []


def test_delete_refunds_purchasers(db):
    alice = db.users.get("alice")
    heat = db.get_movie("Heat")
    alice.buy_tokens(10)
    alice.buy_movie(heat)
    assert alice.tokens_count == 8

    db.delete_movie("Heat")
    assert alice.tokens_count == 10
    assert alice.purchased_movies == []
    assert alice.notifications[-1].movie_name == "Heat"


def test_search_and_find(movies):
    assert [m.name for m in search_movies(movies, "In")] == ["Inception", "Interstellar"]
    assert search_movies(movies, "in") == []
    assert len(search_movies(movies, None)) == 4
    assert find_movie(movies, "Heat") is movies[2]
    assert find_movie(movies, "Ronin") is None
    assert find_movie(None, "Heat") is None


def test_from_input_skips_duplicates():
    data = ReplayInput.model_validate({
        "users": [
            {"credentials": {"name": "alice", "password": "a", "accountType": "standard",
                             "country": "Romania", "balance": "50"}},
            {"credentials": {"name": "alice", "password": "b", "accountType": "premium",
                             "country": "Romania", "balance": "0"}},
        ],
        "movies": [
            {"name": "Heat", "year": 1995, "duration": 170, "genres": ["Action"],
             "actors": [], "countriesBanned": []},
            {"name": "Heat", "year": 1995, "duration": 1, "genres": [], "actors": [], "countriesBanned": []},
        ],
    })
    db = Database.from_input(data)
    assert len(db.users) == 1
    assert db.users.get("alice").credentials.balance == 50
    assert db.get_movie("Heat").year == "1995"
    assert db.get_movie("Heat").duration == 170
    assert db.users.login(ALICE.model_copy(update={"password": "a"})) is not None

from history import PageHistory
from page import FEATURES, LINKS, Page, PageKind


def test_page_legality_lookups():
    page = Page()
    assert page.has_link_to(PageKind.LOGIN)
    assert not page.has_link_to(PageKind.MOVIES)
    assert not page.has_feature("login")

    assert page.allowed_transitions == frozenset({PageKind.LOGIN, PageKind.REGISTER})
    assert page.allowed_features == frozenset()

    page.show(PageKind.MOVIES)
    assert page.allowed_features == {"search", "filter"}
    assert page.has_feature("filter")
    assert page.has_link_to(PageKind.SEE_DETAILS)
    assert not page.has_feature("purchase")


def test_every_kind_has_tables():
    assert set(LINKS) == set(PageKind)
    assert set(FEATURES) == set(PageKind)


def test_parse_unknown_kind():
    assert PageKind.parse("see details") is PageKind.SEE_DETAILS
    assert PageKind.parse("cinema") is None
    assert PageKind.parse(None) is None


def test_restore_on_empty_history_changes_nothing():
    history = PageHistory()
    page = Page(kind=PageKind.HOMEPAGE)
    assert not history.restore_last_state(page)
    assert page.kind is PageKind.HOMEPAGE


def test_history_is_lifo(movies):
    history = PageHistory()
    page = Page(kind=PageKind.HOMEPAGE)
    history.save_state(page)
    page.show(PageKind.MOVIES, movies=movies)
    history.save_state(page)
    page.show(PageKind.SEE_DETAILS, movie=movies[0])

    assert history.restore_last_state(page)
    assert page.kind is PageKind.MOVIES
    assert page.movies == movies
    assert page.movie is None

    assert history.restore_last_state(page)
    assert page.kind is PageKind.HOMEPAGE
    assert page.movies is None

    assert not history.restore_last_state(page)
    assert page.kind is PageKind.HOMEPAGE


def test_snapshot_is_not_affected_by_later_changes(movies):
    history = PageHistory()
    listed = list(movies)
    page = Page(kind=PageKind.MOVIES, movies=listed)
    history.save_state(page)
    listed.clear()
    page.show(PageKind.HOMEPAGE)

    history.restore_last_state(page)
    assert [m.name for m in page.movies] == [m.name for m in movies]


def test_clear():
    history = PageHistory()
    page = Page(kind=PageKind.HOMEPAGE)
    history.save_state(page)
    history.save_state(page)
    assert len(history) == 2
    history.clear()
    assert len(history) == 0
    assert not history.restore_last_state(page)


def test_max_depth_drops_oldest():
    history = PageHistory(max_depth=2)
    page = Page(kind=PageKind.HOMEPAGE)
    history.save_state(page)
    page.show(PageKind.MOVIES)
    history.save_state(page)
    page.show(PageKind.UPGRADES)
    history.save_state(page)

    assert len(history) == 2
    history.restore_last_state(page)
    assert page.kind is PageKind.UPGRADES
    history.restore_last_state(page)
    assert page.kind is PageKind.MOVIES
    assert not history.restore_last_state(page)

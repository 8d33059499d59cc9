"""Filtering and sorting of movie lists for the "filter" feature.

Filters combine with AND and an unset field imposes no constraint. When both
sort keys are given, duration orders first in its own direction and rating
breaks ties in its own direction.
"""

from typing import Iterable, List, Optional

from schemas import Filters, Movie, SortCriteria


def matches(filters: Filters, movie: Movie) -> bool:
    if filters.year is not None and movie.year != filters.year:
        return False
    if filters.country is not None and movie.is_banned_in(filters.country):
        return False
    if filters.genre is not None and not movie.has_genre(filters.genre):
        return False
    if filters.contains is not None:
        if not all(actor in movie.actors for actor in filters.contains.actors):
            return False
        if not all(movie.has_genre(genre) for genre in filters.contains.genre):
            return False
    return True


def sort_movies(criteria: Optional[SortCriteria], movies: List[Movie]) -> List[Movie]:
    result = list(movies)
    if criteria is None:
        return result
    # Stable sorts: secondary key first, primary key last.
    if criteria.rating is not None:
        result.sort(key=lambda movie: movie.rating, reverse=criteria.rating == "descending")
    if criteria.duration is not None:
        result.sort(key=lambda movie: movie.duration, reverse=criteria.duration == "descending")
    return result


def apply(filters: Optional[Filters], movies: Iterable[Movie]) -> List[Movie]:
    if filters is None:
        return list(movies)
    kept = [movie for movie in movies if matches(filters, movie)]
    return sort_movies(filters.sort, kept)

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, TextIO, Union

from schemas import Movie
from users import User

ERROR = "Error"


class OutputWriter:
    """Collects one JSON record per emitted result.

    Movies and users are rendered when written, so each record is a snapshot
    of that moment.
    """

    def __init__(self) -> None:
        self.records: List[Dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self.records)

    def _append(self, error: Optional[str], movies: Optional[List[Dict[str, Any]]], user: Optional[User]) -> Dict[str, Any]:
        record = {
            "error": error,
            "currentMoviesList": movies,
            "currentUser": user.to_output() if user is not None else None,
        }
        self.records.append(record)
        return record

    def write(self) -> Dict[str, Any]:
        return self._append(ERROR, [], None)

    def write_movies(self, movies: Iterable[Movie], user: Optional[User]) -> Dict[str, Any]:
        return self._append(None, [movie.to_output() for movie in movies], user)

    def write_user(self, user: User) -> Dict[str, Any]:
        return self._append(None, [], user)

    def write_recommendation(self, user: User) -> Dict[str, Any]:
        return self._append(None, None, user)

    def dumps(self) -> str:
        return json.dumps(self.records, indent=2, ensure_ascii=False)

    def dump(self, target: Union[str, Path, TextIO]) -> None:
        if isinstance(target, (str, Path)):
            Path(target).write_text(self.dumps() + "\n", encoding="utf-8")
        else:
            target.write(self.dumps() + "\n")

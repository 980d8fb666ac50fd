# reductive/shared.py
from __future__ import annotations

import threading
from typing import Iterable, List, Tuple

from .errors import NoMatches
from .searcher import Searcher


class SharedSearcher:
    """
    A Searcher behind one lock, for callers that drive it from several threads
    (e.g. the Flask dev server). Every operation reads and writes all of the
    searcher's state, so the whole structure is guarded, never single fields.
    """

    def __init__(self, corpus: Iterable[str]) -> None:
        self._searcher = Searcher(corpus)
        self._lock = threading.Lock()

    def snapshot(self) -> Tuple[str, List[str]]:
        """(query, results) read under one acquisition."""
        with self._lock:
            return self._searcher.query, self._searcher.results()

    def results(self) -> List[str]:
        with self._lock:
            return self._searcher.results()

    @property
    def query(self) -> str:
        with self._lock:
            return self._searcher.query

    def __len__(self) -> int:
        with self._lock:
            return len(self._searcher)

    def add_character(self, character: str) -> str:
        with self._lock:
            return self._searcher.add_character(character)

    def type_text(self, text: str) -> str:
        with self._lock:
            return self._searcher.type_text(text)

    def type_keystroke(self, text: str) -> str:
        """
        type_text() as one step: a key that folds to several characters
        either lands completely or leaves the query as it was.
        """
        with self._lock:
            before = len(self._searcher.query)
            try:
                return self._searcher.type_text(text)
            except NoMatches:
                while len(self._searcher.query) > before:
                    self._searcher.remove_character()
                raise

    def remove_character(self) -> None:
        with self._lock:
            self._searcher.remove_character()

    def reset_search(self) -> None:
        with self._lock:
            self._searcher.reset_search()

    def add_to_vec(self, string: str) -> None:
        with self._lock:
            self._searcher.add_to_vec(string)

    def remove_from_vec(self, string: str) -> str:
        with self._lock:
            return self._searcher.remove_from_vec(string)

# reductive/searcher.py
from __future__ import annotations

import logging
from typing import Iterable, List

from .errors import EmptyingRepository, NoMatches, NotFound, QueryShrunk

log = logging.getLogger(__name__)


def substring_filter(strings: Iterable[str], query: str) -> List[str]:
    """Keep the strings containing `query`, in their original order."""
    return [s for s in strings if query in s]


class Searcher:
    """
    Incremental substring narrowing over a fixed, caller-owned corpus.

    Holds three pieces of state that always agree with each other:
      - corpus:  every candidate string, insertion order, duplicates allowed
      - query:   the substring typed so far ("" matches everything)
      - cache:   the corpus entries containing the query, in corpus order

    Appending a character filters the current cache only (a longer query can
    only shrink the match set). Every other edit rebuilds the cache from the
    full corpus.

    Operations either commit completely or raise a SearchError subclass; the
    only error raised after a change was applied is QueryShrunk.

    Not thread-safe. Use SharedSearcher to share one instance between threads.
    """

    # ------------- lifecycle -------------

    def __init__(self, corpus: Iterable[str]) -> None:
        self._corpus: List[str] = list(corpus)
        self._query: str = ""
        self._cache: List[str] = list(self._corpus)

    def __len__(self) -> int:
        return len(self._corpus)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(query={self._query!r}, "
            f"results={len(self._cache)}, corpus={len(self._corpus)})"
        )

    # ------------- read -------------

    def results(self) -> List[str]:
        return list(self._cache)

    @property
    def query(self) -> str:
        return self._query

    @property
    def corpus(self) -> List[str]:
        return list(self._corpus)

    # ------------- query edits -------------

    # /* ~~~ Narrow the query by one character, filtering the current cache ~~~ */
    def add_character(self, character: str) -> str:
        """
        Append `character` to the query and return the new query.

        Raises NoMatches (state untouched) if no cached result contains the
        extended query.
        """
        if not isinstance(character, str) or len(character) != 1:
            raise ValueError(f"add_character() expects a single character, got {character!r}")

        candidate = self._query + character
        matches = substring_filter(self._cache, candidate)
        if not matches:
            log.debug("Rejected %r: %r matches nothing", character, candidate)
            raise NoMatches(character)

        self._query = candidate
        self._cache = matches
        return self._query

    def type_text(self, text: str) -> str:
        """
        Feed `text` through add_character() one character at a time.

        Each character commits on its own: if one is rejected, the ones before
        it stay in the query and the NoMatches propagates.
        """
        for character in text:
            self.add_character(character)
        return self._query

    def remove_character(self) -> None:
        # the dropped character may have excluded entries the cache no longer holds
        self._query = self._query[:-1]
        self._refresh()

    def reset_search(self) -> None:
        self._query = ""
        self._cache = list(self._corpus)

    # ------------- corpus edits -------------

    def add_to_vec(self, string: str) -> None:
        """Append `string` to the corpus. It only shows up if it matches the query."""
        self._corpus.append(string)
        self._refresh()

    # /* ~~~ Remove one corpus entry, backing the query off if it goes dead ~~~ */
    def remove_from_vec(self, string: str) -> str:
        """
        Remove the first occurrence of `string` from the corpus and return it.

        Raises:
          EmptyingRepository: fewer than two entries left; nothing removed.
          NotFound:           `string` is not in the corpus; nothing removed.
          QueryShrunk:        the entry was removed, but it was the last match
                              for the query, so characters were popped off the
                              query until something matched again.
        """
        if len(self._corpus) < 2:
            raise EmptyingRepository()
        try:
            index = self._corpus.index(string)
        except ValueError:
            raise NotFound(string) from None

        removed = self._corpus.pop(index)
        self._refresh()
        if self._cache:
            return removed

        # corpus still holds at least one entry, so "" always ends the loop
        while not self._cache:
            self._query = self._query[:-1]
            self._refresh()
        log.info("Removed %r was the last match; query shrunk to %r", removed, self._query)
        raise QueryShrunk(self._query, removed)

    # ------------- internals -------------

    def _refresh(self) -> None:
        self._cache = substring_filter(self._corpus, self._query)

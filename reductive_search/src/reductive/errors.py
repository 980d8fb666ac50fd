# reductive/errors.py
from __future__ import annotations


class SearchError(Exception):
    """
    Base class for every outcome the searcher reports instead of committing
    the requested change. All of them are recoverable.

    changed_state tells callers whether the searcher was left untouched
    (False) or moved to a different consistent state than the one requested
    (True), without having to enumerate the subclasses.
    """
    changed_state: bool = False


class NoMatches(SearchError):
    """An appended character would leave the query matching nothing."""

    def __init__(self, character: str) -> None:
        super().__init__(f"Adding character {character!r} to the search returned no results")
        self.character = character


class EmptyingRepository(SearchError):
    """Removing the string would leave the corpus empty."""

    def __init__(self) -> None:
        super().__init__("Can't remove last item from search")


class NotFound(SearchError):
    def __init__(self, string: str) -> None:
        super().__init__(f"Couldn't find string {string!r} in the corpus")
        self.string = string


class QueryShrunk(SearchError):
    """
    The corpus removal was applied, but the query no longer matched anything
    and was truncated to `query`. `removed` is the string taken out of the corpus.
    """
    changed_state = True

    def __init__(self, query: str, removed: str) -> None:
        super().__init__(f"Removing {removed!r} emptied the results; query shrunk to {query!r}")
        self.query = query
        self.removed = removed

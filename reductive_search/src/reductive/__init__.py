"""
Reductive Search

Type-to-filter over a fixed list of strings. A Searcher holds the corpus, the
query typed so far, and the entries containing that query; each keystroke
narrows (or widens) the result list without re-scanning the whole corpus when
it doesn't have to.

Example Usage:
    from reductive import Searcher, NoMatches

    s = Searcher(["hi", "hill", "hello"])
    s.add_character("h")
    s.add_character("e")
    print(s.results())        # ['hello']

    try:
        s.add_character("z")
    except NoMatches as err:
        print(err.character)  # 'z', query is still "he"
"""

# src/reductive/__init__.py
from .errors import SearchError, NoMatches, EmptyingRepository, NotFound, QueryShrunk
from .searcher import Searcher, substring_filter
from .shared import SharedSearcher
from .loader import load_strings
from .normalize import fold

__version__ = "1.0.0"
__all__ = [
    "Searcher", "SharedSearcher", "substring_filter",
    "SearchError", "NoMatches", "EmptyingRepository", "NotFound", "QueryShrunk",
    "load_strings", "fold",
]

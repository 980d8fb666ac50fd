from __future__ import annotations
import re
import unicodedata

_SPACES = re.compile(r"\s+")

def fold(text: str) -> str:
    """
    Fold text for case- and accent-insensitive substring matching:
      * NFKD decomposition, combining marks dropped ("café" -> "cafe")
      * casefold ("Straße" -> "strasse")
      * each whitespace run becomes a single space (not trimmed, so a typed
        space still folds to " ")
    The searcher never folds on its own; apply this to corpus entries AND to
    typed text, or matches will silently disagree.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _SPACES.sub(" ", stripped.casefold())

from __future__ import annotations
import logging
import os
from typing import Iterable, List, Optional

from . import config as CFG
from .normalize import fold as fold_text

log = logging.getLogger(__name__)

PROGRESS_EVERY_FILES = 500

def _iter_text_files(roots: Iterable[str]) -> Iterable[str]:
    """Yield matching files under each root (recursively), or the root itself if it is a file."""
    for root in roots:
        root = os.path.abspath(root)
        if os.path.isfile(root):
            yield root
            continue
        if not os.path.isdir(root):
            raise FileNotFoundError(root)
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for fn in sorted(filenames):
                if fn.lower().endswith(CFG.INCLUDE_EXTS):
                    yield os.path.join(dirpath, fn)

def _line_units(lines: List[str]) -> Iterable[str]:
    for raw in lines:
        if CFG.SKIP_BLANK_LINES and raw.strip() == "":
            continue
        yield raw

def _paragraph_units(lines: List[str]) -> Iterable[str]:
    block: List[str] = []
    for raw in lines:
        if raw.strip() == "":
            if block:
                yield "\n".join(block)
                block = []
        else:
            block.append(raw)
    if block:
        yield "\n".join(block)

_UNITS = {"line": _line_units, "paragraph": _paragraph_units}

def load_strings(roots: Iterable[str],
                 unit: Optional[str] = None,
                 fold: Optional[bool] = None) -> List[str]:
    """
    Scan roots for text files and return the corpus entries, in file order.
    unit: "line" (default) or "paragraph".
    fold: apply normalize.fold() to every entry (defaults to config.FOLD).
    """
    unit = (unit or CFG.TEXT_UNIT).lower()
    if unit not in _UNITS:
        raise ValueError(f"unknown text unit {unit!r}; expected one of {sorted(_UNITS)}")
    split = _UNITS[unit]
    fold = CFG.FOLD if fold is None else fold

    strings: List[str] = []
    file_count = 0
    for path in _iter_text_files(roots):
        try:
            with open(path, "r", encoding=CFG.ENCODING, errors="ignore") as f:
                raw_lines = [ln.rstrip("\r\n") for ln in f]
        except OSError as exc:
            log.warning("Skipping unreadable file %s: %s", path, exc)
            continue

        for entry in split(raw_lines):
            strings.append(fold_text(entry) if fold else entry)

        file_count += 1
        if file_count % PROGRESS_EVERY_FILES == 0:
            log.info("[scanned] files=%d entries=%d", file_count, len(strings))

    log.info("Loaded %d entries from %d files (unit=%s)", len(strings), file_count, unit)
    return strings

def build_corpus(roots: Iterable[str],
                 strings: Iterable[str] = (),
                 unit: Optional[str] = None,
                 fold: Optional[bool] = None) -> List[str]:
    """Entries loaded from `roots`, followed by the inline `strings` (folded alike when asked)."""
    roots = list(roots)
    fold = CFG.FOLD if fold is None else fold
    corpus = load_strings(roots, unit=unit, fold=fold) if roots else []
    corpus.extend(fold_text(s) if fold else s for s in strings)
    return corpus

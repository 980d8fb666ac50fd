from __future__ import annotations
import argparse, json, logging, os, sys

from . import config as CFG
from .errors import SearchError, NoMatches, NotFound, EmptyingRepository, QueryShrunk
from .loader import build_corpus
from .normalize import fold as fold_text
from .searcher import Searcher

log = logging.getLogger(__name__)

def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"

def _clear_screen():
    # ANSI clear; fallback to newlines if not a TTY
    if sys.stdout.isatty():
        print("\033[2J\033[H", end="", flush=True)
    else:
        print("\n" * 100)

def _print_state(s: Searcher, k: int, as_json: bool = False) -> None:
    rows = s.results()
    if as_json:
        print(json.dumps({"query": s.query, "results": rows, "count": len(rows)}, ensure_ascii=False))
        return
    print(_c(f"[query] {s.query!r}  ({len(rows)} of {len(s)})", "1;37"))
    if not rows:
        print(_c("(no entries)", "2;37")); return
    for i, r in enumerate(rows[:k], 1):
        print(f"{i:<3} {r}")
    if len(rows) > k:
        print(_c(f"... {len(rows) - k} more", "2;37"))

def _report(err: SearchError) -> None:
    """Print a SearchError by variant: state untouched vs. state repaired."""
    if isinstance(err, NoMatches):
        print(_c(f"(rejected {err.character!r}: no entry matches)", "1;31"))
    elif isinstance(err, QueryShrunk):
        print(_c(f"(removed {err.removed!r}; query shrunk to {err.query!r})", "1;33"))
    elif isinstance(err, NotFound):
        print(_c(f"(not found: {err.string!r})", "1;31"))
    elif isinstance(err, EmptyingRepository):
        print(_c("(refused: can't remove the last entry)", "1;31"))
    else:
        print(_c(f"(error: {err})", "1;31"))

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Reductive search REPL (type to narrow)")
    p.add_argument("--roots", nargs="+", default=[], help="Folders or files to read entries from")
    p.add_argument("--strings", nargs="+", default=[], help="Inline corpus entries")
    p.add_argument("--unit", choices=["line", "paragraph"], default=None, help="Text unit for --roots")
    p.add_argument("--fold", action="store_true", default=CFG.FOLD, help="Case/accent-insensitive matching")
    p.add_argument("-k", type=int, default=CFG.SHOW_K, help="Results shown per step")
    p.add_argument("--q", default=None, help="Type this text once and print the state")
    p.add_argument("--repl", action="store_true", help="Interactive loop (default when --q is absent)")
    p.add_argument("--json", action="store_true", help="Emit state as JSON")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    if not args.roots and not args.strings:
        p.error("one of --roots or --strings is required")

    corpus = build_corpus(args.roots, args.strings, args.unit, args.fold)
    s = Searcher(corpus)
    log.info("Searcher ready: %d entries", len(s))

    def type_in(text: str) -> None:
        try:
            s.type_text(fold_text(text) if args.fold else text)
        except NoMatches as err:
            _report(err)

    if args.q is not None:
        type_in(args.q)
        _print_state(s, args.k, args.json)
        if not args.repl:
            return 0

    print("Type to narrow (empty line to quit).  '-' drops a character, '#' resets.")
    print(_c("Commands: :add TEXT, :rm TEXT, :show, :clear, :reset, :back", "2;37"))

    while True:
        try:
            raw = input("> ")
        except (EOFError, KeyboardInterrupt):
            print(); break
        cmd = raw.strip()
        if raw == "":
            print("Goodbye!"); break
        if cmd in ("-", ":back"):
            s.remove_character()
        elif cmd in ("#", ":reset"):
            s.reset_search(); print(_c("(reset)", "2;36"))
        elif cmd in (":clear", ":cls"):
            _clear_screen(); continue
        elif cmd == ":show":
            pass
        elif cmd.startswith(":add "):
            # argument taken from raw so surrounding spaces stay part of the entry
            entry = raw.lstrip()[len(":add "):]
            s.add_to_vec(fold_text(entry) if args.fold else entry)
        elif cmd.startswith(":rm "):
            entry = raw.lstrip()[len(":rm "):]
            try:
                removed = s.remove_from_vec(fold_text(entry) if args.fold else entry)
                print(_c(f"(removed {removed!r})", "2;36"))
            except SearchError as err:
                _report(err)
        else:
            type_in(raw)
        _print_state(s, args.k, args.json)
    return 0

if __name__ == "__main__":
    sys.exit(main())

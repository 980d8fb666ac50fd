from __future__ import annotations

# Text unit for corpus entries: "line" or "paragraph"
TEXT_UNIT: str = "line"

# file types picked up when scanning a root folder
INCLUDE_EXTS = (".txt",)
ENCODING: str = "utf-8"

# blank lines make poor candidates; drop them while loading
SKIP_BLANK_LINES: bool = True

# apply normalize.fold() to corpus entries and typed text
FOLD: bool = False

# how many results the REPL / GUI print per step
SHOW_K: int = 10

# the GUI result pane scrolls, so it lists more before truncating
GUI_SHOW_K: int = 100

# web frontend
HOST: str = "127.0.0.1"
PORT: int = 8000

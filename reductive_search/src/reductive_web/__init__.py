"""Flask frontend: one shared Searcher session driven keystroke by keystroke over JSON."""
from __future__ import annotations
from .web import app, main

__all__ = ["app", "main"]

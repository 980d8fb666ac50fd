# app.py
# CustomTkinter GUI for Reductive Search (dark theme).
# - Load a corpus folder on a background thread (keeps UI responsive).
# - Edits in the search box are replayed as add/remove character steps;
#   a keystroke that matches nothing is reverted.
# - Add/remove corpus entries; results & event log panes.

from __future__ import annotations
import os
import threading
from typing import List, Optional

import tkinter.filedialog as fd
import tkinter.messagebox as mb
import customtkinter as ctk

# Project imports (installed package, or PYTHONPATH=src)
from reductive import config as CFG
from reductive import Searcher, SearchError, NoMatches, QueryShrunk, load_strings, fold


# -------------------- small helpers --------------------

def shorten_path(p: str, max_chars: int = 60) -> str:
    """Shorten long paths neatly for labels."""
    if len(p) <= max_chars:
        return p
    keep = max_chars // 2 - 3
    return p[:keep] + "..." + p[-keep:]


# -------------------- main app --------------------

class ReductiveSearchApp(ctk.CTk):
    """Dark-themed GUI: load a folder, then narrow its lines keystroke by keystroke."""

    def __init__(self, fold_text: bool = CFG.FOLD) -> None:
        super().__init__()

        ctk.set_appearance_mode("dark")
        ctk.set_default_color_theme("blue")

        self.title("Reductive Search")
        self.geometry("900x650")
        self.minsize(820, 560)

        # State
        self._searcher: Optional[Searcher] = None
        self._fold = fold_text
        self._loading_thread: Optional[threading.Thread] = None

        self.font_title = ctk.CTkFont(size=18, weight="bold")
        self.font_label = ctk.CTkFont(size=13)
        self.font_mono = ctk.CTkFont(family="Cascadia Mono, Menlo, Consolas, Courier New", size=13)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(4, weight=1)  # results
        self.grid_rowconfigure(5, weight=1)  # log

        self._build_header()
        self._build_source_bar()
        self._build_search()
        self._build_corpus_bar()
        self._build_results()
        self._build_log()

        self._set_status("Ready")

    # --------- UI sections ---------

    def _build_header(self) -> None:
        header = ctk.CTkFrame(self, corner_radius=10)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 6))
        ctk.CTkLabel(header, text="Reductive Search", font=self.font_title).grid(
            row=0, column=0, sticky="w", padx=12, pady=10
        )

    def _build_source_bar(self) -> None:
        bar = ctk.CTkFrame(self, corner_radius=10)
        bar.grid(row=1, column=0, sticky="ew", padx=12, pady=6)
        bar.grid_columnconfigure(1, weight=1)

        ctk.CTkButton(bar, text="Choose Folder", command=self._choose_folder).grid(
            row=0, column=0, padx=(12, 6), pady=10
        )
        self.lbl_source = ctk.CTkLabel(bar, text="No source selected", anchor="w", font=self.font_label)
        self.lbl_source.grid(row=0, column=1, sticky="ew", padx=6, pady=10)

        self.progress = ctk.CTkProgressBar(bar, mode="indeterminate")
        self.progress.grid(row=0, column=2, sticky="e", padx=(0, 6), pady=10)

        self.lbl_status = ctk.CTkLabel(bar, text="Status: —", anchor="e")
        self.lbl_status.grid(row=0, column=3, sticky="e", padx=12, pady=10)

    def _build_search(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=2, column=0, sticky="ew", padx=12, pady=6)
        box.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(box, text="Type to narrow:", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=10
        )
        self.entry_query = ctk.CTkEntry(box, placeholder_text="Start typing…")
        self.entry_query.grid(row=0, column=1, sticky="ew", padx=6, pady=10)
        self.entry_query.bind("<KeyRelease>", self._on_query_changed)

        ctk.CTkButton(box, text="Reset", width=80, command=self._reset).grid(
            row=0, column=2, padx=(0, 12), pady=10
        )

    def _build_corpus_bar(self) -> None:
        box = ctk.CTkFrame(self, corner_radius=10)
        box.grid(row=3, column=0, sticky="ew", padx=12, pady=6)
        box.grid_columnconfigure(0, weight=1)

        self.entry_corpus = ctk.CTkEntry(box, placeholder_text="Corpus entry to add or remove")
        self.entry_corpus.grid(row=0, column=0, sticky="ew", padx=(12, 6), pady=10)
        ctk.CTkButton(box, text="Add", width=80, command=self._add_entry).grid(row=0, column=1, padx=6, pady=10)
        ctk.CTkButton(box, text="Remove", width=80, command=self._remove_entry).grid(
            row=0, column=2, padx=(0, 12), pady=10
        )

    def _build_results(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=4, column=0, sticky="nsew", padx=12, pady=6)
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        self.lbl_results = ctk.CTkLabel(frame, text="Results", font=self.font_label)
        self.lbl_results.grid(row=0, column=0, sticky="w", padx=12, pady=(10, 2))

        self.txt_results = ctk.CTkTextbox(frame, wrap="word", font=self.font_mono)
        self.txt_results.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self.txt_results.configure(state="disabled")
        self._set_results("(load a folder to begin)")

    def _build_log(self) -> None:
        frame = ctk.CTkFrame(self, corner_radius=10)
        frame.grid(row=5, column=0, sticky="nsew", padx=12, pady=(6, 12))
        frame.grid_columnconfigure(0, weight=1)
        frame.grid_rowconfigure(1, weight=1)

        ctk.CTkLabel(frame, text="Event log", font=self.font_label).grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 2)
        )
        self.txt_log = ctk.CTkTextbox(frame, height=110, wrap="word", font=ctk.CTkFont(size=12))
        self.txt_log.grid(row=1, column=0, sticky="nsew", padx=12, pady=(0, 12))
        self._log("GUI ready. Choose a folder to begin.")

    # --------- loading pipeline (threaded) ---------

    def _choose_folder(self) -> None:
        path = fd.askdirectory(title="Choose corpus folder")
        if not path:
            return
        if self._loading_thread and self._loading_thread.is_alive():
            mb.showinfo("Loading", "A corpus is already loading. Please wait.")
            return

        self.lbl_source.configure(text=f"Folder: {shorten_path(path)}")
        self._set_status("Loading…")
        self.progress.start()

        self._loading_thread = threading.Thread(target=self._load_worker, args=(path,), daemon=True)
        self._loading_thread.start()

    def _load_worker(self, root: str) -> None:
        # Searcher itself is only touched on the Tk thread (see _on_load_ok)
        try:
            strings = load_strings([root], fold=self._fold)
        except (OSError, ValueError) as exc:
            self.after(0, lambda: self._on_load_error(exc))
            return
        self.after(0, lambda: self._on_load_ok(strings))

    def _on_load_ok(self, strings: List[str]) -> None:
        self.progress.stop()
        self._searcher = Searcher(strings)
        self.entry_query.delete(0, "end")
        self._set_status(f"Loaded {len(strings):,} entries.")
        self._log(f"Corpus ready ({len(strings)} entries).")
        self._show()
        self.entry_query.focus_set()

    def _on_load_error(self, exc: Exception) -> None:
        self.progress.stop()
        self._set_status("Error while loading corpus.")
        self._log(f"ERROR: {exc!r}")
        mb.showerror("Load error", "Failed to load corpus.\nSee event log for details.")

    # --------- search ---------

    def _on_query_changed(self, _ev=None) -> None:
        s = self._searcher
        if s is None:
            return
        text = self.entry_query.get()
        if self._fold:
            text = fold(text)

        # replay the edit: drop what no longer matches the box, then type the rest
        keep = len(os.path.commonprefix([text, s.query]))
        for _ in range(len(s.query) - keep):
            s.remove_character()
        try:
            s.type_text(text[keep:])
        except NoMatches as err:
            self._log(f"Rejected {err.character!r}: nothing contains {s.query + err.character!r}")
            self.entry_query.delete(0, "end")
            self.entry_query.insert(0, s.query)
        self._show()

    def _reset(self) -> None:
        if self._searcher is None:
            return
        self._searcher.reset_search()
        self.entry_query.delete(0, "end")
        self._show()

    def _add_entry(self) -> None:
        entry = self.entry_corpus.get()
        if self._searcher is None or not entry:
            return
        self._searcher.add_to_vec(fold(entry) if self._fold else entry)
        self._log(f"Added {entry!r}.")
        self._show()

    def _remove_entry(self) -> None:
        entry = self.entry_corpus.get()
        if self._searcher is None or not entry:
            return
        try:
            self._searcher.remove_from_vec(fold(entry) if self._fold else entry)
            self._log(f"Removed {entry!r}.")
        except QueryShrunk as err:
            self._log(f"Removed {err.removed!r}; query shrunk to {err.query!r}.")
            self.entry_query.delete(0, "end")
            self.entry_query.insert(0, err.query)
        except SearchError as err:
            self._log(f"Not removed: {err}")
        self._show()

    # --------- misc UI helpers ---------

    def _show(self) -> None:
        s = self._searcher
        rows = s.results() if s else []
        self.lbl_results.configure(text=f"Results ({len(rows)} of {len(s) if s else 0})")
        lines = rows[:CFG.GUI_SHOW_K]
        if len(rows) > len(lines):
            lines.append(f"... {len(rows) - len(lines)} more")
        self._set_results("\n".join(lines))

    def _set_status(self, text: str) -> None:
        self.lbl_status.configure(text=f"Status: {text}")

    def _set_results(self, text: str) -> None:
        self.txt_results.configure(state="normal")
        self.txt_results.delete("0.0", "end")
        if text:
            self.txt_results.insert("end", text)
        self.txt_results.configure(state="disabled")

    def _log(self, msg: str) -> None:
        self.txt_log.insert("end", msg + "\n")
        self.txt_log.see("end")


if __name__ == "__main__":
    app = ReductiveSearchApp()
    app.mainloop()

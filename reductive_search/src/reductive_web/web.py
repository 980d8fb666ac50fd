from __future__ import annotations
import argparse
import logging
from flask import Flask, request, jsonify, Response
from reductive import config as CFG
from reductive.errors import SearchError, NoMatches, NotFound, EmptyingRepository, QueryShrunk
from reductive.shared import SharedSearcher
from reductive.loader import build_corpus
from reductive.normalize import fold as fold_text

log = logging.getLogger(__name__)

app = Flask(__name__)
_searcher: SharedSearcher | None = None
_fold: bool = False  # fold typed characters and entries the way the corpus was folded

_ERROR_CODES = {
    NoMatches: ("no_matches", 409),
    EmptyingRepository: ("emptying_repository", 409),
    NotFound: ("not_found", 404),
}

def _state(**extra):
    query, rows = _searcher.snapshot()  # type: ignore[union-attr]
    return {"query": query, "results": rows, "count": len(rows), **extra}

def _field(name: str) -> str:
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("JSON body must be an object")
    value = data.get(name)
    if not isinstance(value, str):
        raise ValueError(f"JSON body must carry a string field {name!r}")
    return value

def _entry() -> str:
    s = _field("s")
    return fold_text(s) if _fold else s

# ---------- session guard ----------
@app.before_request
def require_session():
    # app imported without main() (e.g. `flask run`): no searcher to serve yet
    if _searcher is None and request.path.startswith("/api/") and request.path != "/api/health":
        return jsonify({"error": "not_ready", "message": "no corpus loaded"}), 503

# ---------- errors ----------
@app.errorhandler(SearchError)
def on_search_error(err: SearchError):
    # QueryShrunk is an applied change: report it with the new state, not as a failure
    if isinstance(err, QueryShrunk):
        return jsonify(_state(error="query_shrunk", removed=err.removed, changed=True))
    code, status = _ERROR_CODES.get(type(err), ("search_error", 400))
    body = _state(error=code, message=str(err), changed=False)
    if isinstance(err, NoMatches):
        body["character"] = err.character
    return jsonify(body), status

@app.errorhandler(ValueError)
def on_bad_request(err: ValueError):
    return jsonify({"error": "bad_request", "message": str(err)}), 400

# ---------- API ----------
@app.get("/api/health")
def api_health():
    return jsonify({"ok": _searcher is not None})

@app.get("/api/state")
def api_state():
    return jsonify(_state())

@app.post("/api/char")
def api_char():
    c = _field("c")
    if _fold:
        # a folded key can expand ("ß" -> "ss") or vanish (a lone combining mark)
        _searcher.type_keystroke(fold_text(c))  # type: ignore[union-attr]
    else:
        _searcher.add_character(c)  # type: ignore[union-attr]
    return jsonify(_state())

@app.post("/api/backspace")
def api_backspace():
    _searcher.remove_character()  # type: ignore[union-attr]
    return jsonify(_state())

@app.post("/api/reset")
def api_reset():
    _searcher.reset_search()  # type: ignore[union-attr]
    return jsonify(_state())

@app.post("/api/corpus")
def api_corpus_add():
    _searcher.add_to_vec(_entry())  # type: ignore[union-attr]
    return jsonify(_state()), 201

@app.delete("/api/corpus")
def api_corpus_remove():
    removed = _searcher.remove_from_vec(_entry())  # type: ignore[union-attr]
    return jsonify(_state(removed=removed))

# ---------- UI ----------
@app.get("/")
def home():
    # One page, no external deps: every keystroke goes to the API, rejected keys are not echoed.
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>Reductive Search • Flask UI</title>
<style>
:root{ --bg:#0b0f14; --panel:#0f141b; --ink:#cfd8e3; --muted:#8a94a6; --accent:#6ee7ff;
       --border:#1c2530; --warn:#ffc861; --mark-bg:rgba(110,231,255,.2); }
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink);
      font:16px/1.45 system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,"Helvetica Neue",Arial; }
.container{ max-width:860px; margin:24px auto; padding:0 16px; }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px; }
h1{ font-size:20px; margin:0 0 8px 0; }
.row{ display:flex; gap:10px; margin:10px 0; }
input{ flex:1; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
       background:#0b1117; color:var(--ink); outline:none; font-size:16px; }
input:focus{ border-color:var(--accent) }
.btn{ padding:10px 14px; border-radius:10px; border:1px solid var(--border);
      background:#0b1117; color:var(--ink); cursor:pointer; }
.meta{ color:var(--muted); font-size:13px; }
.msg{ color:var(--warn); font-size:13px; min-height:1.2em; }
ul{ list-style:none; padding:0; margin:12px 0 0 0; border:1px solid var(--border); border-radius:12px; }
li{ padding:10px 14px; border-top:1px solid var(--border); white-space:pre-wrap; }
li:first-child{ border-top:none }
.mark{ background:var(--mark-bg) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Reductive Search</h1>
      <div class="row">
        <input id="q" type="text" placeholder="Type to narrow…" autocomplete="off" autofocus />
        <button id="reset" class="btn">Reset</button>
      </div>
      <div class="row">
        <input id="entry" type="text" placeholder="Corpus entry" autocomplete="off" />
        <button id="add" class="btn">Add</button>
        <button id="rm" class="btn">Remove</button>
      </div>
      <div class="meta" id="stats">Ready.</div>
      <div class="msg" id="msg"></div>
      <ul id="out"></ul>
    </div>
  </div>
<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), stats = $("#stats"), msg = $("#msg"), entry = $("#entry");

function esc(s){ return s.replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
function render(st){
  q.value = st.query;
  stats.textContent = `Query: "${st.query}" • ${st.count} result(s)`;
  out.innerHTML = st.results.map(r => {
    const e = esc(r);
    return `<li>${st.query ? e.split(esc(st.query)).join(`<span class="mark">${esc(st.query)}</span>`) : e}</li>`;
  }).join("");
}
async function call(method, path, body){
  const resp = await fetch(path, { method, headers: {"Content-Type":"application/json"},
                                   body: body ? JSON.stringify(body) : undefined });
  const st = await resp.json();
  if(st.error === "no_matches") msg.textContent = `No entry matches with '${st.character}' added.`;
  else if(st.error === "query_shrunk") msg.textContent = `Removed; query shrunk to "${st.query}".`;
  else if(st.error) msg.textContent = st.message || st.error;
  else msg.textContent = "";
  if(st.results) render(st);
}
q.addEventListener("keydown", (ev)=>{
  if(ev.key === "Backspace"){ ev.preventDefault(); call("POST", "/api/backspace"); }
  else if(ev.key === "Escape"){ ev.preventDefault(); call("POST", "/api/reset"); }
  else if(ev.key.length === 1 && !ev.ctrlKey && !ev.metaKey){ ev.preventDefault(); call("POST", "/api/char", {c: ev.key}); }
});
$("#reset").addEventListener("click", ()=>{ call("POST", "/api/reset"); q.focus(); });
$("#add").addEventListener("click", ()=> entry.value && call("POST", "/api/corpus", {s: entry.value}));
$("#rm").addEventListener("click", ()=> entry.value && call("DELETE", "/api/corpus", {s: entry.value}));
call("GET", "/api/state");
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of a shared Searcher")
    ap.add_argument("--roots", nargs="+", default=[])
    ap.add_argument("--strings", nargs="+", default=[])
    ap.add_argument("--unit", choices=["line", "paragraph"])
    ap.add_argument("--fold", action="store_true", default=CFG.FOLD)
    ap.add_argument("--host", default=CFG.HOST)
    ap.add_argument("--port", type=int, default=CFG.PORT)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)
    if not args.roots and not args.strings:
        ap.error("one of --roots or --strings is required")

    global _searcher, _fold
    _fold = args.fold
    _searcher = SharedSearcher(build_corpus(args.roots, args.strings, args.unit, args.fold))
    log.info("Serving %d entries on %s:%d", len(_searcher), args.host, args.port)

    app.run(host=args.host, port=args.port, debug=args.verbose)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())

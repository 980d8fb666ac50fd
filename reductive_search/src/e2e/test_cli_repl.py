from pathlib import Path
import json
import pytest
from reductive.__main__ import main

def _feed(monkeypatch, lines):
    it = iter(lines)
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(it))

@pytest.mark.e2e
def test_single_query_prints_state(capsys):
    assert main(["--strings", "hi", "hill", "hello", "--q", "he"]) == 0
    out = capsys.readouterr().out
    assert "[query] 'he'  (1 of 3)" in out
    assert "hello" in out and "hill" not in out

@pytest.mark.e2e
def test_single_query_json(capsys):
    main(["--strings", "hi", "hill", "hello", "--q", "hi", "--json"])
    state = json.loads(capsys.readouterr().out.strip())
    assert state == {"query": "hi", "results": ["hi", "hill"], "count": 2}

@pytest.mark.e2e
def test_repl_session(monkeypatch, capsys):
    _feed(monkeypatch, ["he", ":rm hello", "z", "-", ":add hev suit", "#", ""])
    assert main(["--strings", "hi", "hill", "hello"]) == 0
    out = capsys.readouterr().out
    assert "(removed 'hello'; query shrunk to 'h')" in out
    assert "(rejected 'z': no entry matches)" in out
    assert "[query] ''  (2 of 2)" in out      # after '-'
    assert "(reset)" in out
    assert "[query] ''  (3 of 3)" in out      # after :add + reset
    assert out.rstrip().endswith("Goodbye!")

@pytest.mark.e2e
def test_repl_refuses_last_entry(monkeypatch, capsys):
    _feed(monkeypatch, [":rm hello", ":rm nope", ""])
    main(["--strings", "hello"])
    out = capsys.readouterr().out
    assert "(refused: can't remove the last entry)" in out

@pytest.mark.e2e
def test_roots_with_fold(tmp_path: Path, capsys):
    root = tmp_path / "Archive"; root.mkdir()
    (root / "mix.txt").write_text("Café con leche.\nA naïve approach.\n", encoding="utf-8")
    main(["--roots", str(root), "--fold", "--q", "NAIVE", "--json"])
    state = json.loads(capsys.readouterr().out.strip())
    assert state["results"] == ["a naive approach."]

def test_requires_a_corpus():
    with pytest.raises(SystemExit):
        main([])

@pytest.mark.e2e
def test_repl_entries_keep_surrounding_spaces(monkeypatch, capsys):
    _feed(monkeypatch, [":add  padded ", "d ", ":rm  padded ", ""])
    main(["--strings", "alpha", "beta", "--json"])
    states = [json.loads(ln) for ln in capsys.readouterr().out.splitlines() if ln.startswith("{")]
    assert states[0]["count"] == 3            # " padded " added
    assert states[1]["results"] == [" padded "]
    assert states[2]["query"] == ""           # exact entry removed, query shrunk
    assert states[2]["results"] == ["alpha", "beta"]

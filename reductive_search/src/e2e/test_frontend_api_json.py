import pytest
from reductive import SharedSearcher
from reductive_web.web import app as flask_app
import reductive_web.web as webmod

@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(webmod, "_searcher", SharedSearcher(["hi", "hill", "hello"]))
    monkeypatch.setattr(webmod, "_fold", False)
    return flask_app.test_client()

@pytest.mark.e2e
def test_state_and_typing(client):
    rv = client.get("/api/state")
    assert rv.status_code == 200
    assert rv.get_json() == {"query": "", "results": ["hi", "hill", "hello"], "count": 3}

    rv = client.post("/api/char", json={"c": "h"})
    assert rv.status_code == 200
    rv = client.post("/api/char", json={"c": "e"})
    assert rv.get_json()["results"] == ["hello"]

    rv = client.post("/api/backspace")
    assert rv.get_json()["query"] == "h"

@pytest.mark.e2e
def test_rejected_character_is_409_with_unchanged_state(client):
    client.post("/api/char", json={"c": "h"})
    rv = client.post("/api/char", json={"c": "a"})
    assert rv.status_code == 409
    data = rv.get_json()
    assert data["error"] == "no_matches"
    assert data["character"] == "a"
    assert data["changed"] is False
    assert data["query"] == "h"
    assert data["results"] == ["hi", "hill", "hello"]

@pytest.mark.e2e
def test_corpus_add_and_remove(client):
    client.post("/api/char", json={"c": "h"})
    client.post("/api/char", json={"c": "e"})

    rv = client.post("/api/corpus", json={"s": "hev suit"})
    assert rv.status_code == 201
    assert rv.get_json()["results"] == ["hello", "hev suit"]

    rv = client.delete("/api/corpus", json={"s": "hev suit"})
    assert rv.status_code == 200
    assert rv.get_json()["removed"] == "hev suit"

    rv = client.delete("/api/corpus", json={"s": "hello"})
    assert rv.status_code == 200
    data = rv.get_json()
    assert data["error"] == "query_shrunk"
    assert data["changed"] is True
    assert data["query"] == "h"
    assert data["results"] == ["hi", "hill"]

    rv = client.delete("/api/corpus", json={"s": "nope"})
    assert rv.status_code == 404
    assert rv.get_json()["error"] == "not_found"

@pytest.mark.e2e
def test_emptying_and_bad_requests(client, monkeypatch):
    monkeypatch.setattr(webmod, "_searcher", SharedSearcher(["hello"]))
    rv = client.delete("/api/corpus", json={"s": "hello"})
    assert rv.status_code == 409
    assert rv.get_json()["error"] == "emptying_repository"
    assert rv.get_json()["results"] == ["hello"]

    assert client.post("/api/char", json={}).status_code == 400
    assert client.post("/api/char", json={"c": "ab"}).status_code == 400

@pytest.mark.e2e
def test_reset(client):
    client.post("/api/char", json={"c": "l"})
    rv = client.post("/api/reset")
    assert rv.get_json()["count"] == 3

@pytest.mark.e2e
def test_folded_typing(client, monkeypatch):
    monkeypatch.setattr(webmod, "_searcher", SharedSearcher(["strasse", "weg"]))
    monkeypatch.setattr(webmod, "_fold", True)
    rv = client.post("/api/char", json={"c": "ß"})
    assert rv.status_code == 200
    assert rv.get_json()["query"] == "ss"

@pytest.mark.e2e
def test_non_object_json_body_is_bad_request(client):
    rv = client.post("/api/char", json=["h"])
    assert rv.status_code == 400
    assert rv.get_json()["error"] == "bad_request"

    rv = client.post("/api/corpus", json="hev suit")
    assert rv.status_code == 400
    assert rv.get_json()["error"] == "bad_request"
    assert client.get("/api/state").get_json()["count"] == 3

@pytest.mark.e2e
def test_folded_keystroke_is_all_or_nothing(client, monkeypatch):
    # "ß" folds to "ss": the first "s" matches "sa", the second does not
    monkeypatch.setattr(webmod, "_searcher", SharedSearcher(["sa", "x"]))
    monkeypatch.setattr(webmod, "_fold", True)
    rv = client.post("/api/char", json={"c": "ß"})
    assert rv.status_code == 409
    data = rv.get_json()
    assert data["changed"] is False
    assert data["query"] == ""
    assert data["results"] == ["sa", "x"]

@pytest.mark.e2e
def test_api_without_session_is_503(monkeypatch):
    monkeypatch.setattr(webmod, "_searcher", None)
    c = flask_app.test_client()
    for rv in (c.get("/api/state"),
               c.post("/api/char", json={"c": "h"}),
               c.post("/api/reset"),
               c.delete("/api/corpus", json={"s": "x"})):
        assert rv.status_code == 503
        assert rv.get_json()["error"] == "not_ready"
    assert c.get("/api/health").get_json() == {"ok": False}

import threading
from reductive import SharedSearcher, substring_filter, NoMatches, QueryShrunk

def test_shared_searcher_delegates():
    s = SharedSearcher(["hi", "hill", "hello"])
    assert s.add_character("h") == "h"
    assert s.type_text("e") == "he"
    assert s.snapshot() == ("he", ["hello"])
    s.remove_character()
    assert s.query == "h"
    s.add_to_vec("ho")
    assert s.results() == ["hi", "hill", "hello", "ho"]
    assert s.remove_from_vec("ho") == "ho"
    s.reset_search()
    assert s.snapshot() == ("", ["hi", "hill", "hello"])
    assert len(s) == 3

def test_concurrent_edits_stay_consistent():
    s = SharedSearcher(["alpha", "beta", "gamma", "delta"])
    errors = []

    def typist(word: str):
        for _ in range(200):
            for ch in word:
                try:
                    s.add_character(ch)
                except NoMatches:
                    pass
            s.reset_search()

    def editor():
        for i in range(200):
            s.add_to_vec(f"extra{i}")
            try:
                s.remove_from_vec(f"extra{i}")
            except QueryShrunk:
                pass

    def checker():
        for _ in range(500):
            query, rows = s.snapshot()
            if not query:
                continue
            if any(query not in r for r in rows):
                errors.append((query, rows))

    threads = [threading.Thread(target=typist, args=("alp",)),
               threading.Thread(target=typist, args=("elt",)),
               threading.Thread(target=editor),
               threading.Thread(target=checker)]
    for t in threads: t.start()
    for t in threads: t.join()

    assert errors == []
    query, rows = s.snapshot()
    assert query == ""
    assert rows == substring_filter(rows, query)

def test_type_keystroke_rolls_back_partial_text():
    s = SharedSearcher(["sa", "x"])
    try:
        s.type_keystroke("ss")
    except NoMatches as err:
        assert err.character == "s"
    else:
        raise AssertionError("expected NoMatches")
    assert s.snapshot() == ("", ["sa", "x"])

def test_type_keystroke_keeps_earlier_query():
    s = SharedSearcher(["strasse", "sa"])
    s.add_character("s")
    assert s.type_keystroke("tr") == "str"
    try:
        s.type_keystroke("az")
    except NoMatches:
        pass
    assert s.snapshot() == ("str", ["strasse"])

from datetime import datetime

from gemview.history import MAX_HISTORY, History
from gemview.models.history_record import HistoryRecord


def urls(history):
    return [r.url for r in history.records]


def test_same_url_twice_is_one_record():
    history = History()
    history.open_url("gemini://h/a")
    history.open_url("gemini://h/a")
    assert urls(history) == ["gemini://h/a"]


def test_oldest_record_evicted():
    history = History()
    for i in range(MAX_HISTORY + 5):
        history.open_url(f"gemini://h/{i}")
    assert len(history) == MAX_HISTORY
    assert history.records[0].url == "gemini://h/5"
    assert history.item(0).url == f"gemini://h/{MAX_HISTORY + 4}"


def test_new_open_after_back_cuts_forward_branch():
    history = History()
    for name in "abcd":
        history.open_url(f"gemini://h/{name}")
    assert history.go_back() == "gemini://h/c"
    assert history.go_back() == "gemini://h/b"
    assert history.pos == 2
    history.open_url("gemini://h/x")
    assert history.pos == 0
    assert urls(history) == ["gemini://h/a", "gemini://h/b", "gemini://h/x"]


def test_reopening_current_after_back_does_not_duplicate():
    history = History()
    for name in "abc":
        history.open_url(f"gemini://h/{name}")
    history.go_back()
    history.open_url("gemini://h/b")
    assert urls(history) == ["gemini://h/a", "gemini://h/b"]
    assert history.pos == 0


def test_redirect_rewrites_current_record_only():
    history = History()
    history.open_url("gemini://h/a")
    history.open_url("gemini://h/b")
    when = history.item(0).when
    history.open_url("gemini://h/b2", redirect=True)
    assert len(history) == 2
    assert history.item(0).url == "gemini://h/b2"
    assert history.item(0).when == when


def test_redirect_on_empty_history_is_harmless():
    history = History()
    history.open_url("gemini://h/a", redirect=True)
    assert len(history) == 0


def test_suppressed_open_changes_nothing():
    history = History()
    history.open_url("gemini://h/a")
    history.open_url("gemini://h/b")
    history.go_back()
    history.open_url("gemini://h/a", suppress_history=True)
    assert urls(history) == ["gemini://h/a", "gemini://h/b"]
    assert history.pos == 1


def test_back_and_forward_bounds():
    history = History()
    assert history.go_back() is None
    assert history.go_forward() is None
    history.open_url("gemini://h/a")
    assert history.go_back() is None
    history.open_url("gemini://h/b")
    assert history.go_back() == "gemini://h/a"
    assert history.go_back() is None
    assert history.go_forward() == "gemini://h/b"
    assert history.go_forward() is None
    assert history.pos == 0


def test_item_out_of_range():
    history = History()
    assert history.item(0) is None
    assert history.url(3) == ""


# --- Persistence ---

def test_save_and_load(tmp_path):
    path = tmp_path / "history.txt"
    history = History()
    history._items = [
        HistoryRecord("gemini://h/a", datetime(2020, 7, 1, 12, 30, 5)),
        HistoryRecord("file:///tmp/a b.gmi", datetime(2020, 7, 2, 8, 0, 0)),
    ]
    history.save(path)
    assert path.read_text() == (
        "2020-07-01T12:30:05 gemini://h/a\n"
        "2020-07-02T08:00:00 file:///tmp/a b.gmi\n"
    )
    loaded = History()
    loaded.load(path)
    assert urls(loaded) == ["gemini://h/a", "file:///tmp/a b.gmi"]
    assert loaded.records[0].when == datetime(2020, 7, 1, 12, 30, 5)
    assert loaded.pos == 0


def test_load_stops_at_malformed_line(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text(
        "2020-07-01T12:30:05 gemini://h/a\n"
        "garbage\n"
        "2020-07-03T12:30:05 gemini://h/c\n"
    )
    history = History()
    history.load(path)
    assert urls(history) == ["gemini://h/a"]


def test_load_stops_at_year_zero(tmp_path):
    path = tmp_path / "history.txt"
    path.write_text(
        "2020-07-01T12:30:05 gemini://h/a\n"
        "0000-00-00T00:00:00 gemini://h/b\n"
    )
    history = History()
    history.load(path)
    assert urls(history) == ["gemini://h/a"]


def test_load_missing_file_is_empty(tmp_path):
    history = History()
    history.load(tmp_path / "nope.txt")
    assert len(history) == 0


def test_save_failure_is_swallowed(tmp_path):
    history = History()
    history.open_url("gemini://h/a")
    history.save(tmp_path / "missing-dir" / "history.txt")

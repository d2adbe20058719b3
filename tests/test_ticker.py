import pytest

from gemview.ticker import TickerScheduler


def test_self_rescheduling_ticker_runs_once_per_frame():
    """A ticker that adds itself again lands in the next frame, not this one."""
    tickers = TickerScheduler()
    handle = tickers.new_handle("anim")
    runs = []

    def tick():
        runs.append(len(runs))
        tickers.add(handle, tick)

    tickers.add(handle, tick)
    assert tickers.run()
    assert runs == [0]
    assert handle in tickers
    assert tickers.run()
    assert runs == [0, 1]


def test_same_handle_keeps_latest_callback():
    tickers = TickerScheduler()
    handle = tickers.new_handle()
    runs = []
    tickers.add(handle, lambda: runs.append("first"))
    tickers.add(handle, lambda: runs.append("second"))
    assert len(tickers) == 1
    tickers.run()
    assert runs == ["second"]


def test_run_clears_and_requests_refresh():
    refreshes = []
    tickers = TickerScheduler(on_pending=lambda: refreshes.append(1))
    assert not tickers.run()
    assert refreshes == []
    tickers.add(tickers.new_handle(), lambda: None)
    assert tickers.run()
    assert refreshes == [1]
    assert len(tickers) == 0


def test_tickers_run_in_registration_order_of_handles():
    tickers = TickerScheduler()
    a, b, c = tickers.new_handle("a"), tickers.new_handle("b"), tickers.new_handle("c")
    order = []
    tickers.add(c, lambda: order.append("c"))
    tickers.add(a, lambda: order.append("a"))
    tickers.add(b, lambda: order.append("b"))
    tickers.run()
    assert order == ["a", "b", "c"]


def test_handles_are_never_reused():
    tickers = TickerScheduler()
    handles = {tickers.new_handle() for _ in range(100)}
    assert len(handles) == 100


def test_remove_and_bad_identity():
    tickers = TickerScheduler()
    handle = tickers.new_handle()
    tickers.add(handle, lambda: pytest.fail("removed ticker ran"))
    tickers.remove(handle)
    assert not tickers.run()
    with pytest.raises(ValueError):
        tickers.add(object(), lambda: None)

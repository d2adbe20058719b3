import threading

from gemview.command_bus import CommandBus, EventType, HandlerChain


def drain(bus):
    events = []
    while True:
        ev = bus.poll_event()
        if ev is None:
            return events
        events.append(ev)


def test_commands_come_out_in_post_order():
    bus = CommandBus()
    bus.post("one")
    bus.post_formatted("open url:%s", "gemini://h/")
    bus.post("three")
    assert [(e.type, e.data) for e in drain(bus)] == [
        (EventType.COMMAND, "one"),
        (EventType.COMMAND, "open url:gemini://h/"),
        (EventType.COMMAND, "three"),
    ]


def test_post_formatted_without_args_is_verbatim():
    bus = CommandBus()
    bus.post_formatted("open url:gemini://h/100%")
    assert bus.poll_event().data == "open url:gemini://h/100%"


def test_refresh_requests_coalesce():
    bus = CommandBus()
    bus.post_refresh()
    bus.post_refresh()
    assert bus.pending_refresh
    events = drain(bus)
    assert [e.type for e in events] == [EventType.REFRESH]
    bus.clear_refresh()
    assert not bus.pending_refresh
    bus.post_refresh()
    assert len(bus) == 1


def test_quit_and_drop_events():
    bus = CommandBus()
    bus.post_drop("/tmp/x.gmi")
    bus.post_quit()
    drop, quit_ = drain(bus)
    assert drop.type is EventType.DROP_FILE and drop.data == "/tmp/x.gmi"
    assert quit_.type is EventType.QUIT


def test_wait_event_times_out_when_empty():
    assert CommandBus().wait_event(timeout=0.01) is None


def test_posting_from_other_threads():
    bus = CommandBus()

    def producer(n):
        for i in range(50):
            bus.post(f"cmd n:{n} i:{i}")

    threads = [threading.Thread(target=producer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    events = drain(bus)
    assert len(events) == 200
    # each producer's own commands stay in order
    for n in range(4):
        mine = [e.data for e in events if e.data.startswith(f"cmd n:{n} ")]
        assert mine == [f"cmd n:{n} i:{i}" for i in range(50)]


def test_handler_chain_first_match_wins():
    calls = []

    def declines(cmd):
        calls.append(("declines", cmd))
        return False

    def takes(cmd):
        calls.append(("takes", cmd))
        return True

    def never(cmd):
        calls.append(("never", cmd))
        return True

    chain = HandlerChain([declines, takes, never])
    assert chain.dispatch("x")
    assert calls == [("declines", "x"), ("takes", "x")]


def test_handler_chain_unhandled():
    chain = HandlerChain()
    chain.add(lambda cmd: False)
    assert not chain.dispatch("unknown.verb")

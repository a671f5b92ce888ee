from pixelpet.services.clock import ManualTicker
from pixelpet.services.kivy_ticker import KivyTicker


def test_interval_fires_on_schedule_and_stops_when_cancelled():
    ticker = ManualTicker()
    fired = []
    handle = ticker.schedule_interval(lambda dt: fired.append(ticker.now), 1.0)

    ticker.advance(3.5)
    assert fired == [1.0, 2.0, 3.0]

    handle.cancel()
    assert not handle.active
    ticker.advance(5)
    assert fired == [1.0, 2.0, 3.0]
    assert ticker.now == 8.5


def test_once_fires_a_single_time():
    ticker = ManualTicker()
    fired = []
    handle = ticker.schedule_once(lambda dt: fired.append(dt), 1.2)
    ticker.advance(1.0)
    assert fired == []
    ticker.advance(1.0)
    assert fired == [1.2]
    assert not handle.active
    assert ticker.pending == 0


def test_same_instant_timers_fire_in_scheduling_order():
    ticker = ManualTicker()
    order = []
    ticker.schedule_interval(lambda dt: order.append("a"), 1.0)
    ticker.schedule_interval(lambda dt: order.append("b"), 1.0)
    ticker.advance(2.0)
    assert order == ["a", "b", "a", "b"]


def test_cancel_from_inside_a_callback_prevents_later_firing():
    ticker = ManualTicker()
    fired = []
    second = ticker.schedule_interval(lambda dt: fired.append("second"), 1.0)

    def first(dt):
        fired.append("first")
        second.cancel()

    ticker.schedule_once(first, 0.5)
    ticker.advance(3)
    assert fired == ["first"]


class _FakeEvent:
    def __init__(self):
        self.is_triggered = True
        self.cancelled = 0

    def cancel(self):
        self.cancelled += 1
        self.is_triggered = False


class _FakeClock:
    def __init__(self):
        self.calls = []

    def schedule_interval(self, cb, interval):
        self.calls.append(("interval", interval))
        return _FakeEvent()

    def schedule_once(self, cb, delay):
        self.calls.append(("once", delay))
        return _FakeEvent()


def test_kivy_ticker_delegates_and_cancels_once():
    clock = _FakeClock()
    ticker = KivyTicker(clock=clock)
    handle = ticker.schedule_interval(lambda dt: None, 3.0)
    ticker.schedule_once(lambda dt: None, 1.2)
    assert clock.calls == [("interval", 3.0), ("once", 1.2)]

    assert handle.active
    handle.cancel()
    handle.cancel()
    assert not handle.active
    assert handle._event.cancelled == 1

"""Shared fixtures: manual scheduler and fake host collaborators."""

import pytest

from wallet_session_sdk import Account, Identity, StateSnapshot, Token


class FakeTimer:
    def __init__(self, scheduler, when, callback):
        self.scheduler = scheduler
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Manual clock with the call_later()/time() surface of an event loop."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def time(self):
        return self.now

    def call_later(self, delay, callback):
        timer = FakeTimer(self, self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled and t.callback is not None]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [t for t in self.pending if t.when <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.when)
            self.now = timer.when
            callback, timer.callback = timer.callback, None
            callback()
        self.now = target


class FakeSource:
    """Subscription source that records listeners and unsubscribes."""

    def __init__(self):
        self.listeners = []
        self.unsubscribed = 0

    def subscribe(self, listener):
        self.listeners.append(listener)

        def unsubscribe():
            self.listeners.remove(listener)
            self.unsubscribed += 1

        return unsubscribe

    def emit(self, value):
        for listener in list(self.listeners):
            listener(value)


class FakeStateSource(FakeSource):
    def __init__(self, snapshot):
        super().__init__()
        self.current = snapshot

    def snapshot(self):
        return self.current

    def update(self, snapshot):
        self.current = snapshot
        self.emit(snapshot)


ADDRESS = "0x9a0b7c1d2e3f405162738495a6b7c8d9e0f1a2b3"


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def lifecycle():
    return FakeSource()


@pytest.fixture
def dai():
    return Token(
        address="0x6b175474e89094c44da98b954eedeac495271d0f",
        symbol="DAI",
        balance="100",
        name="Dai Stablecoin",
        balance_fiat="100.00 USD",
    )


@pytest.fixture
def snapshot(dai):
    return StateSnapshot(
        accounts={ADDRESS: Account(address=ADDRESS, balance=hex(2 * 10**18))},
        identities={ADDRESS: Identity(address=ADDRESS, name="Account 1")},
        selected_address=ADDRESS,
        tokens=[dai],
        conversion_rate=1800.0,
        current_currency="usd",
        lock_time=30000,
    )


@pytest.fixture
def state_source(snapshot):
    return FakeStateSource(snapshot)


@pytest.fixture
def deep_link_source():
    return FakeSource()

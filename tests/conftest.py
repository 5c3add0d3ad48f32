import pytest
from pydantic import SecretStr

from config.settings import ServiceConfig
from persistence.store import InsertResult, RegistrationStore, StoreError
from notification.email_function import NotifyResponse
from registration.messages import Messages
from registration.state import RegistrationPayload


class FakeStore(RegistrationStore):
    def __init__(self, events, error=None, exc=None):
        self.events = events
        self.error = error
        self.exc = exc
        self.records = []

    async def insert(self, record):
        self.events.append("persist")
        self.records.append(record)
        if self.exc is not None:
            raise self.exc
        if self.error is not None:
            return InsertResult(error=self.error)
        return InsertResult(rows=[dict(record, id=1)])


class FakeNotifier:
    def __init__(self, events, status_code=200, exc=None):
        self.events = events
        self.status_code = status_code
        self.exc = exc
        self.bodies = []

    async def send(self, body):
        self.events.append("notify")
        self.bodies.append(body)
        if self.exc is not None:
            raise self.exc
        return NotifyResponse(status_code=self.status_code, reason="", body={"ok": self.status_code < 300})


class FakeTimer:
    def __init__(self, delay, callback, args):
        self.delay = delay
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    def __init__(self):
        self.timers = []

    def call_later(self, delay, callback, *args):
        timer = FakeTimer(delay, callback, args)
        self.timers.append(timer)
        return timer

    def advance(self, seconds):
        for t in self.timers:
            if not t.cancelled and not t.fired and t.delay <= seconds:
                t.fired = True
                t.callback(*t.args)


@pytest.fixture()
def config():
    return ServiceConfig(
        url="https://project.example.co",
        access_key=SecretStr("anon-key-0123456789"),
        locale="en",
    )


@pytest.fixture()
def messages():
    return Messages("en")


@pytest.fixture()
def payload():
    return RegistrationPayload(
        name="Ali",
        email="a@b.com",
        phone="+1",
        organization="Acme",
        country="X",
        city="Y",
    )


@pytest.fixture()
def events():
    return []


@pytest.fixture()
def duplicate_error():
    return StoreError(message="duplicate", code="23505")


@pytest.fixture()
def make_store(events):
    def _make(**kwargs):
        return FakeStore(events, **kwargs)

    return _make


@pytest.fixture()
def make_notifier(events):
    def _make(**kwargs):
        return FakeNotifier(events, **kwargs)

    return _make


@pytest.fixture()
def scheduler():
    return FakeScheduler()

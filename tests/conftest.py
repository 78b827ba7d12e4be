import datetime

import pytest

from config import Config
from ro_aviation import create_app
from ro_aviation.app_state import NotificationChannel
from ro_aviation.store import (SERVER_TIMESTAMP, ListenerRegistry, RecordSnapshot,
                               RecordStore, StoreError)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeRecordStore(RecordStore):
    """In-memory store double. Set ``fail_with`` to make every write raise StoreError."""

    def __init__(self):
        self.docs = {}
        self.calls = []
        self.fail_with = None
        self.listeners = ListenerRegistry()
        self._counter = 0

    def _next_stamp(self):
        self._counter += 1
        return datetime.datetime(2025, 1, 1) + datetime.timedelta(minutes=self._counter)

    def _write(self, op):
        self.calls.append(op)
        if self.fail_with:
            raise StoreError(self.fail_with)

    def _resolve(self, fields):
        stamp = self._next_stamp()
        return {k: (stamp if v is SERVER_TIMESTAMP else v) for k, v in fields.items()}

    def snapshot(self, path):
        return [RecordSnapshot(record_id, dict(data))
                for record_id, data in self.docs.get(path, {}).items()]

    def subscribe(self, path, on_snapshot, on_error=None):
        subscription = self.listeners.add(path, on_snapshot, on_error)
        on_snapshot(self.snapshot(path))
        return subscription

    def create(self, path, fields):
        self._write('create')
        self._counter += 1
        record_id = f"doc{self._counter:04d}"
        self.docs.setdefault(path, {})[record_id] = self._resolve(fields)
        self.listeners.notify(path, self.snapshot(path))
        return record_id

    def update(self, path, record_id, fields):
        self._write('update')
        docs = self.docs.get(path, {})
        if record_id not in docs:
            raise StoreError(f"No document to update: {path}/{record_id}")
        docs[record_id].update(self._resolve(fields))
        self.listeners.notify(path, self.snapshot(path))

    def delete(self, path, record_id):
        self._write('delete')
        self.docs.get(path, {}).pop(record_id, None)
        self.listeners.notify(path, self.snapshot(path))

    def seed(self, path, records):
        """Insert documents directly, bypassing call tracking."""
        ids = []
        for data in records:
            self._counter += 1
            record_id = f"doc{self._counter:04d}"
            self.docs.setdefault(path, {})[record_id] = dict(data)
            ids.append(record_id)
        self.listeners.notify(path, self.snapshot(path))
        return ids


class AppTestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    APP_ID = 'test-app'
    SQLALCHEMY_DATABASE_URI = None
    STAFF_PASSWORD = 'letmein'
    INITIAL_AUTH_TOKEN = None


class SqlTestConfig(AppTestConfig):
    SQLALCHEMY_DATABASE_URI = 'sqlite://'


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def fake_store():
    return FakeRecordStore()


@pytest.fixture()
def notifications(clock):
    return NotificationChannel(delay_ms=4000, clock=clock)


@pytest.fixture()
def app(fake_store, clock):
    app = create_app(AppTestConfig, store=fake_store)
    app.extensions['ro_aviation_clock'] = clock
    return app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def staff_client(client):
    response = client.post('/staff/login', data={'password': 'letmein'})
    assert response.status_code == 302
    return client


@pytest.fixture()
def sql_app():
    return create_app(SqlTestConfig)

from __future__ import annotations

import dataclasses
import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

import devevent.db as db_module
from devevent.db import ConnectionProvider, create_default_engine, get_provider, reset_provider
from devevent.services.error_codes import ErrorCode
from devevent.services.exceptions import ConfigurationError, DatabaseConnectionError

MEMORY_URL = "sqlite+pysqlite:///:memory:"


class CountingFactory:
    def __init__(self, *urls: str) -> None:
        self.calls: list[str] = []
        self._urls = list(urls)

    def __call__(self, url: str):
        self.calls.append(url)
        target = self._urls.pop(0) if self._urls else url
        return create_default_engine(target)


@pytest.mark.parametrize("url", [None, "", "   "])
def test_missing_connection_string_is_a_configuration_error(url):
    with pytest.raises(ConfigurationError) as exc_info:
        ConnectionProvider(url)
    assert exc_info.value.code == ErrorCode.DATABASE_URL_MISSING.value


def test_default_provider_requires_database_url(monkeypatch):
    monkeypatch.setattr(
        db_module, "settings", dataclasses.replace(db_module.settings, database_url=None)
    )
    reset_provider()
    try:
        with pytest.raises(ConfigurationError):
            get_provider()
    finally:
        reset_provider()


def test_connection_is_cached():
    factory = CountingFactory()
    provider = ConnectionProvider(MEMORY_URL, engine_factory=factory)

    first = provider.get_connection()
    second = provider.get_connection()

    assert first is second
    assert provider.is_connected
    assert len(factory.calls) == 1
    provider.close()


def test_concurrent_callers_share_one_attempt():
    started = threading.Event()
    release = threading.Event()
    calls: list[str] = []

    def slow_factory(url: str):
        calls.append(url)
        started.set()
        release.wait(timeout=5)
        return create_default_engine(url)

    provider = ConnectionProvider(MEMORY_URL, engine_factory=slow_factory)

    with ThreadPoolExecutor(max_workers=2) as executor:
        first = executor.submit(provider.get_connection)
        assert started.wait(timeout=5)
        second = executor.submit(provider.get_connection)
        time.sleep(0.05)
        release.set()
        engines = [first.result(timeout=5), second.result(timeout=5)]

    assert engines[0] is engines[1]
    assert len(calls) == 1
    provider.close()


def test_failed_attempt_is_cleared_and_retried(tmp_path):
    unreachable = f"sqlite:///{tmp_path / 'missing' / 'events.db'}"
    factory = CountingFactory(unreachable)
    provider = ConnectionProvider(MEMORY_URL, engine_factory=factory)

    with pytest.raises(DatabaseConnectionError) as exc_info:
        provider.get_connection()
    assert exc_info.value.code == ErrorCode.DATABASE_UNAVAILABLE.value
    assert not provider.is_connected

    engine = provider.get_connection()

    assert provider.is_connected
    assert engine is provider.get_connection()
    assert len(factory.calls) == 2
    provider.close()


def test_concurrent_waiters_see_the_failure():
    started = threading.Event()
    release = threading.Event()

    def failing_factory(url: str):
        started.set()
        release.wait(timeout=5)
        return create_default_engine("not a url")

    provider = ConnectionProvider(MEMORY_URL, engine_factory=failing_factory)

    with ThreadPoolExecutor(max_workers=2) as executor:
        first = executor.submit(provider.get_connection)
        assert started.wait(timeout=5)
        second = executor.submit(provider.get_connection)
        time.sleep(0.05)
        release.set()
        for future in (first, second):
            with pytest.raises(DatabaseConnectionError):
                future.result(timeout=5)

    assert not provider.is_connected


def test_close_then_reconnect():
    factory = CountingFactory()
    provider = ConnectionProvider(MEMORY_URL, engine_factory=factory)

    first = provider.get_connection()
    provider.close()
    assert not provider.is_connected

    second = provider.get_connection()
    assert second is not first
    assert len(factory.calls) == 2
    provider.close()


def test_session_and_ping(provider):
    assert provider.ping() is True

    db = provider.session()
    try:
        assert db.get_bind() is provider.get_connection()
    finally:
        db.close()


def test_missing_driver_is_a_connection_error():
    attempts: list[str] = []

    def factory(url: str):
        attempts.append(url)
        if len(attempts) == 1:
            raise ImportError("No module named 'psycopg'")
        return create_default_engine(url)

    provider = ConnectionProvider(MEMORY_URL, engine_factory=factory)

    with pytest.raises(DatabaseConnectionError) as exc_info:
        provider.get_connection()
    assert exc_info.value.code == ErrorCode.DATABASE_UNAVAILABLE.value
    assert not provider.is_connected

    assert provider.get_connection() is provider.get_connection()
    assert len(attempts) == 2
    provider.close()

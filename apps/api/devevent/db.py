from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from concurrent.futures import Future
from functools import lru_cache

import structlog
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from devevent.core.config import settings
from devevent.models import Base
from devevent.services.error_codes import ErrorCode
from devevent.services.exceptions import ConfigurationError, DatabaseConnectionError

logger = structlog.get_logger()

EngineFactory = Callable[[str], Engine]


def create_default_engine(url: str) -> Engine:
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            # In-memory databases live on one connection; share it across threads.
            return create_engine(
                url,
                echo=settings.db_echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        return create_engine(url, echo=settings.db_echo)

    return create_engine(
        url,
        echo=settings.db_echo,
        pool_pre_ping=True,
        pool_timeout=settings.db_pool_timeout_seconds,
    )


class ConnectionProvider:
    """Lazily connects to the database and hands out one shared engine.

    The first caller of ``get_connection`` runs the connection attempt; callers
    arriving while it is in flight wait on the same attempt instead of opening
    their own. A failed attempt is forgotten so the next call retries.
    """

    def __init__(self, url: str | None, *, engine_factory: EngineFactory = create_default_engine) -> None:
        if not url or not url.strip():
            raise ConfigurationError(
                ErrorCode.DATABASE_URL_MISSING.value,
                "DATABASE_URL is not set; define it in the environment or .env",
            )
        self._url = url.strip()
        self._engine_factory = engine_factory
        self._lock = threading.Lock()
        self._engine: Engine | None = None
        self._pending: Future[Engine] | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def get_connection(self) -> Engine:
        engine = self._engine
        if engine is not None:
            return engine

        with self._lock:
            if self._engine is not None:
                return self._engine
            pending = self._pending
            owner = pending is None
            if owner:
                pending = self._pending = Future()

        if not owner:
            return pending.result()

        try:
            engine = self._connect()
        except Exception as exc:
            with self._lock:
                self._pending = None
            pending.set_exception(exc)
            raise

        with self._lock:
            self._engine = engine
            self._sessionmaker = sessionmaker(bind=engine, expire_on_commit=False)
            self._pending = None
        pending.set_result(engine)
        return engine

    def _connect(self) -> Engine:
        logger.info("db_connect_started")
        engine: Engine | None = None
        try:
            engine = self._engine_factory(self._url)
            # Verify before caching so callers never queue on a dead handle.
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, ImportError) as exc:
            # ImportError: the DBAPI driver named in the URL is not installed
            if engine is not None:
                engine.dispose()
            logger.warning("db_connect_failed", error=str(exc))
            raise DatabaseConnectionError(
                ErrorCode.DATABASE_UNAVAILABLE.value, "could not connect to the database"
            ) from exc

        logger.info("db_connect_succeeded", backend=engine.dialect.name)
        return engine

    def session(self) -> Session:
        self.get_connection()
        return self._sessionmaker()

    def ping(self) -> bool:
        try:
            with self.get_connection().connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError(
                ErrorCode.DATABASE_UNAVAILABLE.value, "database ping failed"
            ) from exc
        return True

    def create_schema(self) -> None:
        Base.metadata.create_all(self.get_connection())

    def close(self) -> None:
        with self._lock:
            engine, self._engine = self._engine, None
            self._sessionmaker = None
        if engine is not None:
            engine.dispose()
            logger.info("db_provider_closed")


@lru_cache(maxsize=1)
def get_provider() -> ConnectionProvider:
    return ConnectionProvider(settings.database_url)


def reset_provider() -> None:
    if get_provider.cache_info().currsize:
        get_provider().close()
    get_provider.cache_clear()


def get_db() -> Iterator[Session]:
    db = get_provider().session()
    try:
        yield db
    finally:
        db.close()

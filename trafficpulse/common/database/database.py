"""
Store connection service.

One Database instance is created per process and shared by every request.
It is connected lazily on first use and torn down on shutdown.
"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Optional, TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from ..exceptions import StoreError
from ..logging import setup_logger
from ..metrics import QueryMetricsCollector

Base = declarative_base()
logger = setup_logger("trafficpulse.database")

T = TypeVar("T")


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    CLOSED = "closed"


class Database:
    """
    Explicit store service with lifecycle
    uninitialized -> connecting -> ready -> closed.
    """

    def __init__(
        self,
        url: str,
        query_timeout: float = 5.0,
        echo: bool = False,
        pool_pre_ping: bool = True,
        metrics: Optional[QueryMetricsCollector] = None,
        max_workers: int = 8,
    ):
        self.url = url
        self.query_timeout = query_timeout
        self.echo = echo
        self.pool_pre_ping = pool_pre_ping
        self.metrics = metrics or QueryMetricsCollector()
        self.max_workers = max_workers
        self.state = ConnectionState.UNINITIALIZED
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    @property
    def is_ready(self) -> bool:
        return self.state is ConnectionState.READY

    @property
    def engine(self) -> Engine:
        self.connect()
        return self._engine

    def _engine_kwargs(self) -> dict:
        kwargs = {"echo": self.echo, "pool_pre_ping": self.pool_pre_ping}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                # A single shared connection keeps the in-memory database alive
                kwargs["poolclass"] = StaticPool
        elif self.url.startswith("postgresql"):
            timeout_ms = int(self.query_timeout * 1000)
            kwargs["connect_args"] = {"options": f"-c statement_timeout={timeout_ms}"}
        return kwargs

    def _ensure_sqlite_dir(self):
        url = make_url(self.url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    def connect(self) -> "Database":
        """Opens the engine once; later calls are no-ops."""
        if self.state is ConnectionState.READY:
            return self

        with self._lock:
            if self.state is ConnectionState.READY:
                return self
            if self.state is ConnectionState.CLOSED:
                raise StoreError("Database connection has been closed")

            self.state = ConnectionState.CONNECTING
            try:
                self._ensure_sqlite_dir()
                engine = create_engine(self.url, **self._engine_kwargs())
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
            except SQLAlchemyError as e:
                self.state = ConnectionState.UNINITIALIZED
                logger.error("Database connection failed: %s", e, exc_info=True)
                raise StoreError("Database connection failed") from e

            self._engine = engine
            self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="store")
            self.state = ConnectionState.READY
            logger.info("Database connected (%s)", engine.url.render_as_string(hide_password=True))
        return self

    def init_schema(self):
        """Creates tables for every registered model."""
        # Models must be imported so they register with Base
        from . import models  # noqa: F401
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StoreError("Schema creation failed") from e

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yields a session, committing on success and rolling back on error."""
        self.connect()
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def run(self, work: Callable[[Session], T], timeout: Optional[float] = None) -> T:
        """
        Runs a unit of work in a store worker thread.
        Raises StoreError on any store fault or when the timeout is exceeded.
        A timed-out statement is interrupted where the driver allows it, and a
        worker that stays busy is abandoned so later calls get a free one.
        """
        self.connect()
        timeout = self.query_timeout if timeout is None else timeout
        handle = {}

        def _call() -> T:
            with self.session() as session:
                if self._interruptible:
                    handle["dbapi"] = session.connection().connection.dbapi_connection
                return work(session)

        start = time.time()
        with self._lock:
            if self._executor is None:
                raise StoreError("Database connection has been closed")
            future = self._executor.submit(_call)
        try:
            result = future.result(timeout=timeout)
        except FutureTimeoutError as e:
            self.metrics.record_failure(timed_out=True)
            if not future.cancel():
                self._interrupt(handle.get("dbapi"))
                self._replace_executor()
            raise StoreError(f"Store query exceeded {timeout:.1f}s timeout") from e
        except SQLAlchemyError as e:
            self.metrics.record_failure()
            raise StoreError(f"Store query failed: {e}") from e

        self.metrics.record_query((time.time() - start) * 1000)
        return result

    @property
    def _interruptible(self) -> bool:
        # StaticPool hands the same connection to every worker
        return self._engine is not None and not isinstance(self._engine.pool, StaticPool)

    def _interrupt(self, dbapi_connection):
        """Aborts the statement running on a raw driver connection (sqlite3 interrupt, psycopg2 cancel)."""
        if dbapi_connection is None or self._engine is None:
            return
        abort = getattr(dbapi_connection, "interrupt", None) or getattr(dbapi_connection, "cancel", None)
        if abort is None:
            return
        try:
            abort()
        except self._engine.dialect.dbapi.Error as e:
            logger.warning("Could not interrupt timed-out statement: %s", e)

    def _replace_executor(self):
        with self._lock:
            if self._executor is None:
                return
            stale = self._executor
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="store")
        stale.shutdown(wait=False)
        logger.warning("Store worker still busy after timeout; started a fresh worker pool")

    def close(self):
        """Disposes the engine. The instance cannot be reused afterwards."""
        with self._lock:
            if self.state is ConnectionState.CLOSED:
                return
            if self._executor is not None:
                self._executor.shutdown(wait=False)
            self._executor = None
            if self._engine is not None:
                self._engine.dispose()
            self._engine = None
            self._session_factory = None
            self.state = ConnectionState.CLOSED
            logger.info("Database connection closed")


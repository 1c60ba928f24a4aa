# api/utils/db.py
"""
Pooled access to the verse store.

The engine is built lazily from DATABASE_URL and shared by the whole
process. Each request borrows one connection through connect(), which also
arms a request deadline so a runaway regex scan cannot pin a worker.

Usage:
    from utils.db import connect

    with connect() as conn:
        rows = conn.execute(stmt).mappings().all()
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional

import regex
from sqlalchemy import create_engine, event, exc
from sqlalchemy.engine import Connection, Engine, make_url

from core import config

logger = logging.getLogger(__name__)

# SQLite polls the progress handler every N VM instructions
PROGRESS_STEPS = 1000

# Connection record info key holding the request deadline
DEADLINE_KEY = "deadline"

# Smallest time budget handed to a single REGEXP evaluation
MIN_REGEX_TIMEOUT = 0.001

_engine: Optional[Engine] = None


class StoreError(Exception):
    """Base class for verse store failures."""
    pass


class StoreUnavailable(StoreError):
    """A connection to the store could not be established."""
    pass


class StoreBusy(StoreError):
    """No pooled connection became free within the pool timeout."""
    pass


def _is_memory_sqlite(url) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_store_engine(
    url: str = None,
    pool_size: int = None,
    max_overflow: int = None,
    pool_timeout: float = None,
    query_timeout: float = None,
) -> Engine:
    """
    Build a pooled engine for the verse store.

    Args:
        url: SQLAlchemy database URL (defaults to DATABASE_URL)
        pool_size: Connections kept open in the pool
        max_overflow: Extra connections allowed under burst
        pool_timeout: Seconds to wait for a free connection
        query_timeout: Statement timeout applied server-side on PostgreSQL

    Returns:
        SQLAlchemy Engine (no connection is opened yet)
    """
    url = make_url(url or config.DATABASE_URL)
    kwargs = {"pool_pre_ping": True}

    if not _is_memory_sqlite(url):
        kwargs["pool_size"] = pool_size if pool_size is not None else config.DB_POOL_SIZE
        kwargs["max_overflow"] = (
            max_overflow if max_overflow is not None else config.DB_MAX_OVERFLOW
        )
        kwargs["pool_timeout"] = (
            pool_timeout if pool_timeout is not None else config.DB_POOL_TIMEOUT
        )

    if url.get_backend_name() == "postgresql":
        timeout = query_timeout if query_timeout is not None else config.DB_QUERY_TIMEOUT
        kwargs["connect_args"] = {
            "options": f"-c statement_timeout={int(timeout * 1000)}"
        }

    logger.info(f"Creating store engine for {url.render_as_string(hide_password=True)}")
    engine = create_engine(url, **kwargs)
    if url.get_backend_name() == "sqlite":
        _install_regexp(engine)
    return engine


def _install_regexp(engine: Engine) -> None:
    """
    Back SQLite REGEXP with the regex package, bounded by the request deadline.

    The progress handler cannot fire while a single REGEXP call runs, so
    each evaluation gets the time left before the deadline and fails the
    statement once it is spent.
    """

    @event.listens_for(engine, "connect")
    def register_regexp(dbapi_connection, connection_record):
        info = connection_record.info

        def regexp(pattern, value):
            if value is None:
                return None
            deadline = info.get(DEADLINE_KEY)
            timeout = None
            if deadline is not None:
                timeout = max(deadline - time.monotonic(), MIN_REGEX_TIMEOUT)
            try:
                return regex.search(pattern, value, timeout=timeout) is not None
            except TimeoutError:
                logger.warning(f"Regex {pattern!r} ran past the request deadline")
                raise

        dbapi_connection.create_function("regexp", 2, regexp)


def get_engine() -> Engine:
    """Get or create the process-wide engine."""
    global _engine
    if _engine is None:
        _engine = create_store_engine()
    return _engine


def set_engine(engine: Optional[Engine]) -> None:
    """Replace the process-wide engine, disposing of the previous one."""
    global _engine
    if _engine is not None and _engine is not engine:
        _engine.dispose()
    _engine = engine


def _arm_deadline(conn: Connection, timeout: Optional[float]) -> None:
    # PostgreSQL enforces statement_timeout itself
    if not timeout or conn.dialect.name != "sqlite":
        return
    deadline = time.monotonic() + timeout
    conn.connection.info[DEADLINE_KEY] = deadline
    raw = conn.connection.dbapi_connection
    raw.set_progress_handler(lambda: time.monotonic() > deadline, PROGRESS_STEPS)


def _disarm_deadline(conn: Connection) -> None:
    if conn.dialect.name != "sqlite" or conn.invalidated:
        return
    conn.connection.info.pop(DEADLINE_KEY, None)
    conn.connection.dbapi_connection.set_progress_handler(None, 0)


@contextmanager
def connect(engine: Engine = None, timeout: float = None) -> Iterator[Connection]:
    """
    Borrow a pooled store connection for the duration of one request.

    Args:
        engine: Engine to borrow from (defaults to get_engine())
        timeout: Request deadline in seconds (defaults to DB_QUERY_TIMEOUT)

    Raises:
        StoreBusy: Pool wait exceeded; the caller may retry later
        StoreUnavailable: The store refused or failed the connection
    """
    engine = engine or get_engine()
    timeout = config.DB_QUERY_TIMEOUT if timeout is None else timeout

    try:
        conn = engine.connect()
    except exc.TimeoutError as e:
        logger.warning(f"Store pool exhausted: {e}")
        raise StoreBusy(str(e)) from e
    except exc.SQLAlchemyError as e:
        logger.error(f"Store connection failed: {e}")
        raise StoreUnavailable(str(e)) from e

    try:
        _arm_deadline(conn, timeout)
        yield conn
    finally:
        _disarm_deadline(conn)
        conn.close()

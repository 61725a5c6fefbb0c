"""psycopg2 connection pool used by the PostgreSQL document repository.

psycopg2 blocks, so :meth:`PostgresPool.run` checks a connection out inside a worker
thread and hands it to a synchronous callable. ``ThreadedConnectionPool`` fails
immediately once ``maxconn`` connections are in use; this wrapper makes callers wait
up to ``postgres_checkout_timeout`` seconds for a free slot instead, and raises
:class:`PostgresPoolExhaustedError` when none frees up.
"""

import asyncio
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

import psycopg2
from psycopg2.extensions import connection as PgConnection  # noqa: N812
from psycopg2.pool import PoolError, ThreadedConnectionPool

from lifedocs.common.config import LifeDocsConfig
from lifedocs.common.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class PostgresPoolError(Exception):
    """No usable connection could be obtained, or the connection failed mid-call."""


class PostgresPoolExhaustedError(PostgresPoolError):
    """Every pooled connection stayed checked out for the whole checkout timeout."""


class PostgresPool:
    """Bounded pool of PostgreSQL connections shared by repository calls.

    Example:
        >>> pool = PostgresPool(config)
        >>> rows = await pool.run(fetch_rows, owner_id)  # fetch_rows(conn, owner_id)
        >>> pool.close_all()
    """

    def __init__(self, config: LifeDocsConfig) -> None:
        """Open the pool.

        Raises:
            PostgresPoolError: If the initial connections cannot be opened.
        """
        self.max_connections = config.postgres_max_pool_size
        self.checkout_timeout = config.postgres_checkout_timeout
        self._slots = threading.BoundedSemaphore(self.max_connections)

        try:
            self._pool = ThreadedConnectionPool(
                minconn=config.postgres_min_pool_size,
                maxconn=config.postgres_max_pool_size,
                host=config.postgres_host,
                port=config.postgres_port,
                database=config.postgres_db,
                user=config.postgres_user,
                password=config.postgres_password.get_secret_value(),
            )
        except psycopg2.Error as e:
            logger.exception(
                "Could not open PostgreSQL pool",
                extra={"host": config.postgres_host, "database": config.postgres_db},
            )
            raise PostgresPoolError(f"Failed to initialize PostgreSQL pool: {e}") from e

        logger.info(
            "Opened PostgreSQL pool",
            extra={
                "host": config.postgres_host,
                "database": config.postgres_db,
                "max_connections": self.max_connections,
            },
        )

    async def run(self, fn: Callable[..., T], *args: Any) -> T:
        """Call ``fn(connection, *args)`` in a worker thread and return its result."""
        return await asyncio.to_thread(self._run_with_connection, fn, *args)

    def _run_with_connection(self, fn: Callable[..., T], *args: Any) -> T:
        with self.connection() as conn:
            return fn(conn, *args)

    @contextmanager
    def connection(self) -> Iterator[PgConnection]:
        """Check out one connection for the duration of the block.

        Blocks the calling thread while the pool is full. A psycopg2 error raised in
        the block rolls back the open transaction.

        Raises:
            PostgresPoolExhaustedError: No connection freed up within the checkout timeout.
            PostgresPoolError: Connecting failed, or the block raised a psycopg2 error.
        """
        if not self._slots.acquire(timeout=self.checkout_timeout):
            logger.warning(
                "PostgreSQL pool exhausted",
                extra={
                    "max_connections": self.max_connections,
                    "waited_seconds": self.checkout_timeout,
                },
            )
            raise PostgresPoolExhaustedError(
                f"All {self.max_connections} PostgreSQL connections stayed busy "
                f"for {self.checkout_timeout}s"
            )

        try:
            conn = self._checkout()
            try:
                yield conn
            except psycopg2.Error as e:
                if not conn.closed:
                    conn.rollback()
                logger.exception("PostgreSQL call failed")
                raise PostgresPoolError(f"PostgreSQL connection error: {e}") from e
            finally:
                self._checkin(conn)
        finally:
            self._slots.release()

    def _checkout(self) -> PgConnection:
        try:
            return self._pool.getconn()
        except PoolError as e:
            # Slots are sized to maxconn, so the only PoolError left here is a closed pool.
            raise PostgresPoolError(f"PostgreSQL pool unavailable: {e}") from e
        except psycopg2.Error as e:
            logger.exception("Could not open PostgreSQL connection")
            raise PostgresPoolError(f"Could not connect to PostgreSQL: {e}") from e

    def _checkin(self, conn: PgConnection) -> None:
        try:
            self._pool.putconn(conn, close=bool(conn.closed))
        except PoolError:
            logger.warning("Connection returned after the pool was closed")

    def close_all(self) -> None:
        """Close every pooled connection. Calling it again does nothing."""
        if self._pool.closed:
            return
        self._pool.closeall()
        logger.info("Closed PostgreSQL pool")


__all__ = ["PostgresPool", "PostgresPoolError", "PostgresPoolExhaustedError"]

"""Slow query logging for the event store.

Discovery issues a handful of read queries per search; anything above the
configured threshold is logged so missing indexes show up early.
"""

import logging
import time
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import Pool

logger = logging.getLogger(__name__)

_MAX_STATEMENT_LOG_LENGTH = 500


def _truncate(statement: str) -> str:
    if len(statement) <= _MAX_STATEMENT_LOG_LENGTH:
        return statement
    return statement[:_MAX_STATEMENT_LOG_LENGTH] + "..."


def setup_query_monitoring(
    engine: AsyncEngine,
    slow_query_threshold: float = 0.1,
    log_pool_stats: bool = False,
) -> None:
    """Attach cursor-execution listeners that log slow statements.

    Args:
        engine: Async engine to monitor
        slow_query_threshold: Log statements slower than this many seconds
        log_pool_stats: Also log pool connect/checkout events at debug level
    """
    if not hasattr(engine, "sync_engine"):
        logger.warning("Engine does not have sync_engine attribute, skipping query monitoring")
        return

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def receive_before_cursor_execute(
        conn: Any,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(engine.sync_engine, "after_cursor_execute")
    def receive_after_cursor_execute(
        conn: Any,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        started = conn.info.get("query_start_time")
        if not started:
            return
        total = time.perf_counter() - started.pop()

        if total > slow_query_threshold:
            logger.warning(
                f"Slow query detected ({total:.3f}s): {_truncate(statement)}",
                extra={
                    "duration_seconds": total,
                    "query": statement,
                    "threshold_seconds": slow_query_threshold,
                },
            )

    if log_pool_stats:

        @event.listens_for(Pool, "connect")
        def receive_connect(dbapi_conn: Any, connection_record: Any) -> None:
            logger.debug("New database connection created")

    logger.info(
        f"Query performance monitoring enabled "
        f"(slow query threshold: {slow_query_threshold}s)"
    )


__all__ = ["setup_query_monitoring"]

import asyncio
import logging

from services.content_store import ContentStore

logger = logging.getLogger(__name__)


async def sweep_once(store: ContentStore, retention_hours: float) -> int:
    # Run sweep in thread to avoid blocking event loop
    removed = await asyncio.to_thread(store.sweep, retention_hours * 3600)
    logger.info(
        "retention: removed %s upload entries older than %s hours",
        removed,
        retention_hours,
    )
    return removed


async def retention_loop(
    store: ContentStore,
    retention_hours: float = 24,
    interval_minutes: float = 60,
) -> None:
    """Background task: periodically sweep the content store.
    - Each pass deletes stored archives and extraction dirs past retention_hours.
    - Sleeps for interval_minutes between runs.
    """
    interval_sec = max(interval_minutes, 1) * 60
    while True:
        try:
            await sweep_once(store, retention_hours)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("retention: sweep failed: %s", e)
        await asyncio.sleep(interval_sec)


def start_retention_worker(
    store: ContentStore,
    retention_hours: float,
    interval_minutes: float,
) -> asyncio.Task | None:
    if retention_hours <= 0:
        logger.info("retention: disabled")
        return None
    return asyncio.create_task(retention_loop(store, retention_hours, interval_minutes))

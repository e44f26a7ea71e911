import asyncio
import os
import time

from services.content_store import ContentStore
from services.retention import start_retention_worker, sweep_once


def test_sweep_once_removes_expired_archives(tmp_path):
    store = ContentStore(str(tmp_path))
    store.ensure()
    stale = store.new_upload_path("stale.zip")
    with open(stale, "wb") as f:
        f.write(b"x")
    ts = time.time() - 3 * 3600
    os.utime(stale, (ts, ts))

    removed = asyncio.run(sweep_once(store, retention_hours=1))

    assert removed == 1
    assert not os.path.exists(stale)


def test_retention_disabled_when_hours_is_zero(tmp_path):
    assert start_retention_worker(ContentStore(str(tmp_path)), 0, 60) is None


def test_retention_worker_runs_and_cancels(tmp_path):
    store = ContentStore(str(tmp_path))
    store.ensure()

    async def _run():
        task = start_retention_worker(store, 1, 60)
        assert task is not None
        await asyncio.sleep(0.05)
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        return task.cancelled()

    assert asyncio.run(_run()) is True

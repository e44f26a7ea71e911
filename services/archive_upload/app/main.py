import asyncio
import contextlib
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.routes.upload import router as upload_router
from core.config import (
    CORS_ALLOW_ORIGINS,
    HOST,
    LOG_LEVEL,
    PORT,
    RETENTION_SWEEP_INTERVAL_MINUTES,
    UPLOAD_DIR,
    UPLOAD_RETENTION_HOURS,
)
from core.errors import register_error_handlers
from core.logging_setup import configure_logging
from services.content_store import ContentStore
from services.retention import start_retention_worker

configure_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

store = ContentStore(UPLOAD_DIR)
store.ensure()

app = FastAPI(title="archive-upload-service", version="0.1")
app.state.store = store
app.state.retention_task = None


@app.on_event("startup")
async def on_startup():
    store.ensure()
    if app.state.retention_task is None:
        app.state.retention_task = start_retention_worker(
            store, UPLOAD_RETENTION_HOURS, RETENTION_SWEEP_INTERVAL_MINUTES
        )


@app.on_event("shutdown")
async def on_shutdown():
    if app.state.retention_task is not None:
        task = app.state.retention_task
        app.state.retention_task = None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(upload_router)
app.mount("/uploads", StaticFiles(directory=store.root), name="uploads")

register_error_handlers(app)


if __name__ == "__main__":
    logger.info("Server is running on port %s", PORT)
    uvicorn.run(app, host=HOST, port=PORT)

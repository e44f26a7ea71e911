import asyncio
import logging
import os
import re
import shutil
from typing import BinaryIO, Optional

from fastapi import Depends, File, HTTPException, Request, UploadFile

from core.config import MAX_UPLOAD_BYTES
from core.errors import UploadRejected
from schemas.upload import StoredUpload
from services.content_store import ContentStore

logger = logging.getLogger(__name__)

ARCHIVE_PATTERN = re.compile(r"zip")
CHUNK_SIZE = 1024 * 1024


def get_store(request: Request) -> ContentStore:
    return request.app.state.store


def is_archive(filename: Optional[str], content_type: Optional[str]) -> bool:
    """Both the declared MIME type and the lowercased extension must name an archive."""
    ext = os.path.splitext(filename or "")[1].lower()
    return bool(ARCHIVE_PATTERN.search(content_type or "")) and bool(ARCHIVE_PATTERN.search(ext))


def _copy_limited(src: BinaryIO, dest: str, limit: int) -> int:
    size = 0
    try:
        with open(dest, "wb") as out:
            while True:
                chunk = src.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > limit:
                    raise UploadRejected("File too large")
                out.write(chunk)
    except BaseException:
        if os.path.exists(dest):
            os.remove(dest)
        raise
    return size


async def save_archive(upload: UploadFile, store: ContentStore, limit: Optional[int] = None) -> StoredUpload:
    logger.info("Received file: %s", upload.filename)
    logger.info("MIME type: %s", upload.content_type)
    logger.info("Extension: %s", os.path.splitext(upload.filename or "")[1].lower())

    if not is_archive(upload.filename, upload.content_type):
        raise UploadRejected("Only zip files are allowed")

    path = store.new_upload_path(upload.filename)
    await upload.seek(0)
    limit = MAX_UPLOAD_BYTES if limit is None else limit
    try:
        size = await asyncio.to_thread(_copy_limited, upload.file, path, limit)
    except OSError:
        logger.exception("Error storing upload %s", upload.filename)
        raise HTTPException(status_code=500, detail="Server error")

    return StoredUpload(
        original_name=upload.filename or "",
        content_type=upload.content_type or "application/octet-stream",
        path=path,
        size=size,
    )


async def intake_archive(
    file: Optional[UploadFile] = File(None),
    store: ContentStore = Depends(get_store),
) -> Optional[StoredUpload]:
    """
    Route dependency: validates and stores the ``file`` part before the
    handler runs. Returns None when the request carries no file so the
    handler can answer with its own 400.
    """
    if file is None:
        return None
    try:
        return await save_archive(file, store)
    finally:
        await file.close()

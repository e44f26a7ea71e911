import asyncio
import logging
import os
import zipfile
from typing import List

from fastapi.responses import JSONResponse

from schemas.upload import StoredUpload
from services.content_store import ContentStore

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}


class UnsafeArchiveEntry(Exception):
    pass


# -------------------------------------------------
# Archive helpers
# -------------------------------------------------

def extract_archive(archive_path: str, destination: str) -> List[str]:
    """
    Extract every member of the zip at ``archive_path`` into ``destination``.
    Members whose target resolves outside ``destination`` abort the whole
    extraction.
    """
    root = os.path.realpath(destination)
    with zipfile.ZipFile(archive_path) as zf:
        names = zf.namelist()
        for name in names:
            target = os.path.realpath(os.path.join(root, name))
            if target != root and not target.startswith(root + os.sep):
                raise UnsafeArchiveEntry(f"entry escapes extraction dir: {name}")
        zf.extractall(root)
    return names


def list_entries(directory: str) -> List[str]:
    return sorted(os.listdir(directory))


def is_image(name: str) -> bool:
    return os.path.splitext(name)[1].lower() in IMAGE_EXTENSIONS


def filter_images(names: List[str]) -> List[str]:
    return [n for n in names if is_image(n)]


# -------------------------------------------------
# Handler
# -------------------------------------------------

async def handle_upload(upload: StoredUpload, store: ContentStore) -> JSONResponse:
    try:
        extraction_path = await asyncio.to_thread(store.new_extraction_dir)
    except OSError:
        logger.exception("Error creating extraction directory for %s", upload.path)
        return JSONResponse(status_code=500, content={"message": "Server error"})

    try:
        names = await asyncio.to_thread(extract_archive, upload.path, extraction_path)
    except Exception:
        logger.exception("Error during extraction of %s", upload.path)
        return JSONResponse(status_code=500, content={"message": "Error during extraction"})
    logger.info("Extraction complete: %s entries in %s", len(names), extraction_path)

    try:
        files = await asyncio.to_thread(list_entries, extraction_path)
    except OSError:
        logger.exception("Error reading extracted files in %s", extraction_path)
        return JSONResponse(status_code=500, content={"message": "Server error"})

    images = filter_images(files)
    logger.info("%s image(s) extracted.", len(images))

    return JSONResponse(
        status_code=200,
        content={
            "message": f"Zip file uploaded and extracted successfully, {len(images)} image(s) found",
            "images": images,
        },
    )

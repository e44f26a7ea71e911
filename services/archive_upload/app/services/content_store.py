import logging
import os
import shutil
import time
import uuid
from typing import Optional

logger = logging.getLogger(__name__)

EXTRACTED_SUBDIR = "extracted"


class ContentStore:
    """
    Owns the upload directory: stored archives live flat under ``root`` and
    extraction directories under ``root/extracted``. Every name carries a
    fresh uuid4 token, so concurrent requests never share a path.
    """

    def __init__(self, root: str):
        self.root = os.path.abspath(root)
        self.extracted_root = os.path.join(self.root, EXTRACTED_SUBDIR)

    def ensure(self) -> None:
        os.makedirs(self.extracted_root, exist_ok=True)

    def new_upload_path(self, original_name: Optional[str]) -> str:
        # basename only: a crafted name must not leave the upload dir
        name = os.path.basename((original_name or "").replace("\\", "/")) or "upload"
        return os.path.join(self.root, f"{uuid.uuid4().hex}-{name}")

    def new_extraction_dir(self) -> str:
        path = os.path.join(self.extracted_root, uuid.uuid4().hex)
        os.makedirs(path, exist_ok=True)
        return path

    def delete(self, path: str) -> bool:
        """Remove a stored file. Returns False if it was already gone."""
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        return True

    def sweep(self, max_age_seconds: float, now: Optional[float] = None) -> int:
        """
        Delete stored archives and extraction directories whose mtime is
        older than ``max_age_seconds``. Returns the number of entries removed.
        """
        cutoff = (now if now is not None else time.time()) - max_age_seconds
        removed = 0

        for entry in _scan(self.root):
            if entry.name == EXTRACTED_SUBDIR and entry.is_dir():
                continue
            if entry.stat().st_mtime < cutoff:
                _remove(entry.path)
                removed += 1

        for entry in _scan(self.extracted_root):
            if entry.stat().st_mtime < cutoff:
                _remove(entry.path)
                removed += 1

        return removed


def _scan(path: str):
    try:
        with os.scandir(path) as it:
            return list(it)
    except FileNotFoundError:
        return []


def _remove(path: str) -> None:
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path, ignore_errors=True)
    else:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass

import os

import requests

ARCHIVE_UPLOAD_URL = os.getenv("ARCHIVE_UPLOAD_URL", "http://localhost:3000")


def _post_archive(endpoint: str, path: str, base_url: str):
    with open(path, "rb") as f:
        files = {"file": (os.path.basename(path), f, "application/zip")}
        r = requests.post(f"{base_url.rstrip('/')}{endpoint}", files=files, timeout=120)
    r.raise_for_status()
    return r.json()


def upload_archive(path: str, base_url: str = ARCHIVE_UPLOAD_URL) -> dict:
    """POST a zip to /upload and return ``{"message", "images"}``."""
    return _post_archive("/upload", path, base_url)


def get_transactions(path: str, base_url: str = ARCHIVE_UPLOAD_URL) -> list:
    return _post_archive("/get_transaction", path, base_url)

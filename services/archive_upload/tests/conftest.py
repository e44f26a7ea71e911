import io
import os
import tempfile
import zipfile

import pytest

# Must be set before main / core.config are imported.
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="archive-upload-tests-")
os.environ["UPLOAD_RETENTION_HOURS"] = "0"

from fastapi.testclient import TestClient  # noqa: E402

from main import app  # noqa: E402


def build_zip(entries: dict) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return buf.getvalue()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def store():
    return app.state.store


@pytest.fixture
def stored_archives(store):
    """Names of stored archives currently sitting in the upload dir."""

    def _list():
        return sorted(
            n for n in os.listdir(store.root)
            if os.path.isfile(os.path.join(store.root, n))
        )

    return _list

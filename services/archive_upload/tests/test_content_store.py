import os
import time

from services.content_store import ContentStore


def _touch(path, age_seconds=0):
    with open(path, "wb") as f:
        f.write(b"x")
    ts = time.time() - age_seconds
    os.utime(path, (ts, ts))


def test_new_upload_path_is_unique_and_keeps_name(tmp_path):
    store = ContentStore(str(tmp_path))

    a = store.new_upload_path("Receipts March.zip")
    b = store.new_upload_path("Receipts March.zip")

    assert a != b
    assert os.path.dirname(a) == store.root
    assert a.endswith("-Receipts March.zip")


def test_new_upload_path_strips_directories(tmp_path):
    store = ContentStore(str(tmp_path))

    for name in ("../../etc/passwd.zip", "..\\..\\evil.zip", "/abs/path.zip"):
        path = store.new_upload_path(name)
        assert os.path.dirname(path) == store.root


def test_new_upload_path_without_name(tmp_path):
    store = ContentStore(str(tmp_path))
    assert store.new_upload_path(None).endswith("-upload")


def test_new_extraction_dir_creates_parents(tmp_path):
    store = ContentStore(str(tmp_path / "nested" / "uploads"))

    path = store.new_extraction_dir()

    assert os.path.isdir(path)
    assert os.path.dirname(path) == store.extracted_root


def test_delete(tmp_path):
    store = ContentStore(str(tmp_path))
    path = store.new_upload_path("a.zip")
    _touch(path)

    assert store.delete(path) is True
    assert store.delete(path) is False


def test_sweep_removes_only_expired_entries(tmp_path):
    store = ContentStore(str(tmp_path))
    store.ensure()

    old_archive = store.new_upload_path("old.zip")
    new_archive = store.new_upload_path("new.zip")
    _touch(old_archive, age_seconds=7200)
    _touch(new_archive)

    old_dir = store.new_extraction_dir()
    _touch(os.path.join(old_dir, "a.png"), age_seconds=7200)
    os.utime(old_dir, (time.time() - 7200, time.time() - 7200))
    new_dir = store.new_extraction_dir()

    removed = store.sweep(3600)

    assert removed == 2
    assert not os.path.exists(old_archive)
    assert not os.path.exists(old_dir)
    assert os.path.exists(new_archive)
    assert os.path.isdir(new_dir)
    assert os.path.isdir(store.extracted_root)


def test_sweep_on_missing_root(tmp_path):
    store = ContentStore(str(tmp_path / "missing"))
    assert store.sweep(0) == 0

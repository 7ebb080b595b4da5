"""Tests for content-addressed storage and blobs."""

import pytest

from hog.blob import create_blob, load_blob, save_blob
from hog.errors import MissingFileError, ObjectNotFoundError
from hog.object_store import DiskObjectStore, MemoryObjectStore, compute_digest


@pytest.fixture(params=["memory", "disk"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryObjectStore()
    return DiskObjectStore(tmp_path / "objects")


class TestObjectStore:
    def test_put_returns_sha1_of_kind_and_data(self, store):
        digest = store.put("blob", b"hello")
        assert digest == compute_digest("blob", b"hello")
        assert len(digest) == 40

    def test_put_is_idempotent(self, store):
        first = store.put("blob", b"same")
        second = store.put("blob", b"same")
        assert first == second
        assert list(store.digests("blob")) == [first]

    def test_get_round_trip(self, store):
        digest = store.put("commit", b"{}")
        assert store.get("commit", digest) == b"{}"

    def test_get_missing(self, store):
        with pytest.raises(ObjectNotFoundError):
            store.get("blob", "0" * 40)

    def test_kind_is_part_of_identity(self, store):
        blob = store.put("blob", b"x")
        commit = store.put("commit", b"x")
        assert blob != commit
        assert store.contains("blob", blob)
        assert not store.contains("commit", blob)
        with pytest.raises(ObjectNotFoundError):
            store.get("commit", blob)

    def test_digests_per_kind(self, store):
        a = store.put("blob", b"a")
        b = store.put("blob", b"b")
        store.put("commit", b"c")
        assert sorted(store.digests("blob")) == sorted([a, b])

    def test_unknown_kind(self, store):
        with pytest.raises(ValueError):
            store.put("tree", b"x")

    def test_rejects_str(self, store):
        with pytest.raises(TypeError):
            store.put("blob", "text")  # type: ignore[arg-type]


class TestDiskLayout:
    def test_objects_are_fanned_out_and_compressed(self, tmp_path):
        store = DiskObjectStore(tmp_path / "objects")
        digest = store.put("blob", b"payload" * 100)
        path = tmp_path / "objects" / "blob" / digest[:2] / digest[2:]
        assert path.is_file()
        assert path.read_bytes() != b"payload" * 100

    def test_survives_reopen(self, tmp_path):
        digest = DiskObjectStore(tmp_path / "objects").put("blob", b"kept")
        assert DiskObjectStore(tmp_path / "objects").get("blob", digest) == b"kept"

    def test_non_digest_keys_are_absent(self, tmp_path):
        (tmp_path / "outside").write_bytes(b"not gzip")
        store = DiskObjectStore(tmp_path / "objects")
        assert not store.contains("commit", str(tmp_path / "outside"))
        assert not store.contains("commit", "../../outside")
        with pytest.raises(ObjectNotFoundError):
            store.get("commit", "../../outside")


class TestBlob:
    def test_digest_depends_only_on_content(self, tmp_path):
        (tmp_path / "a.txt").write_bytes(b"same")
        (tmp_path / "b.txt").write_bytes(b"same")
        assert create_blob(tmp_path / "a.txt").digest == create_blob(tmp_path / "b.txt").digest

    def test_create_does_not_persist(self, tmp_path):
        store = MemoryObjectStore()
        (tmp_path / "f").write_bytes(b"data")
        blob = create_blob(tmp_path / "f")
        assert not store.contains("blob", blob.digest)
        assert save_blob(store, blob) == blob.digest
        assert load_blob(store, blob.digest) == b"data"

    def test_missing_file(self, tmp_path):
        with pytest.raises(MissingFileError):
            create_blob(tmp_path / "nope")

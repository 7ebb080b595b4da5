from pathlib import Path
from pydantic import BaseModel

from .errors import MissingFileError, UnreadableFileError
from .object_store import ObjectStore, compute_digest


class Blob(BaseModel):
    content: bytes
    digest: str


def blob_from_bytes(content: bytes) -> Blob:
    return Blob(content=content, digest=compute_digest("blob", content))


def create_blob(filepath: Path) -> Blob:
    """Read ``filepath`` and wrap it as a blob. Nothing is persisted."""
    if not filepath.is_file():
        raise MissingFileError()
    try:
        content = filepath.read_bytes()
    except OSError as e:
        raise UnreadableFileError(f"File {filepath} could not be read: {e}") from e
    return blob_from_bytes(content)


def save_blob(store: ObjectStore, blob: Blob) -> str:
    return store.put("blob", blob.content)


def load_blob(store: ObjectStore, digest: str) -> bytes:
    return store.get("blob", digest)

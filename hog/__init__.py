"""hog: a small local version-control engine."""

from .errors import HogError
from .object_store import DiskObjectStore, MemoryObjectStore, ObjectStore
from .repo_utils import Repo, open_repo

__all__ = [
    "DiskObjectStore",
    "HogError",
    "MemoryObjectStore",
    "ObjectStore",
    "Repo",
    "open_repo",
]

import logging
from pathlib import Path

from .config import REPO_DIR_NAME
from .errors import CorruptRepositoryError, NotInitializedError
from .models import HeadInfo
from .object_store import DiskObjectStore, ObjectStore

logger = logging.getLogger(__name__)


class Repo:
    """An opened repository: its root, metadata directory and object store.

    Every core operation takes a ``Repo`` as its first argument. Tests can
    inject a ``MemoryObjectStore``; references, HEAD and staging always
    live under ``meta_dir``.
    """

    def __init__(self, root: Path, store: ObjectStore | None = None) -> None:
        self.root = root
        self.meta_dir = root / REPO_DIR_NAME
        self.store = store if store is not None else DiskObjectStore(self.meta_dir / "objects")
        # first-parent ancestor sequences, keyed by commit digest
        self.ancestor_cache: dict[str, list[str]] = {}

    def __repr__(self) -> str:
        return f"Repo({str(self.root)!r})"


def find_repo_root_dir(start: Path | None = None) -> Path | None:
    start = start or Path.cwd()
    for directory in [start] + list(start.parents):
        if (directory / REPO_DIR_NAME).is_dir():
            return directory
        if directory == Path.home():    # won't look past home directory
            return None
    return None


def open_repo(start: Path | None = None) -> Repo:
    repo_root = find_repo_root_dir(start)
    if repo_root is None:
        raise NotInitializedError()
    return Repo(repo_root)


def get_head_path(repo: Repo) -> Path:
    return repo.meta_dir / "HEAD"

def get_head_info(repo: Repo) -> HeadInfo:
    head_path = get_head_path(repo)
    if not head_path.exists():
        raise CorruptRepositoryError("HEAD file does not exist")
    content = head_path.read_text().strip()
    if content.startswith("branch: "):
        return HeadInfo(type="branch", value=content[8:])
    elif content.startswith("commit: "):
        return HeadInfo(type="commit", value=content[8:])
    else:
        raise CorruptRepositoryError("Invalid HEAD file format")

def update_head(repo: Repo, new_head_info: HeadInfo) -> None:
    head_path = get_head_path(repo)
    head_path.write_text(new_head_info.type + ": " + new_head_info.value)
    logger.debug("HEAD -> %s %s", new_head_info.type, new_head_info.value)

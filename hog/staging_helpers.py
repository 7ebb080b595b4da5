import gzip
import json
import shutil
from pathlib import Path

from .errors import CorruptRepositoryError
from .models import StagingInfo
from .repo_utils import Repo


def get_staging_path(repo: Repo) -> Path:
    return repo.meta_dir / "staging.json"

def get_snapshot_dir(repo: Repo) -> Path:
    return repo.meta_dir / "staged-files"

def get_staging_info(repo: Repo) -> StagingInfo:
    staging_path = get_staging_path(repo)
    if not staging_path.exists():
        return StagingInfo()
    return StagingInfo(**json.loads(staging_path.read_text()))

def update_staging_info(repo: Repo, info: StagingInfo) -> None:
    info.removals = sorted(set(info.removals))
    staging_path = get_staging_path(repo)
    staging_path.write_text(json.dumps(info.model_dump(), indent=4))

def clear_staging(repo: Repo) -> None:
    update_staging_info(repo, StagingInfo())
    snapshot_dir = get_snapshot_dir(repo)
    if snapshot_dir.exists():
        shutil.rmtree(snapshot_dir)

def write_snapshot(repo: Repo, digest: str, content: bytes) -> None:
    dest_path = get_snapshot_dir(repo) / digest
    if dest_path.exists():
        return
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    with gzip.open(dest_path, "wb") as f_out:
        f_out.write(content)

def read_snapshot(repo: Repo, digest: str) -> bytes:
    snapshot_path = get_snapshot_dir(repo) / digest
    if not snapshot_path.exists():
        raise CorruptRepositoryError(f"staged snapshot {digest} does not exist")
    with gzip.open(snapshot_path, "rb") as f:
        return f.read()

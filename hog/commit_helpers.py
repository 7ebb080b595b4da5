import json
import logging
import re
import time

from .blob import blob_from_bytes, save_blob
from .config import MIN_ABBREV_LENGTH, ROOT_COMMIT_MESSAGE, ROOT_COMMIT_TIMESTAMP
from .errors import (
    EmptyMessageError,
    NoSuchCommitError,
    NothingToCommitError,
    ObjectNotFoundError,
)
from .models import CommitInfo, StagingInfo
from .object_store import compute_digest
from .repo_utils import Repo
from .staging_helpers import read_snapshot

logger = logging.getLogger(__name__)

HEX_ID = re.compile(r"[0-9a-f]+")


def serialize_commit(info: CommitInfo) -> bytes:
    return json.dumps(info.model_dump(), sort_keys=True, separators=(",", ":")).encode()

def compute_commit_hash(info: CommitInfo) -> str:
    """Digest of a commit; a pure function of all its fields."""
    return compute_digest("commit", serialize_commit(info))

def create_root_commit() -> CommitInfo:
    return CommitInfo(
        commitMessage = ROOT_COMMIT_MESSAGE,
        timestamp = ROOT_COMMIT_TIMESTAMP,
        parentCommit = None,
        files = {},
    )

def build_commit(
    message: str,
    parent: str,
    files: dict[str, str],
    merge_parent: str | None = None,
    timestamp: int | None = None,
) -> CommitInfo:
    if not message or message.isspace():
        raise EmptyMessageError()
    return CommitInfo(
        commitMessage = message,
        timestamp = int(time.time()) if timestamp is None else timestamp,
        parentCommit = parent,
        mergeParent = merge_parent,
        files = dict(files),
    )

def create_commit_from_parent(
    repo: Repo,
    message: str,
    parent_hash: str,
    staging: StagingInfo,
    merge_parent: str | None = None,
) -> CommitInfo:
    """Build the commit that applies ``staging`` on top of ``parent_hash``.

    Blobs for staged additions are persisted here; the commit itself is
    not. Clearing the staging area afterwards is the caller's job. A merge
    commit may have nothing staged.
    """
    if not message or message.isspace():
        raise EmptyMessageError()
    parent_info = get_commit_info(repo, parent_hash)
    if staging.is_empty() and merge_parent is None:
        raise NothingToCommitError()
    files = dict(parent_info.files)
    for filepath, snapshot_hash in staging.additions.items():
        blob = blob_from_bytes(read_snapshot(repo, snapshot_hash))
        files[filepath] = save_blob(repo.store, blob)
    for filepath in staging.removals:
        files.pop(filepath, None)
    return build_commit(message, parent_hash, files, merge_parent=merge_parent)

def save_commit(repo: Repo, info: CommitInfo) -> str:
    digest = repo.store.put("commit", serialize_commit(info))
    logger.debug("saved commit %s %r", digest, info.commitMessage)
    return digest

def get_commit_info(repo: Repo, commit_hash: str) -> CommitInfo:
    try:
        data = repo.store.get("commit", commit_hash)
    except ObjectNotFoundError:
        raise NoSuchCommitError() from None
    return CommitInfo(**json.loads(data))

def resolve_commit_id(repo: Repo, commit_id: str) -> str:
    """Expand a full or abbreviated commit id to a stored digest."""
    if not HEX_ID.fullmatch(commit_id):
        raise NoSuchCommitError()
    if repo.store.contains("commit", commit_id):
        return commit_id
    if len(commit_id) < MIN_ABBREV_LENGTH:
        raise NoSuchCommitError()
    matches = [d for d in repo.store.digests("commit") if d.startswith(commit_id)]
    if len(matches) != 1:
        raise NoSuchCommitError()
    return matches[0]

def all_commits(repo: Repo) -> list[tuple[str, CommitInfo]]:
    return [(digest, get_commit_info(repo, digest)) for digest in repo.store.digests("commit")]

def find_commits_by_message(repo: Repo, message: str) -> list[str]:
    found = [digest for digest, info in all_commits(repo) if info.commitMessage == message]
    if not found:
        raise NoSuchCommitError("Found no commit with that message.")
    return found

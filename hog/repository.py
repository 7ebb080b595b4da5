import logging
from pathlib import Path

from .blob import create_blob
from .branching import (
    get_branch_heads,
    get_current_branch,
    move_current_branch,
    resolve_head,
    update_branch_head,
)
from .commit_helpers import (
    create_commit_from_parent,
    create_root_commit,
    get_commit_info,
    save_commit,
)
from .config import REPO_DIR_NAME, default_branch
from .errors import AlreadyInitializedError, MissingFileError, NoReasonToRemoveError
from .file_helpers import delete_working_file, list_working_files, working_path
from .models import HeadInfo, StagingInfo, StatusReport
from .object_store import ObjectStore
from .repo_utils import Repo, update_head
from .staging_helpers import (
    clear_staging,
    get_staging_info,
    update_staging_info,
    write_snapshot,
)

logger = logging.getLogger(__name__)


def init_repo(root: Path, store: ObjectStore | None = None) -> Repo:
    """Create ``.hog`` under ``root`` with the root commit on the default branch."""
    meta_dir = root / REPO_DIR_NAME
    if meta_dir.exists():
        raise AlreadyInitializedError()
    meta_dir.mkdir(parents=True)
    repo = Repo(root, store)
    root_hash = save_commit(repo, create_root_commit())
    branch_name = default_branch()
    update_branch_head(repo, branch_name, root_hash)
    update_head(repo, HeadInfo(type="branch", value=branch_name))
    update_staging_info(repo, StagingInfo())
    logger.debug("initialized repository at %s", root)
    return repo


def stage_file(repo: Repo, relative_path: str) -> bool:
    """Snapshot a working file into the staging area.

    Returns False when the file matches the HEAD version, in which case any
    earlier staged addition for it is dropped instead.
    """
    filepath = working_path(repo.root, relative_path)
    if not filepath.is_file():
        raise MissingFileError()
    blob = create_blob(filepath)
    head_info = get_commit_info(repo, resolve_head(repo))
    staging = get_staging_info(repo)
    if relative_path in staging.removals:
        staging.removals.remove(relative_path)
    staged = head_info.files.get(relative_path) != blob.digest
    if staged:
        write_snapshot(repo, blob.digest, blob.content)
        staging.additions[relative_path] = blob.digest
    else:
        staging.additions.pop(relative_path, None)
    update_staging_info(repo, staging)
    return staged


def unstage_file(repo: Repo, relative_path: str) -> None:
    head_info = get_commit_info(repo, resolve_head(repo))
    staging = get_staging_info(repo)
    tracked = relative_path in head_info.files
    if not tracked and relative_path not in staging.additions:
        raise NoReasonToRemoveError()
    staging.additions.pop(relative_path, None)
    if tracked:
        staging.removals.append(relative_path)
    update_staging_info(repo, staging)
    if tracked:
        delete_working_file(repo.root, relative_path)


def commit_staged(repo: Repo, message: str) -> str:
    """Turn the staging area into a commit on HEAD and drain it.

    A pending conflicted merge becomes the commit's second parent, and its
    generated message is used when none is given.
    """
    staging = get_staging_info(repo)
    if staging.mergeHead is not None and (not message or message.isspace()):
        message = staging.mergeMessage or message
    parent_hash = resolve_head(repo)
    info = create_commit_from_parent(repo, message, parent_hash, staging, merge_parent=staging.mergeHead)
    new_commit_hash = save_commit(repo, info)
    move_current_branch(repo, new_commit_hash)
    clear_staging(repo)
    return new_commit_hash


def _working_digest(repo: Repo, relative_path: str) -> str | None:
    filepath = working_path(repo.root, relative_path)
    if not filepath.is_file():
        return None
    return create_blob(filepath).digest


def repo_status(repo: Repo) -> StatusReport:
    head_hash = resolve_head(repo)
    head_files = get_commit_info(repo, head_hash).files
    staging = get_staging_info(repo)
    working_files = set(list_working_files(repo.root))

    modified = []
    for filepath in sorted(set(head_files) | set(staging.additions)):
        if filepath in staging.removals:
            continue
        expected = staging.additions.get(filepath, head_files.get(filepath))
        actual = _working_digest(repo, filepath)
        if actual is None:
            modified.append(f"{filepath} (deleted)")
        elif actual != expected:
            modified.append(f"{filepath} (modified)")

    untracked = sorted(
        f for f in working_files
        if (f not in head_files and f not in staging.additions) or f in staging.removals
    )
    return StatusReport(
        branches=sorted(get_branch_heads(repo)),
        currentBranch=get_current_branch(repo),
        headCommit=head_hash,
        staged=sorted(staging.additions),
        removed=list(staging.removals),
        modified=modified,
        untracked=untracked,
        mergeHead=staging.mergeHead,
    )


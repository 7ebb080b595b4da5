import logging

from .blob import load_blob
from .branching import create_branch, get_branch_heads, get_current_branch, resolve_head
from .commit_helpers import get_commit_info, resolve_commit_id
from .errors import FileNotInCommitError, NoNeedToCheckoutError, UntrackedFileConflictError
from .file_helpers import delete_working_file, working_path, write_working_file
from .models import HeadInfo
from .repo_utils import Repo, update_head
from .staging_helpers import clear_staging

logger = logging.getLogger(__name__)


def find_untracked_conflicts(repo: Repo, current_files: dict[str, str], incoming_paths) -> list[str]:
    return sorted(
        filepath for filepath in incoming_paths
        if filepath not in current_files and working_path(repo.root, filepath).exists()
    )

def recreate_directory(repo: Repo, current_files: dict[str, str], target_files: dict[str, str]) -> None:
    """Replace the tracked state ``current_files`` with ``target_files`` on disk."""
    conflicts = find_untracked_conflicts(repo, current_files, target_files)
    if conflicts:
        raise UntrackedFileConflictError(conflicts)
    for filepath, blob_hash in target_files.items():
        write_working_file(repo.root, filepath, load_blob(repo.store, blob_hash))
    for filepath in current_files:
        if filepath not in target_files:
            delete_working_file(repo.root, filepath)
    logger.debug("materialized %d files, removed %d",
                 len(target_files), len(set(current_files) - set(target_files)))

def checkout_file_from_commit(repo: Repo, commit_id: str, filepath: str) -> None:
    commit_info = get_commit_info(repo, resolve_commit_id(repo, commit_id))
    blob_hash = commit_info.files.get(filepath)
    if blob_hash is None:
        raise FileNotInCommitError()
    write_working_file(repo.root, filepath, load_blob(repo.store, blob_hash))

def checkout_file(repo: Repo, filepath: str) -> None:
    checkout_file_from_commit(repo, resolve_head(repo), filepath)

def checkout(repo: Repo, branch_name_or_commit: str) -> str:
    """Check out a branch, or detach HEAD at a commit id. Returns the new HEAD commit."""
    branch_heads = get_branch_heads(repo)
    if branch_name_or_commit in branch_heads:
        if get_current_branch(repo) == branch_name_or_commit:
            raise NoNeedToCheckoutError()
        target_hash = branch_heads[branch_name_or_commit]
        new_head = HeadInfo(type="branch", value=branch_name_or_commit)
    else:
        target_hash = resolve_commit_id(repo, branch_name_or_commit)
        new_head = HeadInfo(type="commit", value=target_hash)

    current_files = get_commit_info(repo, resolve_head(repo)).files
    target_files = get_commit_info(repo, target_hash).files
    recreate_directory(repo, current_files, target_files)
    update_head(repo, new_head)
    clear_staging(repo)
    return target_hash

def reset(repo: Repo, branch_name_or_commit: str) -> str:
    return checkout(repo, branch_name_or_commit)

def checkout_new_branch(repo: Repo, branch_name: str) -> None:
    """Create a branch at HEAD and switch to it. Files and staging are untouched."""
    create_branch(repo, branch_name)
    update_head(repo, HeadInfo(type="branch", value=branch_name))

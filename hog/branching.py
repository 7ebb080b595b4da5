import json
import logging
from pathlib import Path

from .errors import (
    BranchExistsError,
    CannotDeleteCurrentBranchError,
    CorruptRepositoryError,
    NoSuchBranchError,
)
from .models import BranchInfo, HeadInfo
from .repo_utils import Repo, get_head_info, update_head

logger = logging.getLogger(__name__)


def get_branch_heads_path(repo: Repo) -> Path:
    return repo.meta_dir / "BRANCH_HEADS.json"

def get_branch_heads(repo: Repo) -> BranchInfo:
    branch_heads_path = get_branch_heads_path(repo)
    if not branch_heads_path.exists():
        return {}
    return json.loads(branch_heads_path.read_text())

def write_branch_heads(repo: Repo, branch_heads: BranchInfo) -> None:
    branch_heads_path = get_branch_heads_path(repo)
    branch_heads_path.write_text(json.dumps(branch_heads, indent=4, sort_keys=True))

def update_branch_head(repo: Repo, branch_name: str, new_commit_hash: str) -> None:
    branch_heads = get_branch_heads(repo)
    branch_heads[branch_name] = new_commit_hash
    write_branch_heads(repo, branch_heads)
    logger.debug("branch %s -> %s", branch_name, new_commit_hash)

def get_current_branch(repo: Repo) -> str | None:
    head_info = get_head_info(repo)
    if head_info.type == "branch":
        return head_info.value
    return None

def resolve_head(repo: Repo) -> str:
    """Return the commit digest HEAD points at, through the branch if any."""
    head_info = get_head_info(repo)
    if head_info.type == "commit":
        return head_info.value
    branch_heads = get_branch_heads(repo)
    if head_info.value not in branch_heads:
        raise CorruptRepositoryError(f"HEAD names missing branch '{head_info.value}'")
    return branch_heads[head_info.value]

def move_current_branch(repo: Repo, new_commit_hash: str) -> None:
    """Point whatever HEAD designates at ``new_commit_hash``.

    On a branch the branch moves; with a detached HEAD the HEAD record
    itself moves.
    """
    current_branch = get_current_branch(repo)
    if current_branch:
        update_branch_head(repo, current_branch, new_commit_hash)
    else:
        update_head(repo, HeadInfo(type="commit", value=new_commit_hash))

def create_branch(repo: Repo, branch_name: str, start_commit: str | None = None) -> None:
    if start_commit is None:
        start_commit = resolve_head(repo)
    branch_heads = get_branch_heads(repo)
    if branch_name in branch_heads:
        raise BranchExistsError()
    update_branch_head(repo, branch_name, start_commit)

def delete_branch(repo: Repo, branch_name: str) -> None:
    branch_heads = get_branch_heads(repo)
    if branch_name not in branch_heads:
        raise NoSuchBranchError()
    if get_current_branch(repo) == branch_name:
        raise CannotDeleteCurrentBranchError()
    branch_heads.pop(branch_name)
    write_branch_heads(repo, branch_heads)
    logger.debug("deleted branch %s", branch_name)

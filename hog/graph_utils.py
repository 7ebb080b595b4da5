from collections import deque

from .commit_helpers import get_commit_info
from .models import CommitInfo
from .repo_utils import Repo


def first_parent_ancestors(repo: Repo, commit_hash: str) -> list[str]:
    """Every ancestor along first-parent links, nearest first, excluding ``commit_hash``.

    Results are memoized on the repo for every commit the walk visits.
    """
    cache = repo.ancestor_cache
    if commit_hash in cache:
        return list(cache[commit_hash])

    chain = []
    current = commit_hash
    while current not in cache:
        parent = get_commit_info(repo, current).parentCommit
        if parent is None:
            cache[current] = []
            break
        chain.append((current, parent))
        current = parent
    for digest, parent in reversed(chain):
        cache[digest] = [parent] + cache[parent]
    return list(cache[commit_hash])

def first_parent_line(repo: Repo, commit_hash: str) -> list[str]:
    """``commit_hash`` followed by its first-parent ancestors."""
    return [commit_hash] + first_parent_ancestors(repo, commit_hash)

def first_parent_history(repo: Repo, commit_hash: str) -> list[tuple[str, CommitInfo]]:
    return [(digest, get_commit_info(repo, digest)) for digest in first_parent_line(repo, commit_hash)]

def all_ancestors(repo: Repo, commit_hash: str) -> list[str]:
    """Every commit reachable through any parent, breadth first, including ``commit_hash``."""
    seen = {commit_hash}
    order = []
    queue = deque([commit_hash])
    while queue:
        current = queue.popleft()
        order.append(current)
        info = get_commit_info(repo, current)
        for parent in (info.parentCommit, info.mergeParent):
            if parent is not None and parent not in seen:
                seen.add(parent)
                queue.append(parent)
    return order

def is_ancestor(repo: Repo, ancestor_hash: str, commit_hash: str) -> bool:
    return ancestor_hash in set(all_ancestors(repo, commit_hash))

def find_merge_base(repo: Repo, head_hash: str, other_hash: str) -> str | None:
    """Nearest commit on both first-parent lines, in HEAD's order."""
    other_line = set(first_parent_line(repo, other_hash))
    for digest in first_parent_line(repo, head_hash):
        if digest in other_line:
            return digest
    return None

import difflib
import logging

from .blob import load_blob
from .branching import get_branch_heads, get_current_branch, update_branch_head
from .checkout import find_untracked_conflicts, recreate_directory
from .commit_helpers import build_commit, get_commit_info, save_commit
from .errors import (
    AlreadyUpToDateError,
    CannotMergeWithSelfError,
    DetachedHeadError,
    NoSuchBranchError,
    UncommittedChangesError,
    UntrackedFileConflictError,
)
from .file_helpers import delete_working_file, write_working_file
from .graph_utils import find_merge_base, is_ancestor
from .models import MergeResult, StagingInfo
from .object_store import compute_digest
from .repo_utils import Repo
from .staging_helpers import get_staging_info, update_staging_info, write_snapshot

logger = logging.getLogger(__name__)

HEAD_MARKER = "<<<<<<< HEAD\n"
SEPARATOR = "=======\n"


def _changed_regions(base_lines: list[str], other_lines: list[str]) -> list[tuple[int, int, int, int]]:
    matcher = difflib.SequenceMatcher(None, base_lines, other_lines, autojunk=False)
    # opcodes are of the form (tag, i1, i2, j1, j2)
    return [(i1, i2, j1, j2) for tag, i1, i2, j1, j2 in matcher.get_opcodes() if tag != "equal"]

def _side_lines(lines: list[str], changes: list[tuple[int, int, int, int]], start: int, end: int) -> list[str]:
    # outside its changes a side is aligned with base, so extend the slice by the unchanged edges
    first, last = changes[0], changes[-1]
    return lines[first[2] - (first[0] - start): last[3] + (end - last[1])]

def _terminated(lines: list[str]) -> list[str]:
    if lines and not lines[-1].endswith("\n"):
        return lines[:-1] + [lines[-1] + "\n"]
    return lines

def merge_lines(base_lines: list[str], head_lines: list[str], target_lines: list[str], target_label: str) -> tuple[list[str], bool]:
    """Line-level three-way merge. Returns the merged lines and whether any hunk conflicted."""
    head_changes = _changed_regions(base_lines, head_lines)
    target_changes = _changed_regions(base_lines, target_lines)

    merged = []
    has_conflicts = False
    base_pos = 0
    h = t = 0
    while h < len(head_changes) or t < len(target_changes):
        # start a region at the earliest pending change, then absorb everything touching it
        starts = []
        if h < len(head_changes):
            starts.append(head_changes[h][0])
        if t < len(target_changes):
            starts.append(target_changes[t][0])
        start = min(starts)
        end = start
        region_head, region_target = [], []
        while True:
            if h < len(head_changes) and head_changes[h][0] <= end:
                region_head.append(head_changes[h])
                end = max(end, head_changes[h][1])
                h += 1
            elif t < len(target_changes) and target_changes[t][0] <= end:
                region_target.append(target_changes[t])
                end = max(end, target_changes[t][1])
                t += 1
            else:
                break

        merged.extend(base_lines[base_pos:start])
        if not region_target:
            merged.extend(_side_lines(head_lines, region_head, start, end))
        elif not region_head:
            merged.extend(_side_lines(target_lines, region_target, start, end))
        else:
            ours = _side_lines(head_lines, region_head, start, end)
            theirs = _side_lines(target_lines, region_target, start, end)
            if ours == theirs:
                merged.extend(ours)
            else:
                has_conflicts = True
                merged.append(HEAD_MARKER)
                merged.extend(_terminated(ours))
                merged.append(SEPARATOR)
                merged.extend(_terminated(theirs))
                merged.append(f">>>>>>> {target_label}\n")
        base_pos = end

    merged.extend(base_lines[base_pos:])
    return merged, has_conflicts

def render_conflict(base: bytes | None, head: bytes | None, target: bytes | None, target_label: str) -> bytes:
    """Conflict-marked content combining the HEAD and target versions of a file."""
    try:
        base_lines = (base or b"").decode().splitlines(keepends=True)
        head_lines = (head or b"").decode().splitlines(keepends=True)
        target_lines = (target or b"").decode().splitlines(keepends=True)
    except UnicodeDecodeError:
        pass
    else:
        if head is not None and target is not None:
            lines, has_conflicts = merge_lines(base_lines, head_lines, target_lines, target_label)
            if has_conflicts:
                return "".join(lines).encode()

    def terminated(content: bytes | None) -> bytes:
        if content and not content.endswith(b"\n"):
            return content + b"\n"
        return content or b""

    return (
        HEAD_MARKER.encode()
        + terminated(head)
        + SEPARATOR.encode()
        + terminated(target)
        + f">>>>>>> {target_label}\n".encode()
    )

def classify_paths(
    base_files: dict[str, str],
    head_files: dict[str, str],
    target_files: dict[str, str],
) -> tuple[dict[str, str], list[str]]:
    """Resolve every path three ways. Returns (resolved path -> blob, conflicting paths)."""
    resolved = {}
    conflicts = []
    for filepath in sorted(set(base_files) | set(head_files) | set(target_files)):
        base = base_files.get(filepath)
        head = head_files.get(filepath)
        target = target_files.get(filepath)
        if head == target:
            result = head
        elif head == base:
            result = target
        elif target == base:
            result = head
        else:
            conflicts.append(filepath)
            continue
        if result is not None:
            resolved[filepath] = result
    return resolved, conflicts

def merge(repo: Repo, branch_name: str) -> MergeResult:
    staging = get_staging_info(repo)
    if not staging.is_empty() or staging.mergeHead is not None:
        raise UncommittedChangesError()
    current_branch = get_current_branch(repo)
    if current_branch is None:
        raise DetachedHeadError()
    branch_heads = get_branch_heads(repo)
    if branch_name not in branch_heads:
        raise NoSuchBranchError()
    if branch_name == current_branch:
        raise CannotMergeWithSelfError()

    head_hash = branch_heads[current_branch]
    target_hash = branch_heads[branch_name]
    base_hash = find_merge_base(repo, head_hash, target_hash)
    logger.debug("merge %s into %s: base %s", branch_name, current_branch, base_hash)

    if base_hash == target_hash or is_ancestor(repo, target_hash, head_hash):
        raise AlreadyUpToDateError()

    head_files = get_commit_info(repo, head_hash).files
    target_files = get_commit_info(repo, target_hash).files

    if base_hash == head_hash or is_ancestor(repo, head_hash, target_hash):
        recreate_directory(repo, head_files, target_files)
        update_branch_head(repo, current_branch, target_hash)
        return MergeResult(strategy="fast_forward", commit=target_hash)

    base_files = get_commit_info(repo, base_hash).files if base_hash else {}
    resolved, conflicts = classify_paths(base_files, head_files, target_files)

    to_write: dict[str, bytes] = {}
    for filepath, blob_hash in resolved.items():
        if head_files.get(filepath) != blob_hash:
            to_write[filepath] = load_blob(repo.store, blob_hash)

    def version(files: dict[str, str], filepath: str) -> bytes | None:
        blob_hash = files.get(filepath)
        return load_blob(repo.store, blob_hash) if blob_hash else None

    for filepath in conflicts:
        to_write[filepath] = render_conflict(
            version(base_files, filepath),
            version(head_files, filepath),
            version(target_files, filepath),
            branch_name,
        )
    to_delete = [f for f in head_files if f not in resolved and f not in conflicts]

    untracked = find_untracked_conflicts(repo, head_files, to_write)
    if untracked:
        raise UntrackedFileConflictError(untracked)

    for filepath, content in to_write.items():
        write_working_file(repo.root, filepath, content)
    for filepath in to_delete:
        delete_working_file(repo.root, filepath)

    message = f"Merged {branch_name} into {current_branch}."
    if conflicts:
        logger.debug("merge conflicts in %s", ", ".join(conflicts))
        pending = StagingInfo(removals=to_delete, mergeHead=target_hash, mergeMessage=message)
        for filepath, content in to_write.items():
            snapshot_hash = compute_digest("blob", content)
            write_snapshot(repo, snapshot_hash, content)
            pending.additions[filepath] = snapshot_hash
        update_staging_info(repo, pending)
        return MergeResult(strategy="conflict", conflicts=conflicts)

    merge_commit_hash = save_commit(
        repo, build_commit(message, head_hash, resolved, merge_parent=target_hash)
    )
    update_branch_head(repo, current_branch, merge_commit_hash)
    return MergeResult(strategy="merge", commit=merge_commit_hash)

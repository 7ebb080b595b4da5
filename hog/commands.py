from pathlib import Path
from typing import Callable
import time

from .branching import create_branch, delete_branch, get_branch_heads, get_current_branch, resolve_head
from .checkout import checkout as checkout_commit, checkout_file, checkout_new_branch, checkout_file_from_commit, reset as reset_commit
from .commit_helpers import all_commits, find_commits_by_message
from .config import SHORT_ID_LENGTH
from .errors import HogError, MissingFileError
from .file_helpers import relative_to_root
from .graph_utils import first_parent_history
from .merging import merge as merge_branch
from .models import CommitInfo
from .repo_utils import Repo, open_repo
from .repository import commit_staged, init_repo, repo_status, stage_file, unstage_file


def map_command(command: str) -> Callable:
    commandsMap = {
        "init": init,
        "add": add,
        "commit": commit,
        "rm": rm,
        "log": log,
        "global-log": global_log,
        "find": find,
        "status": status,
        "checkout": checkout,
        "branch": branch,
        "rm-branch": rm_branch,
        "reset": reset,
        "merge": merge,
    }
    return commandsMap[command]

def repo_relative_path(repo: Repo, name: str) -> str:
    try:
        return relative_to_root(repo.root, Path.cwd() / name)
    except ValueError:
        raise MissingFileError(f"{name} is outside the repository") from None

def format_commit(commit_hash: str, commit_info: CommitInfo) -> str:
    lines = ["===", f"commit {commit_hash}"]
    if commit_info.mergeParent is not None:
        lines.append(
            f"Merge: {commit_info.parentCommit[:SHORT_ID_LENGTH]} {commit_info.mergeParent[:SHORT_ID_LENGTH]}"
        )
    date = time.strftime("%a %b %d %H:%M:%S %Y %z", time.localtime(commit_info.timestamp))
    lines.append(f"Date: {date}")
    lines.append(commit_info.commitMessage)
    return "\n".join(lines) + "\n"

def init(args):
    repo = init_repo(Path.cwd())
    print("Initialized empty hog repository in " + str(repo.meta_dir))

def add(args):
    repo = open_repo()
    stage_file(repo, repo_relative_path(repo, args.file))

def commit(args):
    repo = open_repo()
    commit_staged(repo, args.message)

def rm(args):
    repo = open_repo()
    unstage_file(repo, repo_relative_path(repo, args.file))

def log(args):
    repo = open_repo()
    for commit_hash, commit_info in first_parent_history(repo, resolve_head(repo)):
        print(format_commit(commit_hash, commit_info))

def global_log(args):
    repo = open_repo()
    for commit_hash, commit_info in all_commits(repo):
        print(format_commit(commit_hash, commit_info))

def find(args):
    repo = open_repo()
    for commit_hash in find_commits_by_message(repo, args.message):
        print(commit_hash)

def status(args):
    repo = open_repo()
    report = repo_status(repo)
    if report.currentBranch is None:
        print(f"HEAD detached at {report.headCommit[:SHORT_ID_LENGTH]}")
    print("=== Branches ===")
    for branch_name in report.branches:
        prefix = "*" if branch_name == report.currentBranch else ""
        print(f"{prefix}{branch_name}")
    sections = [
        ("Staged Files", report.staged),
        ("Removed Files", report.removed),
        ("Modifications Not Staged For Commit", report.modified),
        ("Untracked Files", report.untracked),
    ]
    for title, entries in sections:
        print(f"\n=== {title} ===")
        for entry in entries:
            print(entry)
    if report.mergeHead is not None:
        print(f"\nMerging {report.mergeHead[:SHORT_ID_LENGTH]}; commit to conclude the merge.")
    print()

def checkout(args):
    repo = open_repo()
    if args.file:
        filepath = repo_relative_path(repo, args.file)
        if args.name:
            checkout_file_from_commit(repo, args.name, filepath)
        else:
            checkout_file(repo, filepath)
        return
    if not args.name:
        raise HogError("Incorrect operands.")
    if args.create:
        checkout_new_branch(repo, args.name)
    else:
        checkout_commit(repo, args.name)

def branch(args):
    repo = open_repo()
    if args.delete:
        delete_branch(repo, args.delete)
    elif args.create:
        create_branch(repo, args.create)
    else:
        current_branch = get_current_branch(repo)
        for branch_name in get_branch_heads(repo):
            prefix = "*" if branch_name == current_branch else " "
            print(f"{prefix} {branch_name}")

def rm_branch(args):
    repo = open_repo()
    delete_branch(repo, args.name)

def reset(args):
    repo = open_repo()
    reset_commit(repo, args.name)

def merge(args):
    repo = open_repo()
    result = merge_branch(repo, args.name)
    if result.strategy == "fast_forward":
        print("Current branch fast-forwarded.")
    elif result.strategy == "conflict":
        print("Encountered a merge conflict.")
        for filepath in result.conflicts:
            print(f"  {filepath}")
    else:
        print(f"Successfully merged branch '{args.name}' into current branch.")

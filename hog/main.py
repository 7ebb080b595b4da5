import logging
import sys

import argparse
from .commands import map_command
from .config import log_level
from .errors import HogError

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hog", description="Hog CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init command
    subparsers.add_parser("init", help="Initialize a new hog repository")

    # add command
    add_parser = subparsers.add_parser("add", help="Stage a file for the next commit")
    add_parser.add_argument("file", help="File to stage")

    # commit command
    commit_parser = subparsers.add_parser("commit", help="Commit staged changes")
    commit_parser.add_argument("-m", "--message", default="", help="Commit message")

    # rm command
    rm_parser = subparsers.add_parser("rm", help="Unstage a file or stage it for removal")
    rm_parser.add_argument("file", help="File to remove")

    # log commands
    subparsers.add_parser("log", help="Show first-parent history of HEAD")
    subparsers.add_parser("global-log", help="Show every commit ever made")

    # find command
    find_parser = subparsers.add_parser("find", help="Print ids of commits with the given message")
    find_parser.add_argument("message", help="Exact commit message")

    # status command
    subparsers.add_parser("status", help="Show the status of the repository")

    # checkout command
    checkout_parser = subparsers.add_parser("checkout", help="Checkout a branch, a commit, or a single file")
    checkout_parser.add_argument("-b", "--create", action="store_true", help="Create the branch at HEAD and switch to it, keeping staged changes")
    checkout_parser.add_argument("-f", "--file", required=False, help="Restore only this file (from HEAD, or from NAME as a commit id)")
    checkout_parser.add_argument("name", nargs="?", help="Branch name or commit hash to checkout")

    # branch command
    branch_parser = subparsers.add_parser("branch", help="Manage branches")
    branch_parser.add_argument("-c", "--create", required=False, metavar="BRANCH_NAME", help="Create a new branch")
    branch_parser.add_argument("-d", "--delete", required=False, metavar="BRANCH_NAME", help="Delete the specified branch")

    # rm-branch command
    rm_branch_parser = subparsers.add_parser("rm-branch", help="Delete a branch")
    rm_branch_parser.add_argument("name", help="Branch to delete")

    # reset command
    reset_parser = subparsers.add_parser("reset", help="Check out all files of a branch or commit")
    reset_parser.add_argument("name", help="Branch name or commit hash")

    # merge command
    merge_parser = subparsers.add_parser("merge", help="Merge a branch into the current branch")
    merge_parser.add_argument("name", help="Branch name to merge from")

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=log_level(), format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    try:
        map_command(args.command)(args)
    except HogError as e:
        print(e)
    return 0


if __name__ == "__main__":
    sys.exit(main())

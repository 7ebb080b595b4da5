"""Tests for ancestry and merge-base discovery."""

from hog.branching import create_branch, get_branch_heads, resolve_head
from hog.checkout import checkout
from hog.graph_utils import (
    all_ancestors,
    find_merge_base,
    first_parent_ancestors,
    first_parent_history,
    is_ancestor,
)
from hog.merging import merge


class TestFirstParent:
    def test_root_has_no_ancestors(self, repo):
        assert first_parent_ancestors(repo, resolve_head(repo)) == []

    def test_nearest_first(self, repo, commit_file):
        root = resolve_head(repo)
        a = commit_file("f.txt", "A")
        b = commit_file("f.txt", "B")
        c = commit_file("f.txt", "C")
        assert first_parent_ancestors(repo, c) == [b, a, root]

    def test_memoized_prefixes(self, repo, commit_file):
        a = commit_file("f.txt", "A")
        b = commit_file("f.txt", "B")
        first_parent_ancestors(repo, b)
        assert a in repo.ancestor_cache
        assert repo.ancestor_cache[b][0] == a

    def test_returned_list_is_a_copy(self, repo, commit_file):
        a = commit_file("f.txt", "A")
        first_parent_ancestors(repo, a).clear()
        assert first_parent_ancestors(repo, a) != []

    def test_history_includes_tip(self, repo, commit_file):
        a = commit_file("f.txt", "A", "first")
        b = commit_file("f.txt", "B", "second")
        history = first_parent_history(repo, b)
        assert [digest for digest, _ in history][:2] == [b, a]
        assert [info.commitMessage for _, info in history] == ["second", "first", "initial commit"]


class TestMergeBase:
    def test_with_itself(self, repo, commit_file):
        a = commit_file("f.txt", "A")
        assert find_merge_base(repo, a, a) == a

    def test_diverged(self, repo, commit_file):
        split = commit_file("f.txt", "A")
        create_branch(repo, "other")
        commit_file("g.txt", "master side")
        checkout(repo, "other")
        commit_file("h.txt", "other side")
        heads = get_branch_heads(repo)
        assert find_merge_base(repo, heads["master"], heads["other"]) == split
        assert find_merge_base(repo, heads["other"], heads["master"]) == split

    def test_ancestor_is_base(self, repo, commit_file):
        a = commit_file("f.txt", "A")
        b = commit_file("f.txt", "B")
        assert find_merge_base(repo, a, b) == a
        assert find_merge_base(repo, b, a) == a


class TestAllAncestors:
    def test_includes_second_parent(self, repo, commit_file):
        create_branch(repo, "other")
        commit_file("f.txt", "master")
        checkout(repo, "other")
        other_tip = commit_file("g.txt", "other")
        checkout(repo, "master")
        result = merge(repo, "other")
        assert result.strategy == "merge"
        assert other_tip in all_ancestors(repo, result.commit)
        assert other_tip not in first_parent_ancestors(repo, result.commit)
        assert is_ancestor(repo, other_tip, result.commit)
        assert not is_ancestor(repo, result.commit, other_tip)

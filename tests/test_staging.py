"""Tests for add, rm and status."""

import pytest

from hog.errors import MissingFileError, NoReasonToRemoveError
from hog.repository import repo_status, stage_file, unstage_file
from hog.staging_helpers import get_staging_info


class TestStageFile:
    def test_stage_new_file(self, repo, write):
        write("f.txt", "A")
        assert stage_file(repo, "f.txt") is True
        assert set(get_staging_info(repo).additions) == {"f.txt"}

    def test_missing_file(self, repo):
        with pytest.raises(MissingFileError):
            stage_file(repo, "nope.txt")

    def test_restage_overwrites(self, repo, write):
        write("f.txt", "A")
        stage_file(repo, "f.txt")
        first = get_staging_info(repo).additions["f.txt"]
        write("f.txt", "B")
        stage_file(repo, "f.txt")
        assert get_staging_info(repo).additions["f.txt"] != first

    def test_identical_to_head_is_unstaged(self, repo, commit_file, write):
        commit_file("f.txt", "A")
        write("f.txt", "B")
        stage_file(repo, "f.txt")
        write("f.txt", "A")
        assert stage_file(repo, "f.txt") is False
        assert get_staging_info(repo).is_empty()

    def test_add_cancels_removal(self, repo, commit_file, write):
        commit_file("f.txt", "A")
        unstage_file(repo, "f.txt")
        assert get_staging_info(repo).removals == ["f.txt"]
        write("f.txt", "A")
        stage_file(repo, "f.txt")
        staging = get_staging_info(repo)
        assert staging.removals == []
        assert staging.additions == {}

    def test_nested_paths(self, repo, write):
        write("dir/sub/f.txt", "A")
        stage_file(repo, "dir/sub/f.txt")
        assert "dir/sub/f.txt" in get_staging_info(repo).additions


class TestUnstageFile:
    def test_tracked_file_is_staged_for_removal_and_deleted(self, repo, commit_file):
        commit_file("f.txt", "A")
        unstage_file(repo, "f.txt")
        assert get_staging_info(repo).removals == ["f.txt"]
        assert not (repo.root / "f.txt").exists()

    def test_staged_only_file_is_unstaged_and_kept(self, repo, write):
        write("f.txt", "A")
        stage_file(repo, "f.txt")
        unstage_file(repo, "f.txt")
        assert get_staging_info(repo).is_empty()
        assert (repo.root / "f.txt").exists()

    def test_no_reason(self, repo, write):
        write("f.txt", "A")
        with pytest.raises(NoReasonToRemoveError):
            unstage_file(repo, "f.txt")

    def test_path_never_in_both_sets(self, repo, commit_file, write):
        commit_file("f.txt", "A")
        write("f.txt", "B")
        stage_file(repo, "f.txt")
        unstage_file(repo, "f.txt")
        staging = get_staging_info(repo)
        assert "f.txt" not in staging.additions
        assert staging.removals == ["f.txt"]


class TestStatus:
    def test_clean(self, repo):
        report = repo_status(repo)
        assert report.branches == ["master"]
        assert report.currentBranch == "master"
        assert report.staged == report.removed == report.modified == report.untracked == []

    def test_all_sections(self, repo, commit_file, write):
        commit_file("tracked.txt", "1")
        commit_file("deleted.txt", "1")
        commit_file("removed.txt", "1")
        write("tracked.txt", "2")
        (repo.root / "deleted.txt").unlink()
        unstage_file(repo, "removed.txt")
        write("staged.txt", "s")
        stage_file(repo, "staged.txt")
        write("loose.txt", "u")

        report = repo_status(repo)
        assert report.staged == ["staged.txt"]
        assert report.removed == ["removed.txt"]
        assert report.modified == ["deleted.txt (deleted)", "tracked.txt (modified)"]
        assert report.untracked == ["loose.txt"]

    def test_staged_then_edited(self, repo, write):
        write("f.txt", "A")
        stage_file(repo, "f.txt")
        write("f.txt", "B")
        assert repo_status(repo).modified == ["f.txt (modified)"]

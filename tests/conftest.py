import pytest

from hog.repository import init_repo


@pytest.fixture
def repo(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return init_repo(tmp_path)


@pytest.fixture
def write(repo):
    def _write(name: str, content: str) -> None:
        path = repo.root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    return _write


@pytest.fixture
def commit_file(repo, write):
    """Write, stage and commit one file; returns the new commit digest."""
    from hog.repository import commit_staged, stage_file

    def _commit_file(name: str, content: str, message: str | None = None) -> str:
        write(name, content)
        stage_file(repo, name)
        return commit_staged(repo, message or f"update {name}")

    return _commit_file

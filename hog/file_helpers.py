from pathlib import Path

from .config import REPO_DIR_NAME


def working_path(repo_root: Path, relative_path: str) -> Path:
    return repo_root / relative_path


def relative_to_root(repo_root: Path, filepath: Path) -> str:
    return filepath.resolve().relative_to(repo_root.resolve()).as_posix()


def write_working_file(repo_root: Path, relative_path: str, content: bytes) -> None:
    dest_path = working_path(repo_root, relative_path)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    dest_path.write_bytes(content)


def delete_working_file(repo_root: Path, relative_path: str) -> None:
    target = working_path(repo_root, relative_path)
    target.unlink(missing_ok=True)
    # prune directories left empty, never the root itself
    parent = target.parent
    while parent != repo_root and parent.is_dir() and not any(parent.iterdir()):
        parent.rmdir()
        parent = parent.parent


def list_working_files(repo_root: Path) -> list[str]:
    files = []
    for path in repo_root.rglob("*"):
        relative = path.relative_to(repo_root)
        if relative.parts[0] == REPO_DIR_NAME or not path.is_file():
            continue
        files.append(relative.as_posix())
    return sorted(files)

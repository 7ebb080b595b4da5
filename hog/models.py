from pydantic import BaseModel, Field
from typing import Literal, TypeAlias


class CommitInfo(BaseModel):
    commitMessage: str
    timestamp: int
    parentCommit: str | None = None
    mergeParent: str | None = None
    files: dict[str, str] = Field(default_factory=dict)   # path -> blob digest


class StagingInfo(BaseModel):
    additions: dict[str, str] = Field(default_factory=dict)   # path -> snapshot digest
    removals: list[str] = Field(default_factory=list)
    mergeHead: str | None = None
    mergeMessage: str | None = None

    def is_empty(self) -> bool:
        return not self.additions and not self.removals


BranchInfo: TypeAlias = dict[str, str]


class HeadInfo(BaseModel):
    type: Literal["branch", "commit"]
    value: str # branch name or commit hash


class MergeResult(BaseModel):
    strategy: Literal["fast_forward", "merge", "conflict"]
    commit: str | None = None
    conflicts: list[str] = Field(default_factory=list)


class StatusReport(BaseModel):
    branches: list[str]
    currentBranch: str | None
    headCommit: str
    staged: list[str]
    removed: list[str]
    modified: list[str]     # "path (modified)" / "path (deleted)"
    untracked: list[str]
    mergeHead: str | None = None

"""hog error types.

Every failure a command can hit is a ``HogError``. The CLI prints the
message and exits normally; nothing on disk has been touched when one is
raised.
"""


class HogError(Exception):
    """Base class for all recoverable hog errors."""

    message = "hog error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NotInitializedError(HogError):
    message = "Not in an initialized hog directory."


class AlreadyInitializedError(HogError):
    message = "A hog version-control system already exists in the current directory."


class CorruptRepositoryError(HogError):
    message = "The repository metadata is unreadable."


class EmptyMessageError(HogError):
    message = "Please enter a commit message."


class NothingToCommitError(HogError):
    message = "No changes added to the commit."


class MissingFileError(HogError):
    message = "File does not exist."


class UnreadableFileError(HogError):
    message = "File could not be read."


class FileNotInCommitError(HogError):
    message = "File does not exist in that commit."


class ObjectNotFoundError(HogError):
    message = "No object with that id exists."


class NoSuchCommitError(HogError):
    message = "No commit with that id exists."


class NoSuchBranchError(HogError):
    message = "A branch with that name does not exist."


class BranchExistsError(HogError):
    message = "A branch with that name already exists."


class CannotDeleteCurrentBranchError(HogError):
    message = "Cannot remove the current branch."


class DetachedHeadError(HogError):
    message = "HEAD is detached; check out a branch first."


class NoNeedToCheckoutError(HogError):
    message = "No need to checkout the current branch."


class UntrackedFileConflictError(HogError):
    """Raised before any write when an untracked file would be overwritten.

    Attributes:
        paths: The working-directory paths that are in the way.
    """

    message = "There is an untracked file in the way; delete it, or add and commit it first."

    def __init__(self, paths: list[str] | None = None) -> None:
        self.paths = sorted(paths or [])
        super().__init__()


class NoReasonToRemoveError(HogError):
    message = "No reason to remove the file."


class UncommittedChangesError(HogError):
    message = "You have uncommitted changes."


class AlreadyUpToDateError(HogError):
    message = "Given branch is an ancestor of the current branch."


class CannotMergeWithSelfError(HogError):
    message = "Cannot merge a branch with itself."

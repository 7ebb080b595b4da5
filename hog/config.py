import os

REPO_DIR_NAME = ".hog"
ROOT_COMMIT_MESSAGE = "initial commit"
ROOT_COMMIT_TIMESTAMP = 0
MIN_ABBREV_LENGTH = 4
SHORT_ID_LENGTH = 7


def default_branch() -> str:
    return os.environ.get("HOG_DEFAULT_BRANCH", "master")


def log_level() -> str:
    return os.environ.get("HOG_LOG_LEVEL", "WARNING").upper()

"""Git operations — open repos and inspect their head commit."""

from __future__ import annotations

from pathlib import Path

from git import InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import BadName

SHORT_HASH_LENGTH = 7


def open_repository(repo_path: str | Path) -> Repo:
    """Open the Git repository at *repo_path*.

    Parent directories are searched, so any path inside a work tree works.

    Raises:
        ValueError: If the path does not exist or is not inside a Git repo.
    """
    try:
        return Repo(repo_path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError) as err:
        raise ValueError(f"Not a Git repo: {repo_path}") from err


def head_commit_hash(repo: Repo, short: bool = False) -> str:
    """Return the hash of the commit HEAD points to.

    Args:
        repo: An opened repository.
        short: Abbreviate to the first ``SHORT_HASH_LENGTH`` hex digits.

    Raises:
        ValueError: If HEAD cannot be resolved (e.g. no commits yet).
    """
    try:
        hexsha = repo.head.commit.hexsha
    except (ValueError, BadName) as err:
        raise ValueError(f"Repository has no resolvable HEAD commit: {repo.working_dir}") from err
    return hexsha[:SHORT_HASH_LENGTH] if short else hexsha

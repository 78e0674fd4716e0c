"""Git repository management for the exported documentation tree.

This module provides the GitRepository class for committing and pushing the
rendered Markdown files. It uses subprocess to execute git commands; the
resulting commit is what the issue reconciliation later reads back as a diff
from the GitLab project.
"""

import logging
import os
import re
import subprocess
from typing import List, Optional

from src.git_integration.errors import GitRepositoryError

logger = logging.getLogger(__name__)

# Git command timeout in seconds
GIT_TIMEOUT = 10

# Pushing talks to the remote and gets more time
GIT_PUSH_TIMEOUT = 120

_COMMIT_LINE = re.compile(r"^commit ([0-9a-f]{40})\b", re.MULTILINE)


class GitRepository:
    """Manages the git working copy holding the documentation tree.

    The output directory must already be a clone of the GitLab project the
    issues are tracked in, so that the pushed commit can be diffed through
    the GitLab API.

    Example:
        >>> repo = GitRepository("./docs", remote="origin", branch="master")
        >>> if repo.commit_and_push("Update API documentation"):
        ...     print(repo.current_commit_id())
    """

    def __init__(
        self,
        repo_path: str,
        remote: str = "origin",
        branch: Optional[str] = None,
        push: bool = True,
    ):
        """Initialize git repository manager.

        Args:
            repo_path: Path to the git working copy
            remote: Remote to push to
            branch: Branch to push (None pushes the current branch)
            push: Whether commit_and_push pushes at all
        """
        self.repo_path = repo_path
        self.remote = remote
        self.branch = branch
        self.push_enabled = push
        self._ensure_absolute_path()

    def _ensure_absolute_path(self) -> None:
        """Convert repo_path to absolute path if relative."""
        if not os.path.isabs(self.repo_path):
            self.repo_path = os.path.abspath(self.repo_path)

    def commit_and_push(self, message: str) -> bool:
        """Stage everything, commit and push.

        With push enabled, commits left behind by an earlier failed push are
        pushed too, even when there is nothing new to commit.

        Args:
            message: Commit message

        Returns:
            True if a commit was created or unpushed commits were pushed,
            False if there was nothing to commit or push

        Raises:
            GitRepositoryError: If any git command fails
        """
        committed = self.commit(message)

        if not self.push_enabled:
            return committed

        if not committed and not self.unpushed_commits():
            return False

        self.push()
        return True

    def commit(self, message: str) -> bool:
        """Stage everything and commit.

        Returns:
            True if a commit was created, False if there was nothing to commit

        Raises:
            GitRepositoryError: If git add or git commit fails
        """
        self._run(["git", "add", "-A"], "Failed to stage changes")

        result = self._run(
            ["git", "commit", "-m", message],
            "Failed to commit changes",
            check=False,
        )

        if result.returncode != 0:
            if "nothing to commit" in result.stdout or "nothing to commit" in result.stderr:
                logger.info("No documentation changes to commit")
                return False
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message="Failed to commit changes",
                git_output=result.stderr,
            )

        logger.info(f"Committed documentation changes: {message}")
        return True

    def unpushed_commits(self) -> List[str]:
        """List the local commits the remote branch has not received.

        When the remote-tracking branch does not exist yet, the whole history
        counts as unpushed.

        Returns:
            Full commit SHAs, oldest first (empty for a repository without commits)

        Raises:
            GitRepositoryError: If git fails
        """
        if not self._ref_exists("HEAD"):
            return []

        branch = self.branch or self._current_branch()
        remote_ref = f"refs/remotes/{self.remote}/{branch}"
        rev_range = f"{remote_ref}..HEAD" if self._ref_exists(remote_ref) else "HEAD"

        result = self._run(
            ["git", "rev-list", "--reverse", rev_range],
            "Failed to list unpushed commits",
        )
        commits = result.stdout.split()
        if commits:
            logger.info(f"{len(commits)} commit(s) not yet pushed to {self.remote}/{branch}")
        return commits

    def push(self) -> None:
        """Push the current branch to the configured remote.

        Raises:
            GitRepositoryError: If git push fails
        """
        args = ["git", "push", self.remote]
        if self.branch:
            args.append(self.branch)

        self._run(args, f"Failed to push to {self.remote}", timeout=GIT_PUSH_TIMEOUT)
        logger.info(f"Pushed to {self.remote}{'/' + self.branch if self.branch else ''}")

    def current_commit_id(self) -> str:
        """Get the id of the latest commit from the history output.

        Returns:
            Full commit SHA

        Raises:
            GitRepositoryError: If git log fails or prints no commit id
        """
        result = self._run(
            ["git", "log", "-n", "1", "--no-abbrev-commit", "--no-color"],
            "Failed to read git history",
        )

        match = _COMMIT_LINE.search(result.stdout)
        if not match:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message="No commit id found in git log output",
                git_output=result.stdout,
            )

        return match.group(1)

    def _current_branch(self) -> str:
        result = self._run(
            ["git", "symbolic-ref", "--short", "HEAD"],
            "Failed to read current branch",
        )
        return result.stdout.strip()

    def _ref_exists(self, ref: str) -> bool:
        result = self._run(
            ["git", "rev-parse", "--verify", "--quiet", ref],
            f"Failed to resolve {ref}",
            check=False,
        )
        return result.returncode == 0

    def _run(
        self,
        args: List[str],
        error_message: str,
        check: bool = True,
        timeout: int = GIT_TIMEOUT,
    ) -> subprocess.CompletedProcess:
        """Run a git command in the repository.

        Args:
            args: Command line
            error_message: Message for the GitRepositoryError on failure
            check: Raise when git exits with a non-zero status
            timeout: Timeout in seconds

        Returns:
            The completed process

        Raises:
            GitRepositoryError: If git is missing, times out or fails
        """
        logger.debug(f"Running: {' '.join(args)}")
        try:
            result = subprocess.run(
                args,
                cwd=self.repo_path,
                capture_output=True,
                text=True,
                timeout=timeout,
                # Output is parsed, keep git messages in English
                env={**os.environ, "LC_ALL": "C"},
            )
        except subprocess.TimeoutExpired:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=f"{' '.join(args[:2])} timed out after {timeout} seconds",
            )
        except FileNotFoundError:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message="Git command not found. Please install git.",
            )

        if check and result.returncode != 0:
            raise GitRepositoryError(
                repo_path=self.repo_path,
                message=error_message,
                git_output=result.stderr,
            )

        return result

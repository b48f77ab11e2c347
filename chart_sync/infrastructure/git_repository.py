"""Git operations used to snapshot synced documents."""

import logging
import os
import subprocess
from typing import Iterable, Optional

from chart_sync.domain.errors import CommitFailure, PreconditionFailure

logger = logging.getLogger(__name__)


class GitRepository:
    """Thin wrapper over the git command line for one working tree."""

    DEFAULT_BRANCH = "main"

    def __init__(self, root: str = "."):
        self.root = root

    def _run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                ["git", *args],
                cwd=self.root,
                capture_output=True,
                text=True,
                check=check,
            )
        except FileNotFoundError as e:
            raise PreconditionFailure("git executable not found") from e

    def ensure_repository(self):
        """Raise PreconditionFailure unless the root is a git working tree."""
        if not os.path.isdir(os.path.join(self.root, ".git")):
            raise PreconditionFailure(f"Not a git repository: {os.path.abspath(self.root)}")

    def dirty_paths(self, ignored: Iterable[str] = ()) -> list[str]:
        """List modified or untracked paths, leaving out ignored ones."""
        ignored = set(ignored)
        result = self._run("status", "--porcelain", check=False)
        if result.returncode != 0:
            raise PreconditionFailure(f"git status failed: {result.stderr.strip()}")

        paths = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            path = line[3:]
            if " -> " in path:
                path = path.split(" -> ", 1)[1]
            path = path.strip('"')
            if path not in ignored:
                paths.append(path)
        return paths

    def ensure_clean(self, ignored: Iterable[str] = ()):
        dirty = self.dirty_paths(ignored)
        if dirty:
            raise PreconditionFailure(
                f"Working tree is not clean, commit or stash changes first: {', '.join(dirty)}"
            )

    def current_branch(self) -> str:
        result = self._run("branch", "--show-current", check=False)
        branch = result.stdout.strip() if result.returncode == 0 else ""
        return branch or self.DEFAULT_BRANCH

    def commit(self, paths: Iterable[str], message: str) -> Optional[str]:
        """
        Stage the given paths and commit them.

        Args:
            paths: Paths relative to the repository root
            message: Commit message

        Returns:
            Short hash of the new commit, or None if nothing changed

        Raises:
            CommitFailure: If staging or committing fails
        """
        try:
            self._run("add", "--", *paths)
            staged = self._run("diff", "--cached", "--quiet", check=False)
            if staged.returncode == 0:
                logger.info("No changes to commit")
                return None
            self._run("commit", "-m", message)
            head = self._run("rev-parse", "--short", "HEAD")
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            raise CommitFailure(f"git {e.cmd[1]} failed: {detail}") from e
        return head.stdout.strip()

    def unstage(self, paths: Iterable[str]):
        """
        Return the given paths in the index to their HEAD state.

        Raises:
            CommitFailure: If git cannot reset the index
        """
        try:
            self._run("reset", "-q", "--", *paths)
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            raise CommitFailure(f"git reset failed: {detail}") from e

    def recent_commits(self, count: int = 3) -> list[str]:
        result = self._run("log", "--oneline", "-n", str(count), check=False)
        return result.stdout.splitlines() if result.returncode == 0 else []

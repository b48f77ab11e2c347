"""Scratch git repositories for tests that need a real working tree."""

import shutil
import subprocess
import unittest

requires_git = unittest.skipUnless(shutil.which("git"), "git executable not available")


def git(root: str, *args: str) -> str:
    return subprocess.run(["git", *args], cwd=root, check=True, capture_output=True, text=True).stdout


def init_repository(root: str):
    git(root, "init", "-q")
    git(root, "symbolic-ref", "HEAD", "refs/heads/main")
    git(root, "config", "user.name", "Chart Bot")
    git(root, "config", "user.email", "charts@example.com")
    git(root, "config", "commit.gpgsign", "false")


def commit_all(root: str, message: str = "initial"):
    git(root, "add", "-A")
    git(root, "commit", "-q", "-m", message)

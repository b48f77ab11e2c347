"""Configuration for a chart sync run."""

import os
from dataclasses import dataclass, field, replace
from typing import Optional

from chart_sync.domain.document import HEAD_COUNT
from chart_sync.domain.formatting import DATE_STYLE_SHORT, DATE_STYLES, DESCRIPTION_LIMIT

DEFAULT_SOURCE = "../GitHub-Chinese-Top-Charts-Classified/content/charts/overall/software/All-Language.md"
DEFAULT_LOG_FILE = "sync.log"


@dataclass(frozen=True)
class SyncSettings:
    """Immutable settings for one sync run."""

    source: str = DEFAULT_SOURCE
    readme_path: str = "README.md"
    continuation_path: str = "README-Part2.md"
    heading: str = "## All Language"
    continuation_heading: str = "## All Language (Part 2)"
    head_count: int = HEAD_COUNT
    description_limit: int = DESCRIPTION_LIMIT
    date_style: str = DATE_STYLE_SHORT
    repo_root: str = "."
    log_file: Optional[str] = None
    ignored_paths: tuple[str, ...] = field(default=(DEFAULT_LOG_FILE,))
    commit: bool = True

    def __post_init__(self):
        if self.date_style not in DATE_STYLES:
            raise ValueError(f"date_style must be one of {DATE_STYLES}, got {self.date_style!r}")
        if self.head_count < 1:
            raise ValueError(f"head_count must be positive, got {self.head_count}")
        if self.description_limit < 1:
            raise ValueError(f"description_limit must be positive, got {self.description_limit}")

    @property
    def source_is_url(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    def status_ignored_paths(self) -> tuple[str, ...]:
        """Paths the clean working tree check skips, the log file included when it sits in the repository."""
        paths = list(self.ignored_paths)
        if self.log_file:
            relative = os.path.relpath(os.path.abspath(self.log_file), os.path.abspath(self.repo_root))
            relative = relative.replace(os.sep, "/")
            if not relative.startswith("../") and relative != ".." and relative not in paths:
                paths.append(relative)
        return tuple(paths)

    def resolve(self, path: str) -> str:
        """Resolve a destination path against the repository root."""
        return os.path.join(self.repo_root, path)

    @classmethod
    def from_env(cls) -> "SyncSettings":
        """
        Build settings from environment variables, falling back to defaults.

        SYNC_IGNORED_PATHS is a comma-separated list of paths that may be
        untracked or modified without failing the clean working tree check.
        """
        ignored = os.getenv("SYNC_IGNORED_PATHS")
        ignored_paths = tuple(p.strip() for p in ignored.split(",") if p.strip()) if ignored else (DEFAULT_LOG_FILE,)

        return cls(
            source=os.getenv("CLASSIFIED_DATA_PATH", DEFAULT_SOURCE),
            readme_path=os.getenv("README_PATH", "README.md"),
            continuation_path=os.getenv("CONTINUATION_PATH", "README-Part2.md"),
            heading=os.getenv("SECTION_HEADING", "## All Language"),
            continuation_heading=os.getenv("CONTINUATION_HEADING", "## All Language (Part 2)"),
            head_count=int(os.getenv("HEAD_COUNT", str(HEAD_COUNT))),
            description_limit=int(os.getenv("DESCRIPTION_LIMIT", str(DESCRIPTION_LIMIT))),
            date_style=os.getenv("DATE_STYLE", DATE_STYLE_SHORT),
            repo_root=os.getenv("SYNC_REPO_ROOT", "."),
            log_file=os.getenv("SYNC_LOG_FILE") or None,
            ignored_paths=ignored_paths,
        )

    def with_overrides(self, **overrides) -> "SyncSettings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

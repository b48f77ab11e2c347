"""Application service for syncing the overall chart into the README documents."""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from chart_sync.application.settings import SyncSettings
from chart_sync.domain.document import Document, section_body, split_entries
from chart_sync.domain.entry import Entry, ParsedRow, ParseResult
from chart_sync.domain.errors import CommitFailure, PreconditionFailure, WriteFailure
from chart_sync.domain.formatting import format_stars
from chart_sync.domain.table import parse_table, render_table
from chart_sync.infrastructure.chart_source import ChartSourceClient
from chart_sync.infrastructure.git_repository import GitRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlannedWrite:
    """New content for one destination file, with what it replaces."""

    path: str
    content: str
    previous: Optional[str]

    @property
    def changed(self) -> bool:
        return self.content != self.previous


@dataclass(frozen=True)
class SyncPlan:
    parsed: ParseResult
    head: tuple[Entry, ...]
    continuation: tuple[Entry, ...]
    writes: tuple[PlannedWrite, ...]


@dataclass(frozen=True)
class SyncResult:
    processed: int
    skipped: int
    head_rows: int
    continuation_rows: int
    written: tuple[str, ...]
    commit: Optional[str]


@dataclass(frozen=True)
class CheckReport:
    candidate_lines: int
    processed: int
    skipped: int
    preview: tuple[str, ...]
    readme_entries: Optional[int]


def _read_optional(path: str) -> Optional[str]:
    if not os.path.isfile(path):
        return None
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write(path: str, content: str):
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


class SyncService:
    """Parses the source chart and rewrites the head and continuation listings."""

    PREVIEW_ROWS = 5
    PROGRESS_INTERVAL = 10

    def __init__(
        self,
        settings: SyncSettings,
        source_client: ChartSourceClient,
        git_repository: Optional[GitRepository] = None,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize the sync service.

        Args:
            settings: Run configuration
            source_client: Reader for the source chart document
            git_repository: Working tree to commit into. Defaults to settings.repo_root.
            log: Logger receiving progress events. Defaults to this module's logger.
        """
        self.settings = settings
        self.source_client = source_client
        self.git_repository = git_repository or GitRepository(settings.repo_root)
        self.logger = log or logger

    def parse_source(self) -> ParseResult:
        self.logger.info(f"Reading source: {self.settings.source}")
        text = self.source_client.read(self.settings.source)

        processed = 0

        def progress(row: ParsedRow):
            nonlocal processed
            processed += 1
            if processed % self.PROGRESS_INTERVAL == 0:
                self.logger.info(f"Processed {processed} entries...")

        parsed = parse_table(text.splitlines(), on_row=progress)

        for skip in parsed.skipped:
            self.logger.debug(f"Skipped line {skip.line_number}: {skip.reason}")
        ranks = [entry.rank for entry in parsed.entries]
        if any(current >= following for current, following in zip(ranks, ranks[1:])):
            self.logger.warning("Source ranks are not strictly increasing")
        self.logger.info(f"Parsed {len(parsed.rows)} entries, skipped {len(parsed.skipped)} rows")
        return parsed

    def check(self) -> CheckReport:
        """Parse and report without writing files or touching git."""
        self.logger.info("[check] Safe mode enabled, nothing will be written")
        parsed = self.parse_source()

        preview = tuple(
            f"#{entry.rank} {entry.name} ({format_stars(entry.stars)} stars)"
            for entry in parsed.entries[:self.PREVIEW_ROWS]
        )
        self.logger.info(f"[check] Source has {parsed.candidate_lines} table lines, {len(parsed.rows)} entries")
        for line in preview:
            self.logger.info(f"[check] {line}")

        readme_text = _read_optional(self.settings.resolve(self.settings.readme_path))
        readme_entries = None
        if readme_text is None:
            self.logger.warning(f"[check] {self.settings.readme_path} does not exist")
        else:
            readme_entries = len(parse_table(readme_text.splitlines()).rows)
            self.logger.info(f"[check] {self.settings.readme_path} currently lists {readme_entries} entries")

        self.logger.info("[check] Done, no changes made")
        return CheckReport(
            candidate_lines=parsed.candidate_lines,
            processed=len(parsed.rows),
            skipped=len(parsed.skipped),
            preview=preview,
            readme_entries=readme_entries,
        )

    def _pointer(self, continuation: Sequence[Entry]) -> str:
        readme = self.settings.resolve(self.settings.readme_path)
        target = self.settings.resolve(self.settings.continuation_path)
        link = os.path.relpath(target, os.path.dirname(readme) or ".").replace(os.sep, "/")
        return (
            f"> Ranks {continuation[0].rank}-{continuation[-1].rank} "
            f"continue in [{os.path.basename(target)}]({link})"
        )

    def plan(self, parsed: ParseResult) -> SyncPlan:
        """
        Render every destination document in memory.

        Raises:
            PreconditionFailure: If the primary document or its section is missing
        """
        settings = self.settings
        head, continuation = split_entries(parsed.entries, settings.head_count)

        readme_path = settings.resolve(settings.readme_path)
        readme_text = _read_optional(readme_path)
        if readme_text is None:
            raise PreconditionFailure(f"Primary document does not exist: {readme_path}")

        readme = Document.from_text(readme_text)
        span = readme.find_section(settings.heading)
        pointer = self._pointer(continuation) if continuation else None
        body = section_body(
            settings.heading,
            render_table(head, settings.date_style, settings.description_limit),
            pointer,
        )
        writes = [PlannedWrite(readme_path, readme.replace_section(span, body).to_text(), readme_text)]

        continuation_path = settings.resolve(settings.continuation_path)
        continuation_text = _read_optional(continuation_path)
        document = Document.from_text(continuation_text or "")
        has_section = document.has_section(settings.continuation_heading)

        if continuation or has_section:
            body = section_body(
                settings.continuation_heading,
                render_table(continuation, settings.date_style, settings.description_limit),
            )
            if has_section:
                document = document.replace_section(document.find_section(settings.continuation_heading), body)
            else:
                document = document.append_section(body)
            writes.append(PlannedWrite(continuation_path, document.to_text(), continuation_text))

        return SyncPlan(parsed, tuple(head), tuple(continuation), tuple(writes))

    def _apply(self, writes: Sequence[PlannedWrite]) -> list[PlannedWrite]:
        """
        Write every changed document.

        Raises:
            WriteFailure: If a document cannot be written; earlier writes are restored
        """
        applied = []
        for write in writes:
            if not write.changed:
                self.logger.info(f"{write.path} is up to date")
                continue
            try:
                _write(write.path, write.content)
            except OSError as e:
                self.logger.error(f"Cannot write {write.path}, restoring previous documents")
                self._rollback(applied)
                raise WriteFailure(f"Cannot write {write.path}: {e}") from e
            applied.append(write)
            self.logger.info(f"Wrote {write.path}")
        return applied

    def _rollback(self, applied: Sequence[PlannedWrite]):
        for write in applied:
            if write.previous is None:
                os.remove(write.path)
            else:
                _write(write.path, write.previous)
            self.logger.warning(f"Restored {write.path}")

    def _commit_message(self, plan: SyncPlan) -> str:
        now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        return (
            f"Sync overall chart from Classified repository - {now}\n\n"
            f"Source: {self.settings.source}\n"
            f"Entries: {len(plan.parsed.rows)}"
        )

    def run(self) -> SyncResult:
        """
        Sync the source chart into the destination documents and commit them.

        Every document is rendered before any file is written. If the commit
        fails, written files are restored to their previous contents and
        unstaged.

        Returns:
            Counts of processed rows and the files written

        Raises:
            PreconditionFailure: If a precondition fails; nothing is written
            WriteFailure: If a document cannot be written; files are rolled back
            CommitFailure: If git rejects the commit; files are rolled back
        """
        settings = self.settings
        self.logger.info("=== Starting chart sync ===")

        if settings.commit:
            self.git_repository.ensure_repository()
            self.git_repository.ensure_clean(settings.status_ignored_paths())
            self.logger.info(f"Current branch: {self.git_repository.current_branch()}")

        plan = self.plan(self.parse_source())
        applied = self._apply(plan.writes)

        commit = None
        if settings.commit and applied:
            paths = [os.path.relpath(write.path, settings.repo_root) for write in applied]
            try:
                commit = self.git_repository.commit(paths, self._commit_message(plan))
            except CommitFailure:
                self.logger.error("Commit failed, restoring previous documents")
                self._rollback(applied)
                try:
                    self.git_repository.unstage(paths)
                except CommitFailure as e:
                    self.logger.error(f"Cannot unstage {', '.join(paths)}: {e}")
                raise
            if commit:
                self.logger.info(f"Committed {commit}")
                for line in self.git_repository.recent_commits():
                    self.logger.info(f"  {line}")

        self.logger.info(
            f"=== Sync completed: {len(plan.parsed.rows)} entries processed, "
            f"{len(plan.head)} in {settings.readme_path}, "
            f"{len(plan.continuation)} in {settings.continuation_path} ==="
        )
        return SyncResult(
            processed=len(plan.parsed.rows),
            skipped=len(plan.parsed.skipped),
            head_rows=len(plan.head),
            continuation_rows=len(plan.continuation),
            written=tuple(write.path for write in applied),
            commit=commit,
        )

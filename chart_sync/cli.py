"""Command-line entry point for the chart sync."""

import argparse
import logging
from typing import Optional, Sequence

from chart_sync.application.settings import SyncSettings
from chart_sync.application.sync_service import SyncService
from chart_sync.domain.errors import SyncError
from chart_sync.domain.formatting import DATE_STYLES
from chart_sync.infrastructure.chart_source import ChartSourceClient

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sync the overall chart from the Classified repository into README.md."
    )
    parser.add_argument("-s", "--safe", action="store_true",
                        help="Check-only mode: parse and report without writing or committing.")
    parser.add_argument("--source", help="Source chart markdown, a path or http(s) URL.")
    parser.add_argument("--readme", dest="readme_path", help="Primary document to update.")
    parser.add_argument("--continuation", dest="continuation_path", help="Continuation document to update.")
    parser.add_argument("--date-style", choices=DATE_STYLES, help="short renders MM/DD, iso keeps YYYY-MM-DD.")
    parser.add_argument("--head-count", type=int, help="Entries kept in the primary document.")
    parser.add_argument("--repo-root", help="Git working tree holding the documents.")
    parser.add_argument("--no-commit", action="store_true", help="Write documents without committing them.")
    parser.add_argument("--log-file", help="Also append log output to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped rows and other debug output.")
    return parser


def configure_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


def add_log_file(log_file: str) -> logging.Handler:
    """Append root log output to a file."""
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)
    return handler


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the sync, returning the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    handler = None

    try:
        settings = SyncSettings.from_env().with_overrides(
            source=args.source,
            readme_path=args.readme_path,
            continuation_path=args.continuation_path,
            date_style=args.date_style,
            head_count=args.head_count,
            repo_root=args.repo_root,
            commit=False if args.no_commit else None,
            log_file=args.log_file,
        )
        if settings.log_file:
            handler = add_log_file(settings.log_file)
        service = SyncService(settings, ChartSourceClient())

        if args.safe:
            service.check()
        else:
            service.run()
        return 0

    except SyncError as e:
        logger.error(f"Sync failed: {e}")
        return 1
    except Exception as e:
        logger.error(f"Sync failed: {e}", exc_info=True)
        return 1
    finally:
        if handler is not None:
            logging.getLogger().removeHandler(handler)
            handler.close()

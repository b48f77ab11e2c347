#!/usr/bin/env python3
"""Script to dump the parsed source chart to CSV and JSON."""

import logging
import sys
import os
from datetime import datetime

# Add the project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from chart_sync.application.settings import SyncSettings
from chart_sync.application.sync_service import SyncService
from chart_sync.infrastructure.chart_source import ChartSourceClient
from chart_sync.infrastructure.export import dump_to_csv, dump_to_json

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """Dump the source chart entries to CSV and JSON."""
    try:
        output_dir = os.getenv("OUTPUT_DIR", "artifacts")
        os.makedirs(output_dir, exist_ok=True)

        service = SyncService(SyncSettings.from_env(), ChartSourceClient())
        entries = service.parse_source().entries

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        csv_file = os.path.join(output_dir, f"entries_{timestamp}.csv")
        json_file = os.path.join(output_dir, f"entries_{timestamp}.json")

        dump_to_csv(entries, csv_file)
        dump_to_json(entries, json_file)

        logger.info(f"Chart dump completed. Files: {csv_file}, {json_file}")
        return 0
    except Exception as e:
        logger.error(f"Chart dump failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())

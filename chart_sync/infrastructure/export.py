"""Dump parsed chart entries to CSV and JSON."""

import csv
import json
import logging
from dataclasses import asdict, fields
from typing import Sequence

from chart_sync.domain.entry import Entry

logger = logging.getLogger(__name__)

FIELDNAMES = [f.name for f in fields(Entry)]


def dump_to_csv(entries: Sequence[Entry], output_file: str) -> int:
    """Dump entries to CSV, returning the number of rows written."""
    if not entries:
        logger.warning("No data to dump")
        return 0

    with open(output_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        writer.writerows(asdict(entry) for entry in entries)

    logger.info(f"Dumped {len(entries)} entries to {output_file}")
    return len(entries)


def dump_to_json(entries: Sequence[Entry], output_file: str) -> int:
    """Dump entries to JSON, returning the number of records written."""
    if not entries:
        logger.warning("No data to dump")
        return 0

    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump([asdict(entry) for entry in entries], f, indent=2, ensure_ascii=False)

    logger.info(f"Dumped {len(entries)} entries to {output_file}")
    return len(entries)

"""Seed Data — loads the fixed startup dataset into TaskRecord copies.

Invariants:
    - Loaded once per service instance; the file is never written back
    - Any unreadable or malformed entry aborts the load with SeedDataError
    - Duplicate ids in the dataset are rejected (ids must be unique)
"""

import json
import logging
from pathlib import Path

from taskboard.core.errors import SeedDataError
from taskboard.core.task_record import TaskRecord

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = Path(__file__).parent / "data" / "tasks.json"


def load_seed_records(path: str | Path | None = None) -> list[TaskRecord]:
    """Read the seed JSON array and parse each entry into a TaskRecord."""
    source = Path(path) if path else DEFAULT_SEED_PATH
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SeedDataError(str(e), str(source))
    if not isinstance(raw, list):
        raise SeedDataError("top-level value must be a list", str(source))

    records: list[TaskRecord] = []
    seen: set[int] = set()
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise SeedDataError(f"entry {i} is not an object", str(source))
        try:
            record = TaskRecord.from_dict(entry)
        except (KeyError, ValueError, TypeError) as e:
            raise SeedDataError(f"entry {i}: {e!r}", str(source))
        if record.id in seen:
            raise SeedDataError(f"duplicate id {record.id}", str(source))
        seen.add(record.id)
        records.append(record)

    logger.info(f"Loaded {len(records)} seed tasks from {source.name}")
    return records

"""Read and write the catalog JSON file."""

import json
import os
from typing import Iterable, List

from .models import PluginRecord


def save_records(records: Iterable[PluginRecord], path: str) -> int:
    """Write records as a JSON array; returns how many were written."""
    data = [r.to_dict() for r in records]
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    return len(data)


def load_records(path: str) -> List[PluginRecord]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of plugin records")
    return [PluginRecord.from_dict(entry) for entry in data if isinstance(entry, dict)]

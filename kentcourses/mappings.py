"""
Offline mappings bundled with the package.

This module reads two read-only snapshot tables:

    data/courses.json   course name -> base course metadata
    data/rmp_ids.json   professor name -> RateMyProfessors ids

They are produced by separate batch crawls and only ever read here. Both
loaders are defensive: a missing or corrupted file is treated as an empty
table, so the live query path still works.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from kentcourses import config


logger = logging.getLogger(__name__)


def _load_table(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        logger.debug("Mapping file %s does not exist", path)
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Could not read mapping file %s: %s", path, exc)
        return []

    if not isinstance(data, list):
        return []
    return [entry for entry in data if isinstance(entry, dict) and entry.get("name")]


@lru_cache(maxsize=None)
def load_course_mappings(path: Optional[str] = None) -> tuple:
    """
    Load the course table. Cached, the file never changes at runtime.
    """
    table = _load_table(Path(path) if path is not None else config.COURSE_MAPPINGS_FILE)
    return tuple(table)


@lru_cache(maxsize=None)
def load_rmp_mappings(path: Optional[str] = None) -> tuple:
    """
    Load the professor table, normalizing rmp_ids to lists of strings.
    """
    out = []
    for entry in _load_table(Path(path) if path is not None else config.RMP_MAPPINGS_FILE):
        ids = entry.get("rmp_ids", [])
        if not isinstance(ids, list):
            continue
        out.append({"name": str(entry["name"]).strip(), "rmp_ids": [str(x) for x in ids]})
    return tuple(out)


def find_course_mapping(identifier: str, path: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Exact match on the course name, e.g. 'CS10051'."""
    for entry in load_course_mappings(path):
        if entry.get("name") == identifier:
            return entry
    return None

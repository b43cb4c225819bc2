# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Summary Cache — ``maps/records_cache.json`` for incremental map builds.

    {"entries": {"<source>:<path>": {"summary": "..."}}}
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict

logger = logging.getLogger("frame.maps.cache")

CACHE_FILENAME = "records_cache.json"


def load_cache(cache_path: Path) -> Dict[str, str]:
    """Read cached summaries keyed by ``source:path``. Missing or corrupt → {}."""
    if not cache_path.exists():
        return {}
    try:
        data = json.loads(cache_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable summary cache %s: %s", cache_path, e)
        return {}

    entries = data.get("entries", {}) if isinstance(data, dict) else {}
    result: Dict[str, str] = {}
    for key, entry in entries.items():
        if isinstance(entry, dict) and isinstance(entry.get("summary"), str):
            result[key] = entry["summary"]
    return result


def write_cache(cache_path: Path, summaries: Dict[str, str]) -> None:
    """Replace the cache file atomically (temp file + rename)."""
    payload = {"entries": {key: {"summary": s} for key, s in summaries.items()}}
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=".records_cache.", dir=str(cache_path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
        os.replace(tmp_name, cache_path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

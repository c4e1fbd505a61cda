"""
Reading and writing the metadata cache file.

On disk the cache is one JSON object keyed by canonical image path:

    {"/data/set/cat.png": {"caption": "a cat", "resolution": [64, 48]}, ...}

Keys are sorted, so an unchanged directory always produces the same bytes.
"""
import json
import logging
from pathlib import Path
from typing import Dict

from . import config
from .exceptions import CacheReadError, CacheWriteError
from .models import SubsetInfo


class CacheWriter:
    def write(self, input_dir: Path, cache: Dict[str, SubsetInfo]) -> Path:
        """
        Writes the cache into input_dir, replacing any previous cache file.

        The file is truncated and rewritten in place; a crash mid-write leaves
        a partial file behind.
        """
        cache_path = input_dir / config.CACHE_FILENAME
        payload = {key: info.to_dict() for key, info in cache.items()}

        logging.debug(f"Writing {len(payload)} entries to {cache_path}")
        try:
            with open(cache_path, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, sort_keys=True)
        except (OSError, TypeError, ValueError) as e:
            raise CacheWriteError(cache_path, e) from e

        return cache_path


def load_cache(cache_path: Path) -> Dict[str, SubsetInfo]:
    """Reads a cache file written by CacheWriter back into memory."""
    try:
        with open(cache_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError(f"Expected a JSON object, got {type(raw).__name__}")
        return {key: SubsetInfo.from_dict(value) for key, value in raw.items()}
    except (OSError, ValueError) as e:
        raise CacheReadError(cache_path, e) from e

"""
File-based caching for SEC EDGAR JSON responses.

Provides:
- One JSON document per cache name (e.g. CIK0000320193.json)
- Metadata tracking (last update, source URL, size) in <name>_metadata.json
- Staleness checks against a maximum age in hours
- Self-healing (unreadable cache files are treated as a miss and refetched)

Cache Strategy:
- Age <= max_age_hours: serve the cached document
- Age > max_age_hours or no metadata: caller refetches and saves

Usage:
    from secfacts.cache_manager import ResponseCache

    cache = ResponseCache(cache_dir="cache")
    facts = cache.load("CIK0000320193", max_age_hours=24)
    if facts is None:
        facts = download()
        cache.save("CIK0000320193", facts, source=url)
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

# Cache settings
DEFAULT_MAX_AGE_HOURS = 24

logger = logging.getLogger(__name__)


class CacheMetadata:
    """Metadata for a cached JSON response."""

    def __init__(self, last_update: datetime, source: str = "", size: int = 0):
        self.last_update = last_update
        self.source = source
        self.size = size

    def to_dict(self) -> dict:
        return {
            "last_update": self.last_update.isoformat(),
            "source": self.source,
            "size": self.size,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CacheMetadata":
        return cls(
            last_update=pd.Timestamp(data["last_update"]).to_pydatetime(),
            source=data.get("source", ""),
            size=data.get("size", 0),
        )

    def age_hours(self) -> float:
        """Get cache age in hours."""
        return (datetime.now() - self.last_update).total_seconds() / 3600

    def is_valid(self, max_age_hours: float = DEFAULT_MAX_AGE_HOURS) -> bool:
        """Check if cache is still fresh enough to serve."""
        return self.age_hours() <= max_age_hours


class ResponseCache:
    """Staleness-keyed JSON file cache for remote responses."""

    def __init__(self, cache_dir: Optional[Path] = None):
        """
        Initialize response cache.

        Args:
            cache_dir: Directory for cache storage (default: ./cache)
        """
        self.cache_dir = Path(cache_dir) if cache_dir else Path("cache")
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            print(f"[warn] Could not create cache directory {self.cache_dir}: {e}", file=sys.stderr)

    def paths(self, name: str):
        """Return (document path, metadata path) for a cache name."""
        return (
            self.cache_dir / f"{name}.json",
            self.cache_dir / f"{name}_metadata.json",
        )

    def load(self, name: str, max_age_hours: float = DEFAULT_MAX_AGE_HOURS) -> Optional[dict]:
        """
        Load a cached document if it exists and is fresh.

        Args:
            name: Cache name (file stem)
            max_age_hours: Maximum acceptable age of the cached document

        Returns:
            Parsed JSON document, or None on a miss
        """
        cache_file, metadata_file = self.paths(name)

        metadata = self._load_metadata(metadata_file)
        if metadata is None or not cache_file.exists():
            logger.debug("cache miss for %s", name)
            return None

        age_hours = metadata.age_hours()
        if not metadata.is_valid(max_age_hours):
            logger.debug("cache for %s is stale (%.1fh > %sh)", name, age_hours, max_age_hours)
            return None

        try:
            data = json.loads(cache_file.read_text())
        except (OSError, ValueError) as e:
            print(f"[warn] Could not load cache {cache_file}: {e}", file=sys.stderr)
            return None

        logger.debug("cache hit for %s (age %.1fh)", name, age_hours)
        return data

    def save(self, name: str, data: dict, source: str = "") -> None:
        """Write a document and its metadata to the cache."""
        cache_file, metadata_file = self.paths(name)
        try:
            text = json.dumps(data)
            cache_file.parent.mkdir(parents=True, exist_ok=True)
            cache_file.write_text(text)
            metadata = CacheMetadata(last_update=datetime.now(), source=source, size=len(text))
            metadata_file.write_text(json.dumps(metadata.to_dict(), indent=2))
            logger.debug("saved cache %s (%d bytes)", cache_file, len(text))
        except OSError as e:
            print(f"[warn] Could not save cache {cache_file}: {e}", file=sys.stderr)

    def _load_metadata(self, metadata_file: Path) -> Optional[CacheMetadata]:
        """Load cache metadata from JSON file."""
        if not metadata_file.exists():
            return None

        try:
            data = json.loads(metadata_file.read_text())
            return CacheMetadata.from_dict(data)
        except (OSError, ValueError, KeyError) as e:
            print(f"[warn] Could not load cache metadata: {e}", file=sys.stderr)
            return None

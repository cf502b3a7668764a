"""Disk-backed cache of a blog's categories."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import NamedTuple

from pydantic import ValidationError

from blogwire.models.category import Category
from blogwire.utils.logging import get_logger

logger = get_logger(__name__)


class CacheKey(NamedTuple):
    """Identity a snapshot is stored under."""

    host: str
    blog_id: str
    username: str

    @property
    def is_complete(self) -> bool:
        return bool(self.host and self.blog_id and self.username)

    @property
    def filename(self) -> str:
        raw = f"{self.host}_{self.blog_id}_{self.username}"
        return re.sub(r"[^\w.@-]", "_", raw) + ".json"


class CategoryStore:
    """Persists category lists as JSON files, one per cache key."""

    def __init__(self, directory: Path):
        self.directory = directory

    def _path(self, key: CacheKey) -> Path:
        return self.directory / key.filename

    def read_snapshot(self, key: CacheKey) -> list[Category] | None:
        """Load a snapshot from disk; None if missing or unreadable."""
        path = self._path(key)
        if not path.exists():
            return None
        try:
            raw = path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            logger.warning(f"Cannot read cached categories file {path}: {exc}")
            return None
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning(f"Ignoring corrupt categories file {path}")
            return None
        items = data.get("categories", []) if isinstance(data, dict) else data
        if not isinstance(items, list):
            return None
        try:
            return [Category.model_validate(item) for item in items]
        except ValidationError as exc:
            logger.warning(f"Ignoring invalid categories file {path}: {exc}")
            return None

    def write_snapshot(self, key: CacheKey, categories: list[Category]) -> Path:
        """Write the snapshot, replacing any previous one."""
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "count": len(categories),
            "categories": [c.model_dump() for c in categories],
        }
        path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
        return path


class CategoryCache:
    """In-memory category list for one adapter, loaded lazily from the store.

    Only an explicit "list categories" response fills an empty cache from the
    server; loading never touches the network.
    """

    def __init__(self, store: CategoryStore | None, key: CacheKey):
        self.store = store
        self.key = key
        self.categories: list[Category] = []
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    def is_empty(self) -> bool:
        return not self.categories

    def load(self) -> None:
        """Read the persisted snapshot once. Later calls do nothing."""
        if self._loaded:
            return
        self._loaded = True

        if not self.key.is_complete:
            logger.debug("Need host, blog id and username to locate the category cache")
            return
        if self.store is None:
            return
        snapshot = self.store.read_snapshot(self.key)
        if snapshot:
            logger.debug(f"Loaded {len(snapshot)} cached categories for {self.key.host}")
            self.categories = snapshot

    def replace(self, categories: list[Category]) -> None:
        self.categories = list(categories)
        self._loaded = True

    def save(self) -> None:
        if not self.key.is_complete:
            logger.debug("Need host, blog id and username to save the category cache")
            return
        if self.store is None:
            return
        try:
            self.store.write_snapshot(self.key, self.categories)
        except OSError as exc:
            logger.warning(f"Cannot write cached categories file: {exc}")

    def id_for(self, name: str) -> str | None:
        """Server id of the first category called ``name``."""
        for category in self.categories:
            if category.name == name:
                return category.category_id
        return None

    def name_for(self, value: str) -> str | None:
        """Name of the first category whose name or id equals ``value``."""
        for category in self.categories:
            if category.name == value or category.category_id == value:
                return category.name
        return None

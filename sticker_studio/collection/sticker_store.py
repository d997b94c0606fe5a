"""
Sticker Store - Collection Persistence

Keeps produced stickers, newest first. Two backends:
- InMemoryStickerStore: process-local list (tests, one-shot sessions)
- JsonStickerStore: a directory holding stickers.json metadata plus one
  PNG per sticker, so the collection survives restarts
"""

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

from ..common.constants import STORE_INDEX_FILENAME
from ..common.exceptions import StoreError
from ..common.logger import get_logger
from .sticker import Sticker

logger = get_logger(__name__)

STORE_FORMAT_VERSION = "1.0.0"


class StickerStore(Protocol):
    """Key-value collection of sticker artifacts."""

    def add_artifact(self, artifact: Sticker) -> None:
        ...

    def remove_artifact(self, sticker_id: str) -> bool:
        ...

    def clear_all(self) -> None:
        ...

    def list_artifacts(self) -> List[Sticker]:
        ...


class InMemoryStickerStore:
    """Sticker collection held in memory."""

    def __init__(self):
        self._stickers: List[Sticker] = []

    def add_artifact(self, artifact: Sticker) -> None:
        """Add a sticker at the front of the collection."""
        self._stickers = [s for s in self._stickers if s.id != artifact.id]
        self._stickers.insert(0, artifact)

    def remove_artifact(self, sticker_id: str) -> bool:
        before = len(self._stickers)
        self._stickers = [s for s in self._stickers if s.id != sticker_id]
        return len(self._stickers) != before

    def clear_all(self) -> None:
        self._stickers = []

    def list_artifacts(self) -> List[Sticker]:
        """All stickers, newest first."""
        return list(self._stickers)

    def get_artifact(self, sticker_id: str) -> Optional[Sticker]:
        return next((s for s in self._stickers if s.id == sticker_id), None)

    def __len__(self) -> int:
        return len(self._stickers)


def _atomic_write(path: Path, data: bytes) -> None:
    """Write to a sibling temp file, then swap it into place."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class JsonStickerStore:
    """
    Sticker collection persisted to a directory.

    Layout:
        <store_dir>/stickers.json   ordered metadata, newest first
        <store_dir>/<id>.png        image payload per sticker
    """

    def __init__(self, store_dir: Union[str, Path]):
        """
        Initialize the store, loading any existing index.

        Args:
            store_dir: Directory for the index and PNG files (created if missing)

        Raises:
            StoreError: if the directory or index cannot be read
        """
        self.store_dir = Path(store_dir)
        self.index_file = self.store_dir / STORE_INDEX_FILENAME
        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create store directory: {e}", operation="init") from e

        self._order: List[str] = []
        self._meta: Dict[str, dict] = {}
        self._load()

    def _load(self) -> None:
        """Load index from file."""
        if not self.index_file.exists():
            return
        try:
            with open(self.index_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read sticker index: {e}", operation="load") from e

        for entry in data.get("stickers", []):
            sticker_id = entry.get("id")
            if not sticker_id or sticker_id in self._meta:
                continue
            if not self._png_path(sticker_id).exists():
                logger.warning(f"Sticker {sticker_id} has no image file; dropped from index")
                continue
            self._order.append(sticker_id)
            self._meta[sticker_id] = entry
        logger.info(f"Loaded {len(self._order)} stickers from {self.store_dir}")

    def _save(self, order: List[str], meta: Dict[str, dict]) -> None:
        """Write the given order and metadata as the index file."""
        data = {
            "version": STORE_FORMAT_VERSION,
            "updated_at": datetime.now(timezone.utc).isoformat(),
            "stickers": [meta[sticker_id] for sticker_id in order],
        }
        payload = json.dumps(data, indent=2, ensure_ascii=False).encode("utf-8")
        try:
            _atomic_write(self.index_file, payload)
        except OSError as e:
            raise StoreError(f"Cannot write sticker index: {e}", operation="save") from e

    def _png_path(self, sticker_id: str) -> Path:
        return self.store_dir / f"{sticker_id}.png"

    def add_artifact(self, artifact: Sticker) -> None:
        """
        Persist a sticker at the front of the collection.

        On failure the collection is left as it was and a newly written
        image file is removed again.

        Raises:
            StoreError: if the image or index cannot be written
        """
        is_new = artifact.id not in self._meta
        png_path = self._png_path(artifact.id)
        try:
            _atomic_write(png_path, artifact.png_bytes)
        except OSError as e:
            raise StoreError(
                f"Cannot write sticker image: {e}", sticker_id=artifact.id, operation="add"
            ) from e

        order = [artifact.id] + [s for s in self._order if s != artifact.id]
        meta = dict(self._meta)
        meta[artifact.id] = artifact.to_dict()
        try:
            self._save(order, meta)
        except StoreError:
            if is_new:
                png_path.unlink(missing_ok=True)
            raise

        self._order, self._meta = order, meta
        logger.info(f"Stored sticker {artifact.id} ({artifact.width}x{artifact.height})")

    def remove_artifact(self, sticker_id: str) -> bool:
        """Delete a sticker. Returns False if it was not in the collection."""
        if sticker_id not in self._meta:
            return False
        order = [s for s in self._order if s != sticker_id]
        meta = {k: v for k, v in self._meta.items() if k != sticker_id}
        self._save(order, meta)

        self._order, self._meta = order, meta
        self._png_path(sticker_id).unlink(missing_ok=True)
        logger.info(f"Removed sticker {sticker_id}")
        return True

    def clear_all(self) -> None:
        self._save([], {})
        for sticker_id in self._order:
            self._png_path(sticker_id).unlink(missing_ok=True)
        count = len(self._order)
        self._order = []
        self._meta = {}
        logger.info(f"Cleared {count} stickers")

    def get_artifact(self, sticker_id: str) -> Optional[Sticker]:
        """
        Load one sticker with its image.

        Raises:
            StoreError: if the image file cannot be read
        """
        meta = self._meta.get(sticker_id)
        if meta is None:
            return None
        try:
            png_bytes = self._png_path(sticker_id).read_bytes()
        except OSError as e:
            raise StoreError(
                f"Cannot read sticker image: {e}", sticker_id=sticker_id, operation="get"
            ) from e
        return Sticker.from_dict(meta, png_bytes)

    def list_artifacts(self) -> List[Sticker]:
        """All readable stickers, newest first. Unreadable entries are skipped."""
        stickers = []
        for sticker_id in self._order:
            try:
                stickers.append(self.get_artifact(sticker_id))
            except StoreError as e:
                logger.warning(f"Skipping sticker {sticker_id}: {e}")
        return stickers

    def __len__(self) -> int:
        return len(self._order)

from __future__ import annotations

import asyncio
import hashlib
import json
import threading
from pathlib import Path
from typing import Any

from app.application.ports.key_value_store import KeyValueStorePort


class JsonKeyValueStore(KeyValueStorePort):
    """
    One JSON file per key under data_dir.

    Each set() is atomic (temp file + rename) but get/set pairs are not:
    read-modify-write callers still race with each other.
    """

    def __init__(self, data_dir: str = "./data/kv") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict

    def _get_lock(self, key: str) -> threading.Lock:
        """Get or create the file lock for a key."""
        with self._lock_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def _get_file_path(self, key: str) -> Path:
        """Keys may hold any characters (user ids), so file names are hashed."""
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]
        return self._data_dir / f"{digest}.json"

    def _read(self, key: str) -> str | None:
        file_path = self._get_file_path(key)
        with self._get_lock(key):
            if not file_path.exists():
                return None
            with open(file_path, "r", encoding="utf-8") as f:
                data: dict[str, Any] = json.load(f)
        return data.get("value")

    def _write(self, key: str, value: str) -> None:
        """Save the value atomically."""
        file_path = self._get_file_path(key)
        temp_path = file_path.with_suffix(".json.tmp")
        with self._get_lock(key):
            try:
                # Write to temp file
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump({"key": key, "value": value}, f, indent=2, ensure_ascii=False)
                # Atomic rename
                temp_path.replace(file_path)
            except Exception:
                # Clean up temp file on error
                temp_path.unlink(missing_ok=True)
                raise

    def _remove(self, key: str) -> None:
        with self._get_lock(key):
            self._get_file_path(key).unlink(missing_ok=True)

    async def get(self, key: str) -> str | None:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)

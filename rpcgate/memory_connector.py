"""An in-process connector backed by a bounded least-recently-used cache."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Optional

from rpcgate.config import MemoryConnectorConfig
from rpcgate.connector import Connector
from rpcgate.endpoint_errors import ErrRecordNotFound
from rpcgate.utils import wildcard_match
from rpcgate.value import DataRow

MEMORY_DRIVER_NAME = "memory"
DEFAULT_MAX_ITEMS = 1000


class MemoryConnector(Connector):
    """Keeps up to ``max_items`` values, dropping the least recently used first."""

    def __init__(self, cfg: Optional[MemoryConnectorConfig] = None):
        if cfg is not None and cfg.max_items <= 0:
            raise ValueError("maxItems must be greater than 0")
        self.max_items = cfg.max_items if cfg is not None else DEFAULT_MAX_ITEMS
        self._items: OrderedDict[str, str] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def _key(partition_key: str, range_key: str) -> str:
        return f"{partition_key}:{range_key}"

    def _keys(self) -> list[str]:
        with self._lock:
            return list(self._items)

    def _touch(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._items.get(key)
            if value is not None:
                self._items.move_to_end(key)
            return value

    def _remove(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def set(self, partition_key: str, range_key: str, value: str) -> None:
        key = self._key(partition_key, range_key)
        with self._lock:
            if key in self._items:
                self._items.move_to_end(key)
            self._items[key] = value
            while len(self._items) > self.max_items:
                self._items.popitem(last=False)

    def get(self, index: str, partition_key: str, range_key: str) -> str:
        if partition_key.endswith("*"):
            return self._get_with_wildcard(partition_key, range_key)
        value = self._touch(self._key(partition_key, range_key))
        if value is None:
            raise ErrRecordNotFound(f"PK: {partition_key} RK: {range_key}", MEMORY_DRIVER_NAME)
        return value

    def _get_with_wildcard(self, partition_key: str, range_key: str) -> str:
        pattern = self._key(partition_key, range_key)
        for key in self._keys():
            if wildcard_match(pattern, key):
                value = self._touch(key)
                if value is not None:
                    return value
        raise ErrRecordNotFound(f"PK: {partition_key} RK: {range_key}", MEMORY_DRIVER_NAME)

    def query(self, index: str, partition_key: str, range_key: str) -> list[DataRow]:
        """Rows whose partition key starts with ``partition_key`` (minus a trailing ``*``)
        and whose range key equals ``range_key``, starts with it when it ends with ``*``,
        or is anything when ``range_key`` is empty."""
        prefix = partition_key.removesuffix("*")
        range_prefix = range_key.removesuffix("*")
        rows = []
        for key in self._keys():
            parts = key.split(":")
            if len(parts) != 2 or not parts[0].startswith(prefix):
                continue
            if (
                range_key == ""
                or (range_key.endswith("*") and parts[1].startswith(range_prefix))
                or parts[1] == range_key
            ):
                value = self._touch(key)
                rows.append(DataRow(value=value if value is not None else ""))
        return rows

    def delete(self, index: str, partition_key: str, range_key: str) -> None:
        if partition_key.endswith("*") or range_key.endswith("*"):
            self._delete_with_wildcard(partition_key, range_key)
            return
        self._remove(self._key(partition_key, range_key))

    def _delete_with_wildcard(self, partition_key: str, range_key: str) -> None:
        pk_prefix = partition_key.removesuffix("*")
        rk_prefix = range_key.removesuffix("*")
        for key in self._keys():
            parts = key.split(":")
            if (
                len(parts) == 2
                and (partition_key == "*" or parts[0].startswith(pk_prefix))
                and (range_key == "*" or parts[1].startswith(rk_prefix))
            ):
                self._remove(key)

    def close(self) -> None:
        """Nothing to release; the cache stays usable."""

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
"""A connector that keeps values in a Redis server under ``partition:range`` keys."""

from __future__ import annotations

from typing import Any, Optional

import redis

from rpcgate.config import RedisConnectorConfig
from rpcgate.connector import Connector
from rpcgate.endpoint_errors import ErrRecordNotFound

REDIS_DRIVER_NAME = "redis"
_DEFAULT_HOST = "localhost"
_DEFAULT_PORT = 6379


def _split_addr(addr: str) -> tuple[str, int]:
    if not addr:
        return _DEFAULT_HOST, _DEFAULT_PORT
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr, _DEFAULT_PORT
    return host or _DEFAULT_HOST, int(port) if port else _DEFAULT_PORT


def _client_from_config(cfg: RedisConnectorConfig) -> Any:
    host, port = _split_addr(cfg.addr)
    password = cfg.password or None
    return redis.Redis(
        host=host, port=port, password=password, db=cfg.db, decode_responses=True
    )


def _text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return str(value)


class RedisConnector(Connector):
    """Stores values in Redis; keys containing ``*`` are expanded with KEYS."""

    def __init__(self, cfg: RedisConnectorConfig, client: Optional[Any] = None):
        self._client = client if client is not None else _client_from_config(cfg)
        try:
            self._client.ping()
        except (redis.RedisError, OSError) as exc:
            raise ConnectionError(f"failed to connect to Redis: {exc}") from exc

    @staticmethod
    def _key(partition_key: str, range_key: str) -> str:
        return f"{partition_key}:{range_key}"

    def set(self, partition_key: str, range_key: str, value: str) -> None:
        self._client.set(self._key(partition_key, range_key), value)

    def get(self, index: str, partition_key: str, range_key: str) -> str:
        key = self._key(partition_key, range_key)
        if "*" in key:
            keys = self._client.keys(key)
            if not keys:
                raise ErrRecordNotFound(
                    f"PK: {partition_key} RK: {range_key}", REDIS_DRIVER_NAME
                )
            key = _text(keys[0])
        value = self._client.get(key)
        if value is None:
            raise ErrRecordNotFound(f"PK: {partition_key} RK: {range_key}", REDIS_DRIVER_NAME)
        return _text(value)

    def delete(self, index: str, partition_key: str, range_key: str) -> None:
        key = self._key(partition_key, range_key)
        if "*" in key:
            keys = [_text(k) for k in self._client.keys(key)]
            if keys:
                self._client.delete(*keys)
            return
        self._client.delete(key)

    def close(self) -> None:
        self._client.close()
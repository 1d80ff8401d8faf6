"""Construction of a connector from its configuration."""

from __future__ import annotations

from rpcgate.config import ConnectorConfig
from rpcgate.connector import Connector
from rpcgate.endpoint_errors import ErrInvalidConnectorDriver
from rpcgate.memory_connector import MemoryConnector
from rpcgate.redis_connector import RedisConnector


def new_connector(cfg: ConnectorConfig) -> Connector:
    """The connector named by ``cfg.driver``; raises ErrInvalidConnectorDriver otherwise."""
    if cfg.driver == "memory":
        return MemoryConnector(cfg.memory)
    if cfg.driver == "redis":
        if cfg.redis is None:
            raise ValueError("missing redis config for redis connector")
        return RedisConnector(cfg.redis)
    raise ErrInvalidConnectorDriver(cfg.driver)
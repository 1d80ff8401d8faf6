"""The storage interface shared by every key/value backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

CONNECTOR_MAIN_INDEX = "idx_main"
CONNECTOR_REVERSE_INDEX = "idx_reverse"


class Connector(ABC):
    """A store of string values addressed by a partition key and a range key.

    Keys may end with ``*`` to address every key with that prefix where the
    backend supports it. Connectors are context managers that close on exit.
    """

    @abstractmethod
    def get(self, index: str, partition_key: str, range_key: str) -> str:
        """The value stored under the keys; raises ErrRecordNotFound when absent."""

    @abstractmethod
    def set(self, partition_key: str, range_key: str, value: str) -> None:
        """Store ``value`` under the keys, replacing any earlier value."""

    @abstractmethod
    def delete(self, index: str, partition_key: str, range_key: str) -> None:
        """Remove the value, or every matching value for wildcard keys."""

    @abstractmethod
    def close(self) -> None:
        """Release whatever the connector holds."""

    def __enter__(self) -> "Connector":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
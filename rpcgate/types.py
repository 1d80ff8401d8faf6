"""Shared enumerations and small value types for networks, upstreams and requests."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class EvmNodeType(str, Enum):
    FULL = "full"
    ARCHIVE = "archive"
    SEQUENCER = "sequencer"
    EXECUTION = "execution"


class NetworkArchitecture(str, Enum):
    EVM = "evm"


class UpstreamType(str, Enum):
    EVM = "evm"
    EVM_ALCHEMY = "evm-alchemy"


@dataclass
class RequestDirectives:
    """Per-request behaviour switches supplied by the caller."""

    retry_empty: bool = False


class EvmBlockTracker:
    """Thread-safe holder of the latest and finalized block numbers of a chain."""

    def __init__(self, latest: int = 0, finalized: int = 0):
        self._lock = threading.Lock()
        self._latest = max(latest, 0)
        self._finalized = max(finalized, 0)

    def latest_block(self) -> int:
        """The most recent known block number, 0 when unknown."""
        with self._lock:
            return self._latest

    def finalized_block(self) -> int:
        """The most recent known finalized block number, 0 when unknown."""
        with self._lock:
            return self._finalized

    def update(self, latest: Optional[int] = None, finalized: Optional[int] = None) -> None:
        """Record fetched block numbers; values that are not positive are ignored."""
        with self._lock:
            if latest is not None and latest > 0:
                self._latest = latest
            if finalized is not None and finalized > 0:
                self._finalized = finalized
"""A stored row whose value is a serialized JSON-RPC response."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Optional

from rpcgate.json_rpc import JsonRpcResponse, parse_json_rpc_response


@dataclass
class DataRow:
    value: str = ""
    pk: str = ""
    rk: str = ""
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )
    _parsed: Optional[JsonRpcResponse] = field(default=None, init=False, repr=False, compare=False)

    def as_json_rpc_response(self) -> JsonRpcResponse:
        """The value parsed as a JSON-RPC response; parsed once and then reused."""
        with self._lock:
            if self._parsed is None:
                self._parsed = parse_json_rpc_response(self.value)
            return self._parsed


def new_data_value(value: str) -> DataRow:
    """A row holding only ``value``."""
    return DataRow(value=value)
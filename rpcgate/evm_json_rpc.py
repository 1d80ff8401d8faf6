"""Normalization of block-number parameters in incoming EVM JSON-RPC requests."""

from __future__ import annotations

from typing import Any, Optional, Protocol

from rpcgate.evm_block_ref import BLOCK_NUMBER_FIRST_METHODS, BLOCK_NUMBER_SECOND_METHODS
from rpcgate.json_rpc import JsonRpcRequest
from rpcgate.utils import normalize_hex


class _BlockTracker(Protocol):
    def latest_block(self) -> int: ...

    def finalized_block(self) -> int: ...


class _Network(Protocol):
    def evm_block_tracker(self) -> Optional[_BlockTracker]: ...


class _NormalizedRequest(Protocol):
    def network(self) -> Optional[_Network]: ...


def _resolve_tag(tracker: _BlockTracker, tag: Any) -> Any:
    if tag == "latest":
        block = tracker.latest_block()
        return normalize_hex(block) if block > 0 else tag
    if tag == "finalized":
        block = tracker.finalized_block()
        return normalize_hex(block) if block > 0 else tag
    try:
        return normalize_hex(tag)
    except (ValueError, TypeError):
        return tag


def normalize_http_json_rpc(
    normalized_request: Optional[_NormalizedRequest], request: JsonRpcRequest
) -> None:
    """Rewrite block numbers in ``request.params`` to unpadded hex, in place.

    For methods taking the block first, ``latest`` and ``finalized`` become the
    block numbers known to the network's block tracker, when there is one.
    """
    method, params = request.method, request.params

    if method in BLOCK_NUMBER_FIRST_METHODS:
        if not params:
            return
        if not isinstance(params[0], str):
            raise ValueError(
                "invalid block number, must be 0x hex string, or numer or latest/finalized"
            )
        network = normalized_request.network() if normalized_request is not None else None
        if network is None:
            return
        tracker = network.evm_block_tracker()
        if tracker is not None:
            params[0] = _resolve_tag(tracker, params[0])
    elif method in BLOCK_NUMBER_SECOND_METHODS:
        if len(params) > 1:
            params[1] = normalize_hex(params[1])
    elif method == "eth_getLogs":
        if params and isinstance(params[0], dict):
            log_filter = params[0]
            for key in ("fromBlock", "toBlock"):
                if key in log_filter:
                    log_filter[key] = normalize_hex(log_filter[key])
"""Finding the block a JSON-RPC request refers to, for caching decisions."""

from __future__ import annotations

from typing import NamedTuple, Optional

from rpcgate.json_rpc import JsonRpcRequest
from rpcgate.utils import decode_hex_uint64

BLOCK_NUMBER_FIRST_METHODS = frozenset(
    {
        "eth_getBlockByNumber",
        "eth_getUncleByBlockNumberAndIndex",
        "eth_getTransactionByBlockNumberAndIndex",
        "eth_getUncleCountByBlockNumber",
        "eth_getBlockTransactionCountByNumber",
    }
)

BLOCK_NUMBER_SECOND_METHODS = frozenset(
    {
        "eth_getBalance",
        "eth_getStorageAt",
        "eth_getCode",
        "eth_getTransactionCount",
        "eth_call",
        "eth_estimateGas",
    }
)


class BlockReference(NamedTuple):
    """A cache reference for the block and the highest block number involved."""

    ref: str
    number: int


_NONE = BlockReference("", 0)


def _from_block_param(param: object) -> BlockReference:
    if not isinstance(param, str):
        return _NONE
    if not param.startswith("0x"):
        return _NONE
    number = decode_hex_uint64(param)
    return BlockReference(str(number), number)


def extract_block_reference(request: Optional[JsonRpcRequest]) -> BlockReference:
    """The block reference of ``request``; empty when it names no specific block."""
    if request is None:
        raise ValueError("cannot extract block reference when json-rpc request is nil")

    method, params = request.method, request.params

    if method in BLOCK_NUMBER_FIRST_METHODS:
        if not params:
            raise ValueError(f"unexpected no parameters for method {method}")
        return _from_block_param(params[0])

    if method == "eth_getLogs":
        if params and isinstance(params[0], dict):
            from_block = params[0].get("fromBlock")
            to_block = params[0].get("toBlock")
            if (
                isinstance(from_block, str)
                and isinstance(to_block, str)
                and to_block.startswith("0x")
            ):
                to_number = decode_hex_uint64(to_block)
                return BlockReference(f"{from_block}-{to_block}".lower(), to_number)
        return _NONE

    if method in BLOCK_NUMBER_SECOND_METHODS:
        if len(params) <= 1:
            raise ValueError(f"unexpected missing 2nd parameter for method {method}: {params!r}")
        return _from_block_param(params[1])

    if method == "eth_getBlockByHash":
        if params:
            if isinstance(params[0], str):
                return BlockReference(params[0], 0)
            raise ValueError(
                f"first parameter is not a string for method {method} it is {params!r}"
            )
        return _NONE

    return _NONE
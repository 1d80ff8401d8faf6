"""JSON-RPC request and response shapes, including lenient parsing of upstream replies."""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from rpcgate.endpoint_errors import ErrJsonRpcException, JsonRpcErrorNumber

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


@dataclass
class JsonRpcRequest:
    jsonrpc: str = ""
    id: Any = None
    method: str = ""
    params: list[Any] = field(default_factory=list)

    def cache_hash(self) -> str:
        """A key of the form ``method:hexdigest`` derived from the parameters.

        Mapping entries are hashed in sorted key order so the key is stable.
        """
        hasher = hashlib.sha256()
        for param in self.params:
            _hash_value(hasher, param)
        digest = hashlib.sha256(hasher.digest()).hexdigest()
        return f"{self.method}:{digest}"


def _hash_value(hasher: Any, value: Any) -> None:
    if isinstance(value, bool):
        hasher.update(b"true" if value else b"false")
    elif isinstance(value, int):
        hasher.update(str(value).encode())
    elif isinstance(value, float):
        hasher.update(f"{value:f}".encode())
    elif isinstance(value, str):
        hasher.update(value.encode())
    elif isinstance(value, (list, tuple)):
        for item in value:
            _hash_value(hasher, item)
    elif isinstance(value, dict):
        for key in sorted(value):
            hasher.update(str(key).encode())
            _hash_value(hasher, value[key])
    else:
        raise TypeError(f"unsupported type for value during hash: {value!r}")


@dataclass
class JsonRpcResponse:
    jsonrpc: str = ""
    id: Any = None
    result: Any = None
    error: Optional[ErrJsonRpcException] = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation, leaving out empty members."""
        data: dict[str, Any] = {}
        if self.jsonrpc:
            data["jsonrpc"] = self.jsonrpc
        if self.id is not None:
            data["id"] = self.id
        if self.result is not None:
            data["result"] = self.result
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data


def _is_int64(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and _INT64_MIN <= value <= _INT64_MAX


def _error_from_irregular_body(doc: dict[str, Any]) -> ErrJsonRpcException:
    code = doc.get("code")
    message = doc.get("message")
    if (code is None or _is_int64(code)) and (message is None or isinstance(message, str)):
        return ErrJsonRpcException(code or 0, 0, message or "")
    error_text = doc.get("error")
    if error_text is None or isinstance(error_text, str):
        return ErrJsonRpcException(
            int(JsonRpcErrorNumber.SERVER_SIDE_EXCEPTION), 0, error_text or ""
        )
    return ErrJsonRpcException(
        int(JsonRpcErrorNumber.SERVER_SIDE_EXCEPTION), 0, json.dumps(doc)
    )


def _error_from_object(raw: Any) -> ErrJsonRpcException:
    if raw is None:
        return ErrJsonRpcException(0, 0, "")
    if not isinstance(raw, dict):
        raise ValueError("json-rpc error member must be an object")
    code = 0
    raw_code = raw.get("code")
    if isinstance(raw_code, (int, float)) and not isinstance(raw_code, bool):
        code = int(raw_code)
    message = ""
    if "message" in raw:
        if not isinstance(raw["message"], str):
            raise ValueError("json-rpc error message must be a string")
        message = raw["message"]
    return ErrJsonRpcException(code, 0, message)


def parse_json_rpc_response(data: Union[bytes, bytearray, str]) -> JsonRpcResponse:
    """Parse an upstream reply, turning non-standard error bodies into an error member."""
    text = bytes(data).decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    doc = json.loads(text)
    if not isinstance(doc, dict):
        raise ValueError("json-rpc response must be a JSON object")

    jsonrpc = doc.get("jsonrpc")
    if jsonrpc is None:
        jsonrpc = ""
    elif not isinstance(jsonrpc, str):
        raise ValueError("json-rpc version must be a string")

    response = JsonRpcResponse(jsonrpc=jsonrpc, id=doc.get("id"), result=doc.get("result"))

    if "error" not in doc and response.result is None and response.id is None:
        response.error = _error_from_irregular_body(doc)
        return response

    if "error" in doc:
        response.error = _error_from_object(doc["error"])
    return response
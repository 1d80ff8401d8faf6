"""Errors raised for remote endpoint failures, JSON-RPC exceptions and storage lookups."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Optional, Union

from rpcgate.errors import BaseError

ERR_CODE_ENDPOINT_UNAUTHORIZED = "ErrEndpointUnauthorized"
ERR_CODE_ENDPOINT_UNSUPPORTED = "ErrEndpointUnsupported"
ERR_CODE_ENDPOINT_CLIENT_SIDE_EXCEPTION = "ErrEndpointClientSideException"
ERR_CODE_ENDPOINT_SERVER_SIDE_EXCEPTION = "ErrEndpointServerSideException"
ERR_CODE_ENDPOINT_CAPACITY_EXCEEDED = "ErrEndpointCapacityExceeded"
ERR_CODE_ENDPOINT_BILLING_ISSUE = "ErrEndpointBillingIssue"
ERR_CODE_ENDPOINT_NODE_TIMEOUT = "ErrEndpointNodeTimeout"
ERR_CODE_ENDPOINT_NOT_SYNCED_YET = "ErrEndpointNotSyncedYet"
ERR_CODE_ENDPOINT_EVM_LARGE_RANGE = "ErrEndpointEvmLargeRange"
ERR_CODE_JSON_RPC_EXCEPTION = "ErrJsonRpcException"
ERR_CODE_INVALID_CONNECTOR_DRIVER = "ErrInvalidConnectorDriver"
ERR_CODE_RECORD_NOT_FOUND = "ErrRecordNotFound"


# Endpoint (third-party providers, RPC nodes)


class ErrEndpointUnauthorized(BaseError):
    status_code = 401

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_UNAUTHORIZED,
            "remote endpoint responded with Unauthorized",
            cause=cause,
        )


class ErrEndpointUnsupported(BaseError):
    status_code = 415

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_UNSUPPORTED,
            "remote endpoint does not support requested method",
            cause=cause,
        )


class ErrEndpointClientSideException(BaseError):
    status_code = 400

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_CLIENT_SIDE_EXCEPTION,
            "client-side error when sending request to remote endpoint",
            cause=cause,
        )


class ErrEndpointServerSideException(BaseError):
    status_code = 500

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_SERVER_SIDE_EXCEPTION,
            "an internal error on remote endpoint",
            cause=cause,
        )


class ErrEndpointCapacityExceeded(BaseError):
    status_code = 429

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_CAPACITY_EXCEEDED,
            "remote endpoint capacity exceeded",
            cause=cause,
        )


class ErrEndpointBillingIssue(BaseError):
    status_code = 402

    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_BILLING_ISSUE,
            "remote endpoint billing issue",
            cause=cause,
        )


class ErrEndpointNodeTimeout(BaseError):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_NODE_TIMEOUT,
            "node timeout to execute the request, maybe increase the method timeout",
            cause=cause,
        )


class ErrEndpointNotSyncedYet(BaseError):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_NOT_SYNCED_YET,
            "remote endpoint not synced yet for this specific data or block",
            cause=cause,
        )


class ErrEndpointEvmLargeRange(BaseError):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(
            ERR_CODE_ENDPOINT_EVM_LARGE_RANGE,
            "evm remote endpoint complained about large logs range",
            cause=cause,
        )


# JSON-RPC


class JsonRpcErrorNumber(IntEnum):
    """Numeric JSON-RPC error codes, normalized across providers for clients."""

    UNKNOWN = -99999

    CLIENT_SIDE_EXCEPTION = -32600
    UNSUPPORTED_EXCEPTION = -32601
    INVALID_ARGUMENT = -32602
    SERVER_SIDE_EXCEPTION = -32603
    PARSE_EXCEPTION = -32700

    CAPACITY_EXCEEDED = -32005
    EVM_LOGS_LARGE_RANGE = -32012
    EVM_REVERTED = -32013
    NOT_SYNCED_YET = -32014
    NODE_TIMEOUT = -32015
    UNAUTHORIZED = -32016


class ErrJsonRpcException(BaseError):
    """A JSON-RPC level error carrying the provider's code and a normalized one."""

    def __init__(
        self,
        original_code: int = 0,
        normalized_code: int = 0,
        message: str = "",
        cause: Optional[BaseException] = None,
    ):
        details: dict[str, Any] = {}
        if original_code != 0:
            details["originalCode"] = int(original_code)
        if normalized_code != 0:
            details["normalizedCode"] = _as_error_number(normalized_code)
        super().__init__(ERR_CODE_JSON_RPC_EXCEPTION, message, cause=cause, details=details)

    @property
    def status_code(self) -> int:  # type: ignore[override]
        cause_status = getattr(self.cause, "status_code", None)
        if isinstance(cause_status, int):
            return cause_status
        return 400

    def code_chain(self) -> str:
        """The normalized code followed by the chain of error codes."""
        return f"{int(self.normalized_code())} <- {super().code_chain()}"

    def normalized_code(self) -> Union[JsonRpcErrorNumber, int]:
        """The normalized JSON-RPC error number, 0 when none was set."""
        return (self.details or {}).get("normalizedCode", 0)

    def original_code(self) -> int:
        """The error code reported by the remote endpoint, 0 when none was set."""
        return (self.details or {}).get("originalCode", 0)


def _as_error_number(code: int) -> Union[JsonRpcErrorNumber, int]:
    try:
        return JsonRpcErrorNumber(code)
    except ValueError:
        return int(code)


# Store


class ErrInvalidConnectorDriver(BaseError):
    def __init__(self, driver: str):
        super().__init__(
            ERR_CODE_INVALID_CONNECTOR_DRIVER,
            "invalid store driver",
            details={"driver": driver},
        )


class ErrRecordNotFound(BaseError):
    def __init__(self, key: str, driver: str):
        super().__init__(
            ERR_CODE_RECORD_NOT_FOUND,
            "record not found",
            details={"key": key, "driver": driver},
        )
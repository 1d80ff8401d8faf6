import pytest

from rpcgate.endpoint_errors import (
    ERR_CODE_ENDPOINT_CAPACITY_EXCEEDED,
    ERR_CODE_JSON_RPC_EXCEPTION,
    ERR_CODE_RECORD_NOT_FOUND,
    ErrEndpointBillingIssue,
    ErrEndpointCapacityExceeded,
    ErrEndpointClientSideException,
    ErrEndpointEvmLargeRange,
    ErrEndpointNodeTimeout,
    ErrEndpointNotSyncedYet,
    ErrEndpointServerSideException,
    ErrEndpointUnauthorized,
    ErrEndpointUnsupported,
    ErrInvalidConnectorDriver,
    ErrJsonRpcException,
    ErrRecordNotFound,
    JsonRpcErrorNumber,
)
from rpcgate.errors import BaseError, ErrUpstreamsExhausted, has_code


@pytest.mark.parametrize(
    "cls, code, status",
    [
        (ErrEndpointUnauthorized, "ErrEndpointUnauthorized", 401),
        (ErrEndpointUnsupported, "ErrEndpointUnsupported", 415),
        (ErrEndpointClientSideException, "ErrEndpointClientSideException", 400),
        (ErrEndpointServerSideException, "ErrEndpointServerSideException", 500),
        (ErrEndpointCapacityExceeded, "ErrEndpointCapacityExceeded", 429),
        (ErrEndpointBillingIssue, "ErrEndpointBillingIssue", 402),
    ],
)
def test_endpoint_errors_codes_and_status(cls, code, status):
    err = cls(None)
    assert err.code == code
    assert err.status_code == status
    assert err.cause is None


@pytest.mark.parametrize(
    "cls, code",
    [
        (ErrEndpointNodeTimeout, "ErrEndpointNodeTimeout"),
        (ErrEndpointNotSyncedYet, "ErrEndpointNotSyncedYet"),
        (ErrEndpointEvmLargeRange, "ErrEndpointEvmLargeRange"),
    ],
)
def test_endpoint_errors_without_status(cls, code):
    err = cls()
    assert err.code == code
    assert err.status_code is None


@pytest.mark.parametrize(
    "number, value",
    [
        (JsonRpcErrorNumber.SERVER_SIDE_EXCEPTION, -32603),
        (JsonRpcErrorNumber.PARSE_EXCEPTION, -32700),
        (JsonRpcErrorNumber.CAPACITY_EXCEEDED, -32005),
        (JsonRpcErrorNumber.UNKNOWN, -99999),
    ],
)
def test_json_rpc_error_numbers_recorded_as_normalized_code(number, value):
    err = ErrJsonRpcException(0, number, "x")
    assert err.details == {"normalizedCode": value}
    assert err.normalized_code() == value


def test_json_rpc_exception_codes_recorded():
    err = ErrJsonRpcException(-32007, JsonRpcErrorNumber.CAPACITY_EXCEEDED, "limit reached")
    assert err.code == ERR_CODE_JSON_RPC_EXCEPTION
    assert err.message == "limit reached"
    assert err.original_code() == -32007
    assert err.normalized_code() == JsonRpcErrorNumber.CAPACITY_EXCEEDED
    assert err.details == {"originalCode": -32007, "normalizedCode": -32005}


def test_json_rpc_exception_zero_codes_left_out():
    err = ErrJsonRpcException(0, 0, "plain")
    assert err.details == {}
    assert err.original_code() == 0
    assert err.normalized_code() == 0


def test_json_rpc_exception_code_chain_prefixes_normalized_code():
    inner = ErrEndpointServerSideException(None)
    err = ErrJsonRpcException(0, JsonRpcErrorNumber.SERVER_SIDE_EXCEPTION, "failed", inner)
    assert err.code_chain() == (
        f"{int(JsonRpcErrorNumber.SERVER_SIDE_EXCEPTION)} <- "
        f"{ERR_CODE_JSON_RPC_EXCEPTION} <- ErrEndpointServerSideException"
    )


def test_json_rpc_exception_status_from_cause():
    err = ErrJsonRpcException(0, 0, "x", ErrEndpointCapacityExceeded(None))
    assert err.status_code == 429


def test_json_rpc_exception_default_status():
    assert ErrJsonRpcException(0, 0, "x").status_code == 400
    assert ErrJsonRpcException(0, 0, "x", ValueError("boom")).status_code == 400


def test_json_rpc_exception_nested_has_code():
    err = ErrUpstreamsExhausted([])
    wrapped = ErrJsonRpcException(0, 0, "m", ErrEndpointCapacityExceeded(err))
    assert has_code(wrapped, ERR_CODE_ENDPOINT_CAPACITY_EXCEEDED)
    assert not has_code(wrapped, ERR_CODE_RECORD_NOT_FOUND)


def test_json_rpc_exception_is_raisable():
    err = ErrJsonRpcException(0, JsonRpcErrorNumber.NODE_TIMEOUT, "slow")
    assert err.normalized_code() == JsonRpcErrorNumber.NODE_TIMEOUT
    with pytest.raises(BaseError, match="ErrJsonRpcException: slow"):
        raise err


def test_record_not_found_details():
    err = ErrRecordNotFound("PK: a RK: b", "memory")
    assert err.code == ERR_CODE_RECORD_NOT_FOUND
    assert err.details == {"key": "PK: a RK: b", "driver": "memory"}
    assert err.message == "record not found"


def test_invalid_connector_driver_details():
    err = ErrInvalidConnectorDriver("mongo")
    assert err.code == "ErrInvalidConnectorDriver"
    assert err.details == {"driver": "mongo"}
    assert "mongo" in str(err)
"""Error hierarchy shared by the gateway: coded errors that chain through causes."""

from __future__ import annotations

import json
import re
from typing import Any, ClassVar, Iterable, Mapping, Optional

ERR_CODE_JSON_RPC_REQUEST_UNMARSHAL = "ErrJsonRpcRequestUnmarshal"
ERR_CODE_FAILSAFE_RETRY_EXCEEDED = "ErrFailsafeRetryExceeded"

_DIGITS = re.compile(r"\d+", re.ASCII)
_ETH_ADDR = re.compile(r"0x[a-fA-F0-9]+")
_REVERT = re.compile(r".*execution reverted.*")


def _clean_up_message(message: str) -> str:
    message = _ETH_ADDR.sub("0xREDACTED", message)
    message = _REVERT.sub("execution reverted", message)
    return _DIGITS.sub("XX", message)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, BaseError):
        return obj.to_dict()
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


class _JoinedError(Exception):
    """Several errors reported together; the message lists each on its own line."""

    def __init__(self, errors: Iterable[BaseException]):
        self.errors = list(errors)
        super().__init__(str(self))

    def __str__(self) -> str:
        return "\n".join(str(err) for err in self.errors)


def _join_errors(errors: Iterable[Optional[BaseException]]) -> Optional[_JoinedError]:
    present = [err for err in errors if err is not None]
    return _JoinedError(present) if present else None


def _error_is(err: Optional[BaseException], target: BaseException) -> bool:
    if err is None:
        return False
    if err is target:
        return True
    if isinstance(err, BaseError):
        return err.matches(target)
    if isinstance(err, _JoinedError):
        return any(_error_is(inner, target) for inner in err.errors)
    return False


class BaseError(Exception):
    """An error with a code, a message, optional details and an optional cause."""

    status_code: ClassVar[Optional[int]] = None

    def __init__(
        self,
        code: str = "",
        message: str = "",
        cause: Optional[BaseException] = None,
        details: Optional[Mapping[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.cause = cause
        self.details: Optional[dict[str, Any]] = dict(details) if details is not None else None
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def _details_text(self) -> str:
        if not self.details:
            return ""
        try:
            encoded = json.dumps(
                self.details, sort_keys=True, separators=(",", ":"), default=_json_default
            )
        except (TypeError, ValueError):
            return f"({self.details})"
        return f"({encoded})"

    def __str__(self) -> str:
        details = self._details_text()
        head = f"{self.code}: {self.message}"
        if details:
            head = f"{head} -> {details}"
        if self.cause is None:
            return head
        return f"{head} \ncaused by: {self.cause}"

    def code_chain(self) -> str:
        """Codes of this error and its coded causes, outermost first."""
        if isinstance(self.cause, BaseError):
            return f"{self.code} <- {self.cause.code_chain()}"
        return self.code

    def deepest_message(self) -> str:
        """Message of the innermost coded error in the cause chain."""
        if isinstance(self.cause, BaseError):
            return self.cause.deepest_message()
        return self.message

    def has_code(self, code: str) -> bool:
        """Whether this error or any coded cause carries ``code``."""
        if self.code == code:
            return True
        if isinstance(self.cause, BaseError):
            return self.cause.has_code(code)
        return False

    def matches(self, other: BaseException) -> bool:
        """Whether ``other`` is considered the same error as this one or its causes."""
        if type(other) is BaseError:
            result = self.code == other.code
        elif isinstance(other, BaseError):
            result = self.code in other.code_chain()
        else:
            result = False
        if not result and self.cause is not None:
            result = _error_is(self.cause, other)
        return result

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation, causes included."""
        data: dict[str, Any] = {}
        if self.code:
            data["code"] = self.code
        if self.message:
            data["message"] = self.message
        if self.details:
            data["details"] = dict(self.details)
        if isinstance(self.cause, BaseError):
            data["cause"] = self.cause.to_dict()
        elif self.cause is not None:
            data["cause"] = {"code": "ErrGeneric", "message": str(self.cause), "cause": None}
        else:
            data["cause"] = None
        return data


def is_null(err: Any) -> bool:
    """True when ``err`` stands for no error at all."""
    if err is None or err == "":
        return True
    if isinstance(err, BaseError):
        return err.code == ""
    return False


def error_summary(err: Any) -> str:
    """A short label for an error with numbers and addresses masked."""
    if err is None:
        return ""
    if isinstance(err, BaseError):
        return f"{err.code_chain()}: {_clean_up_message(err.deepest_message())}"
    if isinstance(err, BaseException):
        return _clean_up_message(str(err))
    return "ErrUnknown"


def has_code(err: Any, code: str) -> bool:
    """Whether ``err`` or any of its coded causes carries ``code``."""
    if isinstance(err, BaseError):
        return err.has_code(code)
    return False


# Projects


class ErrProjectNotFound(BaseError):
    def __init__(self, project_id: str):
        super().__init__(
            "ErrProjectNotFound",
            "project not configured in the config",
            details={"projectId": project_id},
        )


class ErrProjectAlreadyExists(BaseError):
    def __init__(self, project_id: str):
        super().__init__(
            "ErrProjectAlreadyExists",
            "project already exists",
            details={"projectId": project_id},
        )


# Networks


class ErrNetworkNotFound(BaseError):
    def __init__(self, network_id: str):
        super().__init__(
            "ErrNetworkNotFound",
            "network not configured in the config",
            details={"networkId": network_id},
        )


class ErrUnknownNetworkID(BaseError):
    def __init__(self, architecture: Any):
        super().__init__(
            "ErrUnknownNetworkID",
            "could not resolve network ID not from config nor from the upstreams",
            details={"architecture": architecture},
        )


class ErrUnknownNetworkArchitecture(BaseError):
    def __init__(self, architecture: Any):
        super().__init__(
            "ErrUnknownNetworkArchitecture",
            "unknown network architecture",
            details={"architecture": architecture},
        )


class ErrInvalidEvmChainId(BaseError):
    def __init__(self, chain_id: Any):
        super().__init__(
            "ErrInvalidEvmChainId",
            "invalid EVM chain ID, it must be a number",
            details={"chainId": str(chain_id)},
        )


# Upstreams


class ErrUpstreamRequest(BaseError):
    def __init__(self, cause: Optional[BaseException], upstream_id: str, request: Any):
        try:
            request_text = json.dumps(request, default=_json_default)
        except (TypeError, ValueError):
            request_text = str(request)
        super().__init__(
            "ErrUpstreamRequest",
            "failed to make request to upstream",
            cause=cause,
            details={"upstreamId": upstream_id, "request": request_text},
        )


class ErrUpstreamClientInitialization(ErrUpstreamRequest):
    def __init__(self, cause: Optional[BaseException], upstream_id: str):
        BaseError.__init__(
            self,
            "ErrUpstreamClientInitialization",
            "could not initialize upstream client",
            cause=cause,
            details={"upstreamId": upstream_id},
        )


class ErrUpstreamMalformedResponse(BaseError):
    def __init__(self, cause: Optional[BaseException], upstream_id: str):
        super().__init__(
            "ErrUpstreamMalformedResponse",
            "malformed response from upstream",
            cause=cause,
            details={"upstreamId": upstream_id},
        )


class ErrUpstreamsExhausted(BaseError):
    status_code = 503

    def __init__(self, errors: Iterable[Optional[BaseException]]):
        self.errors = [err for err in errors if err is not None]
        super().__init__(
            "ErrUpstreamsExhausted",
            "all available upstreams have been exhausted",
            cause=_join_errors(self.errors),
        )


class ErrNoUpstreamsDefined(BaseError):
    status_code = 404

    def __init__(self, project: str):
        super().__init__(
            "ErrNoUpstreamsDefined",
            "no upstreams defined for project",
            details={"project": project},
        )


class ErrNoUpstreamsFound(BaseError):
    def __init__(self, project: str, network: str):
        super().__init__(
            "ErrNoUpstreamsFound",
            "no upstreams found for network",
            details={"project": project, "network": network},
        )


class ErrUpstreamNetworkNotDetected(BaseError):
    def __init__(self, project_id: str, upstream_id: str):
        super().__init__(
            "ErrUpstreamNetworkNotDetected",
            "network not detected for upstream either from config nor by calling the endpoint",
            details={"projectId": project_id, "upstreamId": upstream_id},
        )


class ErrUpstreamInitialization(BaseError):
    def __init__(self, cause: Optional[BaseException], upstream_id: str):
        super().__init__(
            "ErrUpstreamInitialization",
            "failed to initialize upstream",
            cause=cause,
            details={"upstreamId": upstream_id},
        )


class ErrResponseWriteLock(BaseError):
    def __init__(self, writer_id: str):
        super().__init__(
            "ErrResponseWriteLock",
            "failed to acquire write lock, potentially being writen by another upstream/writer",
            details={"writerId": writer_id},
        )


# Health checks


class ErrHealthCheckGroupNotFound(BaseError):
    def __init__(self, health_check_group_id: str):
        super().__init__(
            "ErrHealthCheckGroupNotFound",
            "health check group not found",
            details={"healthCheckGroupId": health_check_group_id},
        )


class ErrInvalidHealthCheckConfig(BaseError):
    def __init__(self, cause: Optional[BaseException], health_check_group_id: str):
        super().__init__(
            "ErrInvalidHealthCheckConfig",
            "invalid health check config",
            cause=cause,
            details={"healthCheckGroupId": health_check_group_id},
        )


# Clients


class ErrJsonRpcRequestUnmarshal(BaseError):
    status_code = 400

    def __init__(self, cause: Optional[BaseException]):
        super().__init__(
            ERR_CODE_JSON_RPC_REQUEST_UNMARSHAL,
            "failed to unmarshal json-rpc request",
            cause=cause,
        )


class ErrJsonRpcRequestUnresolvableMethod(BaseError):
    def __init__(self, rpc_request: Any):
        super().__init__(
            "ErrJsonRpcRequestUnresolvableMethod",
            "could not resolve method in json-rpc request",
            details={"request": rpc_request},
        )


class ErrJsonRpcRequestPreparation(BaseError):
    def __init__(self, cause: Optional[BaseException], details: Optional[Mapping[str, Any]]):
        super().__init__(
            "ErrJsonRpcRequestPreparation",
            "failed to prepare json-rpc request",
            cause=cause,
            details=details,
        )


# Failsafe


class ErrFailsafeConfiguration(BaseError):
    def __init__(self, cause: Optional[BaseException], details: Optional[Mapping[str, Any]]):
        super().__init__(
            "ErrFailsafeConfiguration",
            "failed to configure failsafe policy",
            cause=cause,
            details=details,
        )


class ErrFailsafeTimeoutExceeded(BaseError):
    status_code = 504

    def __init__(self, cause: Optional[BaseException]):
        super().__init__(
            "ErrFailsafeTimeoutExceeded",
            "failsafe timeout policy exceeded",
            cause=cause,
        )


class ErrFailsafeRetryExceeded(BaseError):
    status_code = 503

    def __init__(self, cause: Optional[BaseException], last_result: Any):
        super().__init__(
            ERR_CODE_FAILSAFE_RETRY_EXCEEDED,
            "failsafe retry policy exceeded",
            cause=cause,
            details={"lastResult": last_result},
        )

    def last_result(self) -> Any:
        """The last result seen before retries ran out."""
        return (self.details or {}).get("lastResult")


class ErrFailsafeCircuitBreakerOpen(BaseError):
    def __init__(self, cause: Optional[BaseException]):
        super().__init__(
            "ErrFailsafeCircuitBreakerOpen",
            "circuit breaker is open due to high error rate",
            cause=cause,
        )


class ErrFailsafeUnexpected(BaseError):
    def __init__(self, cause: Optional[BaseException]):
        super().__init__(
            "ErrFailsafeUnexpected",
            "unexpected failsafe error type encountered",
            cause=cause,
        )


# Rate limiters


class ErrRateLimitBudgetNotFound(BaseError):
    def __init__(self, budget_id: str):
        super().__init__(
            "ErrRateLimitBudgetNotFound",
            "rate limit budget not found",
            details={"budgetId": budget_id},
        )


class ErrRateLimitRuleNotFound(BaseError):
    def __init__(self, budget_id: str, method: str):
        super().__init__(
            "ErrRateLimitRuleNotFound",
            "rate limit rule not found",
            details={"budgetId": budget_id, "method": method},
        )


class ErrRateLimitInvalidConfig(BaseError):
    def __init__(self, cause: Optional[BaseException]):
        super().__init__(
            "ErrRateLimitInvalidConfig",
            "invalid rate limit config",
            cause=cause,
        )


class ErrProjectRateLimitRuleExceeded(BaseError):
    status_code = 429

    def __init__(self, project: str, budget: str, rule: str):
        super().__init__(
            "ErrProjectRateLimitRuleExceeded",
            "project-level rate limit rule exceeded",
            details={"project": project, "budget": budget, "rule": rule},
        )


class ErrNetworkRateLimitRuleExceeded(BaseError):
    status_code = 429

    def __init__(self, project: str, network: str, budget: str, rule: str):
        super().__init__(
            "ErrNetworkRateLimitRuleExceeded",
            "network-level rate limit rule exceeded",
            details={"project": project, "network": network, "budget": budget, "rule": rule},
        )


class ErrUpstreamRateLimitRuleExceeded(BaseError):
    status_code = 429

    def __init__(self, upstream: str, budget: str, rule: str):
        super().__init__(
            "ErrUpstreamRateLimitRuleExceeded",
            "upstream-level rate limit rule exceeded",
            details={"upstream": upstream, "budget": budget, "rule": rule},
        )
"""Gateway configuration: typed sections read from a YAML document."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from rpcgate.errors import ErrUnknownNetworkID
from rpcgate.types import NetworkArchitecture

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1


class ConfigError(ValueError):
    """Raised when a configuration document does not fit the expected shape."""


def _opt(key: str, kind: Any, default: Any = None) -> Any:
    return field(default=default, metadata={"yaml": key, "kind": kind})


def _many(key: str, kind: Any) -> Any:
    return field(default_factory=list, metadata={"yaml": key, "kind": ("list", kind)})


@dataclass
class ServerConfig:
    http_host: str = _opt("httpHost", str, "")
    http_port: int = _opt("httpPort", int, 0)
    max_timeout_ms: int = _opt("maxTimeoutMs", int, 0)


@dataclass
class MemoryConnectorConfig:
    max_items: int = _opt("maxItems", int, 0)


@dataclass
class RedisConnectorConfig:
    addr: str = _opt("addr", str, "")
    password: str = _opt("password", str, "")
    db: int = _opt("db", int, 0)


@dataclass
class ConnectorConfig:
    driver: str = _opt("driver", str, "")
    memory: Optional[MemoryConnectorConfig] = _opt("memory", MemoryConnectorConfig)
    redis: Optional[RedisConnectorConfig] = _opt("redis", RedisConnectorConfig)


@dataclass
class DatabaseConfig:
    evm_json_rpc_cache: Optional[ConnectorConfig] = _opt("evmJsonRpcCache", ConnectorConfig)
    evm_block_ingestions: Optional[ConnectorConfig] = _opt("evmBlockIngestions", ConnectorConfig)
    rate_limit_snapshots: Optional[ConnectorConfig] = _opt("rateLimitSnapshots", ConnectorConfig)


@dataclass
class EvmUpstreamConfig:
    chain_id: int = _opt("chainId", int, 0)
    node_type: str = _opt("nodeType", str, "")
    engine: str = _opt("engine", str, "")
    get_logs_max_block_range: int = _opt("getLogsMaxBlockRange", int, 0)
    syncing: bool = _opt("syncing", bool, False)


@dataclass
class RetryPolicyConfig:
    max_attempts: int = _opt("maxAttempts", int, 0)
    delay: str = _opt("delay", str, "")
    backoff_max_delay: str = _opt("backoffMaxDelay", str, "")
    backoff_factor: float = _opt("backoffFactor", float, 0.0)
    jitter: str = _opt("jitter", str, "")


@dataclass
class CircuitBreakerPolicyConfig:
    failure_threshold_count: int = _opt("failureThresholdCount", int, 0)
    failure_threshold_capacity: int = _opt("failureThresholdCapacity", int, 0)
    half_open_after: str = _opt("halfOpenAfter", str, "")
    success_threshold_count: int = _opt("successThresholdCount", int, 0)
    success_threshold_capacity: int = _opt("successThresholdCapacity", int, 0)


@dataclass
class TimeoutPolicyConfig:
    duration: str = _opt("duration", str, "")


@dataclass
class HedgePolicyConfig:
    delay: str = _opt("delay", str, "")
    max_count: int = _opt("maxCount", int, 0)


@dataclass
class FailsafeConfig:
    retry: Optional[RetryPolicyConfig] = _opt("retry", RetryPolicyConfig)
    circuit_breaker: Optional[CircuitBreakerPolicyConfig] = _opt(
        "circuitBreaker", CircuitBreakerPolicyConfig
    )
    timeout: Optional[TimeoutPolicyConfig] = _opt("timeout", TimeoutPolicyConfig)
    hedge: Optional[HedgePolicyConfig] = _opt("hedge", HedgePolicyConfig)


@dataclass
class UpstreamConfig:
    id: str = _opt("id", str, "")
    type: str = _opt("type", str, "")
    vendor_name: str = _opt("vendorName", str, "")
    endpoint: str = _opt("endpoint", str, "")
    evm: Optional[EvmUpstreamConfig] = _opt("evm", EvmUpstreamConfig)
    allow_methods: list[str] = _many("allowMethods", str)
    ignore_methods: list[str] = _many("ignoreMethods", str)
    failsafe: Optional[FailsafeConfig] = _opt("failsafe", FailsafeConfig)
    rate_limit_budget: str = _opt("rateLimitBudget", str, "")
    health_check_group: str = _opt("healthCheckGroup", str, "")
    credit_unit_mapping: str = _opt("creditUnitMapping", str, "")


@dataclass
class EvmNetworkConfig:
    chain_id: int = _opt("chainId", int, 0)
    finality_depth: int = _opt("finalityDepth", "uint", 0)
    block_tracker_interval: str = _opt("blockTrackerInterval", str, "")


@dataclass
class NetworkConfig:
    architecture: str = _opt("architecture", str, "")
    rate_limit_budget: str = _opt("rateLimitBudget", str, "")
    failsafe: Optional[FailsafeConfig] = _opt("failsafe", FailsafeConfig)
    evm: Optional[EvmNetworkConfig] = _opt("evm", EvmNetworkConfig)

    def network_id(self) -> str:
        """The network identifier, such as ``evm:1``; empty for unknown architectures."""
        if self.architecture == NetworkArchitecture.EVM.value:
            if self.evm is None:
                raise ErrUnknownNetworkID(self.architecture)
            return f"evm:{self.evm.chain_id}"
        return ""


@dataclass
class ProjectConfig:
    id: str = _opt("id", str, "")
    upstreams: list[UpstreamConfig] = _many("upstreams", UpstreamConfig)
    networks: list[NetworkConfig] = _many("networks", NetworkConfig)
    rate_limit_budget: str = _opt("rateLimitBudget", str, "")


@dataclass
class RateLimitRuleConfig:
    scope: str = _opt("scope", str, "")
    method: str = _opt("method", str, "")
    max_count: int = _opt("maxCount", int, 0)
    period: str = _opt("period", str, "")
    wait_time: str = _opt("waitTime", str, "")


@dataclass
class RateLimitBudgetConfig:
    id: str = _opt("id", str, "")
    rules: list[RateLimitRuleConfig] = _many("rules", RateLimitRuleConfig)


@dataclass
class RateLimiterConfig:
    budgets: list[RateLimitBudgetConfig] = _many("budgets", RateLimitBudgetConfig)


@dataclass
class HealthCheckGroupConfig:
    id: str = _opt("id", str, "")
    check_interval: str = _opt("checkInterval", str, "")
    max_error_rate_percent: int = _opt("maxErrorRatePercent", int, 0)
    max_p90_latency: str = _opt("maxP90Latency", str, "")
    max_blocks_lag: int = _opt("maxBlocksLag", int, 0)


@dataclass
class HealthCheckConfig:
    groups: list[HealthCheckGroupConfig] = _many("groups", HealthCheckGroupConfig)

    def get_group_config(self, group_id: str) -> Optional[HealthCheckGroupConfig]:
        """The group with ``group_id``, or None."""
        return next((group for group in self.groups if group.id == group_id), None)


@dataclass
class MetricsConfig:
    enabled: bool = _opt("enabled", bool, False)
    host: str = _opt("host", str, "")
    port: int = _opt("port", int, 0)


@dataclass
class Config:
    log_level: str = _opt("logLevel", str, "")
    server: Optional[ServerConfig] = _opt("server", ServerConfig)
    database: Optional[DatabaseConfig] = _opt("database", DatabaseConfig)
    projects: list[ProjectConfig] = _many("projects", ProjectConfig)
    rate_limiters: Optional[RateLimiterConfig] = _opt("rateLimiters", RateLimiterConfig)
    health_checks: Optional[HealthCheckConfig] = _opt("healthChecks", HealthCheckConfig)
    metrics: Optional[MetricsConfig] = _opt("metrics", MetricsConfig)

    def get_project_config(self, project_id: str) -> Optional[ProjectConfig]:
        """The project with ``project_id``, or None."""
        return next((project for project in self.projects if project.id == project_id), None)


def _convert(kind: Any, value: Any, path: str) -> Any:
    if isinstance(kind, tuple):
        if not isinstance(value, list):
            raise ConfigError(f"{path}: expected a list")
        return [_convert(kind[1], item, f"{path}[{pos}]") for pos, item in enumerate(value)]
    if is_dataclass(kind):
        return _build(kind, value, path)
    if kind is str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, int, float)):
            return str(value)
        raise ConfigError(f"{path}: expected a string")
    if kind is bool:
        if isinstance(value, bool):
            return value
        raise ConfigError(f"{path}: expected a boolean")
    if kind is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise ConfigError(f"{path}: expected a number")
    low, high = (0, _UINT64_MAX) if kind == "uint" else (_INT64_MIN, _INT64_MAX)
    if isinstance(value, float) and not math.isnan(value) and not math.isinf(value):
        value = int(value)
    if isinstance(value, int) and not isinstance(value, bool) and low <= value <= high:
        return value
    raise ConfigError(f"{path}: expected an integer")


def _build(cls: type, data: Any, path: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping")
    values = {}
    for spec in fields(cls):
        key = spec.metadata["yaml"]
        raw = data.get(key)
        if raw is None:
            continue
        values[spec.name] = _convert(spec.metadata["kind"], raw, f"{path}.{key}")
    return cls(**values)


def config_from_dict(data: Any) -> Config:
    """Build a configuration from a parsed document; None gives the defaults."""
    if data is None:
        return Config()
    return _build(Config, data, "config")


_current: Optional[Config] = None


def load_config(path: Union[str, Path]) -> Config:
    """Read and parse the YAML file at ``path`` and remember it as the current config."""
    global _current
    text = Path(path).read_text(encoding="utf-8")
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    cfg = config_from_dict(document)
    _current = cfg
    return cfg


def get_config() -> Optional[Config]:
    """The configuration most recently loaded by :func:`load_config`."""
    return _current
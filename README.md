# rpcgate

Building blocks for a JSON-RPC proxy in front of EVM nodes: typed
configuration, coded errors, JSON-RPC request and response handling, EVM
block-parameter helpers and key/value cache connectors.

## Installation

```
pip install rpcgate
```

## What is in the package

- **`rpcgate.config`**: dataclasses for every configuration section
  (`Config`, `ServerConfig`, `ProjectConfig`, `UpstreamConfig`,
  `NetworkConfig`, `FailsafeConfig`, `RateLimiterConfig`,
  `HealthCheckConfig`, `ConnectorConfig` and the rest).
  `load_config(path)` reads a YAML file, remembers it for `get_config()` and
  returns it; invalid YAML or a value of the wrong shape raises `ConfigError`.
  `config_from_dict(data)` builds a `Config` from an already parsed mapping.
  `Config.get_project_config(project_id)` and
  `HealthCheckConfig.get_group_config(group_id)` look entries up by id, and
  `NetworkConfig.network_id()` gives identifiers such as `evm:1`.
- **`rpcgate.errors`**: exceptions rooted at `BaseError`, each with a code, a
  message, optional details and an optional cause. `code_chain()` lists the
  codes of an error and its causes, `deepest_message()` returns the innermost
  message, `has_code(err, code)` searches the chain, `is_null(err)` tells
  whether a value stands for no error, and `error_summary(err)` gives a short
  label with hex addresses and numbers masked. Some errors carry an HTTP
  `status_code` (for example 429 for rate-limit errors).
- **`rpcgate.endpoint_errors`**: errors for remote endpoint failures
  (`ErrEndpointCapacityExceeded`, `ErrEndpointUnauthorized`, ...),
  `ErrJsonRpcException` with its `normalized_code()` and `original_code()`,
  the `JsonRpcErrorNumber` codes, and the storage errors
  `ErrInvalidConnectorDriver` and `ErrRecordNotFound`.
- **`rpcgate.json_rpc`**: `JsonRpcRequest` with `cache_hash()`, a
  `method:sha256` key that does not depend on the order of mapping keys;
  `JsonRpcResponse` with `to_dict()`; and `parse_json_rpc_response(data)`,
  which also turns non-standard error bodies (a bare `code`/`message`, a
  string `error`, or anything else) into an `ErrJsonRpcException`.
- **`rpcgate.evm_block_ref`**: `extract_block_reference(request)` returns a
  `BlockReference(ref, number)` for the block a request names.
- **`rpcgate.evm_json_rpc`**: `normalize_http_json_rpc(normalized_request,
  request)` rewrites block parameters in place into unpadded hex, turning
  `latest` and `finalized` into block numbers when the request's network has a
  block tracker.
- **`rpcgate.utils`**: `decode_hex_uint64`, `hex_to_uint64`, `normalize_hex`,
  `wildcard_match` and `remove_duplicates`.
- **`rpcgate.types`**: the `EvmNodeType`, `NetworkArchitecture` and
  `UpstreamType` enumerations, `RequestDirectives`, and `EvmBlockTracker`, a
  thread-safe holder of latest and finalized block numbers set through
  `update()`.
- **Connectors**: the `Connector` interface (`rpcgate.connector`), an
  in-process LRU store `MemoryConnector` (`rpcgate.memory_connector`, 1000
  items unless configured) that also offers `query()`, and `RedisConnector`
  (`rpcgate.redis_connector`). `rpcgate.connectors.new_connector(cfg)` builds
  one from a `ConnectorConfig` whose `driver` is `memory` or `redis`; any
  other driver raises `ErrInvalidConnectorDriver`. Connectors are context
  managers and close on exit.

## Example

```python
from rpcgate.config import config_from_dict
from rpcgate.connectors import new_connector
from rpcgate.json_rpc import JsonRpcRequest, parse_json_rpc_response

cfg = config_from_dict({
    "logLevel": "info",
    "database": {
        "evmJsonRpcCache": {"driver": "memory", "memory": {"maxItems": 1000}},
    },
})

request = JsonRpcRequest(method="eth_getBalance", params=["0xabc", "0x10"])
key = request.cache_hash()

with new_connector(cfg.database.evm_json_rpc_cache) as cache:
    cache.set("evm:1", key, '{"jsonrpc":"2.0","id":1,"result":"0x0"}')
    response = parse_json_rpc_response(cache.get("idx_main", "evm:1", key))
    print(response.result)  # 0x0
```

## What the package does not do

rpcgate is a library of parts. It has no command to run and no HTTP server; it
does not forward requests to upstreams, apply retry, timeout, hedge or
circuit-breaker policies, enforce rate limits, run health checks, export
metrics, or fetch block numbers from a node. The configuration sections for
those features are parsed, but nothing in the package acts on them. Of the
storage drivers, only `memory` and `redis` exist.

## Running the tests

```
pip install rpcgate[test]
pytest
```
"""Configuration, coded errors, JSON-RPC handling, EVM helpers and cache connectors for an EVM RPC proxy."""

__version__ = "0.1.0"
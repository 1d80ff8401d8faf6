import pytest

from rpcgate.config import ConnectorConfig, MemoryConnectorConfig
from rpcgate.connector import CONNECTOR_MAIN_INDEX
from rpcgate.connectors import new_connector
from rpcgate.endpoint_errors import ErrInvalidConnectorDriver
from rpcgate.errors import has_code
from rpcgate.memory_connector import MemoryConnector


def test_memory_driver_with_defaults():
    conn = new_connector(ConnectorConfig(driver="memory"))
    assert isinstance(conn, MemoryConnector)
    assert conn.max_items == 1000


def test_memory_driver_with_config_is_usable():
    conn = new_connector(
        ConnectorConfig(driver="memory", memory=MemoryConnectorConfig(max_items=7))
    )
    assert conn.max_items == 7
    conn.set("pk", "rk", "v")
    assert conn.get(CONNECTOR_MAIN_INDEX, "pk", "rk") == "v"


def test_memory_driver_rejects_bad_capacity():
    with pytest.raises(ValueError):
        new_connector(ConnectorConfig(driver="memory", memory=MemoryConnectorConfig(max_items=0)))


@pytest.mark.parametrize("driver", ["", "unknown", "MEMORY"])
def test_unknown_driver(driver):
    with pytest.raises(ErrInvalidConnectorDriver) as info:
        new_connector(ConnectorConfig(driver=driver))
    assert info.value.details == {"driver": driver}
    assert has_code(info.value, "ErrInvalidConnectorDriver")


def test_redis_driver_without_config():
    with pytest.raises(ValueError, match="missing redis config"):
        new_connector(ConnectorConfig(driver="redis"))
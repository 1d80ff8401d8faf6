import pytest

from rpcgate.connector import CONNECTOR_MAIN_INDEX, CONNECTOR_REVERSE_INDEX, Connector
from rpcgate.endpoint_errors import ErrRecordNotFound


class DictConnector(Connector):
    def __init__(self):
        self.items = {}
        self.closed = False

    def get(self, index, partition_key, range_key):
        try:
            return self.items[(partition_key, range_key)]
        except KeyError:
            raise ErrRecordNotFound(f"PK: {partition_key} RK: {range_key}", "dict") from None

    def set(self, partition_key, range_key, value):
        self.items[(partition_key, range_key)] = value

    def delete(self, index, partition_key, range_key):
        self.items.pop((partition_key, range_key), None)

    def close(self):
        self.closed = True


def test_abstract_connector_cannot_be_created():
    with pytest.raises(TypeError):
        Connector()


def test_enter_returns_same_instance():
    conn = DictConnector()
    entered = Connector.__enter__(conn)
    assert entered is conn
    assert conn.closed is False
    assert CONNECTOR_MAIN_INDEX == "idx_main"
    assert CONNECTOR_REVERSE_INDEX == "idx_reverse"


def test_exit_closes_connector():
    conn = DictConnector()
    Connector.__enter__(conn)
    conn.set("pk", "rk", "v")
    assert conn.get(CONNECTOR_MAIN_INDEX, "pk", "rk") == "v"
    suppressed = Connector.__exit__(conn, None, None, None)
    assert not suppressed
    assert conn.closed is True


def test_exit_closes_and_does_not_swallow_errors():
    conn = DictConnector()
    Connector.__enter__(conn)
    error = ErrRecordNotFound("PK: missing RK: key", "dict")
    suppressed = Connector.__exit__(conn, type(error), error, None)
    assert not suppressed
    assert conn.closed is True
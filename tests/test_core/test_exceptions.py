"""
Тесты иерархии исключений.
"""

import pytest

from mac_search.core.exceptions import (
    CollectorError,
    ConfigError,
    MacSearchError,
    QueryError,
    SNMPError,
    ValidationError,
    format_error_for_log,
)


@pytest.mark.unit
class TestHierarchy:
    """Все ошибки ловятся базовым MacSearchError."""

    @pytest.mark.parametrize("error", [
        ValidationError("bad", category="mac"),
        QueryError("bad", operation="select"),
        CollectorError("bad", device="sw1"),
        SNMPError("bad", device="sw1", oid="1.3.6"),
        ConfigError("bad", config_file="config.yaml"),
    ])
    def test_base_class(self, error):
        assert isinstance(error, MacSearchError)

    def test_snmp_is_collector_error(self):
        assert issubclass(SNMPError, CollectorError)


@pytest.mark.unit
class TestDetails:
    """Детали ошибок."""

    def test_validation_str_is_message(self):
        error = ValidationError("Invalid MAC address: 'zz'", category="mac", value="zz")

        assert str(error) == "Invalid MAC address: 'zz'"
        assert error.details == {"category": "mac", "value": "zz"}

    def test_collector_error_str_has_device(self):
        error = CollectorError("timeout", device="sw1")
        assert str(error) == "timeout (device='sw1')"

    def test_snmp_error_details(self):
        error = SNMPError("timeout", device="sw1", oid="1.3.6.1")

        assert error.device == "sw1"
        assert error.oid == "1.3.6.1"
        assert error.details == {"oid": "1.3.6.1", "device": "sw1"}

    def test_config_error_key(self):
        error = ConfigError("bad value", config_file="c.yaml", key="snmp.port")
        assert error.key == "snmp.port"
        assert "key='snmp.port'" in str(error)

    def test_to_dict(self):
        data = QueryError("locked", operation="select").to_dict()

        assert data == {
            "error_type": "QueryError",
            "message": "locked",
            "details": {"operation": "select"},
        }

    def test_format_error_for_log(self):
        assert format_error_for_log(QueryError("locked")) == "locked"
        assert format_error_for_log(RuntimeError("boom")) == "RuntimeError: boom"

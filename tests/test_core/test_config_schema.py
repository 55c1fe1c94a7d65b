"""
Тесты Pydantic схемы config.yaml.
"""

import pytest

from mac_search.core.config_schema import (
    AppConfig,
    get_default_config,
    validate_config,
)
from mac_search.core.exceptions import ConfigError


@pytest.mark.unit
class TestDefaults:
    """Значения по умолчанию."""

    def test_default_config(self):
        cfg = get_default_config()

        assert cfg.snmp.community == "public"
        assert cfg.snmp.version == "2c"
        assert cfg.snmp.port == 161
        assert cfg.cache.path is None
        assert cfg.output.delimiter == ","
        assert cfg.logging.level == "WARNING"
        assert cfg.hosts == []

    def test_empty_dict_is_valid(self):
        assert validate_config({}) == AppConfig()


@pytest.mark.unit
class TestValidation:
    """Проверка значений."""

    def test_partial_section(self):
        cfg = validate_config({"snmp": {"community": "secret", "timeout": 5}})

        assert cfg.snmp.community == "secret"
        assert cfg.snmp.timeout == 5.0
        assert cfg.snmp.retries == 1

    def test_hosts_list(self):
        cfg = validate_config({"hosts": ["sw1", "sw2"]})
        assert cfg.hosts == ["sw1", "sw2"]

    @pytest.mark.parametrize("data, key", [
        ({"snmp": {"version": "3"}}, "snmp.version"),
        ({"snmp": {"port": 70000}}, "snmp.port"),
        ({"snmp": {"max_workers": 0}}, "snmp.max_workers"),
        ({"output": {"mac_format": "dotted"}}, "output.mac_format"),
        ({"output": {"delimiter": ""}}, "output.delimiter"),
        ({"output": {"delimiter": ", "}}, "output.delimiter"),
        ({"logging": {"level": "VERBOSE"}}, "logging.level"),
    ])
    def test_invalid_value_names_key(self, data, key):
        with pytest.raises(ConfigError) as exc_info:
            validate_config(data, config_file="test.yaml")

        assert exc_info.value.key == key
        assert exc_info.value.config_file == "test.yaml"

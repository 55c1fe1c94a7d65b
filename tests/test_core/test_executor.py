"""
Тесты выполнения поиска.

Проверяет:
- Компиляцию условий в параметризованный SQL
- Batch режим (литеральные фильтры / без фильтров)
- Потоковый режим: одна строка ввода — один запрос
- Изоляцию ошибок отдельных строк
"""

from unittest.mock import MagicMock

import pytest

from mac_search.core.domain import build_predicates
from mac_search.core.exceptions import QueryError
from mac_search.core.executor import CompiledQuery, QueryExecutor, compile_predicates
from mac_search.core.models import OutputOptions
from mac_search.exporters import ResultFormatter

HEADER_LINE = "Host,Port,MAC,VLAN\n"


@pytest.mark.unit
class TestCompilePredicates:
    """Тесты compile_predicates."""

    def test_always_true(self):
        compiled = compile_predicates(build_predicates({}))
        assert compiled == CompiledQuery(where="1", params={})

    def test_membership(self):
        compiled = compile_predicates(build_predicates({"vlan": ["10", "20"]}))

        assert compiled.where == "vlan IN (:vlan_0, :vlan_1)"
        assert compiled.params == {"vlan_0": "10", "vlan_1": "20"}

    def test_equality_has_no_literal_param(self):
        compiled = compile_predicates(build_predicates({"mac": [], "port": ["24"]}))

        assert compiled.where == "mac = :mac AND port IN (:port_0)"
        assert compiled.params == {"port_0": "24"}

    def test_exclusions_numbered(self):
        compiled = compile_predicates(build_predicates({}, ["sw1:24", "sw2:1"]))

        assert compiled.where == (
            "NOT (host = :x0_host AND port = :x0_port) AND "
            "NOT (host = :x1_host AND port = :x1_port)"
        )
        assert compiled.params == {
            "x0_host": "sw1", "x0_port": "24",
            "x1_host": "sw2", "x1_port": "1",
        }

    def test_values_never_in_sql_text(self):
        compiled = compile_predicates(build_predicates({"mac": ["aabbccddeeff"]}, ["sw1:24"]))
        assert "aabbccddeeff" not in compiled.where
        assert "sw1" not in compiled.where

    def test_with_bound_merges(self):
        compiled = CompiledQuery(where="mac = :mac", params={"port_0": "1"})
        assert compiled.with_bound({"mac": "aabbccddeeff"}) == {
            "port_0": "1",
            "mac": "aabbccddeeff",
        }
        assert compiled.params == {"port_0": "1"}


@pytest.mark.unit
class TestBatchMode:
    """Литеральные фильтры: один запрос."""

    def test_no_filters_returns_whole_cache(self, store, formatter, out):
        stats = QueryExecutor(store, formatter).run(build_predicates({}))

        assert out.getvalue() == (
            HEADER_LINE
            + "sw1,1,aabbccddeeff,10\n"
            + "sw1,24,001122334455,10\n"
            + "sw2,2,aabbccddeeff,20\n"
            + "sw2,24,001122334466,30\n"
        )
        assert stats.queries == 1
        assert stats.rows == 4

    def test_literal_mac(self, store, formatter, out):
        predicates = build_predicates({"mac": ["AA-BB-CC-DD-EE-FF"]})
        QueryExecutor(store, formatter).run(predicates)

        assert out.getvalue() == (
            HEADER_LINE
            + "sw1,1,aabbccddeeff,10\n"
            + "sw2,2,aabbccddeeff,20\n"
        )

    def test_exclusion_removes_only_that_port(self, store, formatter, out):
        predicates = build_predicates({}, ["sw1:24"])
        QueryExecutor(store, formatter).run(predicates)

        lines = out.getvalue().splitlines()
        assert "sw1,24,001122334455,10" not in lines
        assert "sw2,24,001122334466,30" in lines
        assert len(lines) == 4

    def test_lines_ignored_in_batch_mode(self, store, formatter, out):
        """Ввод не читается, если все фильтры литеральные."""
        lines = MagicMock()
        QueryExecutor(store, formatter).run(build_predicates({"vlan": ["30"]}), lines=lines)

        lines.__iter__.assert_not_called()
        assert out.getvalue() == HEADER_LINE + "sw2,24,001122334466,30\n"

    def test_no_results(self, store, formatter, out, err):
        predicates = build_predicates({"vlan": ["99"]})
        stats = QueryExecutor(store, formatter).run(predicates)

        assert out.getvalue() == ""
        assert err.getvalue() == "No results for vlan=99\n"
        assert stats.empty == 1

    def test_query_error_propagates(self, formatter):
        store = MagicMock()
        store.execute.side_effect = QueryError("disk I/O error", operation="select")

        with pytest.raises(QueryError):
            QueryExecutor(store, formatter).run(build_predicates({}))


@pytest.mark.unit
class TestStreamingMode:
    """Потоковые фильтры: запрос на каждую строку ввода."""

    def test_mac_and_vlan_per_line(self, store, formatter, out):
        predicates = build_predicates({"mac": [], "vlan": []})
        stats = QueryExecutor(store, formatter).run(
            predicates, lines=["aa:bb:cc:dd:ee:ff,10\n"]
        )

        assert out.getvalue() == HEADER_LINE + "sw1,1,aabbccddeeff,10\n"
        assert stats.queries == 1

    def test_header_once_per_result_set(self, store, formatter, out):
        predicates = build_predicates({"mac": []})
        QueryExecutor(store, formatter).run(
            predicates, lines=["001122334455\n", "001122334466\r\n"]
        )

        assert out.getvalue() == (
            HEADER_LINE
            + "sw1,24,001122334455,10\n"
            + HEADER_LINE
            + "sw2,24,001122334466,30\n"
        )

    def test_bad_line_does_not_stop_stream(self, store, formatter, out, err):
        """Ошибка строки 1 сообщается, строка 2 обрабатывается."""
        predicates = build_predicates({"mac": [], "vlan": []})
        stats = QueryExecutor(store, formatter).run(
            predicates,
            lines=["aa:bb:cc:dd:ee:ff\n", "aa:bb:cc:dd:ee:ff,20\n"],
        )

        assert out.getvalue() == HEADER_LINE + "sw2,2,aabbccddeeff,20\n"
        assert err.getvalue().startswith("Line 1: Expected 2 field(s)")
        assert stats.failed_lines == 1
        assert stats.queries == 1

    def test_invalid_value_reported_with_line_number(self, store, formatter, err):
        predicates = build_predicates({"mac": []})
        QueryExecutor(store, formatter).run(predicates, lines=["aabbccddeeff", "zz"])

        assert "Line 2: Invalid MAC address: 'zz'" in err.getvalue()

    def test_blank_line_fails_alone(self, store, formatter, out, err):
        predicates = build_predicates({"vlan": []})
        stats = QueryExecutor(store, formatter).run(predicates, lines=["\n", "30\n"])

        assert err.getvalue() == "Line 1: Invalid VLAN: ''\n"
        assert out.getvalue() == HEADER_LINE + "sw2,24,001122334466,30\n"
        assert stats.failed_lines == 1

    def test_empty_result_named_by_bound_values(self, store, formatter, out, err):
        predicates = build_predicates({"mac": [], "vlan": []})
        stats = QueryExecutor(store, formatter).run(predicates, lines=["0:0:0:0:0:0,10"])

        assert out.getvalue() == ""
        assert err.getvalue() == "No results for mac=000000000000, vlan=10\n"
        assert stats.empty == 1

    def test_literal_and_streamed_combined(self, store, formatter, out):
        predicates = build_predicates({"mac": [], "port": ["2"]})
        QueryExecutor(store, formatter).run(
            predicates, lines=["aabbccddeeff", "001122334455"]
        )

        assert out.getvalue() == HEADER_LINE + "sw2,2,aabbccddeeff,20\n"

    def test_query_error_isolated_to_line(self, formatter, out, err):
        store = MagicMock()
        store.execute.side_effect = [
            QueryError("database is locked", operation="select"),
            iter([("sw1", "1", "aabbccddeeff", "10")]),
        ]
        predicates = build_predicates({"mac": []})

        stats = QueryExecutor(store, formatter).run(
            predicates, lines=["aabbccddeeff", "aabbccddeeff"]
        )

        assert "Line 1: query failed for mac=aabbccddeeff: database is locked" in err.getvalue()
        assert out.getvalue() == HEADER_LINE + "sw1,1,aabbccddeeff,10\n"
        assert stats.failed_lines == 1
        assert stats.queries == 1

    def test_input_read_lazily(self, store, out, err):
        """Результат строки выводится до чтения следующей строки."""
        formatter = ResultFormatter(out=out, err=err, options=OutputOptions(suppress_header=True))
        seen = []

        def lines():
            yield "aabbccddeeff"
            seen.append(out.getvalue())
            yield "001122334455"

        predicates = build_predicates({"mac": []})
        QueryExecutor(store, formatter).run(predicates, lines=lines())

        assert seen == ["sw1,1,aabbccddeeff,10\nsw2,2,aabbccddeeff,20\n"]

    def test_verbose_prints_where(self, store, out, err):
        formatter = ResultFormatter(out=out, err=err, options=OutputOptions(verbose=True))
        QueryExecutor(store, formatter).run(build_predicates({"vlan": []}), lines=[])

        assert "WHERE vlan = :vlan" in err.getvalue()

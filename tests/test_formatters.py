"""Tests for report formatters."""

import json

import pytest

from polymetrics import analyze
from polymetrics.formatters import (
    EdnFormatter,
    JsonFormatter,
    RichFormatter,
    format_cycle,
    format_metric,
    get_formatter,
)
from polymetrics.formatters.edn_formatter import keyword, to_edn
from polymetrics.scanning.clojure_reader import Keyword, read_forms


class TestGetFormatter:
    def test_known_formatters(self):
        assert isinstance(get_formatter("text"), RichFormatter)
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("edn"), EdnFormatter)

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown formatter"):
            get_formatter("xml")


class TestHelpers:
    def test_format_metric(self):
        assert format_metric(0.12345) == "0.12"
        assert format_metric(0.5, 3) == "0.500"
        assert format_metric(None) == "-"

    def test_format_cycle_closes_the_loop(self):
        assert format_cycle(("a", "b", "c")) == "a → b → c → a"


class TestJsonFormatter:
    def test_report_shape(self, clojure_workspace):
        data = json.loads(JsonFormatter().format(analyze(clojure_workspace)))
        assert set(data) == {"metrics", "health", "cycles", "healthy", "conflicts"}
        assert [m["name"] for m in data["metrics"]] == ["user", "util", "billing"]
        assert data["metrics"][0]["kind"] == "component"
        assert data["health"]["unit_count"] == 3
        assert data["healthy"] is True

    def test_undefined_metrics_are_null(self, clojure_workspace):
        data = json.loads(JsonFormatter().format(analyze(clojure_workspace)))
        billing = data["metrics"][2]
        assert billing["abstractness"] is None
        assert billing["distance"] is None
        assert billing["is_entry_point"] is True

    def test_render_prints_to_stdout(self, clojure_workspace, capsys):
        JsonFormatter().render(analyze(clojure_workspace))
        assert json.loads(capsys.readouterr().out)["healthy"] is True


class TestRichFormatter:
    def test_table_and_verdict(self, clojure_workspace):
        text = RichFormatter().format(analyze(clojure_workspace))
        assert "user" in text
        assert "billing (entry)" in text
        assert "Mean distance:  0.250" in text
        assert "Codebase is healthy" in text

    def test_cycles_and_attention(self, python_workspace, write_tree):
        write_tree(
            {"components/shop/pricing/core.py": "from shop.cart import add\n"},
            root=python_workspace,
        )
        text = RichFormatter().format(analyze(python_workspace))
        assert "Cycles detected (1)" in text
        assert "cart → pricing → cart" in text
        assert "Codebase needs attention" in text

    def test_conflicts_are_listed(self, write_tree, tmp_path):
        write_tree(
            {
                "components/alpha/src/shared/core.clj": "(ns shared.core)",
                "components/beta/src/shared/core.clj": "(ns shared.core)",
            }
        )
        text = RichFormatter().format(analyze(tmp_path))
        assert "Duplicate module declarations (1)" in text
        assert "shared.core: kept in alpha" in text


class TestEdnFormatter:
    def test_scalars(self):
        assert to_edn(None) == "nil"
        assert to_edn(True) == "true"
        assert to_edn(3) == "3"
        assert to_edn(0.25) == "0.25"
        assert to_edn('say "hi"\n') == '"say \\"hi\\"\\n"'

    def test_collections(self):
        assert to_edn({"kept_unit": "a", "cycle": ("a", "b")}) == '{:kept-unit "a" :cycle ["a" "b"]}'
        assert to_edn({"b", "a"}) == '#{"a" "b"}'
        assert keyword("mean_distance") == ":mean-distance"

    def test_unsupported_value(self):
        with pytest.raises(TypeError):
            to_edn(object())

    def test_report_reads_back_as_edn(self, clojure_workspace):
        text = EdnFormatter().format(analyze(clojure_workspace))
        data = next(read_forms(text))

        assert set(data) == {"metrics", "health", "cycles", "healthy?", "conflicts"}
        assert all(isinstance(key, Keyword) for key in data)
        assert data["healthy?"] is True
        assert data["health"]["mean-distance"] == pytest.approx(0.25)
        names = [m["name"] for m in data["metrics"]]
        assert names == ["user", "util", "billing"]
        assert data["metrics"][2]["distance"] is None

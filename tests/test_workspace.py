"""Tests for reading the top namespace from workspace files."""

import logging

from polymetrics.config import MetricsConfig
from polymetrics.workspace import read_workspace_namespace, resolve_top_namespace


class TestReadWorkspaceNamespace:
    def test_polylith_tool_table(self, write_tree, tmp_path):
        write_tree({"workspace.toml": '[tool.polylith]\nnamespace = "shop"\n'})
        assert read_workspace_namespace(tmp_path) == "shop"

    def test_top_level_namespace_key(self, write_tree, tmp_path):
        write_tree({"workspace.toml": 'namespace = "shop"\n'})
        assert read_workspace_namespace(tmp_path) == "shop"

    def test_workspace_edn(self, write_tree, tmp_path):
        write_tree({"workspace.edn": '{:top-namespace "acme" :vcs {:name "git"}}\n'})
        assert read_workspace_namespace(tmp_path) == "acme"

    def test_toml_is_preferred(self, write_tree, tmp_path):
        write_tree(
            {
                "workspace.toml": 'namespace = "from-toml"\n',
                "workspace.edn": '{:top-namespace "from-edn"}\n',
            }
        )
        assert read_workspace_namespace(tmp_path) == "from-toml"

    def test_no_workspace_files(self, tmp_path):
        assert read_workspace_namespace(tmp_path) is None

    def test_malformed_edn_is_ignored(self, write_tree, tmp_path, caplog):
        write_tree({"workspace.edn": '{:top-namespace "acme"'})
        with caplog.at_level(logging.WARNING, logger="polymetrics"):
            assert read_workspace_namespace(tmp_path) is None
        assert "workspace.edn" in caplog.text

    def test_malformed_toml_falls_back_to_edn(self, write_tree, tmp_path):
        write_tree(
            {
                "workspace.toml": "namespace = [\n",
                "workspace.edn": '{:top-namespace "acme"}\n',
            }
        )
        assert read_workspace_namespace(tmp_path) == "acme"

    def test_non_string_namespace_is_ignored(self, write_tree, tmp_path):
        write_tree({"workspace.edn": "{:top-namespace 42}\n"})
        assert read_workspace_namespace(tmp_path) is None

    def test_edn_that_is_not_a_map(self, write_tree, tmp_path):
        write_tree({"workspace.edn": "[:top-namespace \"acme\"]\n"})
        assert read_workspace_namespace(tmp_path) is None


class TestResolveTopNamespace:
    def test_config_wins(self, write_tree, tmp_path):
        write_tree({"workspace.edn": '{:top-namespace "acme"}\n'})
        assert resolve_top_namespace(tmp_path, MetricsConfig(top_namespace="cfg")) == "cfg"

    def test_falls_back_to_workspace_files(self, write_tree, tmp_path):
        write_tree({"workspace.edn": '{:top-namespace "acme"}\n'})
        assert resolve_top_namespace(tmp_path, MetricsConfig()) == "acme"

    def test_empty_without_any_source(self, tmp_path):
        assert resolve_top_namespace(tmp_path, MetricsConfig()) is None

"""Tests for unit discovery and path classification."""

import pytest

from polymetrics.architecture import UnitKind, classify_path, discover_units
from polymetrics.architecture.discovery import find_source_files, path_to_dotted_name
from polymetrics.exceptions import InvalidPathError, NamingCollisionError


class TestClassifyPath:
    """The first marker with a child directory decides the kind."""

    @pytest.mark.parametrize(
        "path,kind,name",
        [
            ("components/user/src/acme/user/core.clj", UnitKind.COMPONENT, "user"),
            ("bases/api/src/acme/api/main.clj", UnitKind.BASE, "api"),
            ("interfaces/contracts/src/acme/contracts/user.clj", UnitKind.INTERFACE_GROUP, "contracts"),
            ("packages/http/src/http/client.py", UnitKind.PACKAGE, "http"),
        ],
    )
    def test_marker_kinds(self, path, kind, name):
        result = classify_path(path)
        assert result.kind is kind
        assert result.name == name

    def test_source_root_runs_through_unit_directory(self):
        result = classify_path("components/user/src/acme/user/core.clj")
        assert result.source_root == "components/user"

    def test_top_namespace_below_marker_is_skipped(self):
        result = classify_path("components/shop/cart/core.py", top_namespace="shop")
        assert result.name == "cart"
        assert result.source_root == "components/shop/cart"

    def test_top_namespace_alone_is_the_unit(self):
        result = classify_path("components/shop/core.py", top_namespace="shop")
        assert result.name == "shop"

    def test_marker_without_child_directory_is_not_a_unit(self):
        result = classify_path("src/components/core.clj")
        assert result.kind is UnitKind.DIRECTORY
        assert result.name == "components"

    def test_plain_directory_name_is_dotted_and_hyphenated(self):
        result = classify_path("src/restaurant/menu_items/mutations/create.clj")
        assert result.kind is UnitKind.DIRECTORY
        assert result.name == "restaurant.menu-items.mutations"
        assert result.source_root == "src/restaurant/menu_items/mutations"

    def test_plain_directory_strips_top_namespace(self):
        result = classify_path("src/acme/orders/core.clj", top_namespace="acme")
        assert result.name == "orders"

    def test_files_directly_under_source_root(self):
        result = classify_path("src/core.clj")
        assert result.name == "top-level.src"
        assert result.source_root == "src"

    def test_root_level_files_are_ignored(self):
        assert classify_path("build.clj") is None

    @pytest.mark.parametrize(
        "path",
        [
            ".git/hooks/pre-commit.py",
            "components/user/.cpcache/x.clj",
            "target/classes/acme/core.clj",
            "projects/app/venv/lib/site.py",
            "node_modules/pkg/index.py",
        ],
    )
    def test_hidden_and_build_directories_are_ignored(self, path):
        assert classify_path(path) is None

    def test_build_output_name_below_marker_is_a_unit(self):
        assert classify_path("components/build/src/acme/build/core.clj", "acme") == (
            UnitKind.COMPONENT,
            "build",
            "components/build",
        )

    def test_build_output_name_below_source_root_is_a_package(self):
        assert classify_path("src/acme/dist/core.py", "acme").name == "dist"
        assert classify_path("src/acme/dist/core.py").name == "acme.dist"

    def test_path_to_dotted_name(self):
        assert path_to_dotted_name(["a_b", "c"]) == "a-b.c"


class TestDiscoverUnits:
    def test_clojure_workspace(self, clojure_workspace):
        units = discover_units(clojure_workspace, top_namespace="acme")
        assert [(u.name, u.kind) for u in units] == [
            ("api", UnitKind.BASE),
            ("billing", UnitKind.COMPONENT),
            ("user", UnitKind.COMPONENT),
            ("util", UnitKind.COMPONENT),
        ]
        user = units[2]
        assert user.source_files == (
            "components/user/src/acme/user/core.clj",
            "components/user/src/acme/user/interface.clj",
        )
        assert user.source_roots == ("components/user",)
        assert user.file_count == 2

    def test_discovery_is_deterministic(self, clojure_workspace):
        assert discover_units(clojure_workspace) == discover_units(clojure_workspace)

    def test_empty_root_yields_no_units(self, tmp_path):
        assert discover_units(tmp_path) == []

    def test_non_source_files_are_ignored(self, write_tree, tmp_path):
        write_tree({"docs/readme.md": "# hi\n", "src/app/data.json": "{}"})
        assert discover_units(tmp_path) == []

    def test_missing_root_is_an_error(self, tmp_path):
        with pytest.raises(InvalidPathError):
            discover_units(tmp_path / "nope")

    def test_plain_directories_merge_across_source_roots(self, write_tree, tmp_path):
        write_tree(
            {
                "src/app/core.clj": "(ns app.core)",
                "test/app/core_test.clj": "(ns app.core-test)",
            }
        )
        (unit,) = discover_units(tmp_path)
        assert unit.name == "app"
        assert unit.kind is UnitKind.DIRECTORY
        assert unit.source_roots == ("src/app", "test/app")
        assert unit.file_count == 2

    def test_filename_clash_across_source_roots(self, write_tree, tmp_path):
        write_tree(
            {
                "src/app/util.clj": "(ns app.util)",
                "dev/app/util.clj": "(ns app.util)",
            }
        )
        with pytest.raises(NamingCollisionError) as exc_info:
            discover_units(tmp_path)
        error = exc_info.value
        assert error.unit == "app"
        assert error.duplicates == ["util.clj"]
        assert error.files == ["dev/app/util.clj", "src/app/util.clj"]

    def test_name_shared_by_two_kinds_is_disambiguated(self, write_tree, tmp_path):
        write_tree(
            {
                "components/user/src/user/core.clj": "(ns user.core)",
                "src/user/legacy.clj": "(ns user.legacy)",
            }
        )
        names = {u.name: u.kind for u in discover_units(tmp_path)}
        assert names == {"user": UnitKind.COMPONENT, "directory:user": UnitKind.DIRECTORY}

    def test_custom_ignored_dirs(self, write_tree, tmp_path):
        write_tree({"generated/app/core.clj": "(ns app.core)"})
        assert discover_units(tmp_path, ignored_dirs=["generated"]) == []


    def test_unit_named_like_build_output(self, write_tree, tmp_path):
        write_tree(
            {
                "components/build/src/acme/build/core.clj": "(ns acme.build.core)",
                "components/user/src/acme/user/core.clj": "(ns acme.user.core (:require [acme.build.core]))",
                "target/classes/acme/build/core.clj": "(ns acme.build.core)",
            }
        )
        units = discover_units(tmp_path, top_namespace="acme")
        assert [(u.name, u.kind) for u in units] == [
            ("build", UnitKind.COMPONENT),
            ("user", UnitKind.COMPONENT),
        ]
        assert units[0].source_files == ("components/build/src/acme/build/core.clj",)

class TestFindSourceFiles:
    def test_sorted_and_filtered(self, write_tree, tmp_path):
        write_tree(
            {
                "b/z.py": "",
                "a/y.clj": "",
                "a/x.txt": "",
                ".hidden/w.py": "",
            }
        )
        found = [p.relative_to(tmp_path).as_posix() for p in find_source_files(tmp_path)]
        assert found == ["a/y.clj", "b/z.py"]

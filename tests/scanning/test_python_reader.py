"""Tests for the Python declaration reader."""

from pathlib import Path

from polymetrics.scanning import PythonReader, module_name_for, read_declaration


class TestModuleNameFor:
    """Module names come from the path below the nearest import root."""

    def test_below_marker_directory(self):
        assert module_name_for(Path("components/myapp/user/core.py")) == "myapp.user.core"

    def test_below_src_directory(self):
        path = Path("components/user/src/myapp/user/core.py")
        assert module_name_for(path) == "myapp.user.core"

    def test_package_init_names_the_package(self):
        path = Path("components/user/src/myapp/user/__init__.py")
        assert module_name_for(path) == "myapp.user"

    def test_relative_to_root(self, tmp_path):
        path = tmp_path / "tools" / "lint.py"
        assert module_name_for(path, tmp_path) == "tools.lint"

    def test_top_level_init_has_no_name(self, tmp_path):
        assert module_name_for(tmp_path / "__init__.py", tmp_path) is None


class TestPythonReader:
    """Imports become raw module references."""

    def _read(self, write_tree, tmp_path, rel_path, source):
        write_tree({rel_path: source})
        return PythonReader().read(tmp_path / rel_path, tmp_path)

    def test_plain_imports(self, write_tree, tmp_path):
        decl = self._read(
            write_tree, tmp_path, "src/app/main.py", "import os\nimport app.db.session\n"
        )
        assert decl.name == "app.main"
        assert decl.requires == frozenset({"os", "app.db.session"})
        assert decl.is_package is False

    def test_from_import_adds_module_and_names(self, write_tree, tmp_path):
        decl = self._read(write_tree, tmp_path, "src/app/main.py", "from app.db import session\n")
        assert decl.requires == frozenset({"app.db", "app.db.session"})

    def test_star_import_adds_module_only(self, write_tree, tmp_path):
        decl = self._read(write_tree, tmp_path, "src/app/main.py", "from app.db import *\n")
        assert decl.requires == frozenset({"app.db"})

    def test_relative_imports_resolve_against_package(self, write_tree, tmp_path):
        source = "from . import models\nfrom ..db import session\n"
        decl = self._read(write_tree, tmp_path, "src/app/api/views.py", source)
        assert "app.api" in decl.requires
        assert "app.api.models" in decl.requires
        assert "app.db.session" in decl.requires

    def test_relative_import_in_package_init(self, write_tree, tmp_path):
        decl = self._read(write_tree, tmp_path, "src/app/api/__init__.py", "from .views import x\n")
        assert decl.name == "app.api"
        assert decl.is_package is True
        assert "app.api.views" in decl.requires

    def test_nested_imports_count(self, write_tree, tmp_path):
        source = "def load():\n    import app.plugins\n    return app.plugins\n"
        decl = self._read(write_tree, tmp_path, "src/app/main.py", source)
        assert "app.plugins" in decl.requires

    def test_self_reference_is_dropped(self, write_tree, tmp_path):
        decl = self._read(write_tree, tmp_path, "src/app/main.py", "import app.main\n")
        assert "app.main" not in decl.requires

    def test_syntax_error_yields_none(self, write_tree, tmp_path):
        assert self._read(write_tree, tmp_path, "src/app/broken.py", "def (:\n") is None

    def test_undecodable_file_yields_none(self, tmp_path):
        path = tmp_path / "src" / "app" / "binary.py"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"\xff\xfe\x00import os")
        assert read_declaration(path, tmp_path) is None

    def test_missing_file_yields_none(self, tmp_path):
        assert read_declaration(tmp_path / "src" / "gone.py", tmp_path) is None

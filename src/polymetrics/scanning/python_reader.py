"""Python declaration reader.

Python files do not declare their module name, so it is derived from the
file's location: the dotted path below the nearest source root
(``src``, ``test``, ``tests``) or unit marker directory, else below the
workspace root.
"""

import ast
from pathlib import Path
from typing import Optional

from ..conventions import MARKER_DIRECTORIES, SOURCE_ROOT_DIRECTORIES
from .base import DeclarationReader
from .models import Declaration


def module_name_for(path: Path, root: Optional[Path] = None) -> Optional[str]:
    """Derive the dotted module name of a Python file.

    >>> module_name_for(Path("components/myapp/user/core.py"))
    'myapp.user.core'
    >>> module_name_for(Path("components/user/src/myapp/user/__init__.py"))
    'myapp.user'
    """
    parts = path.parts
    if root is not None:
        try:
            parts = path.relative_to(root).parts
        except ValueError:
            pass
    if not parts:
        return None

    dir_parts = list(parts[:-1])
    boundary = max(
        (
            i
            for i, part in enumerate(dir_parts)
            if part in SOURCE_ROOT_DIRECTORIES or part in MARKER_DIRECTORIES
        ),
        default=-1,
    )
    module_parts = dir_parts[boundary + 1 :]

    stem = Path(parts[-1]).stem
    if stem != "__init__":
        module_parts.append(stem)

    return ".".join(module_parts) or None


def _resolve_relative(module: Optional[str], level: int, package: str) -> Optional[str]:
    """Resolve ``from ..module import x`` against the importing package."""
    base = package.split(".") if package else []
    if level - 1 > len(base):
        return None  # climbs above the import root
    base = base[: len(base) - (level - 1)]
    if module:
        base.extend(module.split("."))
    return ".".join(base) or None


class PythonReader(DeclarationReader):
    """Reads imports from Python source with the ``ast`` module."""

    suffixes = (".py",)

    def parse(self, content: str, path: Path, root: Optional[Path]) -> Optional[Declaration]:
        name = module_name_for(path, root)
        if name is None:
            return None

        is_package = path.name == "__init__.py"
        package = name if is_package else name.rpartition(".")[0]

        tree = ast.parse(content, filename=str(path))
        requires: set[str] = set()

        # Imports inside functions and conditionals are dependencies too
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                requires.update(alias.name for alias in node.names)
            elif isinstance(node, ast.ImportFrom):
                if node.level:
                    base = _resolve_relative(node.module, node.level, package)
                else:
                    base = node.module
                if not base:
                    continue
                requires.add(base)
                # The imported name may itself be a submodule
                requires.update(f"{base}.{alias.name}" for alias in node.names if alias.name != "*")

        requires.discard(name)
        return Declaration(name=name, requires=frozenset(requires), is_package=is_package)

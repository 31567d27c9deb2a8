"""Reader registry: resolves a file suffix to its declaration reader."""

from pathlib import Path
from typing import Optional

from ..logging_config import get_logger
from .base import DeclarationReader
from .clojure_reader import ClojureReader
from .models import Declaration
from .python_reader import PythonReader

logger = get_logger(__name__)

_READERS: tuple[DeclarationReader, ...] = (PythonReader(), ClojureReader())

_BY_SUFFIX: dict[str, DeclarationReader] = {
    suffix: reader for reader in _READERS for suffix in reader.suffixes
}


def source_suffixes() -> frozenset[str]:
    """All file suffixes some reader understands."""
    return frozenset(_BY_SUFFIX)


def get_reader(path: Path) -> Optional[DeclarationReader]:
    return _BY_SUFFIX.get(path.suffix)


def read_declaration(path: Path, root: Optional[Path] = None) -> Optional[Declaration]:
    """Return the module declaration of ``path``, or None.

    Never raises: files of unknown type, unreadable files and files without
    a declaration all yield None.
    """
    reader = get_reader(path)
    if reader is None:
        logger.debug(f"No declaration reader for {path}")
        return None
    return reader.read(path, root)

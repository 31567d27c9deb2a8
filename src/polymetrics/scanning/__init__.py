"""Module declaration reading for Python and Clojure sources."""

from .base import DeclarationReader
from .clojure_reader import ClojureReader, read_edn_file
from .factory import get_reader, read_declaration, source_suffixes
from .models import Declaration
from .python_reader import PythonReader, module_name_for

__all__ = [
    "ClojureReader",
    "Declaration",
    "DeclarationReader",
    "PythonReader",
    "get_reader",
    "module_name_for",
    "read_declaration",
    "read_edn_file",
    "source_suffixes",
]

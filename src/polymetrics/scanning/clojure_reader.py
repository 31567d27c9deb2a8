"""Clojure declaration reader.

Reads just enough of the Clojure syntax to find the ``(ns ...)`` form of a
file and the libspecs of its ``:require``/``:use`` clauses. The same form
reader parses EDN files such as ``workspace.edn``.

Forms map onto Python values:
    (a b)   -> SList        [a b] -> Vector       #{a} -> ClojureSet
    {a b}   -> dict         :kw   -> Keyword      sym  -> Symbol
    "str"   -> str          nil/true/false -> None/True/False
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterator, Optional

from .base import DeclarationReader
from .models import Declaration


class Symbol(str):
    """A Clojure symbol."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


class Keyword(str):
    """A Clojure keyword, stored without its leading colon."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f":{self}"


class SList(tuple):
    """A Clojure list."""


class Vector(tuple):
    """A Clojure vector."""


class ClojureSet(tuple):
    """A Clojure set literal (kept ordered, items may be unhashable)."""


class _Splice:
    """Items of a splicing reader conditional, ``#?@(:clj [a b])``."""

    def __init__(self, items):
        self.items = items


_NOTHING = object()  # a form that reads as nothing (#_ discard, unmatched #?)

# Feature preference for reader conditionals
_FEATURES = ("clj", "default")

_TOKEN_RE = re.compile(
    r"""
      (?P<ws>[\s,]+)
    | (?P<comment>;[^\n]*|\#![^\n]*)
    | (?P<string>"(?:\\.|[^"\\])*")
    | (?P<regex>\#"(?:\\.|[^"\\])*")
    | (?P<special>\#\{|\#\?@|\#\?|\#_|\#\(|\#'|\^|'|`|~@|~|@)
    | (?P<open>[(\[{])
    | (?P<close>[)\]}])
    | (?P<char>\\(?:newline|space|tab|return|backspace|formfeed|u[0-9a-fA-F]{4}|o[0-7]{1,3}|.))
    | (?P<atom>[^\s,;()\[\]{}"\\]+)
    """,
    re.VERBOSE | re.DOTALL,
)

_CLOSERS = {"(": ")", "[": "]", "{": "}", "#{": "}", "#(": ")"}

_STRING_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\", "b": "\b", "f": "\f"}

_DEPENDENCY_CLAUSES = frozenset({"require", "use", "require-macros", "use-macros"})


def _tokenize(text: str) -> Iterator[tuple[str, str]]:
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ValueError(f"Unreadable input at offset {pos}: {text[pos:pos + 20]!r}")
        pos = match.end()
        kind = match.lastgroup
        if kind in ("ws", "comment"):
            continue
        yield kind, match.group()


def _unescape(body: str) -> str:
    return re.sub(r"\\(.)", lambda m: _STRING_ESCAPES.get(m.group(1), m.group(1)), body)


def _read_atom(text: str) -> Any:
    if text.startswith(":"):
        return Keyword(text.lstrip(":"))
    if text == "nil":
        return None
    if text in ("true", "false"):
        return text == "true"
    if text[0].isdigit() or (len(text) > 1 and text[0] in "+-" and text[1].isdigit()):
        for convert in (int, float):
            try:
                return convert(text.rstrip("MN"))
            except ValueError:
                continue
        return text  # ratios, radix literals
    return Symbol(text)


class FormReader:
    """Streaming reader over the forms of a Clojure/EDN text."""

    def __init__(self, text: str):
        self._tokens = _tokenize(text)

    def __iter__(self) -> Iterator[Any]:
        for token in self._tokens:
            form = self._read(token)
            if form is _NOTHING:
                continue
            if isinstance(form, _Splice):
                yield from form.items
            else:
                yield form

    def _next_form(self) -> Any:
        """Read the next real form, failing at end of input."""
        for token in self._tokens:
            form = self._read(token)
            if form is not _NOTHING:
                return form
        raise ValueError("Unexpected end of input")

    def _read_seq(self, close: str) -> list:
        items: list = []
        for kind, text in self._tokens:
            if kind == "close":
                if text != close:
                    raise ValueError(f"Mismatched '{text}', expected '{close}'")
                return items
            form = self._read((kind, text))
            if form is _NOTHING:
                continue
            if isinstance(form, _Splice):
                items.extend(form.items)
            else:
                items.append(form)
        raise ValueError(f"Unbalanced form, missing '{close}'")

    def _read(self, token: tuple[str, str]) -> Any:
        kind, text = token

        if kind == "open" or text in ("#{", "#("):
            items = self._read_seq(_CLOSERS[text])
            if text in ("(", "#("):
                return SList(items)
            if text == "[":
                return Vector(items)
            if text == "#{":
                return ClojureSet(items)
            return _to_map(items)

        if kind == "close":
            raise ValueError(f"Unexpected '{text}'")
        if kind == "string":
            return _unescape(text[1:-1])
        if kind in ("regex", "char"):
            return text

        if kind == "special":
            if text == "#_":
                self._next_form()
                return _NOTHING
            if text in ("#?", "#?@"):
                return self._read_conditional(splice=text == "#?@")
            if text == "^":
                self._next_form()  # metadata
                return self._next_form()
            # quote, syntax-quote, unquote, deref, var: the wrapped form stands in
            return self._next_form()

        if text.startswith("##"):
            return float(text[2:].replace("Inf", "inf").replace("NaN", "nan"))
        if text.startswith("#"):
            return self._next_form()  # tagged literal, e.g. #inst "..."
        return _read_atom(text)

    def _read_conditional(self, splice: bool) -> Any:
        body = self._next_form()
        if not isinstance(body, SList) or len(body) % 2:
            raise ValueError("Reader conditional body must be a list of feature/form pairs")
        branches = dict(zip(body[::2], body[1::2]))
        for feature in _FEATURES:
            if feature in branches:
                chosen = branches[feature]
                if splice:
                    if not isinstance(chosen, (Vector, SList)):
                        raise ValueError("Splicing reader conditional needs a sequential form")
                    return _Splice(list(chosen))
                return chosen
        return _NOTHING


def _to_map(items: list) -> dict:
    if len(items) % 2:
        raise ValueError("Map literal must contain an even number of forms")
    try:
        return dict(zip(items[::2], items[1::2]))
    except TypeError as e:
        raise ValueError(f"Unhashable map key: {e}")


def read_forms(text: str) -> Iterator[Any]:
    """Iterate over the top-level forms of ``text``."""
    return iter(FormReader(text))


def read_edn_file(path: Path) -> Any:
    """Read the first form of an EDN file, or None if the file is empty."""
    return next(read_forms(path.read_text(encoding="utf-8")), None)


def is_ns_form(form: Any) -> bool:
    return (
        isinstance(form, SList)
        and len(form) >= 2
        and isinstance(form[0], Symbol)
        and form[0] == "ns"
        and isinstance(form[1], Symbol)
    )


def read_ns_form(text: str) -> Optional[SList]:
    """Return the first ``(ns ...)`` form of a source text, if any."""
    for form in read_forms(text):
        if is_ns_form(form):
            return form
    return None


def _join(prefix: Optional[str], name: str) -> str:
    return f"{prefix}.{name}" if prefix else str(name)


def _libspec_names(spec: Any, prefix: Optional[str] = None) -> Iterator[str]:
    """Expand a libspec or prefix list into full namespace names.

    ``foo.bar`` and ``[foo.bar :as b]`` name one namespace;
    ``[foo [bar :as b] baz]`` is a prefix list naming foo.bar and foo.baz.
    """
    if isinstance(spec, Symbol):
        yield _join(prefix, spec)
    elif isinstance(spec, (Vector, SList)) and spec and isinstance(spec[0], Symbol):
        head = spec[0]
        if len(spec) == 1 or isinstance(spec[1], Keyword):
            yield _join(prefix, head)
        else:
            for inner in spec[1:]:
                yield from _libspec_names(inner, _join(prefix, head))


def deps_from_ns_form(form: SList) -> frozenset[str]:
    """Namespaces referenced by the dependency clauses of an ns form."""
    deps: set[str] = set()
    for clause in form[2:]:
        if (
            isinstance(clause, SList)
            and clause
            and isinstance(clause[0], Keyword)
            and clause[0] in _DEPENDENCY_CLAUSES
        ):
            for spec in clause[1:]:
                deps.update(_libspec_names(spec))
    return frozenset(deps)


class ClojureReader(DeclarationReader):
    """Reads ns declarations from Clojure and cljc source."""

    suffixes = (".clj", ".cljc")

    def parse(self, content: str, path: Path, root: Optional[Path]) -> Optional[Declaration]:
        form = read_ns_form(content)
        if form is None:
            return None
        name = str(form[1])
        requires = deps_from_ns_form(form) - {name}
        return Declaration(name=name, requires=requires)

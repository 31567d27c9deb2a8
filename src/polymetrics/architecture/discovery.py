"""Unit discovery and classification.

Walks the source tree bottom-up and classifies every source file by its
path:

1. The first marker directory (components/, bases/, interfaces/,
   packages/) with a child directory decides the kind; the child names the
   unit and the path through the child is the unit's source root.
2. Any other file belongs to a plain-directory unit named after its parent
   directory, dotted and hyphenated
   (src/restaurant/menu_items/x.clj -> restaurant.menu-items).
3. Files under hidden directories are ignored, and so are files under
   build-output directories that sit outside markers and source roots.

Files that classify to the same (name, kind) are merged into one unit.
"""

import os
from collections import Counter, defaultdict
from pathlib import Path, PurePosixPath
from typing import Iterable, NamedTuple, Optional, Sequence

from ..conventions import SOURCE_ROOT_DIRECTORIES
from ..exceptions import InvalidPathError, NamingCollisionError
from ..logging_config import get_logger
from ..scanning import source_suffixes
from .models import MARKER_KINDS, Unit, UnitKind

logger = get_logger(__name__)

DEFAULT_IGNORED_DIRS = frozenset({"target", "build", "dist", "node_modules", "venv", "__pycache__"})


class Classification(NamedTuple):
    kind: UnitKind
    name: str
    source_root: str


def path_to_dotted_name(parts: Iterable[str]) -> str:
    """Convert directory parts to a dotted, hyphenated unit name.

    >>> path_to_dotted_name(["restaurant", "menu_items", "mutations"])
    'restaurant.menu-items.mutations'
    """
    return ".".join(part.replace("_", "-") for part in parts)


def _normalize(segment: str) -> str:
    return segment.replace("-", "_")


def _namespace_dirs(top_namespace: Optional[str]) -> tuple[str, ...]:
    if not top_namespace:
        return ()
    return tuple(_normalize(seg) for seg in top_namespace.split(".") if seg)


def _starts_with(parts: tuple[str, ...], prefix: tuple[str, ...]) -> bool:
    return bool(prefix) and tuple(_normalize(p) for p in parts[: len(prefix)]) == prefix


def _is_ignored_dir(name: str, parents: Sequence[str], ignored_dirs: Iterable[str]) -> bool:
    """Hidden directories are skipped everywhere; build-output names only
    outside unit markers and source roots, where they name units or packages.
    """
    if name.startswith("."):
        return True
    if name not in ignored_dirs:
        return False
    return not any(p in MARKER_KINDS or p in SOURCE_ROOT_DIRECTORIES for p in parents)


def classify_path(
    relative_path: str,
    top_namespace: Optional[str] = None,
    ignored_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS,
) -> Optional[Classification]:
    """Classify a root-relative file path into a unit.

    The top namespace, when given, is skipped when it sits directly below a
    marker (components/myapp/user/... -> unit "user") and stripped from the
    front of plain-directory names.

    Returns None for paths that should be ignored.
    """
    parts = PurePosixPath(relative_path).parts
    dir_parts = parts[:-1]
    if not dir_parts:
        return None  # files at the workspace root belong to no unit

    ignored = frozenset(ignored_dirs)
    if any(_is_ignored_dir(part, dir_parts[:i], ignored) for i, part in enumerate(dir_parts)):
        return None

    ns_dirs = _namespace_dirs(top_namespace)

    for idx, part in enumerate(dir_parts):
        kind = MARKER_KINDS.get(part)
        # Must have at least one more directory after the marker for the name
        if kind is None or idx + 1 >= len(dir_parts):
            continue
        name_idx = idx + 1
        below = dir_parts[name_idx:]
        if _starts_with(below, ns_dirs) and len(below) > len(ns_dirs):
            name_idx += len(ns_dirs)
        return Classification(
            kind=kind,
            name=dir_parts[name_idx],
            source_root="/".join(dir_parts[: name_idx + 1]),
        )

    # Plain directory: first part is the source root (src, src-dev, ...)
    src_root = dir_parts[0]
    ns_parts = dir_parts[1:]
    if _starts_with(ns_parts, ns_dirs) and len(ns_parts) > len(ns_dirs):
        ns_parts = ns_parts[len(ns_dirs) :]

    if not ns_parts:
        return Classification(UnitKind.DIRECTORY, f"top-level.{src_root}", src_root)
    return Classification(UnitKind.DIRECTORY, path_to_dotted_name(ns_parts), "/".join(dir_parts))


def find_source_files(
    root: Path,
    suffixes: Optional[Iterable[str]] = None,
    ignored_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS,
    follow_symlinks: bool = False,
) -> list[Path]:
    """Recursively find source files under ``root``, in sorted order.

    Hidden directories, and ignored directories outside markers and source
    roots, are pruned during the walk.
    """
    wanted = frozenset(suffixes) if suffixes is not None else source_suffixes()
    ignored = frozenset(ignored_dirs)
    found: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root, followlinks=follow_symlinks):
        parents = Path(dirpath).relative_to(root).parts
        dirnames[:] = sorted(d for d in dirnames if not _is_ignored_dir(d, parents, ignored))
        for filename in filenames:
            if Path(filename).suffix in wanted:
                found.append(Path(dirpath) / filename)

    return sorted(found)


def _check_filename_clash(name: str, entries: list[tuple[str, str, str]]) -> None:
    """Fail when two source roots contribute the same filename to one unit."""
    filenames = Counter(filename for _, filename, _ in entries)
    dupes = [filename for filename, count in filenames.items() if count > 1]
    if dupes:
        files = [path for path, filename, _ in entries if filename in dupes]
        raise NamingCollisionError(unit=name, duplicates=dupes, files=files)


def discover_units(
    root: Path,
    top_namespace: Optional[str] = None,
    ignored_dirs: Iterable[str] = DEFAULT_IGNORED_DIRS,
    suffixes: Optional[Iterable[str]] = None,
    follow_symlinks: bool = False,
) -> list[Unit]:
    """Walk the source tree and discover all units with their kinds.

    Returns units sorted by name. Units of the same name and kind found
    under several source roots are merged.

    Raises:
        InvalidPathError: If ``root`` is not a directory
        NamingCollisionError: If a plain-directory unit receives the same
            filename from more than one source root
    """
    root = Path(root)
    if not root.is_dir():
        raise InvalidPathError(root, "not a directory")

    ignored = frozenset(ignored_dirs)
    groups: dict[tuple[str, UnitKind], list[tuple[str, str, str]]] = defaultdict(list)

    for path in find_source_files(root, suffixes, ignored, follow_symlinks):
        rel_path = path.relative_to(root).as_posix()
        classification = classify_path(rel_path, top_namespace, ignored)
        if classification is None:
            logger.debug(f"Ignored {rel_path}: no unit")
            continue
        groups[(classification.name, classification.kind)].append(
            (rel_path, path.name, classification.source_root)
        )

    kind_order = list(UnitKind)
    taken: set[str] = set()
    units: list[Unit] = []

    # Marker kinds claim their names before plain directories
    for (name, kind), entries in sorted(
        groups.items(), key=lambda item: (kind_order.index(item[0][1]), item[0][0])
    ):
        source_roots = sorted({src_root for _, _, src_root in entries})
        # Marker units live under one source root, so only plain directories can clash
        if kind is UnitKind.DIRECTORY and len(source_roots) > 1:
            _check_filename_clash(name, entries)

        unit_name = name
        if name in taken:
            unit_name = f"{kind.value}:{name}"
            logger.warning(
                f"Unit name '{name}' is used by more than one kind; "
                f"reporting the {kind.value} as '{unit_name}'"
            )
        taken.add(unit_name)

        units.append(
            Unit(
                name=unit_name,
                kind=kind,
                source_files=tuple(sorted(path for path, _, _ in entries)),
                source_roots=tuple(source_roots),
            )
        )

    units.sort(key=lambda u: u.name)
    logger.debug(f"Discovered {len(units)} units under {root}")
    return units

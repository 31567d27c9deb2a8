"""Namespace-to-unit resolution.

Reads every unit file's declaration once and indexes the declared module
names by owning unit. Two units declaring the same module name is resolved
first-wins: units are indexed in name order and files in path order, so the
outcome is deterministic. Every conflict is logged and kept on the index.
The losing file still belongs to its own unit: its requires count toward
that unit's dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional

from ..conventions import INTERFACE_SEGMENT, is_interface_name
from ..logging_config import get_logger
from ..scanning import Declaration, read_declaration
from .models import ModuleInfo, Unit, is_abstract_module

logger = get_logger(__name__)

DeclarationFn = Callable[[Path, Optional[Path]], Optional[Declaration]]


@dataclass(frozen=True)
class ModuleConflict:
    """A module name declared by more than one unit."""

    module: str
    kept_unit: str
    ignored_unit: str
    ignored_path: str


@dataclass
class ModuleIndex:
    """Mapping from declared module names to the units that own them."""

    modules: dict[str, ModuleInfo] = field(default_factory=dict)
    by_unit: dict[str, list[ModuleInfo]] = field(default_factory=dict)
    unit_names: frozenset[str] = frozenset()
    top_namespace: Optional[str] = None
    conflicts: list[ModuleConflict] = field(default_factory=list)

    def unit_of(self, module_name: str) -> Optional[str]:
        """Owning unit of a declared module, None if not declared here."""
        info = self.modules.get(module_name)
        return info.unit if info else None

    def module(self, module_name: str) -> Optional[ModuleInfo]:
        return self.modules.get(module_name)

    def modules_of(self, unit_name: str) -> list[ModuleInfo]:
        """Modules declared by a unit's files (empty for unknown units)."""
        return self.by_unit.get(unit_name, [])

    def resolve(self, reference: str) -> Optional[str]:
        """Resolve a raw module reference to a unit name.

        Direct lookup first; otherwise an interface reference is attributed
        to the unit named by the segment before ``interface``, provided such
        a unit exists. External references resolve to None.
        """
        owner = self.unit_of(reference)
        if owner is not None:
            return owner
        inferred = interface_unit_name(reference, self.top_namespace)
        if inferred is not None and inferred in self.unit_names:
            return inferred
        return None


def interface_unit_name(module_name: str, top_namespace: Optional[str] = None) -> Optional[str]:
    """Extract the unit name from an interface module name.

    >>> interface_unit_name("myapp.user.interface")
    'user'
    >>> interface_unit_name("polylith.clj.core.util.interface.str", "polylith.clj.core")
    'util'
    """
    if not is_interface_name(module_name):
        return None
    prefix = f"{top_namespace}." if top_namespace else ""
    if prefix and module_name.startswith(prefix):
        module_name = module_name[len(prefix) :]
    parts = module_name.split(".")
    idx = parts.index(INTERFACE_SEGMENT)
    if idx == 0:
        return None
    return parts[idx - 1]


def build_module_index(
    root: Path,
    units: Iterable[Unit],
    top_namespace: Optional[str] = None,
    reader: DeclarationFn = read_declaration,
) -> ModuleIndex:
    """Read all unit files and map each declared module to its unit.

    Files without a declaration (or unreadable ones) are skipped.
    """
    root = Path(root)
    index = ModuleIndex(top_namespace=top_namespace)
    names: set[str] = set()

    for unit in sorted(units, key=lambda u: u.name):
        names.add(unit.name)
        unit_modules = index.by_unit.setdefault(unit.name, [])
        for rel_path in sorted(unit.source_files):
            decl = reader(root / rel_path, root)
            if decl is None:
                logger.debug(f"No module declaration in {rel_path}")
                continue

            existing = index.modules.get(decl.name)
            if existing is not None and existing.unit != unit.name:
                logger.warning(
                    f"Module '{decl.name}' declared by both '{existing.unit}' "
                    f"and '{unit.name}' ({rel_path}); keeping '{existing.unit}'"
                )
                index.conflicts.append(
                    ModuleConflict(
                        module=decl.name,
                        kept_unit=existing.unit,
                        ignored_unit=unit.name,
                        ignored_path=rel_path,
                    )
                )

            info = ModuleInfo(
                name=decl.name,
                unit=unit.name,
                path=rel_path,
                requires=decl.requires,
                is_abstract=is_abstract_module(decl.name, unit.kind, decl.is_package),
            )
            # The first owner keeps the name; every unit keeps its own requires
            if existing is None:
                index.modules[decl.name] = info
            unit_modules.append(info)

    index.unit_names = frozenset(names)
    logger.debug(f"Indexed {len(index.modules)} modules across {len(names)} units")
    return index

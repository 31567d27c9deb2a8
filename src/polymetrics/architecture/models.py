"""Architecture models: units, their modules, and per-unit metrics.

A unit is the atomic analyzed entity. Its kind comes from the marker
directory it lives under (components/, bases/, interfaces/, packages/) or,
for everything else, is a plain directory.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional

from ..conventions import (
    BASES_DIR,
    COMPONENTS_DIR,
    INTERFACES_DIR,
    PACKAGES_DIR,
    is_interface_name,
)


class UnitKind(Enum):
    """Closed set of unit kinds."""

    COMPONENT = "component"
    BASE = "base"  # entry-point container: wires components, never depended on
    INTERFACE_GROUP = "interface-group"  # every module is interface surface
    PACKAGE = "package"
    DIRECTORY = "directory"  # plain source directory, no interface detection

    @property
    def detects_interfaces(self) -> bool:
        """Whether abstractness can be measured for this kind."""
        return self is not UnitKind.DIRECTORY

    @property
    def is_external_consumer(self) -> bool:
        """Pure consumers sit outside the system: they add no internal coupling."""
        return self is UnitKind.BASE

    @property
    def has_consumer_distinction(self) -> bool:
        """Entry-point status needs confirmation from an external consumer."""
        return self is UnitKind.COMPONENT

    @property
    def is_reportable(self) -> bool:
        return self in (UnitKind.COMPONENT, UnitKind.PACKAGE)


MARKER_KINDS: dict[str, UnitKind] = {
    COMPONENTS_DIR: UnitKind.COMPONENT,
    BASES_DIR: UnitKind.BASE,
    INTERFACES_DIR: UnitKind.INTERFACE_GROUP,
    PACKAGES_DIR: UnitKind.PACKAGE,
}


def is_abstract_module(module_name: str, kind: UnitKind, is_package: bool = False) -> bool:
    """Whether a module counts as interface surface for its unit's kind."""
    if kind is UnitKind.INTERFACE_GROUP:
        return True
    if kind is UnitKind.DIRECTORY:
        return False
    return is_package or is_interface_name(module_name)


@dataclass(frozen=True)
class Unit:
    """A named group of source files (a component, base, package, ...)."""

    name: str
    kind: UnitKind
    source_files: tuple[str, ...] = ()  # relative to the workspace root, sorted
    source_roots: tuple[str, ...] = ()  # directories contributing files, sorted

    @property
    def file_count(self) -> int:
        return len(self.source_files)


@dataclass(frozen=True)
class ModuleInfo:
    """A declared module inside one of a unit's files."""

    name: str
    unit: str  # owning unit name
    path: str  # file path relative to the workspace root
    requires: frozenset[str] = field(default_factory=frozenset)
    is_abstract: bool = False


@dataclass(frozen=True)
class UnitMetrics:
    """Coupling and abstraction metrics for one unit.

    ``abstractness`` and ``distance`` are None where they do not apply:
    entry points and kinds without interface detection.
    """

    name: str
    kind: UnitKind
    afferent_coupling: int = 0  # Ca: internal units depending on this one
    efferent_coupling: int = 0  # Ce: units this one depends on
    instability: float = 0.0  # Ce / (Ca + Ce), 0.0 when isolated
    abstractness: Optional[float] = None
    distance: Optional[float] = None  # |A + I - 1|
    is_entry_point: bool = False

    # Externally visible modules behind the abstractness ratio
    interface_modules: int = 0
    leaky_modules: int = 0

    @property
    def has_distance(self) -> bool:
        return self.distance is not None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class HealthSummary:
    """Aggregate health over a list of unit metrics."""

    unit_count: int = 0
    measured_count: int = 0  # units with a defined distance
    excluded_count: int = 0  # entry points and kinds without interface detection
    mean_distance: float = 0.0
    max_distance: float = 0.0
    min_distance: float = 0.0
    cycle_count: int = 0
    healthy: bool = True

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

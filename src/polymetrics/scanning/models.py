"""Module declarations extracted from source files."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Declaration:
    """What a source file declares: its module name and what it references.

    ``requires`` holds raw referenced module names; resolving them to units
    (and discarding external libraries) is the resolver's job.
    """

    name: str
    requires: frozenset[str] = field(default_factory=frozenset)
    is_package: bool = False  # Python __init__.py: the package's public surface

"""Directory and naming conventions shared by discovery and the readers."""

# Marker directory names, in no particular order. The child directory of a
# marker names the unit.
COMPONENTS_DIR = "components"
BASES_DIR = "bases"
INTERFACES_DIR = "interfaces"
PACKAGES_DIR = "packages"

MARKER_DIRECTORIES = frozenset({COMPONENTS_DIR, BASES_DIR, INTERFACES_DIR, PACKAGES_DIR})

# Directories that start a module path (src/myapp/user/core.py -> myapp.user.core)
SOURCE_ROOT_DIRECTORIES = frozenset({"src", "test", "tests"})

INTERFACE_SEGMENT = "interface"


def is_interface_name(module_name: str) -> bool:
    """True if the dotted name has an ``interface`` segment after the first.

    >>> is_interface_name("myapp.user.interface")
    True
    >>> is_interface_name("myapp.user.interface.admin")
    True
    >>> is_interface_name("myapp.user.interfaces")
    False
    """
    return module_name.endswith(f".{INTERFACE_SEGMENT}") or f".{INTERFACE_SEGMENT}." in module_name

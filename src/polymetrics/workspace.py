"""Workspace configuration: the top namespace shared by every unit.

Looked up in order:
    1. MetricsConfig.top_namespace
    2. workspace.toml ([tool.polylith] namespace, or a top-level namespace key)
    3. workspace.edn (:top-namespace)

Missing or malformed files never stop an analysis; the namespace is then
treated as empty.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Optional

from .config import MetricsConfig
from .logging_config import get_logger
from .scanning import read_edn_file

logger = get_logger(__name__)

WORKSPACE_TOML = "workspace.toml"
WORKSPACE_EDN = "workspace.edn"


def _namespace_from_toml(path: Path) -> Optional[str]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring malformed {path.name}: {e}")
        return None

    polylith = data.get("tool", {}).get("polylith", {})
    namespace = polylith.get("namespace") if isinstance(polylith, dict) else None
    if namespace is None:
        namespace = data.get("namespace")
    return _as_namespace(namespace, path)


def _namespace_from_edn(path: Path) -> Optional[str]:
    try:
        data = read_edn_file(path)
    except (OSError, UnicodeDecodeError, ValueError, RecursionError) as e:
        logger.warning(f"Ignoring malformed {path.name}: {e}")
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring {path.name}: expected a map at top level")
        return None
    return _as_namespace(data.get("top-namespace"), path)


def _as_namespace(value: Any, path: Path) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        logger.warning(f"Ignoring non-string namespace in {path.name}: {value!r}")
        return None
    value = value.strip()
    return value or None


def read_workspace_namespace(root: Path) -> Optional[str]:
    """Top namespace declared by the workspace files under ``root``, if any."""
    root = Path(root)
    toml_path = root / WORKSPACE_TOML
    if toml_path.is_file():
        namespace = _namespace_from_toml(toml_path)
        if namespace:
            return namespace

    edn_path = root / WORKSPACE_EDN
    if edn_path.is_file():
        return _namespace_from_edn(edn_path)
    return None


def resolve_top_namespace(root: Path, config: MetricsConfig) -> Optional[str]:
    """Configured top namespace, falling back to the workspace files."""
    if config.top_namespace:
        return config.top_namespace.strip(". ")
    namespace = read_workspace_namespace(root)
    if namespace:
        logger.debug(f"Top namespace from workspace files: {namespace}")
    return namespace

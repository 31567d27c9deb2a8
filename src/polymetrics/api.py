"""Public API for polymetrics.

This module provides the main entry point for analysis. Users should call
analyze() instead of wiring the discovery, graph and metrics stages by hand.

Example:
    >>> from polymetrics import analyze
    >>>
    >>> # Simple usage
    >>> result = analyze("/path/to/workspace")
    >>> result.health.healthy
    True
    >>>
    >>> # With customization
    >>> result = analyze("/path/to/workspace", top_namespace="myapp", report_all_units=True)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .architecture.analyzer import AnalysisResult, WorkspaceAnalyzer
from .config import MetricsConfig, load_config
from .logging_config import get_logger

logger = get_logger(__name__)


def analyze(
    root: Union[str, Path] = ".",
    config: Optional[MetricsConfig] = None,
    config_file: Optional[Path] = None,
    **overrides,
) -> AnalysisResult:
    """Analyze a workspace and return its metrics, cycles and health.

    Args:
        root: Workspace root (default: current directory)
        config: Ready-made configuration. When given, config files,
            environment variables and overrides are not consulted.
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., top_namespace="myapp")

    Returns:
        AnalysisResult with units, graph, cycles, metrics and health

    Raises:
        PolyMetricsError: If configuration is invalid, the root is not a
            directory, no units were found or a naming collision occurred
    """
    root = Path(root)
    if config is None:
        config = load_config(config_file=config_file, root=root, **overrides)
    logger.info(f"Analyzing workspace {root}")
    return WorkspaceAnalyzer(root, config).analyze()

"""Base reader interface for module declarations."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger
from .models import Declaration

logger = get_logger(__name__)


class DeclarationReader(ABC):
    """Reads the module declaration of one language's source files.

    Subclasses implement ``parse``; ``read`` wraps it so that unreadable or
    malformed files degrade to ``None`` instead of aborting the run.
    """

    suffixes: tuple[str, ...] = ()

    def read(self, path: Path, root: Optional[Path] = None) -> Optional[Declaration]:
        """Read ``path`` and return its declaration, or None if it has none."""
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Skipping unreadable file {path}: {e}")
            return None

        try:
            return self.parse(content, path, root)
        except (SyntaxError, ValueError, RecursionError) as e:
            logger.debug(f"Skipping malformed file {path}: {e}")
            return None

    @abstractmethod
    def parse(self, content: str, path: Path, root: Optional[Path]) -> Optional[Declaration]:
        """Parse file content into a declaration."""

"""Version-gated store of per-document diagnostics."""

import logging
from pathlib import Path

from .models import LineDiagnostic

logger = logging.getLogger(__name__)


class DiagnosticRegistry:
    """Current diagnostics for each open document.

    Every publish carries the document version the analysis started from.
    Results computed from an older version than the one already stored are
    dropped, so a slow run for a stale edit cannot overwrite newer results.
    """

    def __init__(self):
        self._entries: dict[Path, tuple[int, list[LineDiagnostic]]] = {}

    def publish(self, document: Path, version: int, diagnostics: list[LineDiagnostic]) -> bool:
        """Store diagnostics for a document version.

        Args:
            document: Document path
            version: Document version the diagnostics were computed from
            diagnostics: Diagnostics to store

        Returns:
            True if stored, False if a newer version is already stored
        """
        document = Path(document).resolve()
        current = self._entries.get(document)
        if current is not None and version < current[0]:
            logger.debug(f"Dropping stale diagnostics for {document}: version {version} < {current[0]}")
            return False

        self._entries[document] = (version, list(diagnostics))
        return True

    def get(self, document: Path) -> list[LineDiagnostic]:
        """Diagnostics stored for a document (empty if none)."""
        entry = self._entries.get(Path(document).resolve())
        return list(entry[1]) if entry else []

    def version_of(self, document: Path) -> int | None:
        """Version of the stored diagnostics, or None."""
        entry = self._entries.get(Path(document).resolve())
        return entry[0] if entry else None

    def clear(self, document: Path) -> None:
        """Forget a document, e.g. when it is closed."""
        self._entries.pop(Path(document).resolve(), None)

    def clear_all(self) -> None:
        self._entries.clear()

    def documents(self) -> list[Path]:
        return list(self._entries)

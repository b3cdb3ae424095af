"""Recursive import resolution for metaconfig documents."""

import logging
from pathlib import Path

from .exceptions import CyclicImportError
from .exceptions import MetaconfigFileError
from .models import Directive
from .models import Issue
from .models import IssueKind
from .models import ResolvedStream
from .models import Severity
from .parser import IMPORT_MARKER
from .parser import parse_directive
from .parser import parse_key
from .settings import MetaconfigSettings
from .utils import display_path

logger = logging.getLogger(__name__)


class ImportResolver:
    """Expands "!name" imports into a provenance-tagged directive stream.

    Imports are looked up in the configured imports directory, never relative
    to the importing file. Each resolution call owns its own import chain, so
    a resolver instance may be shared between documents.

    Args:
        settings: Project settings (imports directory, extension, comment policy)
    """

    def __init__(self, settings: MetaconfigSettings):
        self.settings = settings

    def locate_import_target(self, name: str) -> Path | None:
        """Find the file an import names.

        Tries <imports_dir>/<name>.<extension>, then <imports_dir>/<name>.

        Args:
            name: Import target, without the leading "!"

        Returns:
            Canonical path of the first existing candidate, or None
        """
        name = name.strip()
        if not name:
            return None

        imports_dir = self.settings.imports_dir
        for candidate in (imports_dir / f"{name}.{self.settings.extension}", imports_dir / name):
            if candidate.is_file():
                return candidate.resolve()
        return None

    def resolve(self, path: Path, text: str | None = None) -> ResolvedStream:
        """Resolve a document and everything it imports.

        Args:
            path: Document to resolve (depth 0)
            text: Current contents of the document, when they differ from disk

        Returns:
            Directives in import-expanded order plus import problems

        Raises:
            MetaconfigFileError: If the document itself cannot be read
        """
        root = Path(path).resolve()
        stream = ResolvedStream(root=root)
        lines = self._read_lines(root) if text is None else text.split("\n")

        logger.debug(f"Resolving {root}")
        stream.directives = self._expand(root, lines, 0, [], stream)
        logger.debug(f"Resolved {root}: {len(stream.directives)} directives, {len(stream.issues)} import issues")
        return stream

    def _expand(
        self,
        path: Path,
        lines: list[str],
        depth: int,
        chain: list[Path],
        stream: ResolvedStream,
    ) -> list[Directive]:
        """Expand one file's lines, recursing into its imports."""
        if path in chain:
            raise CyclicImportError(chain[chain.index(path) :] + [path])

        chain.append(path)
        directives: list[Directive] = []
        try:
            for line_number, raw in enumerate(lines, start=1):
                text = raw.strip()
                if not text:
                    continue

                if not text.startswith(IMPORT_MARKER):
                    directives.append(
                        parse_directive(text, path, line_number, depth, self.settings.comment_policy)
                    )
                    continue

                name = text[len(IMPORT_MARKER) :].strip()
                target = self.locate_import_target(name)
                if target is None:
                    message = f"Imported file '{name}' not found in {self._imports_dir_label()}."
                    self._report_import(stream, IssueKind.MISSING_IMPORT, path, line_number, text, message)
                    continue

                try:
                    directives.extend(self._expand(target, self._read_lines(target), depth + 1, chain, stream))
                except CyclicImportError as e:
                    message = self._cycle_message(e)
                    self._report_import(stream, IssueKind.CYCLIC_IMPORT, path, line_number, text, message)
                except MetaconfigFileError as e:
                    self._report_import(stream, IssueKind.MISSING_IMPORT, path, line_number, text, str(e))
        finally:
            chain.pop()

        return directives

    def _report_import(
        self,
        stream: ResolvedStream,
        kind: IssueKind,
        path: Path,
        line_number: int,
        text: str,
        message: str,
    ) -> None:
        severity = Severity.ERROR if kind is IssueKind.CYCLIC_IMPORT else Severity.WARNING
        logger.debug(f"{display_path(path, self.settings.root)}:{line_number}: {message}")
        stream.issues.append(
            Issue(kind=kind, severity=severity, message=message, file=path, line=line_number, key=parse_key(text))
        )

    def _cycle_message(self, error: CyclicImportError) -> str:
        names = " -> ".join(display_path(p, self.settings.root) for p in error.chain)
        return f"Cyclic import: {names}."

    def _imports_dir_label(self) -> str:
        return display_path(self.settings.imports_dir, self.settings.root)

    def _read_lines(self, path: Path) -> list[str]:
        """Read a file as lines split on newlines.

        Raises:
            MetaconfigFileError: If the file cannot be read
        """
        try:
            return path.read_text(encoding="utf-8").split("\n")
        except (OSError, UnicodeDecodeError) as e:
            raise MetaconfigFileError(f"Failed to read metaconfig file {path}: {e}") from e


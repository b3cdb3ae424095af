"""Entry point tying resolution, analysis and diagnostics together."""

import logging
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from .analyzer import analyze_stream
from .analyzer import precedence_order
from .diagnostics import map_diagnostics
from .exceptions import MetaconfigFileError
from .flatten import effective_config
from .models import Directive
from .models import Issue
from .models import LineDiagnostic
from .models import ResolvedStream
from .registry import DiagnosticRegistry
from .resolver import ImportResolver
from .settings import MetaconfigSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentReport:
    """Diagnostics for one version of one document."""

    document: Path
    version: int
    diagnostics: list[LineDiagnostic] = field(default_factory=list)


class MetaconfigChecker:
    """Resolves and checks metaconfig documents of one project.

    Every call recomputes from the files on disk; nothing is cached between
    calls, so results always reflect the current file system.

    Args:
        settings: Project settings injected by the caller

    Example:
        ```python
        from pathlib import Path
        from metaconfig_check import MetaconfigChecker, load_settings

        checker = MetaconfigChecker(load_settings(Path(".")))
        for issue in checker.analyze(Path("target/zermatt-pro/metaconfig")):
            print(issue.file, issue.line, issue.message)
        ```
    """

    def __init__(self, settings: MetaconfigSettings):
        self.settings = settings
        self.resolver = ImportResolver(settings)

    # ===== Resolution =====

    def resolve_stream(self, path: Path, text: str | None = None) -> ResolvedStream:
        """Resolve a document, keeping import issues alongside the directives."""
        return self.resolver.resolve(path, text)

    def resolve(self, path: Path, text: str | None = None) -> list[Directive]:
        """Directives of a document after import expansion, in precedence order."""
        return precedence_order(self.resolver.resolve(path, text).directives)

    def locate_import_target(self, name: str) -> Path | None:
        """File an "!name" import refers to, or None."""
        return self.resolver.locate_import_target(name)

    def effective_config(self, path: Path, text: str | None = None) -> dict[str, str]:
        """Flattened key/value configuration a document produces."""
        return effective_config(self.resolve(path, text))

    # ===== Analysis =====

    def analyze(self, path: Path, text: str | None = None) -> list[Issue]:
        """All issues of a document and its imports."""
        stream = self.resolver.resolve(path, text)
        issues = analyze_stream(stream, self.settings.root)
        logger.info(f"Checked {stream.root}: {len(issues)} issue(s)")
        return issues

    def check_document(self, path: Path, version: int, text: str | None = None) -> DocumentReport:
        """Diagnostics for the lines of an open document.

        Args:
            path: Document path
            version: Editor version of the document when the check started
            text: Current document contents (read from disk when None)

        Returns:
            Report tagged with the version it was computed from

        Raises:
            MetaconfigFileError: If the document cannot be read
        """
        document = Path(path).resolve()
        if text is None:
            try:
                text = document.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise MetaconfigFileError(f"Failed to read metaconfig file {document}: {e}") from e

        issues = self.analyze(document, text)
        diagnostics = map_diagnostics(issues, document, text, self.settings.comment_policy)
        return DocumentReport(document=document, version=version, diagnostics=diagnostics)

    def publish(self, report: DocumentReport, registry: DiagnosticRegistry) -> bool:
        """Store a report unless the registry already holds a newer version."""
        return registry.publish(report.document, report.version, report.diagnostics)

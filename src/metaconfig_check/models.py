"""Data models for metaconfig-check."""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from pathlib import Path


class DirectiveKind(Enum):
    """Classification of one non-blank metaconfig line."""

    IMPORT = "import"
    EXCLUSION = "exclusion"
    INCLUSION = "inclusion"
    COMMENT = "comment"


class Severity(Enum):
    """Issue severity, most severe first."""

    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class IssueKind(Enum):
    """Categories of problems found in a metaconfig hierarchy."""

    REDEFINED_WITHOUT_EXCLUSION = "redefined-without-exclusion"
    UNNECESSARY_REDEFINITION = "unnecessary-redefinition"
    DUPLICATE_LINE = "duplicate-line"
    MISSING_IMPORT = "missing-import"
    CYCLIC_IMPORT = "cyclic-import"


@dataclass(frozen=True)
class Directive:
    """One meaningful configuration line after import expansion.

    Attributes:
        source_file: File the line is physically written in
        source_line: 1-based line number within source_file
        depth: Import hops between the root document and source_file
        kind: EXCLUSION, INCLUSION or COMMENT (imports never become directives)
        key: Configuration identifier
        value: Text after the first "=" (empty when there is none)
        text: The trimmed raw line
    """

    source_file: Path
    source_line: int
    depth: int
    kind: DirectiveKind
    key: str
    value: str
    text: str


@dataclass(frozen=True)
class Issue:
    """A problem anchored to a (file, line) location.

    Import problems (missing or cyclic) have no directive; they are anchored
    to the import line and keyed by the imported name.
    """

    kind: IssueKind
    severity: Severity
    message: str
    file: Path
    line: int
    key: str
    directive: Directive | None = None


@dataclass
class ResolvedStream:
    """Directives of a root document after recursive import expansion.

    Attributes:
        root: Canonical path of the resolved document
        directives: Directives in import-expanded file order
        issues: Problems met while expanding imports
    """

    root: Path
    directives: list[Directive] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)


@dataclass(frozen=True)
class LineDiagnostic:
    """Combined issues for one physical line of an open document."""

    line: int
    start_column: int
    end_column: int
    severity: Severity
    message: str
    issues: tuple[Issue, ...] = ()

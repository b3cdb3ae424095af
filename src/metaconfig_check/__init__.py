"""metaconfig-check: inheritance resolution and override checks for metaconfig files.

A metaconfig file lists one directive per line:

    !name          import <imports_dir>/name.metaconfig (or <imports_dir>/name)
    -KEY           exclude KEY inherited from an import
    KEY=value      include KEY

Imports are expanded recursively into a stream of directives tagged with the
file, line and import depth they came from. The stream is then checked so that
a key inherited from a base file is only changed by a file that excludes it
first.

Public API:
    MetaconfigChecker: Resolve, analyze and flatten documents
    ImportResolver: Recursive import expansion
    MetaconfigSettings, load_settings, CommentPolicy: Project settings
    Directive, DirectiveKind, Issue, IssueKind, Severity: Data model
    DiagnosticRegistry: Version-gated per-document diagnostics
    MetaconfigError, MetaconfigFileError, CyclicImportError: Exception types

Example:
    ```python
    from pathlib import Path
    from metaconfig_check import MetaconfigChecker, MetaconfigSettings

    settings = MetaconfigSettings.for_root(Path("."))
    checker = MetaconfigChecker(settings)

    for issue in checker.analyze(Path("target/zermatt-pro/metaconfig")):
        print(f"{issue.file}:{issue.line}: {issue.message}")

    config = checker.effective_config(Path("target/zermatt-pro/metaconfig"))
    ```
"""

from .analyzer import analyze_stream
from .analyzer import find_duplicate_lines
from .analyzer import find_override_issues
from .analyzer import precedence_order
from .checker import DocumentReport
from .checker import MetaconfigChecker
from .diagnostics import map_diagnostics
from .exceptions import CyclicImportError
from .exceptions import MetaconfigError
from .exceptions import MetaconfigFileError
from .flatten import effective_config
from .flatten import render_config
from .models import Directive
from .models import DirectiveKind
from .models import Issue
from .models import IssueKind
from .models import LineDiagnostic
from .models import ResolvedStream
from .models import Severity
from .parser import classify_line
from .parser import parse_directive
from .parser import parse_key
from .registry import DiagnosticRegistry
from .resolver import ImportResolver
from .settings import CommentPolicy
from .settings import MetaconfigSettings
from .settings import load_settings

__version__ = "0.1.0"

__all__ = [
    "MetaconfigChecker",
    "DocumentReport",
    "ImportResolver",
    "MetaconfigSettings",
    "CommentPolicy",
    "load_settings",
    "Directive",
    "DirectiveKind",
    "Issue",
    "IssueKind",
    "LineDiagnostic",
    "ResolvedStream",
    "Severity",
    "DiagnosticRegistry",
    "classify_line",
    "parse_directive",
    "parse_key",
    "precedence_order",
    "find_override_issues",
    "find_duplicate_lines",
    "analyze_stream",
    "map_diagnostics",
    "effective_config",
    "render_config",
    "MetaconfigError",
    "MetaconfigFileError",
    "CyclicImportError",
]

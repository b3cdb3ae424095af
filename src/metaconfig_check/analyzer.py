"""Override and duplicate analysis of a resolved directive stream."""

import logging
from collections import defaultdict
from collections.abc import Callable
from collections.abc import Iterable
from pathlib import Path

from .models import Directive
from .models import DirectiveKind
from .models import Issue
from .models import IssueKind
from .models import ResolvedStream
from .models import Severity
from .utils import location

logger = logging.getLogger(__name__)

_ANALYZED_KINDS = (DirectiveKind.INCLUSION, DirectiveKind.EXCLUSION)


def precedence_order(directives: Iterable[Directive]) -> list[Directive]:
    """Order directives base-most first.

    Deeper imports (more generic ancestors) come before shallower, more
    specific files. Within a depth, lines are ordered by line number, then
    by file path so that equal (depth, line) pairs sort deterministically.

    A file reached through more than one import path (a diamond) is expanded
    once per path; only the first, deepest occurrence of each physical line
    is kept.
    """
    ordered = sorted(directives, key=lambda d: (-d.depth, d.source_line, str(d.source_file)))

    seen: set[tuple[Path, int]] = set()
    unique: list[Directive] = []
    for directive in ordered:
        line = (directive.source_file, directive.source_line)
        if line not in seen:
            seen.add(line)
            unique.append(directive)
    return unique


def find_override_issues(ordered: list[Directive], root: Path) -> list[Issue]:
    """Check that inherited keys are only changed after an explicit exclusion.

    Walks the precedence-ordered stream once, keeping per-key history.
    Changing a key an ancestor already included requires the overriding
    file to exclude it first; re-including the excluded value is flagged as
    unnecessary.

    Args:
        ordered: Directives in precedence order
        root: Project root, for message paths

    Returns:
        Issues in stream order
    """
    issues: list[Issue] = []
    history: dict[str, list[Directive]] = defaultdict(list)

    for directive in ordered:
        if directive.kind not in _ANALYZED_KINDS:
            continue

        entries = history[directive.key]
        last_inclusion = _last_index(entries, lambda e: e.kind is DirectiveKind.INCLUSION)

        if directive.kind is DirectiveKind.INCLUSION and last_inclusion is not None:
            previous = entries[last_inclusion]
            same_file_exclusion = _last_index(
                entries,
                lambda e: e.kind is DirectiveKind.EXCLUSION and e.source_file == directive.source_file,
            )

            if same_file_exclusion is None:
                issues.append(_redefined_without_exclusion(previous, directive, root))
            elif previous.value == directive.value and same_file_exclusion > last_inclusion:
                issues.append(_unnecessary_redefinition(directive, root))

        entries.append(directive)

    logger.debug(f"Override analysis: {len(ordered)} directives, {len(issues)} issues")
    return issues


def find_duplicate_lines(directives: Iterable[Directive], root: Path) -> list[Issue]:
    """Flag every occurrence of a line that appears more than once.

    Comparison is on the trimmed line text only, independent of key and
    value structure.
    """
    occurrences: dict[str, list[Directive]] = defaultdict(list)
    for directive in directives:
        if directive.kind in _ANALYZED_KINDS:
            occurrences[directive.text].append(directive)

    issues: list[Issue] = []
    for text, found in occurrences.items():
        if len(found) < 2:
            continue
        for directive in found:
            others = ", ".join(location(o.source_file, o.source_line, root) for o in found if o is not directive)
            issues.append(
                Issue(
                    kind=IssueKind.DUPLICATE_LINE,
                    severity=Severity.ERROR,
                    message=f"Duplicate line '{text}'. Also on {others}.",
                    file=directive.source_file,
                    line=directive.source_line,
                    key=directive.key,
                    directive=directive,
                )
            )
    return issues


def analyze_stream(stream: ResolvedStream, root: Path) -> list[Issue]:
    """All issues for a resolved document.

    Returns:
        Import issues, then override issues, then duplicate-line issues
    """
    ordered = precedence_order(stream.directives)
    return [
        *stream.issues,
        *find_override_issues(ordered, root),
        *find_duplicate_lines(ordered, root),
    ]


def _last_index(entries: list[Directive], predicate: Callable[[Directive], bool]) -> int | None:
    for index in range(len(entries) - 1, -1, -1):
        if predicate(entries[index]):
            return index
    return None


def _redefined_without_exclusion(previous: Directive, current: Directive, root: Path) -> Issue:
    message = (
        "Redefined without exclusion.\n"
        f"Original value (on {location(previous.source_file, previous.source_line, root)})={previous.value}\n"
        f"Redefined value (on {location(current.source_file, current.source_line, root)})={current.value}."
    )
    return Issue(
        kind=IssueKind.REDEFINED_WITHOUT_EXCLUSION,
        severity=Severity.ERROR,
        message=message,
        file=current.source_file,
        line=current.source_line,
        key=current.key,
        directive=current,
    )


def _unnecessary_redefinition(current: Directive, root: Path) -> Issue:
    message = (
        f"Unnecessary redefinition. Value on {location(current.source_file, current.source_line, root)} "
        "is the same as the excluded value."
    )
    return Issue(
        kind=IssueKind.UNNECESSARY_REDEFINITION,
        severity=Severity.ERROR,
        message=message,
        file=current.source_file,
        line=current.source_line,
        key=current.key,
        directive=current,
    )

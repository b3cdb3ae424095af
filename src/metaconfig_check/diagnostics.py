"""Projection of issues onto the lines of one open document."""

from collections.abc import Iterable
from pathlib import Path

from .models import DirectiveKind
from .models import Issue
from .models import LineDiagnostic
from .parser import classify_line
from .parser import parse_key
from .settings import CommentPolicy


def map_diagnostics(
    issues: Iterable[Issue],
    document: Path,
    text: str,
    comment_policy: CommentPolicy = CommentPolicy.INCLUSION,
) -> list[LineDiagnostic]:
    """Attach issues anchored in a document to the lines carrying their key.

    Only issues whose anchor file is the document are kept; issues anchored
    in ancestors are not shown. Issues sharing a key are combined into one
    diagnostic per matching line, with the most severe member's severity.

    Args:
        issues: Issues from analysis
        document: Path of the document being displayed
        text: Current contents of that document
        comment_policy: Treatment of "#" lines

    Returns:
        Diagnostics ordered by line
    """
    document = Path(document).resolve()
    groups: dict[str, list[Issue]] = {}
    for issue in issues:
        if issue.file == document:
            groups.setdefault(issue.key, []).append(issue)

    if not groups:
        return []

    diagnostics: list[LineDiagnostic] = []
    for line_number, raw in enumerate(text.split("\n"), start=1):
        line = raw.strip()
        if not line or classify_line(line, comment_policy) is DirectiveKind.COMMENT:
            continue

        matched = groups.get(parse_key(line))
        if not matched:
            continue

        diagnostics.append(
            LineDiagnostic(
                line=line_number,
                start_column=0,
                end_column=len(raw.rstrip("\r")),
                severity=min(matched, key=lambda i: i.severity.value).severity,
                message="\n".join(issue.message for issue in matched),
                issues=tuple(matched),
            )
        )

    return diagnostics

"""Classification of single metaconfig lines.

Leading-character grammar of a trimmed, non-blank line:

    !name          import of another metaconfig file
    -KEY[=value]   exclusion of KEY
    anything else  inclusion (lines starting with "#" included, unless the
                   COMMENT policy is active)
"""

import re
from pathlib import Path

from .models import Directive
from .models import DirectiveKind
from .settings import CommentPolicy

IMPORT_MARKER = "!"
EXCLUSION_MARKER = "-"
COMMENT_MARKER = "#"

# At most one leading marker, then a non-greedy key up to the first "=".
_KEY_PATTERN = re.compile(r"^[#!-]?(.+?)(?:=.*)?$")


def classify_line(text: str, comment_policy: CommentPolicy = CommentPolicy.INCLUSION) -> DirectiveKind:
    """Classify a trimmed, non-blank line."""
    if text.startswith(IMPORT_MARKER):
        return DirectiveKind.IMPORT
    if text.startswith(EXCLUSION_MARKER):
        return DirectiveKind.EXCLUSION
    if text.startswith(COMMENT_MARKER) and comment_policy is CommentPolicy.COMMENT:
        return DirectiveKind.COMMENT
    return DirectiveKind.INCLUSION


def parse_key(text: str) -> str:
    """Extract the key of a line.

    One leading marker is dropped and the rest is cut at the first "=".
    A line the pattern cannot match yields the line itself.

    Examples:
        >>> parse_key("-CONFIG_BHK")
        'CONFIG_BHK'
        >>> parse_key("CONFIG_BI2C_SDA_PIN=12")
        'CONFIG_BI2C_SDA_PIN'
        >>> parse_key("!genus-zermatt-pro")
        'genus-zermatt-pro'
    """
    match = _KEY_PATTERN.match(text)
    if match is None:
        return text
    return match.group(1)


def parse_value(text: str) -> str:
    """Return everything after the first "=", or "" when there is none."""
    _, sep, value = text.partition("=")
    return value if sep else ""


def parse_directive(
    text: str,
    source_file: Path,
    source_line: int,
    depth: int,
    comment_policy: CommentPolicy = CommentPolicy.INCLUSION,
) -> Directive:
    """Build a Directive from a trimmed, non-blank, non-import line.

    Raises:
        ValueError: If the line is an import
    """
    kind = classify_line(text, comment_policy)
    if kind is DirectiveKind.IMPORT:
        raise ValueError(f"Import lines are not directives: {text!r}")

    return Directive(
        source_file=source_file,
        source_line=source_line,
        depth=depth,
        kind=kind,
        key=parse_key(text),
        value=parse_value(text),
        text=text,
    )

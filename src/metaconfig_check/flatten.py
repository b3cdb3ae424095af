"""Flattening a resolved stream into its effective configuration."""

from collections.abc import Iterable

from .models import Directive
from .models import DirectiveKind


def effective_config(ordered: Iterable[Directive]) -> dict[str, str]:
    """Apply precedence-ordered directives.

    Depth levels are applied base-most first. Within one depth level all
    exclusions are applied before any inclusion, so a key that a file both
    includes and excludes stays included whatever the line order. Inclusions
    set a key, exclusions remove it, and a key keeps the position of its most
    recent inclusion.

    Examples:
        >>> from pathlib import Path
        >>> def d(kind, key, value="", depth=0):
        ...     return Directive(Path("f"), 1, depth, kind, key, value, key)
        >>> effective_config([
        ...     d(DirectiveKind.INCLUSION, "A", "1", depth=1),
        ...     d(DirectiveKind.INCLUSION, "B", "2", depth=1),
        ...     d(DirectiveKind.EXCLUSION, "A"),
        ... ])
        {'B': '2'}
    """
    # Stable sort: precedence order is kept within each (depth, kind) group.
    staged = sorted(ordered, key=lambda d: (-d.depth, d.kind is not DirectiveKind.EXCLUSION))

    config: dict[str, str] = {}
    for directive in staged:
        if directive.kind is DirectiveKind.INCLUSION:
            config.pop(directive.key, None)
            config[directive.key] = directive.value
        elif directive.kind is DirectiveKind.EXCLUSION:
            config.pop(directive.key, None)
    return config


def render_config(config: dict[str, str]) -> str:
    """Render an effective configuration, one KEY=value line per key.

    Keys with an empty value are written bare.
    """
    lines = [f"{key}={value}" if value else key for key, value in config.items()]
    return "".join(f"{line}\n" for line in lines)

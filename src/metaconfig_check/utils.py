"""Utility functions for metaconfig-check."""

from pathlib import Path


def display_path(path: Path, root: Path) -> str:
    """Render a path for messages, relative to the project root when possible.

    Args:
        path: Path to display
        root: Project root

    Returns:
        POSIX-style path relative to root, or the path unchanged when it lies
        outside root

    Examples:
        >>> display_path(Path("/work/metaconfig/chip.metaconfig"), Path("/work"))
        'metaconfig/chip.metaconfig'

        >>> display_path(Path("/elsewhere/board"), Path("/work"))
        '/elsewhere/board'
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def location(path: Path, line: int, root: Path) -> str:
    """Render a "file:line" location."""
    return f"{display_path(path, root)}:{line}"

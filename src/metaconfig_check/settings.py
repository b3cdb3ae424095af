"""Settings for resolving a metaconfig project."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .exceptions import MetaconfigFileError

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = ".metaconfig.yaml"
DEFAULT_IMPORTS_DIRNAME = "metaconfig"
DEFAULT_EXTENSION = "metaconfig"


class CommentPolicy(Enum):
    """How lines starting with "#" are treated.

    INCLUSION keeps them as ordinary inclusions (the historical behavior).
    COMMENT turns them into COMMENT directives that analysis ignores.
    """

    INCLUSION = "inclusion"
    COMMENT = "comment"


@dataclass(frozen=True)
class MetaconfigSettings:
    """Where imports live and how lines are read.

    Attributes:
        root: Project root
        imports_dir: Directory searched for "!name" imports
        extension: File extension tried first when locating an import
        comment_policy: Treatment of "#" lines
    """

    root: Path
    imports_dir: Path
    extension: str = DEFAULT_EXTENSION
    comment_policy: CommentPolicy = CommentPolicy.INCLUSION

    @classmethod
    def for_root(cls, root: Path, **overrides: Any) -> "MetaconfigSettings":
        """Default settings for a project root (imports under <root>/metaconfig)."""
        root = Path(root).resolve()
        overrides.setdefault("imports_dir", root / DEFAULT_IMPORTS_DIRNAME)
        return cls(root=root, **overrides)


def load_settings(root: Path, settings_file: Path | None = None) -> MetaconfigSettings:
    """Load project settings, falling back to defaults.

    Args:
        root: Project root
        settings_file: Explicit settings file (default: <root>/.metaconfig.yaml)

    Returns:
        Settings for the project

    Raises:
        MetaconfigFileError: If the settings file is unreadable or invalid
    """
    root = Path(root).resolve()
    path = settings_file if settings_file is not None else root / SETTINGS_FILENAME

    if not path.exists():
        if settings_file is not None:
            raise MetaconfigFileError(f"Settings file not found: {path}")
        logger.debug(f"No settings file at {path}, using defaults")
        return MetaconfigSettings.for_root(root)

    data = _read_yaml(path)
    unknown = set(data) - {"imports_dir", "extension", "comment_policy"}
    if unknown:
        raise MetaconfigFileError(f"Unknown settings in {path}: {', '.join(sorted(unknown))}")

    overrides: dict[str, Any] = {}

    if "imports_dir" in data:
        imports_dir = data["imports_dir"]
        if not isinstance(imports_dir, str) or not imports_dir:
            raise MetaconfigFileError(f"imports_dir must be a non-empty string in {path}")
        overrides["imports_dir"] = (root / imports_dir).resolve()

    if "extension" in data:
        extension = data["extension"]
        if not isinstance(extension, str) or not extension.lstrip("."):
            raise MetaconfigFileError(f"extension must be a non-empty string in {path}")
        overrides["extension"] = extension.lstrip(".")

    if "comment_policy" in data:
        try:
            overrides["comment_policy"] = CommentPolicy(data["comment_policy"])
        except ValueError as e:
            choices = ", ".join(p.value for p in CommentPolicy)
            raise MetaconfigFileError(f"comment_policy must be one of {choices} in {path}") from e

    logger.debug(f"Loaded settings from {path}: {overrides}")
    return MetaconfigSettings.for_root(root, **overrides)


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping; an empty file is an empty mapping."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise MetaconfigFileError(f"Failed to read settings from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MetaconfigFileError(f"Settings in {path} must be a mapping")
    return data

"""Shared fixtures: temporary metaconfig projects."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from metaconfig_check import MetaconfigChecker
from metaconfig_check import MetaconfigSettings


class Project:
    """A temporary project root with a metaconfig/ imports directory."""

    def __init__(self, root: Path):
        self.root = root.resolve()
        self.imports_dir = self.root / "metaconfig"
        self.imports_dir.mkdir()

    def write_import(self, name: str, *lines: str) -> Path:
        """Write <root>/metaconfig/<name> (name includes any extension)."""
        path = self.imports_dir / name
        path.write_text("\n".join(lines) + "\n")
        return path.resolve()

    def write_target(self, name: str, *lines: str) -> Path:
        """Write <root>/target/<name>/metaconfig, a document a user opens."""
        path = self.root / "target" / name / "metaconfig"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n")
        return path.resolve()

    @property
    def settings(self) -> MetaconfigSettings:
        return MetaconfigSettings.for_root(self.root)


@pytest.fixture
def project():
    """Create an empty metaconfig project."""
    with TemporaryDirectory() as tmpdir:
        yield Project(Path(tmpdir))


@pytest.fixture
def checker(project):
    """Create MetaconfigChecker for the temp project."""
    return MetaconfigChecker(project.settings)

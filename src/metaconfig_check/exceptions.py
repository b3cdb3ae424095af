"""Exceptions for metaconfig-check."""

from pathlib import Path


class MetaconfigError(Exception):
    """Base exception for metaconfig errors."""

    pass


class MetaconfigFileError(MetaconfigError):
    """Error reading a metaconfig document or settings file."""

    pass


class CyclicImportError(MetaconfigError):
    """An import chain leads back to a file that is still being resolved.

    Attributes:
        chain: Files on the import chain, ending with the file that was
            imported a second time
    """

    def __init__(self, chain: list[Path]):
        self.chain = chain
        super().__init__("Cyclic import: " + " -> ".join(p.name for p in chain))

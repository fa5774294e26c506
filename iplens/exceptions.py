"""
Exceptions raised by IPLens
"""

from pathlib import Path
from typing import Union


class IPLensError(Exception):
    """Base class for all IPLens errors"""


class DatabaseError(IPLensError):
    """A required database could not be used. Always fatal."""

    def __init__(self, kind: str, directory: Union[str, Path], message: str):
        self.kind = kind
        self.directory = Path(directory)
        super().__init__(message)


class DatabaseUnavailableError(DatabaseError):
    """None of the file name variants of a database could be read"""

    def __init__(self, kind: str, directory: Union[str, Path]):
        super().__init__(kind, directory, f"Failed to read {kind} mmdb in {directory}")


class MalformedDatabaseError(DatabaseError):
    """A database file was read but is not a valid database of the expected type"""

    def __init__(self, kind: str, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        message = f"Failed to create {kind} reader from {path}"
        if reason:
            message += f": {reason}"
        super().__init__(kind, self.path.parent, message)

"""Error taxonomy for modulegraph runs.

Every condition here is fatal for a run: nothing is retried and nothing is
written once one of these is raised.
"""

from pathlib import Path


class ModuleGraphError(Exception):
    """Base class for modulegraph failures."""
    pass


class MissingTargetFileError(ModuleGraphError):
    """Raised when the target document is absent and creation is not allowed."""

    def __init__(self, path: str | Path | None = None):
        self.path = path
        if path is None:
            message = "Target document does not exist and createReadmeIfMissing is disabled"
        else:
            message = f"Target document not found: {path} (set createReadmeIfMissing to create it)"
        super().__init__(message)


class UnsupportedOrientationError(ModuleGraphError):
    """Raised when an orientation value falls outside the Orientation enumeration."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Unsupported orientation: {value!r}")


class UnwritableTargetError(ModuleGraphError):
    """Raised when the target document cannot be written."""

    def __init__(self, path: str | Path, reason: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


class UnreadableTargetError(ModuleGraphError):
    """Raised when the target document exists but cannot be read."""

    def __init__(self, path: str | Path, reason: str):
        self.path = path
        super().__init__(f"Failed to read {path}: {reason}")

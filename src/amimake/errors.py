"""Exceptions raised for conditions the caller has to act on."""

from pathlib import Path


class ConversionError(Exception):
    """Base class for fatal conversion errors."""


class SourceUnreadableError(ConversionError):
    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        message = f"Cannot read '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DestinationExistsError(ConversionError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Output file '{path}' already exists (use --force to overwrite)")


class DestinationUnwritableError(ConversionError):
    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        message = f"Failed to create output file '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnknownDialectError(ConversionError):
    def __init__(self, name: str, role: str = "target"):
        self.name = name
        self.role = role
        super().__init__(f"Unknown {role} format '{name}'")


class DetectionError(ConversionError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Unable to determine makefile format for '{path}'")


class MakefileNotFoundError(ConversionError):
    def __init__(self, directory: Path):
        self.directory = directory
        super().__init__(f"No makefile found in '{directory}'")


class AmbiguousMakefileError(ConversionError):
    def __init__(self, directory: Path, candidates: list[str]):
        self.directory = directory
        self.candidates = candidates
        super().__init__(
            f"Multiple makefiles found in '{directory}': {', '.join(candidates)}"
        )

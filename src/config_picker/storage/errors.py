"""Error kinds raised by the snapshot storage engine.

Every error carries the offending path/name as attributes so the
front-end can render its own message. Underlying OSError / parse
errors are chained as __cause__.
"""
from pathlib import Path
from typing import Optional


class StorageError(Exception):
    """Base error for all storage failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# === Directories ===

class DirectoryError(StorageError):
    """Base error for directory ensure/create failures."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class NotADirectoryPathError(DirectoryError):
    def __init__(self, path: Path):
        super().__init__(f'path exists and is not a directory, path = "{path}"', path)


class DirectoryMissingError(DirectoryError):
    def __init__(self, path: Path):
        super().__init__(f'path does not exist, path = "{path}"', path)


class DirectoryCreateError(DirectoryError):
    def __init__(self, path: Path):
        super().__init__(f'could not create directory, path = "{path}"', path)


class PathAlreadyExistsError(DirectoryError):
    def __init__(self, path: Path):
        super().__init__(f'path already exists, path = "{path}"', path)


# === Descriptor ===

class DescriptorError(StorageError):
    """Base error for descriptor read/write failures."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class DescriptorOpenError(DescriptorError):
    def __init__(self, path: Path):
        super().__init__(f'could not open descriptor file, path = "{path}"', path)


class DescriptorFormatError(DescriptorError):
    def __init__(self, path: Path, details: str = ""):
        self.details = details
        message = f'could not parse descriptor file, path = "{path}"'
        if details:
            message += f", error = {details}"
        super().__init__(message, path)


class DescriptorWriteError(DescriptorError):
    def __init__(self, path: Path):
        super().__init__(f'could not write descriptor file, path = "{path}"', path)


# === Registry ===

class InvalidStorageRootError(StorageError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f'invalid storage path = "{path}"')


class InvalidNameError(StorageError):
    """A config type or label name is not usable as a single path segment."""

    def __init__(self, kind: str, name: str, reason: str):
        self.kind = kind
        self.name = name
        self.reason = reason
        super().__init__(f"invalid {kind} name {name!r}: {reason}")


class ListingError(StorageError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f'could not list directory, path = "{path}"')


# === Config types ===

class ConfigTypeNotFoundError(StorageError):
    def __init__(self, config_type: str, path: Path):
        self.config_type = config_type
        self.path = path
        super().__init__(f'config type not found = "{config_type}"')


class IncorrectConfigTypeDirectoryError(StorageError):
    """The type directory exists but is unusable (file, or bad descriptor)."""

    def __init__(self, config_type: str, path: Path, reason: Optional[StorageError] = None):
        self.config_type = config_type
        self.path = path
        self.reason = reason
        message = f'incorrect config type directory, config type = "{config_type}"'
        if reason is not None:
            message += f", error = {reason}"
        super().__init__(message)


class ConfigTypeAlreadyExistsError(StorageError):
    def __init__(self, config_type: str):
        self.config_type = config_type
        super().__init__(f'config type already exists, config type = "{config_type}"')


class ConfigTypeCreateError(StorageError):
    def __init__(self, config_type: str, path: Path):
        self.config_type = config_type
        self.path = path
        super().__init__(
            f'could not create config type "{config_type}", path = "{path}"'
        )


class LabelNotFoundError(StorageError):
    def __init__(self, config_type: str, label: str, path: Path):
        self.config_type = config_type
        self.label = label
        self.path = path
        super().__init__(
            f'label not found, config type = "{config_type}", label = "{label}"'
        )


# === Snapshot transactions ===

class SnapshotError(StorageError):
    """Base error for store/load transaction failures."""


class StagingDirectoryError(SnapshotError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"could not create temp directory, path = {path}")


class TemplateResolutionError(SnapshotError):
    def __init__(self, entry: str):
        self.entry = entry
        super().__init__(
            f"could not decode file location in config type descriptor, entry = {entry!r}"
        )


class InvalidDescriptorEntryError(SnapshotError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(
            "file location in config type descriptor does not contain a valid "
            f"parent directory, path = {path}"
        )


class SnapshotDirectoryError(SnapshotError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"could not create directory, path = {path}")


class CopyFileError(SnapshotError):
    def __init__(self, source: Path, destination: Path):
        self.source = source
        self.destination = destination
        super().__init__(
            f"could not copy file, source_path = {source}, dest_path = {destination}"
        )


class RemoveOldLabelError(SnapshotError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"could not remove old directory, path = {path}")


class PromoteLabelError(SnapshotError):
    def __init__(self, source: Path, destination: Path):
        self.source = source
        self.destination = destination
        super().__init__(
            "could not rename temp directory, "
            f"source_path = {source}, dest_path = {destination}"
        )

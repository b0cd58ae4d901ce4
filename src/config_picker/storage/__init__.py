"""Snapshot storage engine for labeled configuration snapshots.

This package provides:
- ConfigStorage: Registry of config types under a storage root
- ConfigTypeStorage: Store/load/list labels of one config type
- ConfigTypeDescriptor: The path templates a config type captures
- Directories: On-disk layout of the storage root
- LabeledSnapshot: Copy transaction between live files and a label directory

Directory structure managed:
    ~/.config-picker/
    ├── db/
    │   └── <config type>/
    │       ├── descriptor.json
    │       └── <label>/
    └── temp/
"""

from .descriptor import ConfigTypeDescriptor
from .errors import (
    StorageError,
    DirectoryError,
    NotADirectoryPathError,
    DirectoryMissingError,
    DirectoryCreateError,
    PathAlreadyExistsError,
    DescriptorError,
    DescriptorOpenError,
    DescriptorFormatError,
    DescriptorWriteError,
    InvalidStorageRootError,
    InvalidNameError,
    ListingError,
    ConfigTypeNotFoundError,
    IncorrectConfigTypeDirectoryError,
    ConfigTypeAlreadyExistsError,
    ConfigTypeCreateError,
    LabelNotFoundError,
    SnapshotError,
    StagingDirectoryError,
    TemplateResolutionError,
    InvalidDescriptorEntryError,
    SnapshotDirectoryError,
    CopyFileError,
    RemoveOldLabelError,
    PromoteLabelError,
)
from .layout import DESCRIPTOR_FILENAME, Directories
from .snapshot import LabeledSnapshot
from .store import ConfigStorage, ConfigTypeStorage, validate_name

__all__ = [
    "ConfigStorage",
    "ConfigTypeStorage",
    "ConfigTypeDescriptor",
    "Directories",
    "DESCRIPTOR_FILENAME",
    "LabeledSnapshot",
    "validate_name",
    "StorageError",
    "DirectoryError",
    "NotADirectoryPathError",
    "DirectoryMissingError",
    "DirectoryCreateError",
    "PathAlreadyExistsError",
    "DescriptorError",
    "DescriptorOpenError",
    "DescriptorFormatError",
    "DescriptorWriteError",
    "InvalidStorageRootError",
    "InvalidNameError",
    "ListingError",
    "ConfigTypeNotFoundError",
    "IncorrectConfigTypeDirectoryError",
    "ConfigTypeAlreadyExistsError",
    "ConfigTypeCreateError",
    "LabelNotFoundError",
    "SnapshotError",
    "StagingDirectoryError",
    "TemplateResolutionError",
    "InvalidDescriptorEntryError",
    "SnapshotDirectoryError",
    "CopyFileError",
    "RemoveOldLabelError",
    "PromoteLabelError",
]

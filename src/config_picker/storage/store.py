"""Config storage: the registry of config types and their labeled snapshots.

Handles:
- Creating and discovering config types under <root>/db
- Storing a label through a staging directory under <root>/temp
- Loading a label straight onto the live filesystem

Store is staged; load is not. A failed load can leave the live
configuration partially overwritten.

Promotion of a staged snapshot is two steps: remove the old label
directory, then rename the staging directory into place. A crash between
the two leaves no snapshot under that label. There is no cross-process
locking; concurrent invocations against the same label are unsupported.
"""
import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, Iterator

from ..templating import VariableResolver
from ..utils.logging_config import timed, timed_section_sync
from .descriptor import ConfigTypeDescriptor
from .errors import (
    ConfigTypeAlreadyExistsError,
    ConfigTypeCreateError,
    ConfigTypeNotFoundError,
    DescriptorError,
    DirectoryError,
    DirectoryMissingError,
    IncorrectConfigTypeDirectoryError,
    InvalidNameError,
    InvalidStorageRootError,
    LabelNotFoundError,
    NotADirectoryPathError,
    PromoteLabelError,
    RemoveOldLabelError,
    SnapshotError,
    StagingDirectoryError,
)
from .fs import create_new_directory, ensure_directory, iter_subdirectory_names
from .layout import DESCRIPTOR_FILENAME, Directories
from .snapshot import LabeledSnapshot

logger = logging.getLogger(__name__)


def validate_name(kind: str, name: str, reserved: Iterable[str] = ()) -> str:
    """Check that `name` is usable as a single path segment.

    Raises:
        InvalidNameError: If the name is empty, `.`/`..`, contains a
            separator or NUL, or is reserved
    """
    if not name:
        raise InvalidNameError(kind, name, "name is empty")
    if name in (".", ".."):
        raise InvalidNameError(kind, name, "name is a relative path marker")
    separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
    if any(sep in name for sep in separators):
        raise InvalidNameError(kind, name, "name contains a path separator")
    if "\0" in name:
        raise InvalidNameError(kind, name, "name contains a NUL character")
    if name in reserved:
        raise InvalidNameError(kind, name, "name is reserved")
    return name


class ConfigTypeStorage:
    """
    One config type: its descriptor and its labels.

    The descriptor is read once at construction and not re-read.
    """

    def __init__(
        self,
        resolver: VariableResolver,
        config_type: str,
        directories: Directories,
    ):
        """
        Open an existing config type.

        Raises:
            ConfigTypeNotFoundError: The type directory does not exist
            IncorrectConfigTypeDirectoryError: The type path is not a
                directory, or its descriptor cannot be read
        """
        self.resolver = resolver
        self.config_type = validate_name("config type", config_type)
        self.directories = directories

        type_dir = directories.config_type_dir(config_type)
        try:
            ensure_directory(type_dir, create=False)
        except DirectoryMissingError as e:
            raise ConfigTypeNotFoundError(config_type, type_dir) from e
        except NotADirectoryPathError as e:
            raise IncorrectConfigTypeDirectoryError(config_type, type_dir, e) from e

        try:
            self.descriptor = ConfigTypeDescriptor.from_file(self.descriptor_path)
        except DescriptorError as e:
            raise IncorrectConfigTypeDirectoryError(config_type, type_dir, e) from e

    @property
    def directory(self) -> Path:
        return self.directories.config_type_dir(self.config_type)

    @property
    def descriptor_path(self) -> Path:
        return self.directories.descriptor_path(self.config_type)

    def label_dir(self, label: str) -> Path:
        validate_name("label", label, reserved=(DESCRIPTOR_FILENAME,))
        return self.directories.label_dir(self.config_type, label)

    def iter_labels(self) -> Iterator[str]:
        """
        Lazily yield label names (sub-directories of the type directory).

        One-shot. A listing failure raises ListingError from the iterator.
        """
        return iter_subdirectory_names(self.directory)

    def add_paths(self, *templates: str) -> ConfigTypeDescriptor:
        """
        Append templates to the descriptor file.

        This instance keeps the descriptor it was opened with; reopen the
        type to pick up the change.

        Returns:
            The descriptor as written
        """
        updated = ConfigTypeDescriptor.from_file(self.descriptor_path).with_paths(*templates)
        updated.write_to_file(self.descriptor_path)
        logger.info(
            f"Added {len(templates)} path(s) to config type '{self.config_type}'"
        )
        return updated

    def store(self, label: str) -> None:
        """
        Snapshot the live files under `label`, replacing any previous snapshot.

        Files are captured into a fresh staging directory, then the old label
        directory is removed and the staging directory renamed into place.

        Raises:
            InvalidNameError: Bad label name
            StagingDirectoryError: The staging directory could not be created
            SnapshotError: A template, directory or copy failure
        """
        target = self.label_dir(label)
        staging = self.directories.new_temp_dir()

        with timed_section_sync("store", config_type=self.config_type, label=label):
            try:
                create_new_directory(staging)
            except DirectoryError as e:
                raise StagingDirectoryError(staging) from e

            try:
                LabeledSnapshot(self.resolver, self.descriptor, staging).store()
            except SnapshotError:
                _discard_staging(staging)
                raise

            if target.exists():
                try:
                    shutil.rmtree(target)
                except OSError as e:
                    raise RemoveOldLabelError(target) from e

            try:
                staging.rename(target)
            except OSError as e:
                raise PromoteLabelError(staging, target) from e

        logger.info(
            f"Stored label '{label}' of config type '{self.config_type}' "
            f"({len(self.descriptor.paths)} file(s))"
        )

    def load(self, label: str) -> None:
        """
        Copy the files of `label` back onto the live filesystem.

        Not staged: a failure part way leaves earlier files overwritten.

        Raises:
            InvalidNameError: Bad label name
            LabelNotFoundError: No such label (nothing is written)
            SnapshotError: A template, directory or copy failure
        """
        source = self.label_dir(label)
        if not source.is_dir():
            raise LabelNotFoundError(self.config_type, label, source)

        with timed_section_sync("load", config_type=self.config_type, label=label):
            LabeledSnapshot(self.resolver, self.descriptor, source).load()

        logger.info(
            f"Loaded label '{label}' of config type '{self.config_type}' "
            f"({len(self.descriptor.paths)} file(s))"
        )


def _discard_staging(staging: Path) -> None:
    try:
        shutil.rmtree(staging)
    except OSError as e:
        logger.warning(f"Could not remove staging directory {staging}: {e}")


class ConfigStorage:
    """
    Registry of config types under a storage root.

    Directory structure:
        <root>/
        ├── db/       # one sub-directory per config type
        └── temp/     # staging directories of in-flight stores
    """

    def __init__(self, resolver: VariableResolver, root_dir: Path):
        """
        Open (and lazily create) the storage root.

        Raises:
            InvalidStorageRootError: root, db or temp cannot be a directory
        """
        self.resolver = resolver
        self.directories = Directories(Path(root_dir))

        for path in (
            self.directories.root_dir,
            self.directories.db_dir,
            self.directories.temp_dir,
        ):
            try:
                ensure_directory(path, create=True)
            except DirectoryError as e:
                raise InvalidStorageRootError(path) from e

        logger.debug(f"Config storage opened at {self.directories.root_dir}")

    @property
    def root_dir(self) -> Path:
        return self.directories.root_dir

    def iter_config_types(self) -> Iterator[str]:
        """Lazily yield config type names. One-shot."""
        return iter_subdirectory_names(self.directories.db_dir)

    def get_config_type_storage(self, config_type: str) -> ConfigTypeStorage:
        """
        Open an existing config type.

        Raises:
            ConfigTypeNotFoundError: No such type
            IncorrectConfigTypeDirectoryError: The type exists but is unusable
        """
        return ConfigTypeStorage(self.resolver, config_type, self.directories)

    @timed("create_type")
    def create_config_type(self, config_type: str) -> ConfigTypeStorage:
        """
        Create a new config type with an empty descriptor.

        Raises:
            ConfigTypeAlreadyExistsError: The type already exists
            IncorrectConfigTypeDirectoryError: Something unusable occupies the path
            ConfigTypeCreateError: The type directory could not be created
            DescriptorWriteError: The empty descriptor could not be written
        """
        try:
            self.get_config_type_storage(config_type)
        except ConfigTypeNotFoundError:
            pass
        else:
            raise ConfigTypeAlreadyExistsError(config_type)

        type_dir = self.directories.config_type_dir(config_type)
        try:
            create_new_directory(type_dir)
        except DirectoryError as e:
            raise ConfigTypeCreateError(config_type, type_dir) from e

        ConfigTypeDescriptor(paths=()).write_to_file(self.directories.descriptor_path(config_type))
        logger.info(f"Created config type '{config_type}' at {type_dir}")
        return self.get_config_type_storage(config_type)

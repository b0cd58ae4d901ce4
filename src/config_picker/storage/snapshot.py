"""Snapshot transaction: copy a descriptor's file set to or from a label directory.

For every template in the descriptor:

    live path     = resolver.resolve(template)
    snapshot path = snapshot_dir / template     (never resolved)

Capture copies live -> snapshot, restore copies snapshot -> live.
The first failure aborts the transaction; files already copied stay.
"""
import enum
import logging
import shutil
from pathlib import Path

from ..templating import TemplateError, VariableResolver
from .descriptor import ConfigTypeDescriptor
from .errors import (
    CopyFileError,
    DirectoryError,
    InvalidDescriptorEntryError,
    SnapshotDirectoryError,
    TemplateResolutionError,
)
from .fs import ensure_directory

logger = logging.getLogger(__name__)


class Direction(str, enum.Enum):
    CAPTURE = "capture"
    RESTORE = "restore"


class LabeledSnapshot:
    """One labeled snapshot directory bound to a descriptor and resolver."""

    def __init__(
        self,
        resolver: VariableResolver,
        descriptor: ConfigTypeDescriptor,
        directory: Path,
    ):
        self.resolver = resolver
        self.descriptor = descriptor
        self.directory = Path(directory)

    def store(self) -> None:
        """Capture live files into the snapshot directory."""
        self._run(Direction.CAPTURE)

    def load(self) -> None:
        """Restore snapshot files onto the live filesystem."""
        self._run(Direction.RESTORE)

    def _live_path(self, template: str) -> Path:
        try:
            return Path(self.resolver.resolve(template))
        except TemplateError as e:
            raise TemplateResolutionError(template) from e

    def _snapshot_path(self, template: str) -> Path:
        relative = Path(template)
        if relative.is_absolute() or ".." in relative.parts:
            raise InvalidDescriptorEntryError(self.directory / template)
        return self.directory / relative

    def _run(self, direction: Direction) -> None:
        for template in self.descriptor.paths:
            live_path = self._live_path(template)
            snapshot_path = self._snapshot_path(template)

            if direction is Direction.CAPTURE:
                source, destination = live_path, snapshot_path
            else:
                source, destination = snapshot_path, live_path

            logger.debug(f"{direction.value}: {source} -> {destination}")
            copy_file(source, destination)


def copy_file(source: Path, destination: Path) -> None:
    """
    Copy one file, creating the destination's parent directories first.

    File contents, permission bits and timestamps are copied.

    Raises:
        InvalidDescriptorEntryError: Destination has no parent segment
        SnapshotDirectoryError: Parent directory cannot be ensured
        CopyFileError: The copy itself failed
    """
    parent = destination.parent
    if not destination.name or parent == destination:
        raise InvalidDescriptorEntryError(destination)

    try:
        ensure_directory(parent, create=True)
    except DirectoryError as e:
        raise SnapshotDirectoryError(parent) from e

    try:
        shutil.copy2(source, destination)
    except (OSError, ValueError) as e:
        raise CopyFileError(source, destination) from e

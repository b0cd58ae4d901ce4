"""Directory helpers shared by the registry and snapshot transactions."""
import logging
import os
from pathlib import Path
from typing import Iterator

from .errors import (
    DirectoryCreateError,
    DirectoryMissingError,
    ListingError,
    NotADirectoryPathError,
    PathAlreadyExistsError,
)

logger = logging.getLogger(__name__)


def ensure_directory(path: Path, create: bool) -> None:
    """
    Make sure `path` is a directory.

    Walks the path from its first component down. Each existing ancestor
    must be a directory; missing ones are created when `create` is set.

    Args:
        path: Directory to check
        create: Create missing components instead of failing

    Raises:
        NotADirectoryPathError: A component exists but is not a directory
        DirectoryMissingError: A component is missing and create is False
        DirectoryCreateError: mkdir failed
    """
    path = Path(path)
    for current in [*reversed(path.parents), path]:
        if current.exists():
            if not current.is_dir():
                raise NotADirectoryPathError(current)
        elif create:
            try:
                current.mkdir()
            except FileExistsError:
                if not current.is_dir():
                    raise NotADirectoryPathError(current)
            except (OSError, ValueError) as e:
                raise DirectoryCreateError(current) from e
            else:
                logger.debug(f"Created directory {current}")
        else:
            raise DirectoryMissingError(current)


def create_new_directory(path: Path) -> None:
    """
    Create exactly one new directory.

    Raises:
        PathAlreadyExistsError: Something already exists at `path`
        DirectoryCreateError: mkdir failed
    """
    path = Path(path)
    if path.exists():
        raise PathAlreadyExistsError(path)
    try:
        path.mkdir()
    except FileExistsError as e:
        raise PathAlreadyExistsError(path) from e
    except (OSError, ValueError) as e:
        raise DirectoryCreateError(path) from e


def iter_subdirectory_names(parent: Path) -> Iterator[str]:
    """
    Lazily yield the names of the immediate sub-directories of `parent`.

    Non-directory entries are skipped. The listing is opened on first
    iteration; any OSError ends the sequence with ListingError.
    """
    parent = Path(parent)
    try:
        with os.scandir(parent) as entries:
            for entry in entries:
                if entry.is_dir():
                    yield entry.name
    except OSError as e:
        raise ListingError(parent) from e

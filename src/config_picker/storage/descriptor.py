"""Config type descriptor: the list of path templates a type captures.

Stored as JSON next to the type's labels:

    {"paths": ["{{HOME}}/.vimrc", "{{CONFIG}}/nvim/init.lua"]}
"""
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import DescriptorFormatError, DescriptorOpenError, DescriptorWriteError

logger = logging.getLogger(__name__)


class ConfigTypeDescriptor(BaseModel):
    """Ordered path templates. Order round-trips but carries no meaning."""
    model_config = ConfigDict(frozen=True)

    paths: tuple[str, ...]

    def with_paths(self, *templates: str) -> "ConfigTypeDescriptor":
        """Return a copy with `templates` appended."""
        return ConfigTypeDescriptor(paths=self.paths + tuple(templates))

    @classmethod
    def from_file(cls, path: Path) -> "ConfigTypeDescriptor":
        """
        Read a descriptor file.

        Raises:
            DescriptorOpenError: The file cannot be opened/read
            DescriptorFormatError: The content is not a valid descriptor
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise DescriptorOpenError(path) from e

        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise DescriptorFormatError(path, f"{e.error_count()} validation error(s)") from e

    def write_to_file(self, path: Path) -> None:
        """
        Write the descriptor as JSON, replacing any existing file.

        Raises:
            DescriptorWriteError: The file cannot be written
        """
        path = Path(path)
        try:
            path.write_text(self.model_dump_json(), encoding="utf-8")
        except OSError as e:
            raise DescriptorWriteError(path) from e
        logger.debug(f"Wrote descriptor with {len(self.paths)} path(s) to {path}")


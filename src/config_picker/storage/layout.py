"""On-disk layout of the storage root.

    <root>/
    ├── db/
    │   └── <config type>/
    │       ├── descriptor.json
    │       └── <label>/        # mirrored files
    └── temp/
        └── <uuid4>/            # staging directory of an in-flight store
"""
import uuid
from dataclasses import dataclass, field
from pathlib import Path

DB_DIR_NAME = "db"
TEMP_DIR_NAME = "temp"
DESCRIPTOR_FILENAME = "descriptor.json"


@dataclass(frozen=True)
class Directories:
    """Pure path arithmetic over a storage root. Performs no I/O."""
    root_dir: Path
    db_dir: Path = field(init=False)
    temp_dir: Path = field(init=False)

    def __post_init__(self):
        root = Path(self.root_dir)
        object.__setattr__(self, "root_dir", root)
        object.__setattr__(self, "db_dir", root / DB_DIR_NAME)
        object.__setattr__(self, "temp_dir", root / TEMP_DIR_NAME)

    def config_type_dir(self, config_type: str) -> Path:
        return self.db_dir / config_type

    def label_dir(self, config_type: str, label: str) -> Path:
        return self.db_dir / config_type / label

    def descriptor_path(self, config_type: str) -> Path:
        return self.db_dir / config_type / DESCRIPTOR_FILENAME

    def new_temp_dir(self) -> Path:
        """Fresh staging path named by a random UUID4. Not created."""
        return self.temp_dir / str(uuid.uuid4())

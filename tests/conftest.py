"""Shared fixtures: a fake home directory and a storage root under tmp_path."""
import pytest

from config_picker.storage import ConfigStorage, ConfigTypeDescriptor
from config_picker.templating import MappingLookup, VariableResolver


@pytest.fixture
def home(tmp_path):
    """Live-side home directory that {{HOME}} resolves to."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def resolver(home):
    return VariableResolver(MappingLookup({"HOME": str(home)}))


@pytest.fixture
def storage(tmp_path, resolver):
    return ConfigStorage(resolver, tmp_path / "root")


@pytest.fixture
def make_type(storage):
    """Create a config type whose descriptor lists `templates`."""
    def _make(name, *templates):
        type_storage = storage.create_config_type(name)
        ConfigTypeDescriptor(paths=templates).write_to_file(type_storage.descriptor_path)
        return storage.get_config_type_storage(name)
    return _make

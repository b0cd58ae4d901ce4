"""config-picker: labeled snapshots of configuration files.

A config type declares the files it covers through path templates such as
`{{HOME}}/.vimrc`; a label is a stored snapshot of those files that can be
restored later.
"""
from .settings import PickerSettings, SettingsError
from .storage import ConfigStorage, ConfigTypeDescriptor, ConfigTypeStorage, StorageError
from .templating import (
    BaseDirsLookup,
    ChainedLookup,
    MappingLookup,
    TemplateError,
    VariableResolver,
)

__version__ = "0.1.0"

__all__ = [
    "PickerSettings",
    "SettingsError",
    "ConfigStorage",
    "ConfigTypeDescriptor",
    "ConfigTypeStorage",
    "StorageError",
    "BaseDirsLookup",
    "ChainedLookup",
    "MappingLookup",
    "TemplateError",
    "VariableResolver",
]

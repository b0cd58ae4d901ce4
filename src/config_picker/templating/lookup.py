"""Variable lookup sources for template resolution.

Environment Variables:
    XDG_CONFIG_HOME: Value of CONFIG (default: ~/.config)
    XDG_DATA_HOME: Value of DATA (default: ~/.local/share)
    XDG_CACHE_HOME: Value of CACHE (default: ~/.cache)
"""
import os
from pathlib import Path
from typing import Mapping, Optional

from .resolver import Lookup


class MappingLookup:
    """Static name -> value table."""

    def __init__(self, variables: Mapping[str, str]):
        self._variables = dict(variables)

    def __call__(self, name: str) -> Optional[str]:
        return self._variables.get(name)


class BaseDirsLookup:
    """
    User base directories.

    Provides HOME plus the XDG user directories CONFIG, DATA and CACHE.
    Values are computed on each call from the given environment.
    """

    def __init__(
        self,
        home: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._home = home
        self._environ = os.environ if environ is None else environ

    @property
    def home(self) -> Path:
        return self._home if self._home is not None else Path.home()

    def _xdg(self, env_name: str, *default: str) -> str:
        value = self._environ.get(env_name)
        if value:
            return value
        return str(self.home.joinpath(*default))

    def __call__(self, name: str) -> Optional[str]:
        if name == "HOME":
            return str(self.home)
        if name == "CONFIG":
            return self._xdg("XDG_CONFIG_HOME", ".config")
        if name == "DATA":
            return self._xdg("XDG_DATA_HOME", ".local", "share")
        if name == "CACHE":
            return self._xdg("XDG_CACHE_HOME", ".cache")
        return None


class ChainedLookup:
    """Consult several lookups in order; the first non-None value wins."""

    def __init__(self, *lookups: Lookup):
        self._lookups = lookups

    def __call__(self, name: str) -> Optional[str]:
        for lookup in self._lookups:
            value = lookup(name)
            if value is not None:
                return value
        return None

"""Path templating: `{{VAR}}` placeholders resolved against a lookup.

This package provides:
- collect_blocks: Tokenizer splitting a template into literal/placeholder blocks
- VariableResolver: Resolves a template into a concrete path string
- MappingLookup/BaseDirsLookup/ChainedLookup: Variable sources

Escaping:
    {{{ in literal text  -> {{
    }}} in literal text  -> }}
"""

from .tokenizer import (
    Block,
    TemplateError,
    UnclosedPlaceholderError,
    collect_blocks,
)
from .resolver import Lookup, UnresolvedVariableError, VariableResolver
from .lookup import BaseDirsLookup, ChainedLookup, MappingLookup

__all__ = [
    "Block",
    "TemplateError",
    "UnclosedPlaceholderError",
    "collect_blocks",
    "Lookup",
    "UnresolvedVariableError",
    "VariableResolver",
    "BaseDirsLookup",
    "ChainedLookup",
    "MappingLookup",
]

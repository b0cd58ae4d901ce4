"""Variable resolution for path templates."""
from typing import Callable, Optional

from .tokenizer import (
    CLOSE,
    ESCAPED_CLOSE,
    ESCAPED_OPEN,
    OPEN,
    Block,
    TemplateError,
    collect_blocks,
)

Lookup = Callable[[str], Optional[str]]


class UnresolvedVariableError(TemplateError):
    """A placeholder names a variable the lookup does not know."""

    def __init__(self, template: str, name: str):
        self.name = name
        super().__init__(
            f"could not resolve variable, variable name = {name!r}, "
            f"template = {template!r}",
            template,
        )


def unescape(literal: str) -> str:
    """Turn `{{{` back into `{{` and `}}}` into `}}`."""
    return literal.replace(ESCAPED_OPEN, OPEN).replace(ESCAPED_CLOSE, CLOSE)


class VariableResolver:
    """
    Resolves `{{NAME}}` placeholders against a lookup.

    The lookup is any callable returning the variable's value or None.
    The resolver holds no other state, so one instance can be shared
    by every storage object.
    """

    def __init__(self, lookup: Lookup):
        self._lookup = lookup

    def tokenize(self, template: str) -> list[Block]:
        """Expose the tokenizer pass for inspection."""
        return collect_blocks(template)

    def resolve(self, template: str) -> str:
        """
        Resolve a template into a concrete string.

        Placeholder names are looked up verbatim (no trimming).

        Raises:
            UnclosedPlaceholderError: If a placeholder is never closed
            UnresolvedVariableError: If the lookup returns None for a name
        """
        parts = []
        for block in collect_blocks(template):
            if block.is_placeholder:
                value = self._lookup(block.value)
                if value is None:
                    raise UnresolvedVariableError(template, block.value)
                parts.append(value)
            else:
                parts.append(unescape(block.value))
        return "".join(parts)

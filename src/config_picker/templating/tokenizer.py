"""Tokenizer for `{{VAR}}` path templates.

Splits a template into literal and placeholder blocks. Escaped braces
(`{{{` in literal text, `}}}` inside a placeholder) are kept verbatim here
and only unescaped by the resolver.

Offsets are UTF-8 byte offsets into the template.
"""
from dataclasses import dataclass

OPEN = "{{"
CLOSE = "}}"
ESCAPED_OPEN = "{{{"
ESCAPED_CLOSE = "}}}"


class TemplateError(Exception):
    """Base error for template tokenizing and resolution."""

    def __init__(self, message: str, template: str):
        self.message = message
        self.template = template
        super().__init__(message)


class UnclosedPlaceholderError(TemplateError):
    """A `{{` was opened but never closed."""

    def __init__(self, template: str, offset: int):
        self.offset = offset
        super().__init__(
            f"opened placeholder is not closed, block start offset = {offset}, "
            f"template = {template!r}",
            template,
        )


def byte_offset(template: str, index: int) -> int:
    """UTF-8 byte offset of string index `index`."""
    return len(template[:index].encode("utf-8", "surrogatepass"))


@dataclass(frozen=True)
class Block:
    """A contiguous piece of a template."""
    offset: int
    value: str
    is_placeholder: bool


def collect_blocks(template: str) -> list[Block]:
    """Split a template into literal and placeholder blocks.

    Args:
        template: Raw template, e.g. "{{HOME}}/.vimrc"

    Returns:
        Blocks in template order. Empty literal blocks are never emitted.

    Raises:
        UnclosedPlaceholderError: If input ends inside a placeholder
    """
    blocks: list[Block] = []
    in_placeholder = False
    block_start = 0
    index = 0

    while index < len(template):
        if in_placeholder:
            if template.startswith(ESCAPED_CLOSE, index):
                index += 3
            elif template.startswith(CLOSE, index):
                offset = byte_offset(template, block_start)
                blocks.append(Block(offset, template[block_start:index], True))
                in_placeholder = False
                index += 2
                block_start = index
            else:
                index += 1
        elif template.startswith(ESCAPED_OPEN, index):
            index += 3
        elif template.startswith(OPEN, index):
            if block_start != index:
                offset = byte_offset(template, block_start)
                blocks.append(Block(offset, template[block_start:index], False))
            in_placeholder = True
            index += 2
            block_start = index
        else:
            index += 1

    if in_placeholder:
        raise UnclosedPlaceholderError(template, byte_offset(template, block_start))

    if block_start != index:
        offset = byte_offset(template, block_start)
        blocks.append(Block(offset, template[block_start:], False))

    return blocks

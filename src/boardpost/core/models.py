"""Post body syntax tree: block items, line items, and the parsed PostBody"""

from dataclasses import dataclass
from typing import Callable, Optional, Union


Resolver = Callable[[int], Optional[str]]


# --- line items ---

@dataclass(frozen=True)
class Strong:
    text: str


@dataclass(frozen=True)
class Emphasis:
    text: str


@dataclass(frozen=True)
class Spoiler:
    text: str


@dataclass(frozen=True)
class InlineCode:
    text: str


@dataclass(frozen=True)
class PostRef:
    """A `>>id` reference; uri is None when the post did not exist at parse time."""
    id: int
    uri: Optional[str] = None


@dataclass(frozen=True)
class Link:
    url: str


@dataclass(frozen=True)
class Text:
    text: str


LineItem = Union[Strong, Emphasis, Spoiler, InlineCode, PostRef, Link, Text]


# --- block items ---

@dataclass(frozen=True)
class Header:
    items: tuple[LineItem, ...]


@dataclass(frozen=True)
class Quote:
    items: tuple[LineItem, ...]


@dataclass(frozen=True)
class Code:
    contents: str                   # verbatim, including the final newline
    language: Optional[str] = None


@dataclass(frozen=True)
class Paragraph:
    items: tuple[LineItem, ...]


BlockItem = Union[Header, Quote, Code, Paragraph]


@dataclass(frozen=True)
class PostBody:
    """Immutable parse result; always holds at least one block."""
    blocks: tuple[BlockItem, ...]

    def __post_init__(self):
        if not self.blocks:
            raise ValueError("A post body needs at least one block")

    def __iter__(self):
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def post_refs(self) -> list[PostRef]:
        """All post references in document order."""
        return [
            item
            for block in self.blocks
            if not isinstance(block, Code)
            for item in block.items
            if isinstance(item, PostRef)
        ]

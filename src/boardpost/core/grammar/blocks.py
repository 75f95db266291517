"""Block grammar: code fences, headers, quotes, and paragraphs"""

from functools import partial
from typing import Optional

from boardpost.core.errors import ParseError
from boardpost.core.grammar.lines import line_items
from boardpost.core.grammar.scanner import Scanner
from boardpost.core.models import BlockItem, Code, Header, Paragraph, Quote, Resolver


FENCE = "```"
CLOSING_FENCE = "\n" + FENCE + "\n"


def code(sc: Scanner) -> Optional[BlockItem]:
    """A fenced block; the body is verbatim up to a line that is exactly the fence."""
    if not sc.expect(FENCE):
        return None
    sc.skip_inline_spaces()
    language = sc.take_while(str.isalnum)
    if not sc.expect("\n") or sc.startswith(FENCE + "\n"):
        return None
    end = sc.text.find(CLOSING_FENCE, sc.pos)
    if end == -1:
        return None
    contents = sc.text[sc.pos:end + 1]
    sc.pos = end + len(CLOSING_FENCE)
    return Code(contents=contents, language=language or None)


def _prefixed_line(sc: Scanner, resolve: Resolver) -> Optional[tuple]:
    sc.skip_inline_spaces()
    items = line_items(sc, resolve)
    if items is None or not sc.expect("\n"):
        return None
    return items


def header(sc: Scanner, resolve: Resolver) -> Optional[BlockItem]:
    if not sc.expect("#"):
        return None
    items = _prefixed_line(sc, resolve)
    return Header(items) if items is not None else None


def quote(sc: Scanner, resolve: Resolver) -> Optional[BlockItem]:
    # '>>' opens a post reference, not a quote.
    if not sc.expect(">") or sc.startswith(">"):
        return None
    items = _prefixed_line(sc, resolve)
    return Quote(items) if items is not None else None


def paragraph(sc: Scanner, resolve: Resolver) -> Optional[BlockItem]:
    items = line_items(sc, resolve)
    if items is None or not sc.expect("\n"):
        return None
    return Paragraph(items)


def parse_blocks(text: str, resolve: Resolver) -> list[BlockItem]:
    """Split canonical (newline-terminated) text into blocks, consuming all of it.

    Raises ParseError at the first position where no block alternative applies,
    including empty input.
    """
    sc = Scanner(text)
    parsers = (
        code,
        partial(header, resolve=resolve),
        partial(quote, resolve=resolve),
        partial(paragraph, resolve=resolve),
    )
    blocks: list[BlockItem] = []
    while True:
        for parser in parsers:
            block = sc.attempt(parser)
            if block is not None:
                blocks.append(block)
                break
        else:
            break
    if not blocks or not sc.at_end():
        raise ParseError(text, sc.pos, expected="a block")
    return blocks

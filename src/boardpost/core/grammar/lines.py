"""Line-item grammar: inline spans within a header, quote, or paragraph line"""

from functools import partial
from typing import Callable, Optional

from boardpost.core.errors import ParseError
from boardpost.core.grammar.scanner import Scanner
from boardpost.core.models import (
    Emphasis, InlineCode, LineItem, Link, PostRef, Resolver, Spoiler, Strong, Text,
)


LINK_SCHEMES = ("http://", "https://")
TEXT_STOP_CHARS = frozenset("*~>`\n")

# URI characters accepted inside a link, and the subset allowed to end one.
# Sentence punctuation right after a link ('.', ',', '?', ...) stays outside it.
LINK_CHARS = frozenset("-._~:/?#[]@!$&'()*+,;%=")
LINK_FINAL_CHARS = frozenset("#$-_+*'")


def _delimited(sc: Scanner, delim: str) -> Optional[str]:
    """Text between two `delim`s on one line; at least one char, backslash escapes honoured."""
    if not sc.expect(delim):
        return None
    buf = []
    while not sc.startswith(delim):
        c = sc.peek()
        if c in ("", "\n"):
            return None
        if c == "\\":
            escaped = sc.peek(1)
            if escaped in ("", "\n"):
                return None
            buf.append(escaped)
            sc.pos += 2
        else:
            buf.append(c)
            sc.pos += 1
    if not buf:
        return None
    sc.pos += len(delim)
    return "".join(buf)


def strong(sc: Scanner) -> Optional[LineItem]:
    text = _delimited(sc, "**")
    return Strong(text) if text is not None else None


def emphasis(sc: Scanner) -> Optional[LineItem]:
    text = _delimited(sc, "*")
    return Emphasis(text) if text is not None else None


def spoiler(sc: Scanner) -> Optional[LineItem]:
    text = _delimited(sc, "~")
    return Spoiler(text) if text is not None else None


def inline_code(sc: Scanner) -> Optional[LineItem]:
    text = _delimited(sc, "`")
    return InlineCode(text) if text is not None else None


def post_ref(sc: Scanner, resolve: Resolver) -> Optional[LineItem]:
    if not sc.expect(">>"):
        return None
    digits = sc.take_while(lambda c: "0" <= c <= "9")
    if not digits:
        return None
    post_id = int(digits)
    return PostRef(id=post_id, uri=resolve(post_id))


def _is_link_char(c: str) -> bool:
    return c != "" and (c.isalnum() or c in LINK_CHARS)


def _is_link_final_char(c: str) -> bool:
    return c != "" and (c.isalnum() or c in LINK_FINAL_CHARS)


def link(sc: Scanner) -> Optional[LineItem]:
    start = sc.pos
    if not any(sc.expect(scheme) for scheme in LINK_SCHEMES):
        return None
    while _is_link_char(sc.peek()) and _is_link_char(sc.peek(1)):
        sc.pos += 1
    if _is_link_final_char(sc.peek()):
        sc.pos += 1
    return Link(sc.text[start:sc.pos])


def _at_text_stop(sc: Scanner) -> bool:
    return sc.peek() in TEXT_STOP_CHARS or any(sc.startswith(s) for s in LINK_SCHEMES)


def _text_char(sc: Scanner) -> str:
    """Consume one literal character; `\\x` yields x, a backslash before a newline is itself."""
    c = sc.peek()
    if c == "\\" and sc.peek(1) not in ("", "\n"):
        sc.pos += 2
        return sc.text[sc.pos - 1]
    sc.pos += 1
    return c


def text(sc: Scanner) -> Optional[LineItem]:
    # The first character is taken unconditionally: every other alternative
    # already failed here, so an unmatched delimiter is literal.
    if sc.peek() in ("", "\n"):
        return None
    buf = [_text_char(sc)]
    while not sc.at_end() and not _at_text_stop(sc):
        buf.append(_text_char(sc))
    return Text("".join(buf))


def _alternatives(resolve: Resolver) -> tuple[Callable[[Scanner], Optional[LineItem]], ...]:
    """Line-item parsers in priority order; `text` is the total fallback."""
    return (strong, emphasis, spoiler, partial(post_ref, resolve=resolve), link, inline_code, text)


def _merge_text(items: list[LineItem]) -> list[LineItem]:
    merged: list[LineItem] = []
    for item in items:
        if isinstance(item, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(merged[-1].text + item.text)
        else:
            merged.append(item)
    return merged


def line_items(sc: Scanner, resolve: Resolver) -> Optional[tuple[LineItem, ...]]:
    """One or more line items up to (not including) the next newline."""
    items: list[LineItem] = []
    parsers = _alternatives(resolve)
    while True:
        for parser in parsers:
            item = sc.attempt(parser)
            if item is not None:
                items.append(item)
                break
        else:
            break
    return tuple(_merge_text(items)) if items else None


def parse_line(line: str, resolve: Optional[Resolver] = None) -> tuple[LineItem, ...]:
    """Parse a single line of text into line items, consuming all of it or raising ParseError."""
    sc = Scanner(line)
    items = line_items(sc, resolve or (lambda _id: None))
    if items is None or not sc.at_end():
        raise ParseError(line, sc.pos, expected="end of line")
    return items

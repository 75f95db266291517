"""Position-based cursor shared by the block and line grammars"""

from typing import Callable, Optional, TypeVar

T = TypeVar("T")


class Scanner:
    """A cursor over a string. Parsers move `pos` forward; `attempt` rewinds on failure."""

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        """Character at pos+offset, or '' past the end."""
        i = self.pos + offset
        return self.text[i] if i < len(self.text) else ""

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def expect(self, prefix: str) -> bool:
        """Consume prefix if it is next."""
        if self.startswith(prefix):
            self.pos += len(prefix)
            return True
        return False

    def take_while(self, pred: Callable[[str], bool]) -> str:
        start = self.pos
        while self.pos < len(self.text) and pred(self.text[self.pos]):
            self.pos += 1
        return self.text[start:self.pos]

    def skip_inline_spaces(self) -> None:
        self.take_while(lambda c: c.isspace() and c != "\n")

    def attempt(self, parser: Callable[["Scanner"], Optional[T]]) -> Optional[T]:
        """Run parser; on None restore the cursor so the next alternative starts clean."""
        mark = self.pos
        result = parser(self)
        if result is None:
            self.pos = mark
        return result

"""Filter-rule substitution and newline normalization ahead of block parsing"""

import logging
import re
from typing import Iterable, Protocol

from boardpost.core.errors import RuleError


logger = logging.getLogger(__name__)

CRLF_RE = re.compile(r"\r\n")
NEWLINES_RE = re.compile(r"\n+")


class Rule(Protocol):
    pattern: str
    replace_with: str


def compile_rules(rules: Iterable[Rule]) -> list[tuple[re.Pattern, str]]:
    """Compile every rule's pattern. Raises RuleError on the first invalid one."""
    compiled = []
    for rule in rules:
        try:
            compiled.append((re.compile(rule.pattern), rule.replace_with))
        except re.error as e:
            raise RuleError(rule.pattern, e) from e
    return compiled


def apply_rules(text: str, rules: Iterable[Rule]) -> str:
    """Apply rules in order, each replacing all matches in the previous rule's output."""
    for pattern, replace_with in compile_rules(rules):
        try:
            text, count = pattern.subn(replace_with, text)
        except re.error as e:
            raise RuleError(pattern.pattern, e) from e
        if count:
            logger.debug("Filter rule %r replaced %d match(es)", pattern.pattern, count)
    return text


def normalize_newlines(text: str) -> str:
    """Use bare '\\n', drop blank lines and a leading newline, end with exactly one '\\n'."""
    text = CRLF_RE.sub("\n", text)
    text = NEWLINES_RE.sub("\n", text)
    if text.startswith("\n"):
        text = text[1:]
    if not text.endswith("\n"):
        text += "\n"
    return text


def preprocess(text: str, rules: Iterable[Rule] = ()) -> str:
    return normalize_newlines(apply_rules(text, rules))

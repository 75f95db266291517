"""Post body parsing entry points: preprocess, resolve references, build the tree"""

import logging
from typing import Iterable, Optional

from boardpost.core.grammar.blocks import parse_blocks
from boardpost.core.models import PostBody, Resolver
from boardpost.core.preprocess import Rule, preprocess
from boardpost.core.render import render_html


logger = logging.getLogger(__name__)


def _no_resolve(post_id: int) -> Optional[str]:
    return None


def _memoize(resolve: Resolver) -> Resolver:
    """Wrap resolve so each post id is looked up at most once per parse."""
    seen: dict[int, Optional[str]] = {}

    def lookup(post_id: int) -> Optional[str]:
        if post_id not in seen:
            seen[post_id] = resolve(post_id)
        return seen[post_id]

    return lookup


def parse_post(
    raw: str,
    rules: Iterable[Rule] = (),
    resolve: Optional[Resolver] = None,
    ) -> PostBody:
    """Parse raw post text into a PostBody, resolving `>>id` references as they are found.

    Raises RuleError for a bad filter rule and ParseError when the text cannot
    be consumed (e.g. it is empty after preprocessing). Nothing partial is returned.
    """
    text = preprocess(raw, rules)
    blocks = parse_blocks(text, _memoize(resolve or _no_resolve))
    logger.debug("Parsed post body: %d chars -> %d block(s)", len(text), len(blocks))
    return PostBody(tuple(blocks))


def render_post(raw: str, rules: Iterable[Rule] = (), resolve: Optional[Resolver] = None) -> str:
    """Parse and render in one step."""
    return render_html(parse_post(raw, rules, resolve))

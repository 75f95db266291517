"""Post persistence and post-reference resolution against stored posts"""

import logging
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from boardpost.core.models import Resolver
from boardpost.core.parse import parse_post
from boardpost.core.preprocess import Rule
from boardpost.core.render import render_html
from boardpost.crud.models import Post, Thread


logger = logging.getLogger(__name__)

# Largest value a SQL INTEGER primary key can hold; bigger ids cannot exist.
MAX_POST_ID = 2**63 - 1


def thread_uri(board: str, thread_id: int) -> str:
    return f"/{board}/{thread_id}"


def get_post(session: Session, post_id: int) -> Post | None:
    """Return the Post with the given id, or None if not found."""
    if not 0 < post_id <= MAX_POST_ID:
        return None
    return session.get(Post, post_id)


def get_thread_posts(session: Session, thread_id: int) -> list[Post]:
    """Return a thread's posts in posting order."""
    return list(session.exec(select(Post).where(Post.thread_id == thread_id).order_by(Post.id)).all())


def post_uri(session: Session, post_id: int) -> str | None:
    """Canonical URI of a post (`/{board}/{thread}#{post}`), or None if it does not exist."""
    post = get_post(session, post_id)
    if post is None:
        return None
    thread = session.get(Thread, post.thread_id)
    return f"{thread_uri(thread.board, thread.id)}#{post.id}"


def make_resolver(session: Session) -> Resolver:
    """Bind post_uri to a session. Lookup failures resolve to None so parsing never aborts."""
    def resolve(post_id: int) -> Optional[str]:
        try:
            return post_uri(session, post_id)
        except SQLAlchemyError as e:
            logger.warning("Could not resolve post reference >>%d: %s", post_id, e)
            return None
    return resolve


def _render(session: Session, raw: str, rules: Iterable[Rule]) -> str:
    body = parse_post(raw, rules, make_resolver(session))
    dangling = [ref.id for ref in body.post_refs() if ref.uri is None]
    if dangling:
        logger.debug("Unresolved post references: %s", dangling)
    return render_html(body)


def create_post(session: Session, thread_id: int, raw: str, rules: Iterable[Rule] = ()) -> Post:
    """Parse, render, and insert a reply to an existing thread.

    Raises ValueError if the thread is missing, ParseError/RuleError if the body
    is rejected; in either case nothing is added to the session.
    Flushes but does not commit; the caller controls the transaction.
    """
    thread = session.get(Thread, thread_id)
    if thread is None:
        raise ValueError(f"Thread #{thread_id} not found")

    html = _render(session, raw, rules)
    post = Post(thread_id=thread.id, body=raw, body_html=html)
    session.add(post)
    session.flush()
    logger.debug("Created post #%d in thread #%d", post.id, thread.id)
    return post


def create_thread(session: Session, board: str, raw: str, rules: Iterable[Rule] = ()) -> tuple[Thread, Post]:
    """Start a thread on board with raw as its opening post.

    The body is parsed before anything is inserted, so a rejected post leaves
    no empty thread behind. Flushes but does not commit.
    """
    html = _render(session, raw, rules)
    thread = Thread(board=board)
    session.add(thread)
    session.flush()

    post = Post(thread_id=thread.id, body=raw, body_html=html)
    session.add(post)
    session.flush()
    logger.debug("Created thread #%d on /%s/ with post #%d", thread.id, board, post.id)
    return thread, post

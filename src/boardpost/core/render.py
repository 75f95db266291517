"""HTML rendering of a parsed PostBody"""

from markdown_it.common.utils import escapeHtml

from boardpost.core.models import (
    BlockItem, Code, Emphasis, Header, InlineCode, LineItem, Link, Paragraph,
    PostBody, PostRef, Quote, Spoiler, Strong, Text,
)


# Line items whose payload is wrapped in fixed markup.
INLINE_WRAPPERS: dict[type, tuple[str, str]] = {
    Strong:     ("<strong>", "</strong>"),
    Emphasis:   ("<em>", "</em>"),
    Spoiler:    ('<span class="spoiler">', "</span>"),
    InlineCode: ("<code>", "</code>"),
}

BLOCK_WRAPPERS: dict[type, tuple[str, str]] = {
    Header:    ("<h3>", "</h3>"),
    Quote:     ("<blockquote><p>", "</p></blockquote>"),
    Paragraph: ("<p>", "</p>"),
}


def render_line_item(item: LineItem) -> str:
    if type(item) in INLINE_WRAPPERS:
        open_tag, close_tag = INLINE_WRAPPERS[type(item)]
        return f"{open_tag}{escapeHtml(item.text)}{close_tag}"
    if isinstance(item, PostRef):
        if item.uri is None:
            return f'<a class="post-ref">{item.id}</a>'
        return f'<a class="post-ref" href="{escapeHtml(item.uri)}">{item.id}</a>'
    if isinstance(item, Link):
        url = escapeHtml(item.url)
        return f'<a href="{url}" rel="nofollow noopener" target="_blank">{url}</a>'
    if isinstance(item, Text):
        return escapeHtml(item.text)
    raise TypeError(f"Unknown line item: {item!r}")


def render_block(block: BlockItem) -> str:
    if isinstance(block, Code):
        attrs = f' class="language-{escapeHtml(block.language)}"' if block.language else ""
        return f'<pre class="blockcode"><code{attrs}>{escapeHtml(block.contents)}</code></pre>'
    open_tag, close_tag = BLOCK_WRAPPERS[type(block)]
    return open_tag + "".join(render_line_item(i) for i in block.items) + close_tag


def render_html(body: PostBody) -> str:
    """Serialize a PostBody to an HTML fragment. Pure: all text is escaped, nothing is resolved."""
    return "".join(render_block(b) for b in body)

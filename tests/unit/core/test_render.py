"""Unit tests for core/render.py"""

import pytest

from boardpost.core.models import (
    Code, Emphasis, Header, InlineCode, Link, Paragraph, PostBody, PostRef, Quote, Spoiler,
    Strong, Text,
)
from boardpost.core.render import render_html


def _body(*blocks) -> PostBody:
    return PostBody(tuple(blocks))


@pytest.mark.parametrize("item,expected", [
    (Strong("supercomputer"),       "<strong>supercomputer</strong>"),
    (Emphasis("harm"),              "<em>harm</em>"),
    (Spoiler("ranting"),            '<span class="spoiler">ranting</span>'),
    (InlineCode("x < y"),           "<code>x &lt; y</code>"),
    (PostRef(1729),                 '<a class="post-ref">1729</a>'),
    (PostRef(2, "/g/1#2"),          '<a class="post-ref" href="/g/1#2">2</a>'),
    (Link("https://lainchan.org"),
     '<a href="https://lainchan.org" rel="nofollow noopener" target="_blank">https://lainchan.org</a>'),
    (Text("it's"),                  "it's"),
])
def test_line_items(item, expected):
    """Each line item renders to its wrapper inside a paragraph."""
    assert render_html(_body(Paragraph((item,)))) == f"<p>{expected}</p>"


def test_blocks():
    """Headers, quotes, and paragraphs wrap their line items."""
    body = _body(
        Header((Text("Title"),)),
        Quote((Text("quoted"),)),
        Paragraph((Text("para"),)),
    )
    assert render_html(body) == "<h3>Title</h3><blockquote><p>quoted</p></blockquote><p>para</p>"


def test_code_block_with_language():
    """Code contents are escaped but otherwise verbatim; the language becomes a class."""
    body = _body(Code("a < b && *c*\n", "C"))
    assert render_html(body) == (
        '<pre class="blockcode"><code class="language-C">a &lt; b &amp;&amp; *c*\n</code></pre>'
    )


def test_code_block_without_language():
    """No class on the code element without a language."""
    assert render_html(_body(Code("x\n"))) == '<pre class="blockcode"><code>x\n</code></pre>'


def test_text_is_escaped():
    """User text cannot inject markup."""
    body = _body(Paragraph((Text('<script>alert("x")</script> & co'),)))
    assert render_html(body) == "<p>&lt;script&gt;alert(&quot;x&quot;)&lt;/script&gt; &amp; co</p>"


def test_span_payloads_are_escaped():
    """Strong, emphasis, and spoiler payloads are escaped too."""
    body = _body(Paragraph((Strong("<b>"), Emphasis("<i>"), Spoiler("&"))))
    assert render_html(body) == '<p><strong>&lt;b&gt;</strong><em>&lt;i&gt;</em><span class="spoiler">&amp;</span></p>'


def test_attribute_values_are_escaped():
    """A URI cannot break out of its href attribute."""
    body = _body(Paragraph((PostRef(3, '/g/1#3" onclick="x'),)))
    assert render_html(body) == '<p><a class="post-ref" href="/g/1#3&quot; onclick=&quot;x">3</a></p>'


def test_render_is_idempotent():
    """Rendering the same body twice gives identical output."""
    body = _body(Paragraph((Text("a"), PostRef(1, "/g/1#1"))), Code("b\n", "py"))
    assert render_html(body) == render_html(body)


def test_empty_body_is_rejected():
    """A PostBody always has at least one block."""
    with pytest.raises(ValueError):
        PostBody(())


def test_post_refs_in_order():
    """post_refs collects references from every non-code block."""
    body = _body(
        Header((PostRef(1),)),
        Code(">>9\n"),
        Paragraph((Text("x"), PostRef(2, "/g/1#2"))),
    )
    assert [r.id for r in body.post_refs()] == [1, 2]

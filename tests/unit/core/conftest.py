"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_POST = """\
# Weekly thread
>be me
>>2 said **this** and *that*
```python
print("*not* parsed")
```
~spoilers~ ahead: `code`
"""

KNOWN_POSTS = {
    1: "/g/1#1",
    2: "/g/1#2",
}


class StubResolver:
    """Dict-backed resolver that records every lookup."""

    def __init__(self, posts: dict[int, str]):
        self.posts = posts
        self.calls: list[int] = []

    def __call__(self, post_id: int):
        self.calls.append(post_id)
        return self.posts.get(post_id)


@pytest.fixture(name="resolver")
def resolver_fixture():
    return StubResolver(dict(KNOWN_POSTS))


@pytest.fixture(name="sample_post")
def sample_post_fixture():
    return SAMPLE_POST

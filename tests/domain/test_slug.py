"""Slug: 제목 → URL 토큰 변환.

Invariants:
    - 소문자, 구두점 제거, 공백 → 하이픈
    - 같은 입력은 항상 같은 출력, 자기 출력에 다시 적용해도 그대로
"""

import pytest

from inkwell.domain.value_objects.slug import derive_slug


def test_hello_world():
    assert derive_slug("Hello, World!") == "hello-world"


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Python Tips & Tricks", "python-tips-tricks"),
        ("Multiple   spaces here", "multiple-spaces-here"),
        ("snake_case stays", "snake_case-stays"),
        ("Version 2.0 Released", "version-20-released"),
        ("Already-hyphenated title", "already-hyphenated-title"),
        ("", ""),
        ("!!!", ""),
    ],
)
def test_transform(title, expected):
    assert derive_slug(title) == expected


def test_unicode_word_characters_are_kept():
    assert derive_slug("파이썬 블로그") == "파이썬-블로그"


def test_case_insensitive():
    assert derive_slug("MiXeD CaSe") == derive_slug("mixed case")


@pytest.mark.parametrize("title", ["Hello, World!", "a - b", "  padded  ", "Ünïcode Títle?"])
def test_idempotent(title):
    once = derive_slug(title)
    assert derive_slug(once) == once

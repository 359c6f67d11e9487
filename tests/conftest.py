"""Shared test fixtures — highlighted code snapshots and source files."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable, List

import pytest

from codeshift.models import FullTween, HighlightedLine, Token


def _highlight(*texts: str) -> List[HighlightedLine]:
    """One token per whitespace-separated word, spaces kept as their own tokens."""
    result = []
    for text in texts:
        tokens = []
        for i, word in enumerate(text.split(" ")):
            if i:
                tokens.append(Token(" ", {"color": "white"}))
            if word:
                tokens.append(Token(word, {"color": "blue" if word.isidentifier() else "red"}))
        result.append(HighlightedLine(tokens=tuple(tokens)))
    return result


@pytest.fixture
def hl() -> Callable[..., List[HighlightedLine]]:
    """Builder: ``hl("a = 1", "b = 2")`` → highlighted lines."""
    return _highlight


@pytest.fixture
def abc_to_axc() -> FullTween[List[HighlightedLine]]:
    """prev a,b,c → next a,x,c: one exit and one enter in the middle."""
    return FullTween(prev=_highlight("a", "b", "c"), next=_highlight("a", "x", "c"))


@pytest.fixture
def function_edit() -> FullTween[List[HighlightedLine]]:
    """A small function gaining a parameter and losing a print."""
    prev = _highlight(
        "def greet(name):",
        "    print(name)",
        "    message = 'hi ' + name",
        "    return message",
    )
    next = _highlight(
        "def greet(name, punctuation):",
        "    message = 'hi ' + name",
        "    message += punctuation",
        "    return message",
    )
    return FullTween(prev=prev, next=next)


@pytest.fixture
def source_files(tmp_path: Path) -> tuple[Path, Path]:
    """Two code files on disk for CLI tests."""
    prev = tmp_path / "prev.py"
    next = tmp_path / "next.py"
    prev.write_text(textwrap.dedent("""\
        import os
        print(os.getcwd())
        x = 1
    """))
    next.write_text(textwrap.dedent("""\
        import os
        x = 1
        y = x + 1
    """))
    return prev, next


@pytest.fixture
def annotation_file(tmp_path: Path) -> Path:
    path = tmp_path / "annotations.yaml"
    path.write_text(textwrap.dedent("""\
        prev:
          - focus: "2[1:5]"
            data: "removed call"
        next:
          - focus: "2:3"
            component: box
            data: "new block"
    """))
    return path

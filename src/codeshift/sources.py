"""CLI inputs — plain-text code files and YAML annotation files.

Tokenizing is not codeshift's job; :func:`plain_lines` stands in for a real
highlighter by turning each line into a single unstyled token.

Annotation file format::

    prev:
      - focus: "2[5:9]"
        data: "renamed below"
    next:
      - focus: "3:5"
        component: box
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

import yaml

from codeshift.annotations.models import AnnotationDescriptor
from codeshift.errors import CodeShiftError
from codeshift.models import HighlightedLine, Token, Tween


class SourceError(CodeShiftError):
    """Raised when an input file is missing or malformed."""


def plain_lines(text: str) -> List[HighlightedLine]:
    """One unstyled token per line; empty lines get no tokens.

    Lines break on ``\\n`` only (a trailing ``\\r`` is stripped), so form feeds
    and other Unicode separators stay inside the line. A UTF-8 BOM is dropped.
    """
    text = text.lstrip("\ufeff")
    if not text:
        return []
    texts = text.split("\n")
    if texts[-1] == "":
        texts.pop()
    result = []
    for line in texts:
        line = line.rstrip("\r")
        result.append(HighlightedLine(tokens=(Token(line),) if line else ()))
    return result


def read_source(path: Path) -> List[HighlightedLine]:
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceError(f"Cannot read {path}: {exc}") from exc
    return plain_lines(text)


def _descriptors(entries: Any, side: str, path: Path) -> Optional[List[AnnotationDescriptor]]:
    if entries is None:
        return None
    if not isinstance(entries, list):
        raise SourceError(f"{path}: '{side}' must be a list of annotations")
    result: List[AnnotationDescriptor] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict) or "focus" not in entry:
            raise SourceError(f"{path}: {side}[{i}] needs a 'focus' key")
        focus = entry["focus"]
        if isinstance(focus, bool) or not isinstance(focus, (str, int)):
            raise SourceError(f"{path}: {side}[{i}] focus must be a string, got {focus!r}")
        result.append(
            AnnotationDescriptor(
                focus=str(focus),
                data=entry.get("data"),
                component=entry.get("component"),
            )
        )
    return result


def load_annotations(path: Path) -> Tween[List[AnnotationDescriptor]]:
    """Load prev / next annotation descriptors from a YAML file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise SourceError(f"Cannot read {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SourceError(f"{path} is not valid UTF-8: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SourceError(f"Failed to parse {path}: {exc}") from exc

    if data is None:
        return Tween()
    if not isinstance(data, dict):
        raise SourceError(f"{path}: expected a mapping with 'prev' and/or 'next'")
    return Tween(
        prev=_descriptors(data.get("prev"), "prev", path),
        next=_descriptors(data.get("next"), "next", path),
    )

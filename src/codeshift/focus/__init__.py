"""Focus splitting."""

from codeshift.focus.splitter import slice_tokens, split_by_focus, split_line

__all__ = ["slice_tokens", "split_by_focus", "split_line"]

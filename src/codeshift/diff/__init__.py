"""Line diffing — normalization, Myers alignment, stay/enter/exit merge."""

from codeshift.diff.differ import diff, merge_lines, move_counts
from codeshift.diff.normalizer import code_text, normalize

__all__ = ["code_text", "diff", "merge_lines", "move_counts", "normalize"]

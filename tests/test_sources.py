"""Tests for reading code files and YAML annotation files."""

from pathlib import Path

import pytest

from codeshift.models import Token
from codeshift.sources import SourceError, load_annotations, plain_lines, read_source


class TestPlainLines:
    def test_one_token_per_line(self):
        lines = plain_lines("x = 1\ny = 2\n")
        assert [line.tokens for line in lines] == [(Token("x = 1"),), (Token("y = 2"),)]

    def test_empty_line_has_no_tokens(self):
        lines = plain_lines("a\n\nb")
        assert lines[1].tokens == ()
        assert [line.text for line in lines] == ["a", "", "b"]

    def test_bom_dropped(self):
        (line,) = plain_lines("\ufeffimport os\n")
        assert line.text == "import os"

    def test_empty_text(self):
        assert plain_lines("") == []

    def test_form_feed_stays_inside_line(self):
        (line,) = plain_lines("x\x0cy\n")
        assert line.text == "x\x0cy"

    def test_only_newline_breaks_lines(self):
        lines = plain_lines("a = 1\n\x0c\nb = 2 c\n")
        assert [line.text for line in lines] == ["a = 1", "\x0c", "b = 2 c"]

    def test_crlf_is_stripped(self):
        lines = plain_lines("a\r\nb\r\n")
        assert [line.text for line in lines] == ["a", "b"]


class TestReadSource:
    def test_reads_file(self, source_files):
        prev, _ = source_files
        lines = read_source(prev)
        assert [line.text for line in lines] == ["import os", "print(os.getcwd())", "x = 1"]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SourceError):
            read_source(tmp_path / "nope.py")


class TestLoadAnnotations:
    def test_loads_both_sides(self, annotation_file):
        annotations = load_annotations(annotation_file)
        (prev,) = annotations.prev
        (next,) = annotations.next
        assert prev.focus == "2[1:5]"
        assert prev.data == "removed call"
        assert prev.is_inline
        assert next.component == "box"
        assert not next.is_inline

    def test_missing_side_is_none(self, tmp_path: Path):
        path = tmp_path / "a.yaml"
        path.write_text('next:\n  - focus: "1"\n')
        annotations = load_annotations(path)
        assert annotations.prev is None
        assert len(annotations.next) == 1

    def test_numeric_focus_becomes_string(self, tmp_path: Path):
        path = tmp_path / "a.yaml"
        path.write_text("prev:\n  - focus: 3\n")
        assert load_annotations(path).prev[0].focus == "3"

    def test_reads_utf8_regardless_of_locale(self, tmp_path: Path):
        path = tmp_path / "a.yaml"
        path.write_text('prev:\n  - focus: "1"\n    data: "café → naïve"\n', encoding="utf-8")
        assert load_annotations(path).prev[0].data == "café → naïve"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "a.yaml"
        path.write_text("")
        annotations = load_annotations(path)
        assert annotations.prev is None and annotations.next is None

    @pytest.mark.parametrize(
        "content",
        [
            "- focus: 1\n",
            "prev: 3\n",
            "prev:\n  - data: x\n",
            "prev: [unclosed\n",
            "prev:\n  - focus: null\n",
            "prev:\n  - focus: true\n",
            "next:\n  - focus: [1, 2]\n",
        ],
    )
    def test_malformed(self, tmp_path: Path, content):
        path = tmp_path / "a.yaml"
        path.write_text(content)
        with pytest.raises(SourceError):
            load_annotations(path)

    def test_null_focus_names_entry(self, tmp_path: Path):
        path = tmp_path / "a.yaml"
        path.write_text('next:\n  - focus: "1"\n  - focus: null\n')
        with pytest.raises(SourceError, match=r"next\[1\] focus"):
            load_annotations(path)

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "a.yaml"
        path.write_bytes(b'prev:\n  - focus: "1"\n    data: "\xff\xfe"\n')
        with pytest.raises(SourceError):
            load_annotations(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SourceError):
            load_annotations(tmp_path / "missing.yaml")

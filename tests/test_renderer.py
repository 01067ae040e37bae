"""
Tests for the content renderer — include directives and their errors.
"""

from pathlib import Path

import pytest

from xtask.core.services.renderer import (
    MalformedDirective,
    MissingInclude,
    RenderError,
    render,
    render_bytes,
    render_readme,
)


def _template(tmp_path: Path, content: str, name: str = "t.md") -> Path:
    path = tmp_path / name
    path.write_text(content)
    return path


class TestInclude:
    def test_hello_world(self, tmp_path: Path):
        (tmp_path / "name.txt").write_text("World")
        tmpl = _template(tmp_path, 'Hello {{include "name.txt"}}!')
        assert render(tmpl, tmp_path).content == b"Hello World!"

    def test_whitespace_inside_delimiters(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("X")
        tmpl = _template(tmp_path, 'before {{  include   "a.txt"  }} after')
        assert render(tmpl, tmp_path).content == b"before X after"

    def test_multiple_directives_left_to_right(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("A")
        (tmp_path / "b.txt").write_text("B")
        tmpl = _template(tmp_path, '{{ include "a.txt" }}-{{ include "b.txt" }}-{{ include "a.txt" }}')
        assert render(tmpl, tmp_path).content == b"A-B-A"

    def test_no_recursive_expansion(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text('{{ include "b.txt" }}')
        tmpl = _template(tmp_path, '[{{ include "a.txt" }}]')
        # b.txt does not exist; a rescan would raise MissingInclude
        assert render(tmpl, tmp_path).content == b'[{{ include "b.txt" }}]'

    def test_raw_bytes_preserved(self, tmp_path: Path):
        (tmp_path / "bin").write_bytes(b"\x00\xff\r\n")
        tmpl = _template(tmp_path, 'x{{ include "bin" }}y')
        assert render(tmpl, tmp_path).content == b"x\x00\xff\r\ny"

    def test_subdirectory_include(self, tmp_path: Path):
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "usage.md").write_text("usage")
        tmpl = _template(tmp_path, '{{ include "docs/usage.md" }}')
        assert render(tmpl, tmp_path).content == b"usage"

    def test_relative_to_working_directory(self, tmp_path: Path):
        other = tmp_path / "other"
        other.mkdir()
        (other / "a.txt").write_text("other")
        tmpl = _template(tmp_path, '{{ include "a.txt" }}')
        assert render(tmpl, other).content == b"other"

    def test_template_without_directives(self, tmp_path: Path):
        tmpl = _template(tmp_path, "plain } text { here")
        assert render(tmpl, tmp_path).content == b"plain } text { here"

    def test_deterministic(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("X")
        tmpl = _template(tmp_path, 'a {{ include "a.txt" }} b')
        assert render(tmpl, tmp_path).content == render(tmpl, tmp_path).content

    def test_destination_carried(self, tmp_path: Path):
        tmpl = _template(tmp_path, "x")
        artifact = render(tmpl, tmp_path, destination=tmp_path / "out.md")
        assert artifact.destination == tmp_path / "out.md"


class TestErrors:
    def test_missing_include(self, tmp_path: Path):
        tmpl = _template(tmp_path, 'Hello {{ include "nope.txt" }}')
        with pytest.raises(MissingInclude) as exc:
            render(tmpl, tmp_path)
        assert exc.value.path == Path("nope.txt")
        assert "nope.txt" in str(exc.value)

    def test_unclosed_directive(self, tmp_path: Path):
        tmpl = _template(tmp_path, 'line one\n  {{ include "a.txt"')
        with pytest.raises(MalformedDirective) as exc:
            render(tmpl, tmp_path)
        assert exc.value.location.line == 2
        assert exc.value.location.column == 3

    def test_non_utf8_include_path(self, tmp_path: Path):
        with pytest.raises(MalformedDirective) as exc:
            render_bytes(b'ok\n{{ include "\xff.txt" }}', tmp_path, Path("t.md"))
        assert isinstance(exc.value, RenderError)
        assert exc.value.location.line == 2
        assert "UTF-8" in exc.value.detail

    def test_unknown_helper(self, tmp_path: Path):
        tmpl = _template(tmp_path, '{{ shell "ls -l" }}')
        with pytest.raises(MalformedDirective):
            render(tmpl, tmp_path)

    def test_variable_is_malformed(self, tmp_path: Path):
        tmpl = _template(tmp_path, "{{ copyright_range }}")
        with pytest.raises(MalformedDirective):
            render(tmpl, tmp_path)

    def test_unquoted_path(self, tmp_path: Path):
        (tmp_path / "a.txt").write_text("X")
        tmpl = _template(tmp_path, "{{ include a.txt }}")
        with pytest.raises(MalformedDirective):
            render(tmpl, tmp_path)

    def test_empty_path(self, tmp_path: Path):
        tmpl = _template(tmp_path, '{{ include "" }}')
        with pytest.raises(MalformedDirective):
            render(tmpl, tmp_path)

    def test_errors_share_base_class(self, tmp_path: Path):
        tmpl = _template(tmp_path, "{{")
        with pytest.raises(RenderError):
            render(tmpl, tmp_path)

    def test_missing_template(self, tmp_path: Path):
        with pytest.raises(OSError):
            render(tmp_path / "absent.md", tmp_path)

    def test_location_in_message(self, tmp_path: Path):
        with pytest.raises(MalformedDirective) as exc:
            render_bytes(b"ok\n{{ nope }}", tmp_path, Path("README.tmpl.md"))
        assert "README.tmpl.md:2:1" in str(exc.value)


class TestRenderReadme:
    def test_readme(self, workspace: Path):
        artifact = render_readme(workspace)
        assert artifact.destination == workspace / "README.md"
        assert artifact.content == b"# Demo\n\nAn example workspace.\n\n"

    def test_missing_template(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            render_readme(tmp_path)

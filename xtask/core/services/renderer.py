"""
Content renderer — resolve include directives in a template.

A template is plain text with directives of the form::

    {{ include "relative/path" }}

Each directive is replaced by the raw bytes of the referenced file,
resolved against the working directory. Substitution is a single
left-to-right pass: included content is never scanned again, so a
directive-shaped string inside an included file stays literal.

Anything else between the delimiters is an error. There is no variable
interpolation and no helper other than ``include``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from xtask.core.models.artifact import RenderedArtifact

logger = logging.getLogger(__name__)

OPEN_DELIMITER = b"{{"
CLOSE_DELIMITER = b"}}"

README_TEMPLATE = "README.tmpl.md"
README_OUTPUT = "README.md"

_INCLUDE_RE = re.compile(rb'^include\s+"([^"]+)"$')


@dataclass(frozen=True)
class SourceLocation:
    """Where a directive starts inside a template (1-based)."""

    path: Path
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.path}:{self.line}:{self.column}"


class RenderError(Exception):
    """Raised when a template cannot be rendered."""


class MissingInclude(RenderError):
    """A directive references a file that does not exist."""

    def __init__(self, path: Path, location: SourceLocation | None = None) -> None:
        self.path = path
        self.location = location
        where = f" (at {location})" if location else ""
        super().__init__(f"Included file not found: {path}{where}")


class MalformedDirective(RenderError):
    """A directive is unterminated or is not a valid include."""

    def __init__(self, location: SourceLocation, detail: str) -> None:
        self.location = location
        self.detail = detail
        super().__init__(f"Malformed directive at {location}: {detail}")


def _locate(template_path: Path, content: bytes, offset: int) -> SourceLocation:
    line = content.count(b"\n", 0, offset) + 1
    line_start = content.rfind(b"\n", 0, offset) + 1
    return SourceLocation(path=template_path, line=line, column=offset - line_start + 1)


def render_bytes(template: bytes, working_directory: Path, template_path: Path) -> bytes:
    """Resolve every include directive in ``template``.

    Args:
        template: Raw template content.
        working_directory: Base directory for include paths.
        template_path: Used only for error locations.

    Returns:
        The rendered bytes.

    Raises:
        MalformedDirective: A directive is unterminated or invalid.
        MissingInclude: A referenced file does not exist.
    """
    parts: list[bytes] = []
    pos = 0

    while True:
        start = template.find(OPEN_DELIMITER, pos)
        if start == -1:
            parts.append(template[pos:])
            break

        location = _locate(template_path, template, start)
        end = template.find(CLOSE_DELIMITER, start + len(OPEN_DELIMITER))
        if end == -1:
            raise MalformedDirective(location, "directive is not closed before end of input")

        body = template[start + len(OPEN_DELIMITER):end].strip()
        match = _INCLUDE_RE.match(body)
        if match is None:
            shown = body.decode("utf-8", errors="replace")
            raise MalformedDirective(location, f'expected include "<path>", got {shown!r}')

        try:
            relative = Path(match.group(1).decode("utf-8"))
        except UnicodeDecodeError as e:
            raise MalformedDirective(location, f"include path is not valid UTF-8: {e}") from e
        target = working_directory / relative
        if not target.is_file():
            raise MissingInclude(relative, location)

        logger.debug("Including %s at %s", target, location)
        parts.append(template[pos:start])
        parts.append(target.read_bytes())
        pos = end + len(CLOSE_DELIMITER)

    return b"".join(parts)


def render(
    template_path: Path,
    working_directory: Path,
    destination: Path | None = None,
) -> RenderedArtifact:
    """Render one template file into an artifact.

    Args:
        template_path: The template to read.
        working_directory: Base directory for include paths.
        destination: Where the rendered content belongs.

    Returns:
        RenderedArtifact holding the rendered bytes.

    Raises:
        RenderError: If the template has a bad or dangling directive.
        OSError: If the template itself cannot be read.
    """
    template = Path(template_path).read_bytes()
    content = render_bytes(template, Path(working_directory), Path(template_path))
    return RenderedArtifact(
        content=content,
        destination=destination,
        reason=f"rendered from {Path(template_path).name}",
    )


def render_readme(directory: Path) -> RenderedArtifact:
    """Render ``<directory>/README.tmpl.md`` into ``<directory>/README.md``."""
    directory = Path(directory)
    return render(
        directory / README_TEMPLATE,
        directory,
        destination=directory / README_OUTPUT,
    )

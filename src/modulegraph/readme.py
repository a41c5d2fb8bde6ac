"""Inserts a rendered diagram into a Markdown document below a heading marker.

The region from the heading to the end of the document is owned by
modulegraph: on every run it is replaced wholesale, so patching is
idempotent and old diagrams never pile up under the heading.
"""

import logging
from pathlib import Path

from .errors import MissingTargetFileError, UnreadableTargetError, UnwritableTargetError

logger = logging.getLogger(__name__)

FENCE = "```"
DIAGRAM_LANGUAGE = "mermaid"


def fence_diagram(diagram: str, language: str = DIAGRAM_LANGUAGE) -> str:
    """Wrap rendered diagram text in a fenced code block."""
    if diagram and not diagram.endswith("\n"):
        diagram += "\n"
    return f"{FENCE}{language}\n{diagram}{FENCE}"


def build_section(heading: str, fenced_diagram: str) -> str:
    return f"{heading}\n{fenced_diagram}"


def patch_document(
    current_content: str | None,
    heading: str,
    fenced_diagram: str,
    create_if_missing: bool = False,
    target: str | Path | None = None,
) -> str:
    """Produce the new document content with the diagram under ``heading``.

    Args:
        current_content: Existing document text, or None when the file is absent
        heading: Marker line the diagram lives under
        fenced_diagram: Diagram already wrapped by ``fence_diagram``
        create_if_missing: Whether an absent document may be created
        target: Document location, used only for error context

    Returns:
        The complete new document content

    Raises:
        MissingTargetFileError: If the document is absent and may not be created
    """
    section = build_section(heading, fenced_diagram)

    if current_content is None:
        if not create_if_missing:
            raise MissingTargetFileError(target)
        logger.debug(f"Creating new document with heading {heading!r}")
        return section

    index = current_content.find(heading)
    if index >= 0:
        logger.debug(f"Replacing content below heading {heading!r} at offset {index}")
        return current_content[:index] + section

    logger.debug(f"Heading {heading!r} not found, appending new section")
    return current_content + _separator(current_content) + section


def _separator(content: str) -> str:
    """Keep one blank line between existing content and an appended heading."""
    if not content:
        return ""
    if content.endswith("\n"):
        return "\n"
    return "\n\n"


def read_document(path: Path) -> str | None:
    """Read the target document, returning None when it does not exist.

    Raises:
        UnreadableTargetError: If the path exists but cannot be read as UTF-8 text
    """
    if not path.exists():
        return None
    try:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        raise UnreadableTargetError(path, e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise UnreadableTargetError(path, f"not valid UTF-8 ({e.reason})") from e


def write_document(path: Path, content: str) -> None:
    """Write the full document content in one operation.

    Raises:
        UnwritableTargetError: If the file cannot be written
    """
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise UnwritableTargetError(path, e.strerror or str(e)) from e

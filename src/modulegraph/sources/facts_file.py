"""Dependency facts supplied as a JSON or JSON Lines document.

Accepted shapes::

    {"dependencies": [{"from": ":app", "to": ":libs:core", "configuration": "api"}]}
    [{"from": ":app", "to": ":libs:core"}]

or one such object per line (``.jsonl``).
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..graph.models import DependencyFact

logger = logging.getLogger(__name__)


class DependencyEntry(BaseModel):
    """Shape of one dependency object in a facts file."""
    source: str | list[str] = Field(alias="from")
    target: str | list[str] = Field(alias="to")
    configuration: str | None = None
    label: str | None = None

    model_config = ConfigDict(populate_by_name=True, frozen=True)


def fact_from_dict(entry: dict[str, Any]) -> DependencyFact:
    """Create a fact from one JSON object.

    Raises:
        ValueError: If ``from`` or ``to`` is missing, or a field has the wrong type
    """
    if not isinstance(entry, dict):
        raise ValueError(f"Dependency entry must be an object, got: {entry!r}")

    try:
        parsed = DependencyEntry(**entry)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise ValueError(f"Invalid dependency entry {entry!r}: {problems}") from None

    label = parsed.configuration if parsed.configuration is not None else parsed.label
    return DependencyFact(source=parsed.source, target=parsed.target, label=label)


class FactsFileSource:
    """Reads dependency facts from a JSON or JSON Lines file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def collect(self) -> list[DependencyFact]:
        """Load all facts in file order.

        Raises:
            FileNotFoundError: If the facts file doesn't exist
            ValueError: If the file is not valid JSON or an entry is malformed
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Facts file not found: {self.path}")

        with open(self.path, encoding="utf-8") as f:
            content = f.read()

        if self.path.suffix == ".jsonl":
            entries = self._parse_lines(content)
        else:
            entries = self._parse_document(content)

        try:
            facts = [fact_from_dict(entry) for entry in entries]
        except ValueError as e:
            raise ValueError(f"Invalid dependency in {self.path}: {e}")

        logger.info(f"Loaded {len(facts)} dependency facts from {self.path}")
        return facts

    def _parse_document(self, content: str) -> list[Any]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in facts file {self.path}: {e}")

        if isinstance(data, dict):
            data = data.get("dependencies")
        if not isinstance(data, list):
            raise ValueError(f"Facts file {self.path} must contain a 'dependencies' list")
        return data

    def _parse_lines(self, content: str) -> list[Any]:
        entries = []
        for line_number, line in enumerate(content.splitlines(), 1):
            if not line.strip():
                continue
            try:
                entries.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON on line {line_number} of {self.path}: {e}")
        return entries

"""Graph data models for module dependency diagrams."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

_SEGMENT_SEPARATORS = re.compile(r"[:/\\]")


def normalize_module_path(path: str | Sequence[str]) -> tuple[str, ...]:
    """Split a module path into its non-empty segments.

    Accepts Gradle notation (``:groupFolder:example2``), slash notation
    (``groupFolder/example2``) or an already split sequence of segments.

    Raises:
        ValueError: If the path is not text, or has no segments
    """
    if isinstance(path, str):
        segments = _SEGMENT_SEPARATORS.split(path)
    elif isinstance(path, (list, tuple)) and all(isinstance(segment, str) for segment in path):
        segments = list(path)
    else:
        raise ValueError(f"Module path must be a string or a list of strings, got: {path!r}")

    normalized = tuple(segment.strip() for segment in segments if segment and segment.strip())
    if not normalized:
        raise ValueError(f"Module path must contain at least one segment, got: {path!r}")
    return normalized


@dataclass(frozen=True)
class DependencyFact:
    """One declared dependency between two modules, as supplied by a fact source."""
    source: tuple[str, ...]
    target: tuple[str, ...]
    label: str | None = None  # Dependency kind, e.g. "implementation"

    def __post_init__(self):
        object.__setattr__(self, "source", normalize_module_path(self.source))
        object.__setattr__(self, "target", normalize_module_path(self.target))
        if self.label is not None:
            if not isinstance(self.label, str):
                raise ValueError(f"Dependency label must be a string, got: {self.label!r}")
            object.__setattr__(self, "label", self.label.strip() or None)

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


@dataclass(frozen=True)
class Module:
    """A module of the build, identified by its full hierarchical path."""
    path: tuple[str, ...]

    @property
    def name(self) -> str:
        """Display label: the last path segment."""
        return self.path[-1]

    @property
    def parent_path(self) -> tuple[str, ...]:
        return self.path[:-1]

    @property
    def group(self) -> str:
        """Grouping key; empty for top-level modules."""
        return "/".join(self.parent_path)

    @property
    def full_path(self) -> str:
        return "/".join(self.path)

    @property
    def is_top_level(self) -> bool:
        return not self.parent_path


@dataclass(frozen=True)
class Edge:
    """Directed dependency edge between two modules."""
    source: Module
    target: Module
    label: str | None = None

    @property
    def key(self) -> tuple[tuple[str, ...], tuple[str, ...], str | None]:
        """Identity used for deduplication."""
        return (self.source.path, self.target.path, self.label)


@dataclass(frozen=True)
class Graph:
    """Normalized, immutable dependency graph ready for rendering."""
    modules: tuple[Module, ...] = field(default_factory=tuple)
    edges: tuple[Edge, ...] = field(default_factory=tuple)

    def __post_init__(self):
        known = set(self.modules)
        for edge in self.edges:
            if edge.source not in known or edge.target not in known:
                raise ValueError(
                    f"Edge {edge.source.full_path} -> {edge.target.full_path} "
                    "references a module outside the graph"
                )

    def groups(self) -> dict[str, list[Module]]:
        """Modules keyed by group, in order of first appearance.

        Top-level modules are never part of a group.
        """
        groups: dict[str, list[Module]] = {}
        for module in self.modules:
            if module.is_top_level:
                continue
            groups.setdefault(module.group, []).append(module)
        return groups

    def ungrouped(self) -> list[Module]:
        """Top-level modules, in order of first appearance."""
        return [module for module in self.modules if module.is_top_level]

    @property
    def is_empty(self) -> bool:
        return not self.modules

"""Builds a normalized Graph from raw dependency facts."""

import logging
from collections.abc import Iterable

from .models import DependencyFact, Edge, Graph, Module

logger = logging.getLogger(__name__)


class GraphBuilder:
    """Accumulates dependency facts and produces an immutable Graph.

    Modules are keyed by full path and edges by (source, target, label).
    Both keep the order in which they were first seen, so the rendered
    diagram is stable for a stable fact order.
    """

    def __init__(self):
        self._modules: dict[tuple[str, ...], Module] = {}
        self._edges: dict[tuple, Edge] = {}
        self._facts_seen = 0

    def add_fact(self, fact: DependencyFact) -> None:
        """Add a single fact; duplicates are absorbed."""
        self._facts_seen += 1
        source = self._module(fact.source)
        target = self._module(fact.target)

        if fact.is_self_loop:
            logger.debug(f"Keeping self-loop on {source.full_path}")

        edge = Edge(source=source, target=target, label=fact.label)
        if edge.key not in self._edges:
            self._edges[edge.key] = edge

    def add_facts(self, facts: Iterable[DependencyFact]) -> None:
        for fact in facts:
            self.add_fact(fact)

    def build(self) -> Graph:
        graph = Graph(
            modules=tuple(self._modules.values()),
            edges=tuple(self._edges.values()),
        )
        logger.debug(
            f"Built graph from {self._facts_seen} facts: "
            f"{len(graph.modules)} modules, {len(graph.edges)} edges"
        )
        return graph

    def _module(self, path: tuple[str, ...]) -> Module:
        module = self._modules.get(path)
        if module is None:
            module = Module(path=path)
            self._modules[path] = module
        return module


def build_graph(facts: Iterable[DependencyFact]) -> Graph:
    """Build a graph from facts in one pass."""
    builder = GraphBuilder()
    builder.add_facts(facts)
    return builder.build()


def filter_facts(facts: Iterable[DependencyFact], excluded_labels: Iterable[str]) -> list[DependencyFact]:
    """Drop facts whose dependency kind is in ``excluded_labels``."""
    excluded = set(excluded_labels)
    if not excluded:
        return list(facts)
    return [fact for fact in facts if fact.label not in excluded]

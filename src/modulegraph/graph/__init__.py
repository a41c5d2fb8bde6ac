"""Module dependency graph: data model, builder and Mermaid renderer."""

from .builder import GraphBuilder, build_graph, filter_facts
from .mermaid import MermaidRenderer, direction_code, render
from .models import DependencyFact, Edge, Graph, Module, normalize_module_path

__all__ = [
    "DependencyFact",
    "Module",
    "Edge",
    "Graph",
    "GraphBuilder",
    "MermaidRenderer",
    "build_graph",
    "direction_code",
    "filter_facts",
    "normalize_module_path",
    "render",
]

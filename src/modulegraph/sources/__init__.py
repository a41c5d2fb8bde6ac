"""Dependency fact sources.

A source turns some description of a multi-module build into an ordered
list of DependencyFact objects.
"""

from pathlib import Path

from ..config import ModuleGraphConfig, SourceKind
from .facts_file import FactsFileSource, fact_from_dict
from .gradle import GradleSource


def create_source(config: ModuleGraphConfig, project_dir: Path, base_dir: Path | None = None):
    """Create the fact source selected by ``config.source``.

    Args:
        config: Loaded configuration
        project_dir: Root of the multi-module build
        base_dir: Directory relative paths in the config resolve against
    """
    if config.source.kind == SourceKind.FACTS:
        return FactsFileSource(config.resolve_facts_file(base_dir or project_dir))
    return GradleSource(project_dir)


__all__ = [
    "FactsFileSource",
    "GradleSource",
    "create_source",
    "fact_from_dict",
]

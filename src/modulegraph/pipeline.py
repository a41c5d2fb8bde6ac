"""One modulegraph run: facts -> graph -> Mermaid -> patched document."""

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import ModuleGraphConfig
from .graph import Graph, build_graph, filter_facts, render
from .readme import fence_diagram, patch_document, read_document, write_document
from .sources import create_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a successful run."""
    graph: Graph
    diagram: str
    target: Path
    created: bool
    changed: bool


def create_module_graph(
    config: ModuleGraphConfig,
    project_dir: Path,
    config_dir: Path | None = None,
    source=None,
) -> PipelineResult:
    """Render the module graph and write it into the configured document.

    Args:
        config: Validated configuration
        project_dir: Root of the multi-module build
        config_dir: Directory relative config paths resolve against (default: project_dir)
        source: Fact source override; defaults to the one selected by config

    Returns:
        PipelineResult describing what was written

    Raises:
        MissingTargetFileError: If the document is absent and may not be created
        UnwritableTargetError: If the document cannot be written
    """
    project_dir = Path(project_dir)
    base_dir = Path(config_dir) if config_dir else project_dir

    if source is None:
        source = create_source(config, project_dir, base_dir)

    facts = source.collect()
    if config.excluded_configurations:
        total = len(facts)
        facts = filter_facts(facts, config.excluded_configurations)
        logger.info(f"Excluded {total - len(facts)} facts by configuration")

    graph = build_graph(facts)
    logger.info(f"Graph has {len(graph.modules)} modules and {len(graph.edges)} edges")

    diagram = render(graph, config)

    target = config.resolve_readme_path(base_dir)
    current = read_document(target)
    new_content = patch_document(
        current,
        config.heading,
        fence_diagram(diagram),
        create_if_missing=config.create_readme_if_missing,
        target=target,
    )

    changed = new_content != current
    if changed:
        write_document(target, new_content)
        logger.info(f"Wrote module graph to {target}")
    else:
        logger.info(f"{target} is already up to date")

    return PipelineResult(
        graph=graph,
        diagram=diagram,
        target=target,
        created=current is None,
        changed=changed,
    )

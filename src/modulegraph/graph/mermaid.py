"""Mermaid diagram renderer for module dependency graphs."""

import logging
import re

from ..config import LinkText, Orientation, Theme
from ..errors import UnsupportedOrientationError
from .models import Edge, Graph

logger = logging.getLogger(__name__)

INDENT = "  "

_PLAIN_ID = re.compile(r"^[A-Za-z0-9_-]+$")

_DIRECTION_CODES = {
    Orientation.TOP_TO_BOTTOM: "TB",
    Orientation.LEFT_TO_RIGHT: "LR",
    Orientation.RIGHT_TO_LEFT: "RL",
    Orientation.BOTTOM_TO_TOP: "BT",
}


class MermaidRenderer:
    """Serializes a Graph as a Mermaid ``graph`` flowchart.

    The output is meant to sit inside a ```` ```mermaid ```` fence; adding the
    fence is left to the document patcher.
    """

    def __init__(
        self,
        theme: Theme | None = None,
        orientation: Orientation = Orientation.LEFT_TO_RIGHT,
        link_text: LinkText = LinkText.NONE,
    ):
        self.theme = theme
        self.orientation = orientation
        self.link_text = link_text

    @classmethod
    def from_config(cls, config) -> "MermaidRenderer":
        """Create a renderer from a ModuleGraphConfig."""
        return cls(theme=config.theme, orientation=config.orientation, link_text=config.link_text)

    @property
    def format_name(self) -> str:
        return "mermaid"

    def render(self, graph: Graph) -> str:
        """Render graph as Mermaid text ending with a blank line."""
        lines = []

        # Header
        lines.extend(self._render_init())
        lines.append(f"graph {direction_code(self.orientation)}")
        lines.append("")

        # Subgraphs, one per group
        for group, modules in graph.groups().items():
            lines.append(f"{INDENT}subgraph {self._subgraph_title(group)}")
            for module in modules:
                lines.append(f"{INDENT}{INDENT}{module.name}")
            lines.append(f"{INDENT}end")

        # Edges
        for edge in graph.edges:
            lines.append(f"{INDENT}{self._render_edge(edge)}")

        lines.append("")
        lines.append("")
        return "\n".join(lines)

    def _render_init(self) -> list[str]:
        if self.theme is None:
            return []
        return [
            "%%{",
            f"{INDENT}init: {{",
            f"{INDENT}{INDENT}'theme': '{Theme(self.theme).value}'",
            f"{INDENT}}}",
            "}%%",
            "",
        ]

    def _render_edge(self, edge: Edge) -> str:
        source = edge.source.name
        target = edge.target.name
        if self.link_text == LinkText.CONFIGURATION and edge.label:
            return f"{source} -- {edge.label} --> {target}"
        return f"{source} --> {target}"

    def _subgraph_title(self, group: str) -> str:
        """Plain identifiers are used as-is; anything else gets a quoted label."""
        if _PLAIN_ID.match(group):
            return group
        safe_id = re.sub(r"[^a-zA-Z0-9_]", "_", group)
        label = group.replace('"', "'")
        return f'{safe_id}["{label}"]'


def direction_code(orientation: Orientation) -> str:
    """Map an orientation to its two-letter Mermaid direction code.

    Raises:
        UnsupportedOrientationError: If the value is not an Orientation member
    """
    try:
        return _DIRECTION_CODES[Orientation(orientation)]
    except (KeyError, ValueError):
        raise UnsupportedOrientationError(orientation) from None


def render(graph: Graph, config) -> str:
    """Render ``graph`` with the theme, orientation and link text of ``config``."""
    renderer = MermaidRenderer.from_config(config)
    logger.debug(f"Rendering {len(graph.edges)} edges with {renderer.format_name} renderer")
    return renderer.render(graph)

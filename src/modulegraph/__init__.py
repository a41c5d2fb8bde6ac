"""modulegraph - Mermaid diagrams of multi-module build dependencies.

modulegraph reads the project dependencies declared between the modules of a
multi-module build, renders them as a Mermaid flowchart and keeps that
diagram current in a README below a heading marker.
"""

__version__ = "0.1.0"
__description__ = "Mermaid diagrams of multi-module build dependencies"

from modulegraph.config import ModuleGraphConfig

__all__ = [
    "__version__",
    "__description__",
    "ModuleGraphConfig",
]

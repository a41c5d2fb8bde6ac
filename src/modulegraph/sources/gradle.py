"""Gradle build script scanner.

Reads the module list from settings.gradle(.kts) and the project
dependencies each module declares in its build.gradle(.kts). This is a
text scan of the declarations, not an evaluation of the build.
"""

import logging
import re
from pathlib import Path

from ..graph.models import DependencyFact

logger = logging.getLogger(__name__)

SETTINGS_FILES = ("settings.gradle.kts", "settings.gradle")
BUILD_FILES = ("build.gradle.kts", "build.gradle")

_LINE_COMMENT = re.compile(r"(^|\s)//[^\n]*")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_QUOTED = re.compile(r"""["']([^"']+)["']""")

# include(":a", ":b") over one or more lines
_INCLUDE_CALL = re.compile(r"\binclude\s*\(([^)]*)\)", re.DOTALL)
# include ':a', ':b'
_INCLUDE_GROOVY = re.compile(r"\binclude[ \t]+([^\n(]+)")
_ROOT_NAME = re.compile(r"""rootProject\.name\s*=\s*["']([^"']+)["']""")

# Calls that wrap a project reference without being a configuration themselves
_WRAPPER_CALLS = ("platform", "enforcedPlatform", "testFixtures")
_WRAPPER = r"(?:(?:" + "|".join(_WRAPPER_CALLS) + r")\s*\(\s*)?"

# implementation(project(":a")), implementation(project(path = ":a")), api project(':a'),
# implementation(platform(project(":bom")))
_PROJECT_DEPENDENCY = re.compile(
    r"""\b([A-Za-z_]\w*)\s*\(?\s*""" + _WRAPPER + r"""project\s*\(\s*(?:path\s*[:=]\s*)?["']([^"']+)["']"""
)
# implementation(projects.groupFolder.example2)
_ACCESSOR_DEPENDENCY = re.compile(r"\b([A-Za-z_]\w*)\s*\(?\s*" + _WRAPPER + r"projects\.([A-Za-z_][\w.]*)")


def strip_comments(text: str) -> str:
    """Remove Kotlin/Groovy line and block comments."""
    text = _BLOCK_COMMENT.sub("", text)
    return _LINE_COMMENT.sub(r"\1", text)


def parse_settings(text: str) -> tuple[str | None, list[str]]:
    """Extract the root project name and included module paths, in order.

    Returns:
        Tuple of (root project name or None, list of Gradle paths)
    """
    text = strip_comments(text)
    root_match = _ROOT_NAME.search(text)
    root_name = root_match.group(1) if root_match else None

    found: list[tuple[int, str]] = []
    spans = []
    for match in _INCLUDE_CALL.finditer(text):
        spans.append(match.span())
        for quoted in _QUOTED.finditer(match.group(1)):
            found.append((match.start(1) + quoted.start(), quoted.group(1)))

    for match in _INCLUDE_GROOVY.finditer(text):
        if any(start <= match.start() < end for start, end in spans):
            continue
        for quoted in _QUOTED.finditer(match.group(1)):
            found.append((match.start(1) + quoted.start(), quoted.group(1)))

    includes = []
    for _, path in sorted(found):
        gradle_path = path if path.startswith(":") else f":{path}"
        if gradle_path not in includes:
            includes.append(gradle_path)
    return root_name, includes


def with_parent_projects(includes: list[str]) -> list[str]:
    """Add the implicit parent projects Gradle creates for nested includes.

    ``:groupFolder:example2`` also declares ``:groupFolder``, which may carry
    its own build script. Parents are placed before their first child.
    """
    expanded: list[str] = []
    for path in includes:
        segments = [segment for segment in path.split(":") if segment]
        for depth in range(1, len(segments) + 1):
            candidate = ":" + ":".join(segments[:depth])
            if candidate not in expanded:
                expanded.append(candidate)
    return expanded


def project_accessor(gradle_path: str) -> str:
    """Type-safe project accessor for a path, e.g. ``:group-folder:app`` -> ``groupFolder.app``."""
    segments = [segment for segment in gradle_path.split(":") if segment]
    return ".".join(_camel_case(segment) for segment in segments)


def _camel_case(segment: str) -> str:
    words = [word for word in re.split(r"[-_]", segment) if word]
    if not words:
        return segment
    return words[0][0].lower() + words[0][1:] + "".join(word[:1].upper() + word[1:] for word in words[1:])


def parse_build_dependencies(text: str, accessors: dict[str, str] | None = None) -> list[tuple[str, str]]:
    """Extract (configuration, gradle path) pairs from a build script, in file order."""
    text = strip_comments(text)
    accessors = accessors or {}

    found: list[tuple[int, str, str]] = []
    for match in _PROJECT_DEPENDENCY.finditer(text):
        configuration, path = match.group(1), match.group(2)
        if configuration == "project" or configuration in _WRAPPER_CALLS:
            continue
        found.append((match.start(), configuration, path if path.startswith(":") else f":{path}"))

    for match in _ACCESSOR_DEPENDENCY.finditer(text):
        configuration, accessor = match.group(1), match.group(2)
        if configuration in _WRAPPER_CALLS:
            continue
        path = accessors.get(accessor)
        if path is None:
            logger.debug(f"Ignoring unknown project accessor projects.{accessor}")
            continue
        found.append((match.start(), configuration, path))

    return [(configuration, path) for _, configuration, path in sorted(found)]


class GradleSource:
    """Collects dependency facts from a Gradle multi-project build."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)

    def find_settings_file(self) -> Path | None:
        for name in SETTINGS_FILES:
            candidate = self.project_dir / name
            if candidate.is_file():
                return candidate
        return None

    def collect(self) -> list[DependencyFact]:
        """Scan settings and build scripts for project dependencies.

        Raises:
            FileNotFoundError: If no settings.gradle(.kts) exists in the project dir
        """
        settings_file = self.find_settings_file()
        if settings_file is None:
            raise FileNotFoundError(f"No settings.gradle(.kts) found in {self.project_dir}")

        root_name, includes = parse_settings(settings_file.read_text(encoding="utf-8"))
        root_name = root_name or self.project_dir.resolve().name
        logger.info(f"Found {len(includes)} included modules in {settings_file.name}")

        projects = with_parent_projects(includes)
        accessors = {project_accessor(path): path for path in projects}

        facts: list[DependencyFact] = []
        modules = [(":", self.project_dir)] + [(path, self._module_dir(path)) for path in projects]
        for gradle_path, module_dir in modules:
            build_file = self._find_build_file(module_dir)
            if build_file is None:
                logger.debug(f"No build script for {gradle_path} in {module_dir}")
                continue

            source = (root_name,) if gradle_path == ":" else gradle_path
            dependencies = parse_build_dependencies(build_file.read_text(encoding="utf-8"), accessors)
            for configuration, target in dependencies:
                facts.append(DependencyFact(source=source, target=target, label=configuration))

        logger.info(f"Collected {len(facts)} project dependencies")
        return facts

    def _module_dir(self, gradle_path: str) -> Path:
        segments = [segment for segment in gradle_path.split(":") if segment]
        return self.project_dir.joinpath(*segments)

    @staticmethod
    def _find_build_file(module_dir: Path) -> Path | None:
        for name in BUILD_FILES:
            candidate = module_dir / name
            if candidate.is_file():
                return candidate
        return None

"""Configuration management for modulegraph using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CONFIG_FILE_NAME = ".modulegraph.json"


class _NamedEnum(str, Enum):
    """String enum that also accepts member names, e.g. ``RIGHT_TO_LEFT``."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            member = cls.__members__.get(value.upper())
            if member is not None:
                return member
            for candidate in cls:
                if candidate.value.lower() == value.lower():
                    return candidate
        return None


class Theme(_NamedEnum):
    """Mermaid color themes."""
    DEFAULT = "default"
    BASE = "base"
    DARK = "dark"
    FOREST = "forest"
    NEUTRAL = "neutral"


class Orientation(_NamedEnum):
    """Diagram flow direction; values are Mermaid direction codes."""
    TOP_TO_BOTTOM = "TB"
    LEFT_TO_RIGHT = "LR"
    RIGHT_TO_LEFT = "RL"
    BOTTOM_TO_TOP = "BT"


class LinkText(_NamedEnum):
    """Whether dependency kinds are printed on edges."""
    NONE = "none"
    CONFIGURATION = "configuration"


class SourceKind(_NamedEnum):
    """Where dependency facts come from."""
    GRADLE = "gradle"
    FACTS = "facts"


class LogLevel(_NamedEnum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class SourceConfig(BaseModel):
    """Fact source configuration section."""
    kind: SourceKind = SourceKind.GRADLE
    facts_file: str | None = Field(alias="factsFile", default=None)

    @model_validator(mode="after")
    def validate_facts_file(self):
        if self.kind == SourceKind.FACTS and not self.facts_file:
            raise ValueError("factsFile is required when source kind is 'facts'")
        return self

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(frozen=True)


class ModuleGraphConfig(BaseModel):
    """Complete modulegraph configuration.

    Rendering options (theme, orientation, linkText, heading) and the target
    document policy (readmePath, createReadmeIfMissing) live here; nothing is
    read from the command line.
    """
    heading: str
    readme_path: str = Field(alias="readmePath")
    theme: Theme | None = None
    orientation: Orientation = Orientation.LEFT_TO_RIGHT
    link_text: LinkText = Field(alias="linkText", default=LinkText.NONE)
    create_readme_if_missing: bool = Field(alias="createReadmeIfMissing", default=False)
    excluded_configurations: list[str] = Field(alias="excludedConfigurations", default_factory=list)
    source: SourceConfig = Field(default_factory=SourceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("theme", "orientation", "link_text", mode="before")
    @classmethod
    def validate_enum_name_or_value(cls, v, info):
        """Accept ``RIGHT_TO_LEFT`` as well as ``RL``."""
        if v is None or not isinstance(v, str):
            return v
        enum_type = {"theme": Theme, "orientation": Orientation, "link_text": LinkText}[info.field_name]
        try:
            return enum_type(v)
        except ValueError:
            allowed = ", ".join(member.name for member in enum_type)
            raise ValueError(f"{info.field_name} must be one of {allowed}, got: {v}")

    @field_validator("heading", "readme_path")
    @classmethod
    def validate_not_blank(cls, v, info):
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} must not be blank")
        return v

    @field_validator("heading")
    @classmethod
    def validate_single_line_heading(cls, v):
        if "\n" in v or "\r" in v:
            raise ValueError("heading must be a single line")
        return v

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    def resolve_readme_path(self, base_dir: Path) -> Path:
        """Resolve the target document against ``base_dir`` when relative."""
        return _resolve(self.readme_path, base_dir)

    def resolve_facts_file(self, base_dir: Path) -> Path | None:
        if self.source.facts_file is None:
            return None
        return _resolve(self.source.facts_file, base_dir)


def _resolve(path: str, base_dir: Path) -> Path:
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return (base_dir / candidate).resolve()


def load_config(config_path: str | Path | None = None) -> ModuleGraphConfig:
    """Load and validate configuration from a JSON file.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .modulegraph.json

    Returns:
        ModuleGraphConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If no configuration file can be found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            raise FileNotFoundError(
                f"No {CONFIG_FILE_NAME} found in the current directory or its parents"
            )
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}")

    try:
        return ModuleGraphConfig(**config_data)
    except Exception as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Locate the nearest .modulegraph.json, walking from ``start_dir`` to the filesystem root.

    A build nested inside a larger repository picks up the repository's
    configuration unless it carries its own.
    """
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None

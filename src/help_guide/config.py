"""TOML config loader and validation."""

import dataclasses
import re
import tomllib
from pathlib import Path

CONFIG_DIR = ".help_guide"
CONFIG_FILE = "config.toml"

_HEX_COLOR_RE = re.compile(r"#[0-9A-Fa-f]{6}")


@dataclasses.dataclass(frozen=True)
class Appearance:
    """Styling handed to the presentation layer at construction.

    The document and query modules never read this.
    """

    tint_color: str | None = None
    article_background_color: str = "#FFFFFF"
    article_text_color: str = "#000000"


def config_path(project_path: Path) -> Path:
    return project_path / CONFIG_DIR / CONFIG_FILE


def load_config(project_path: Path) -> dict | None:
    """Read the project's guide settings, or None when the project has none yet."""
    settings_file = config_path(project_path)
    if not settings_file.is_file():
        return None
    return tomllib.loads(settings_file.read_text(encoding="utf-8"))


def require_config_section(config: dict | None, section: str) -> dict:
    """Return a [section] table of the guide settings or raise RuntimeError."""
    where = f"{CONFIG_DIR}/{CONFIG_FILE}"
    if config is None:
        raise RuntimeError(
            f"No guide settings found; expected {where}. "
            f"Run 'guide init' to point the project at its guide document."
        )
    value = config.get(section)
    if value is None:
        raise RuntimeError(f"Guide settings in {where} have no [{section}] table.")
    if not isinstance(value, dict):
        raise RuntimeError(
            f"Guide settings [{section}] must be a table, not {type(value).__name__}"
        )
    return value


def resolve_document_path(config: dict | None, project_path: Path) -> Path:
    """Guide document path from [document], relative to the project root."""
    section = require_config_section(config, "document")
    path = section.get("path")
    if not isinstance(path, str) or not path:
        raise RuntimeError(f"[document] path must be a non-empty string, got {path!r}")
    return project_path / path


def resolve_build_number(config: dict | None) -> int | None:
    """Host build number from [build], or None when build gating is off."""
    if config is None or "build" not in config:
        return None
    number = require_config_section(config, "build").get("number")
    if number is None:
        return None
    if isinstance(number, bool) or not isinstance(number, int):
        raise ValueError(f"[build] number must be an integer, got {number!r}")
    return number


def require_appearance_config(config: dict | None) -> Appearance:
    """Extract [appearance] with defaults.

    Unlike [document], the [appearance] section is optional.
    """
    if config is None or "appearance" not in config:
        return Appearance()
    section = require_config_section(config, "appearance")
    known = {f.name for f in dataclasses.fields(Appearance)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(
            f"Unknown keys in [appearance] config: {', '.join(sorted(unknown))}. "
            f"Valid options: {', '.join(sorted(known))}"
        )
    for key, value in section.items():
        if not isinstance(value, str) or not _HEX_COLOR_RE.fullmatch(value):
            raise ValueError(
                f"[appearance] {key} must be a #RRGGBB color, got {value!r}"
            )
    return Appearance(**section)


def create_default_config(project_path: Path) -> Path:
    """Create a default config.toml in .help_guide/. Returns the path."""
    config_dir = project_path / CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    path = config_dir / CONFIG_FILE
    if path.exists():
        raise FileExistsError(f"Config already exists: {path}")
    path.write_text(
        '[document]\n'
        'path = "guide.json"\n'
        '\n'
        '# Articles outside [build_min, build_max] are hidden for this build.\n'
        '# [build]\n'
        '# number = 100\n'
        '\n'
        '[appearance]\n'
        '# tint_color = "#007AFF"\n'
        'article_background_color = "#FFFFFF"\n'
        'article_text_color = "#000000"\n'
    )
    return path

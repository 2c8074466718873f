"""Configuration file loading for versionpatch."""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from versionpatch.errors import VersionError, VersionFileError
from versionpatch.models import PatchConfig

CONFIG_FILE_NAME = ".versionpatch.yaml"


def find_config(start: Optional[Path] = None) -> Optional[Path]:
    """Walk up from start (default: cwd) looking for .versionpatch.yaml."""
    current = (start or Path.cwd()).resolve()
    for directory in [current, *current.parents]:
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path, **overrides: Any) -> PatchConfig:
    """Load a PatchConfig from a YAML file.

    Relative base_path values are resolved against the file's directory,
    which is also the default base_path. Keyword overrides that are not None
    replace values from the file.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise VersionFileError(f"Cannot read config: {e.strerror or e}", path=path) from e

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise VersionError(f"Invalid YAML in config: {e}", path=path) from e

    if not isinstance(data, dict):
        raise VersionError("Config must be a mapping", path=path)

    data.update({k: v for k, v in overrides.items() if v is not None})

    base_path = Path(data.get("base_path") or ".").expanduser()
    if not base_path.is_absolute():
        base_path = path.parent.resolve() / base_path
    data["base_path"] = base_path

    return build_config(data, source=path)


def build_config(data: dict[str, Any], source: Optional[Path] = None) -> PatchConfig:
    """Validate raw options into a PatchConfig, raising VersionError."""
    try:
        return PatchConfig(**data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise VersionError(f"Invalid configuration: {errors}", path=source) from e

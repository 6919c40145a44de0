from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


DEFAULT_IMAGE_DIRECTORY = "Config/Extra"


class ConfigurationError(RuntimeError):
    """Raised when required configuration is missing or malformed."""


def default_output_root() -> Path:
    return Path.home() / "Downloads"


@dataclass
class ConverterSettings:
    '''Expected variables in the settings file'''

    image_directory: str = DEFAULT_IMAGE_DIRECTORY
    vault_path: Optional[Path] = None
    output_root: Path = field(default_factory=default_output_root)

    @property
    def resolved_vault_path(self) -> Path:
        return self.vault_path if self.vault_path is not None else Path.cwd()

    @property
    def image_source_dir(self) -> Path:
        return self.resolved_vault_path / self.image_directory


def _parse_env_lines(text: str) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        raw[key.strip()] = value.strip().strip('"').strip("'")
    return raw


def load_settings(path: Path) -> ConverterSettings:
    """Parse the settings file and return ConverterSettings, falling back to defaults."""

    if not path.exists():
        return ConverterSettings()

    raw = _parse_env_lines(path.read_text(encoding="utf-8"))

    image_directory = raw.get("IMAGE_DIRECTORY", DEFAULT_IMAGE_DIRECTORY)
    if not image_directory:
        raise ConfigurationError(f"IMAGE_DIRECTORY is empty in {path}")

    vault_path = raw.get("VAULT_PATH")
    output_root = raw.get("OUTPUT_ROOT")
    return ConverterSettings(
        image_directory=image_directory
        ,vault_path=Path(vault_path).expanduser() if vault_path else None
        ,output_root=Path(output_root).expanduser() if output_root else default_output_root()
    )


def save_settings(path: Path, settings: ConverterSettings) -> None:
    """Write the settings back, replacing known keys and keeping every other line."""

    values: Dict[str, Optional[str]] = {
        "IMAGE_DIRECTORY": settings.image_directory
        ,"VAULT_PATH": str(settings.vault_path) if settings.vault_path else None
        ,"OUTPUT_ROOT": str(settings.output_root)
    }

    lines: List[str] = []
    if path.exists():
        for line in path.read_text(encoding="utf-8").splitlines():
            key = line.split("=", 1)[0].strip() if "=" in line else None
            if key in values and not line.strip().startswith("#"):
                continue
            lines.append(line)

    for key, value in values.items():
        if value is not None:
            lines.append(f"{key}={value}")

    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

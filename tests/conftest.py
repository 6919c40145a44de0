"""Shared fixtures: a small vault with an image directory and an output root."""

from pathlib import Path

import pytest

from obsidian_to_hugo.config import ConverterSettings


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(64))


@pytest.fixture
def vault_dir(tmp_path):
    vault = tmp_path / "vault"
    images = vault / "Config" / "Extra"
    images.mkdir(parents=True)
    (images / "img.png").write_bytes(PNG_BYTES)
    (images / "second.png").write_bytes(PNG_BYTES[::-1])
    return vault


@pytest.fixture
def output_root(tmp_path):
    return tmp_path / "Downloads"


@pytest.fixture
def settings(vault_dir, output_root):
    return ConverterSettings(vault_path=vault_dir, output_root=output_root)


@pytest.fixture
def write_note(vault_dir):
    """Write a note into the vault and return its path."""

    def _write(name: str, text: str) -> Path:
        path = vault_dir / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write

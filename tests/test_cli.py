"""Tests for the command-line front end and its user notices."""

from unittest.mock import patch

import pytest

from obsidian_to_hugo import cli
from obsidian_to_hugo.config import load_settings

from .conftest import PNG_BYTES


@pytest.fixture
def env_file(tmp_path, vault_dir, output_root):
    env = tmp_path / ".env"
    env.write_text(f"VAULT_PATH={vault_dir}\nOUTPUT_ROOT={output_root}\n", encoding="utf-8")
    return env


class TestRunCli:
    def test_no_note(self, capsys):
        assert cli.run_cli([]) == 1
        assert cli.NO_ACTIVE_NOTE in capsys.readouterr().out

    def test_note_does_not_exist(self, tmp_path, capsys):
        assert cli.run_cli([str(tmp_path / "nope.md")]) == 1
        assert cli.NO_ACTIVE_NOTE in capsys.readouterr().out

    def test_directory_name_required(self, write_note, env_file, output_root, capsys):
        note = write_note("Note.md", "body")
        with patch("obsidian_to_hugo.cli.ask_for_directory_name", return_value=None) as prompt:
            assert cli.run_cli(["--settings", str(env_file), str(note)]) == 1
        prompt.assert_called_once()
        assert cli.DIR_NAME_REQUIRED in capsys.readouterr().out
        assert not output_root.exists()

    def test_empty_dir_name_option(self, write_note, env_file, capsys):
        note = write_note("Note.md", "body")
        assert cli.run_cli(["--settings", str(env_file), "--dir-name", "", str(note)]) == 1
        assert cli.DIR_NAME_REQUIRED in capsys.readouterr().out

    def test_prompted_name_used(self, write_note, env_file, output_root, capsys):
        note = write_note("Note.md", "body")
        with patch("obsidian_to_hugo.cli.ask_for_directory_name", return_value="a|b"):
            assert cli.run_cli(["--settings", str(env_file), str(note)]) == 0
        assert (output_root / "a_b" / "index.md").exists()
        assert cli.CONVERSION_COMPLETE in capsys.readouterr().out

    def test_conversion_complete(self, write_note, env_file, output_root, capsys):
        note = write_note("Trip.md", "#travel ![[img.png]] and [[Plan]]")
        assert cli.run_cli(["--settings", str(env_file), "--dir-name", "trip", str(note)]) == 0

        out = capsys.readouterr().out
        assert cli.CONVERSION_COMPLETE in out
        assert "Copied img.png" in out
        assert (output_root / "trip" / "img.png").read_bytes() == PNG_BYTES
        assert "tags: [travel]" in (output_root / "trip" / "index.md").read_text(encoding="utf-8")

    def test_generic_error_notice(self, write_note, env_file, output_root, capsys):
        note = write_note("Note.md", "![[missing.png]]")
        assert cli.run_cli(["--settings", str(env_file), "--dir-name", "broken", str(note)]) == 1

        out = capsys.readouterr().out
        assert cli.CONVERSION_FAILED in out
        assert "missing.png" not in out
        assert cli.CONVERSION_COMPLETE not in out
        assert (output_root / "broken" / "index.md").exists()

    def test_keep_image_links(self, write_note, env_file, output_root):
        note = write_note("Note.md", "![[img.png]]")
        args = ["--settings", str(env_file), "--dir-name", "kept", "--keep-image-links", str(note)]
        assert cli.run_cli(args) == 0
        assert (output_root / "kept" / "index.md").read_text(encoding="utf-8").endswith("![](img.png)")

    def test_dry_run(self, write_note, env_file, output_root, capsys):
        note = write_note("Note.md", "see [[Other]] ![[img.png]]")
        assert cli.run_cli(["--settings", str(env_file), "--dir-name", "preview", "--dry-run", str(note)]) == 0

        out = capsys.readouterr().out
        assert "title: Note" in out
        assert "see Other ![]($1)" in out
        assert "Would copy image" in out
        assert not output_root.exists()

    def test_image_directory_override_saved(self, write_note, env_file, vault_dir, output_root):
        media = vault_dir / "Media"
        media.mkdir()
        (media / "photo.jpg").write_bytes(b"jpeg")
        note = write_note("Note.md", "![[photo.jpg]]")

        args = [
            "--settings", str(env_file),
            "--dir-name", "media",
            "--image-directory", "Media",
            "--save-settings",
            str(note),
        ]
        assert cli.run_cli(args) == 0
        assert (output_root / "media" / "photo.jpg").read_bytes() == b"jpeg"
        assert load_settings(env_file).image_directory == "Media"
        assert load_settings(env_file).vault_path == vault_dir

    def test_image_directory_override_not_saved(self, write_note, env_file, vault_dir):
        (vault_dir / "Media").mkdir()
        note = write_note("Note.md", "body")
        args = ["--settings", str(env_file), "--dir-name", "x", "--image-directory", "Media", str(note)]
        assert cli.run_cli(args) == 0
        assert load_settings(env_file).image_directory == "Config/Extra"

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List


# Tags match ASCII word characters only, as Obsidian's exporter plugin did.
TAG_RE = re.compile(r"#\w+(?:/\w+)*", re.ASCII)
IMAGE_EMBED_RE = re.compile(r"!\[\[([^\]]+)\]\]")
BRACKETS_RE = re.compile(r"\[\[([^\]]+)\]\]")


@dataclass
class ObsidianNote:
    text: str
    title: str
    path: Path


def note_title(path: Path) -> str:
    """Return the file name with a trailing .md removed."""

    return re.sub(r"\.md$", "", path.name)


def extract_tags(text: str) -> List[str]:
    """Return every inline tag without its '#', in order of appearance, duplicates kept."""

    return [match.group(0)[1:] for match in TAG_RE.finditer(text)]


def strip_tags(text: str) -> str:
    return TAG_RE.sub("", text).strip()


def extract_image_embeds(text: str) -> List[str]:
    return [match.group(1) for match in IMAGE_EMBED_RE.finditer(text)]


def parse_note(path: Path) -> ObsidianNote:
    text = path.read_text(encoding="utf-8")
    return ObsidianNote(text=text, title=note_title(path), path=path)

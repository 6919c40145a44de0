from __future__ import annotations

import logging
import re
import shutil
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from .config import ConverterSettings
from .parser import BRACKETS_RE, IMAGE_EMBED_RE, ObsidianNote, extract_image_embeds, extract_tags, strip_tags


logger = logging.getLogger(__name__)

UNSAFE_CHARS_RE = re.compile(r'[<>:"/\\|?*]')
INDEX_FILE_NAME = "index.md"

# Obsidian's exporter emitted this literal instead of the embed target.
IMAGE_LINK_PLACEHOLDER = "![]($1)"


class ConversionError(RuntimeError):
    """Raised when a note cannot be turned into a page bundle."""


def sanitize_dir_name(name: str) -> str:
    """Replace characters that are unsafe in directory names with underscores."""

    return UNSAFE_CHARS_RE.sub("_", name)


def format_timestamp(now: Optional[datetime] = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T09:30:00.000Z."""

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def create_front_matter(contents: str, title: str, now: Optional[datetime] = None) -> str:
    """Prepend Hugo front matter built from the note's inline tags and strip those tags from the body.

    Title and tags are written verbatim; values containing YAML metacharacters
    are not quoted.
    """

    formatted_date = format_timestamp(now)
    tags = ", ".join(extract_tags(contents))
    text_without_tags = strip_tags(contents)

    front_matter = "\n".join(
        [
            "---"
            ,f"title: {title}"
            ,f"date: {formatted_date}"
            ,"draft: false"
            ,f"tags: [{tags}]"
            ,f"categories: [{formatted_date[:4]}]"
            ,"---\n\n"
        ]
    )
    return front_matter + text_without_tags


def convert_wiki_links(contents: str, *, keep_image_targets: bool = False) -> str:
    """Rewrite ![[X]] embeds and [[X]] links into plain markdown.

    By default embeds become the literal ``![]($1)``; pass ``keep_image_targets``
    to get ``![](X)`` instead.
    """

    image_replacement = r"![](\1)" if keep_image_targets else IMAGE_LINK_PLACEHOLDER
    converted = IMAGE_EMBED_RE.sub(image_replacement, contents)
    return BRACKETS_RE.sub(r"\1", converted)


def image_source_path(image_name: str, settings: ConverterSettings) -> Path:
    return settings.image_source_dir / image_name


def copy_images(
    contents: str
    ,output_dir: Path
    ,settings: ConverterSettings
    ,*
    ,debug_logger: Optional[logging.Logger] = None
) -> List[Path]:
    """Copy every embedded image into output_dir, stopping at the first failure."""

    logger.info("Copying images to %s", output_dir)
    copied: List[Path] = []
    for image_name in extract_image_embeds(contents):
        source = image_source_path(image_name, settings)
        if not source.is_file():
            raise ConversionError(f"Image '{image_name}' not found at {source}")

        target = output_dir / image_name
        shutil.copyfile(source, target)
        copied.append(target)
        logger.info("Copied %s to %s", image_name, target)
        if debug_logger:
            debug_logger.info("Copied %s (%d bytes) -> %s", source, source.stat().st_size, target)
    return copied


@dataclass
class ConversionResult:
    note: ObsidianNote
    document: str
    output_dir: Path

    images: List[Path] = field(default_factory=list)
    written: bool = False

    @property
    def index_path(self) -> Path:
        return self.output_dir / INDEX_FILE_NAME


def convert_note(
    note: ObsidianNote
    ,dir_name: str
    ,settings: ConverterSettings
    ,*
    ,now: Optional[datetime] = None
    ,keep_image_targets: bool = False
    ,dry_run: bool = False
    ,debug_logger: Optional[logging.Logger] = None
) -> ConversionResult:
    """Build the page bundle for a note: index.md first, then the embedded images.

    Nothing is rolled back, so a failed image copy leaves index.md behind.
    """

    if not dir_name:
        raise ConversionError("Directory name is required.")

    output_dir = settings.output_root / sanitize_dir_name(dir_name)
    with_front_matter = create_front_matter(note.text, note.title, now)
    document = convert_wiki_links(with_front_matter, keep_image_targets=keep_image_targets)

    if debug_logger:
        debug_logger.info("Rendered %s for %s:\n%s", INDEX_FILE_NAME, note.path, document)

    if dry_run:
        planned = [output_dir / name for name in extract_image_embeds(note.text)]
        return ConversionResult(note=note, document=document, output_dir=output_dir, images=planned)

    output_dir.mkdir(parents=True, exist_ok=True)
    index_path = output_dir / INDEX_FILE_NAME
    index_path.write_text(document, encoding="utf-8")
    logger.info("Wrote %s", index_path)

    images = copy_images(note.text, output_dir, settings, debug_logger=debug_logger)

    return ConversionResult(
        note=note
        ,document=document
        ,output_dir=output_dir
        ,images=images
        ,written=True
    )

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from .config import ConverterSettings, load_settings, save_settings
from .exporter import ConversionResult, convert_note
from .parser import parse_note
from .prompt import ask_for_directory_name


NO_ACTIVE_NOTE = "No active note open."
DIR_NAME_REQUIRED = "Directory name is required."
CONVERSION_COMPLETE = "Conversion complete."
CONVERSION_FAILED = "Error during conversion. Check convert.log for details."


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the command-line parser for the converter CLI."""

    parser = argparse.ArgumentParser(description="Convert a single Obsidian note into a Hugo page bundle.")
    parser.add_argument("--dir-name", help="Output directory name; prompted for when omitted.")
    parser.add_argument("--settings", default=".env", help="Path to the settings file.")
    parser.add_argument("--image-directory", help="Vault-relative directory holding embedded images.")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist --image-directory to the settings file.",
    )
    parser.add_argument(
        "--keep-image-links",
        action="store_true",
        help="Write the image file name into rewritten embeds instead of the $1 placeholder.",
    )
    parser.add_argument("--dry-run", action="store_true", help="Print the converted note without writing anything.")
    parser.add_argument(
        "--debug-log",
        action="store_true",
        help="Write rendered documents and image copy details to convert.debug.log",
    )
    parser.add_argument("note_path", nargs="?", help="Markdown file to convert (the active note).")
    return parser


def notify(message: str, logger: logging.Logger) -> None:
    print(message)
    logger.info(message)


def resolve_settings(args: argparse.Namespace, logger: logging.Logger) -> ConverterSettings:
    """Load settings and apply command-line overrides, saving them when asked."""

    settings_path = Path(args.settings)
    settings = load_settings(settings_path)
    if args.image_directory:
        settings.image_directory = args.image_directory
        if args.save_settings:
            save_settings(settings_path, settings)
            logger.info("Saved IMAGE_DIRECTORY=%s to %s", settings.image_directory, settings_path)
    return settings


def report(result: ConversionResult, logger: logging.Logger) -> None:
    if not result.written:
        print(result.document)
        for image in result.images:
            print(f"[info] Would copy image to {image}")
        logger.info("Dry-run complete for %s", result.note.path)
        return

    for image in result.images:
        print(f"[info] Copied {image.name}")
    print(f"[info] Wrote {result.index_path}")


def run_cli(argv: Optional[list[str]] = None) -> int:
    """Entry point invoked by convert_note_for_hugo.py or tests."""

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logger = configure_logging()
    debug_logger = configure_debug_logger() if args.debug_log else None

    if not args.note_path or not Path(args.note_path).is_file():
        notify(NO_ACTIVE_NOTE, logger)
        return 1

    note_path = Path(args.note_path)
    logger.info("Active note found: %s", note_path)

    dir_name = args.dir_name if args.dir_name is not None else ask_for_directory_name()
    if not dir_name:
        notify(DIR_NAME_REQUIRED, logger)
        return 1

    try:
        settings = resolve_settings(args, logger)
        note = parse_note(note_path)
        result = convert_note(
            note
            ,dir_name
            ,settings
            ,keep_image_targets=args.keep_image_links
            ,dry_run=args.dry_run
            ,debug_logger=debug_logger
        )
    except Exception:
        print(CONVERSION_FAILED)
        logger.exception("Error during conversion of %s", note_path)
        return 1

    report(result, logger)
    notify(CONVERSION_COMPLETE, logger)
    return 0


LOG_PATH = Path(__file__).resolve().parent.parent / "convert.log"
DEBUG_LOG_PATH = Path(__file__).resolve().parent.parent / "convert.debug.log"
LOGGER_NAME = "obsidian_to_hugo"


def configure_logging() -> logging.Logger:
    """Set up the primary info-level logger that writes to convert.log."""

    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        logger.setLevel(logging.INFO)
        handler = logging.FileHandler(LOG_PATH, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(handler)
    return logger


def configure_debug_logger() -> logging.Logger:
    """Create or return the debug logger that captures rendered documents and copies."""

    debug_logger = logging.getLogger(f"{LOGGER_NAME}.debug")
    if not debug_logger.handlers:
        debug_logger.setLevel(logging.INFO)
        handler = logging.FileHandler(DEBUG_LOG_PATH, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s [DEBUG] %(message)s"))
        debug_logger.addHandler(handler)
    return debug_logger

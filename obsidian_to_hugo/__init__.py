"""
Utility package for turning a single Obsidian note into a Hugo page bundle.

The note is passed in explicitly (e.g., from an Obsidian shell command run at
the vault root). Front matter is synthesized from the note's inline tags, wiki
links are rewritten to plain markdown, and embedded images are copied next to
the generated index.md.
"""
__all__ = [
    "config",
    "parser",
    "exporter",
    "prompt",
    "cli",
]

from __future__ import annotations

from typing import Callable, Optional


PROMPT_TEXT = "Enter directory name: "


def ask_for_directory_name(input_func: Callable[[str], str] = input) -> Optional[str]:
    """Ask for the output directory name.

    Returns None when nothing usable was entered: an empty or blank answer,
    end of input, or Ctrl-C.
    """

    try:
        value = input_func(PROMPT_TEXT)
    except (EOFError, KeyboardInterrupt):
        return None

    value = value.strip()
    return value or None

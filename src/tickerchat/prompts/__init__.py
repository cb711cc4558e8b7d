"""System prompt templates.

Templates are plain text files with ``{placeholder}`` fields. A directory
named by TICKERCHAT_PROMPTS_DIR, or a ``prompts/`` directory in the
working directory, shadows the bundled templates file by file.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

PROMPTS_DIR_ENV = "TICKERCHAT_PROMPTS_DIR"

_BUNDLED_DIR = Path(__file__).parent


def prompt_dirs(environ: Mapping[str, str] | None = None) -> list[Path]:
    """Directories searched for templates, highest priority first."""
    env = os.environ if environ is None else environ
    dirs = []
    if env.get(PROMPTS_DIR_ENV):
        dirs.append(Path(env[PROMPTS_DIR_ENV]))
    dirs.append(Path.cwd() / "prompts")
    dirs.append(_BUNDLED_DIR)
    return dirs


def load_prompt(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Read the template called name, surrounding whitespace stripped.

    Raises:
        FileNotFoundError: If no searched directory holds {name}.txt
    """
    searched = [directory / f"{name}.txt" for directory in prompt_dirs(environ)]
    for path in searched:
        if path.is_file():
            logger.debug("Loading prompt %s from %s", name, path)
            return path.read_text(encoding="utf-8").strip()

    raise FileNotFoundError(
        f"Prompt '{name}' not found in: " + ", ".join(str(path) for path in searched)
    )


def get_system_prompt(subject: str) -> str:
    """System turn seeded at the start of a conversation about subject."""
    return load_prompt("system").format(subject=subject)


__all__ = [
    "PROMPTS_DIR_ENV",
    "get_system_prompt",
    "load_prompt",
    "prompt_dirs",
]

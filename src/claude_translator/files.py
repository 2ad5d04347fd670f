from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import OverwritePolicy
from .console import ConsoleIO


LOGGER = logging.getLogger("claude_translator.files")


def translated_output_path(source_path: Path, target_language: str) -> Path:
    """Return ``<stem>_<target_language><suffix>`` next to *source_path*."""
    source = Path(source_path)
    return source.with_name(f"{source.stem}_{target_language}{source.suffix}")


def read_source(path: Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def write_translation(
    path: Path,
    text: str,
    policy: OverwritePolicy,
    console: ConsoleIO,
) -> Optional[Path]:
    """
    Write *text* to *path* as UTF-8.

    Returns the written path, or ``None`` when an existing file was kept because of
    *policy* or the operator declined to overwrite it.
    """
    target = Path(path)
    if target.exists():
        if policy is OverwritePolicy.SKIP:
            LOGGER.warning("Output file %s exists; translation not written.", target)
            return None
        if policy is OverwritePolicy.PROMPT and not console.confirm(f"{target} already exists. Overwrite?"):
            LOGGER.info("Kept existing file %s.", target)
            return None
        LOGGER.debug("Overwriting existing file %s", target)

    target.write_text(text, encoding="utf-8")
    return target

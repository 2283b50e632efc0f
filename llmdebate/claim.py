"""Seed claim and role instruction loading."""

import logging
import os
import re
from pathlib import Path

import frontmatter
import yaml

from llmdebate.errors import InputUnavailable

logger = logging.getLogger(__name__)

_MAX_PATH_LEN = 255
_FILE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,8}$")


def load_claim(file_path: Path) -> tuple[str, dict]:
    """Parse a seed file with optional YAML frontmatter.

    Returns:
        (claim, metadata) where claim is the body text and metadata is a dict
        that may carry rounds (int), duration (str), challenger (str) and
        defender (str). If no frontmatter, metadata is {}.

    Raises:
        InputUnavailable: If the file cannot be read, its frontmatter is
            malformed, or the body is empty.
    """
    try:
        post = frontmatter.load(str(file_path))
        metadata = dict(post.metadata)
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError, TypeError) as exc:
        raise InputUnavailable(f"reading input file {file_path}: {exc}") from exc

    claim = post.content.strip()
    if not claim:
        raise InputUnavailable(f"input file {file_path} contains no claim")
    return claim, metadata


def _looks_like_path(value: str) -> bool:
    # Prose without a separator or file extension is inline text.
    if len(value) > _MAX_PATH_LEN or any(ch.isspace() for ch in value):
        return False
    return "/" in value or "\\" in value or bool(_FILE_SUFFIX.match(Path(value).suffix))


def load_instruction(value: str | None, fallback: str) -> str:
    """Resolve a role instruction given as inline text or as a file path.

    Empty values use fallback. A path-like value that cannot be read logs a
    warning and uses fallback instead of failing the run.
    """
    if not value or not value.strip():
        return fallback

    path = Path(value)
    if _looks_like_path(value) or os.path.isfile(value):
        try:
            text = path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to load prompt %s, using default (%s)", value, exc)
            return fallback
        if not text:
            logger.warning("Prompt file %s is empty, using default", value)
            return fallback
        return text

    return value.strip()

"""Turn free-form generated text into artifacts."""

from __future__ import annotations

import re

from paintgen.errors.exceptions import ParseError
from paintgen.generation.prompts import DESCRIPTION_SECTION, POSTER_SECTION
from paintgen.types import ExhibitionOption, PosterResult

_MAX_OPTIONS = 3

# "1. Title" or "1) Title"
_NUMBERED_LINE = re.compile(r"^\d+[.)]\s*(.+)$")
_NUMBER_PREFIX = re.compile(r"^\d+[.)]\s*")

_POSTER_PATTERN = re.compile(
    rf"{re.escape(POSTER_SECTION)}\s*(.+?)(?={re.escape(DESCRIPTION_SECTION)}|$)",
    re.IGNORECASE | re.DOTALL,
)
_DESCRIPTION_PATTERN = re.compile(
    rf"{re.escape(DESCRIPTION_SECTION)}\s*(.+?)$",
    re.IGNORECASE | re.DOTALL,
)

DEFAULT_POSTER_TEXT = "The poster layout will be created by a designer based on the exhibition concept."
DEFAULT_DESCRIPTION_TEXT = "The exhibition presents a collection of unique works of art."


def parse_exhibition_options(raw_text: str) -> list[ExhibitionOption]:
    """Extract up to three titles from a numbered list.

    Raises ParseError when no title can be found.
    """
    lines = [line.strip() for line in raw_text.splitlines() if line.strip()]

    options: list[ExhibitionOption] = []
    for line in lines:
        match = _NUMBERED_LINE.match(line)
        title = match.group(1).strip() if match else _NUMBER_PREFIX.sub("", line).strip()
        title = _strip_decorations(title)
        if title:
            options.append(ExhibitionOption(id=len(options) + 1, title=title))
        if len(options) >= _MAX_OPTIONS:
            break

    if not options:
        raise ParseError("Could not generate exhibition title options", raw_text=raw_text)
    return options


def parse_poster(raw_text: str) -> PosterResult:
    """Split the response into layout and description sections."""
    poster_match = _POSTER_PATTERN.search(raw_text)
    description_match = _DESCRIPTION_PATTERN.search(raw_text)

    poster = poster_match.group(1).strip() if poster_match else ""
    description = description_match.group(1).strip() if description_match else ""

    return PosterResult(
        poster=poster or DEFAULT_POSTER_TEXT,
        description=description or DEFAULT_DESCRIPTION_TEXT,
    )


def _strip_decorations(title: str) -> str:
    """Remove surrounding quotes and markdown emphasis."""
    return title.strip().strip("*_").strip().strip("\"'«»“”").strip()

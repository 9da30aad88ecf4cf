# SPDX-License-Identifier: MIT

import re
from typing import Optional

from did.errors import (
    EmptyDescriptionError,
    InvalidDurationError,
    MissingDurationError,
)
from did.model.entry import Entry

MAX_DURATION_MINUTES = 24 * 60

DURATION_SEPARATOR = " for "

_COMBINED_DURATION_PATTERN = re.compile(r"^(\d+)h(\d+)m$")
_SIMPLE_DURATION_PATTERN = re.compile(r"^(\d+)([hm])$")
_PROJECT_PATTERN = re.compile(r"@([a-zA-Z0-9_-]+)")
_TAG_PATTERN = re.compile(r"#([a-zA-Z0-9_-]+)")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def parse_duration(duration: str) -> int:
    """
    Parse "2h", "30m" or "1h30m" into minutes.

    Zero, malformed and over-24h durations raise InvalidDurationError.
    """
    duration = duration.strip().lower()

    combined_match = _COMBINED_DURATION_PATTERN.match(duration)
    simple_match = _SIMPLE_DURATION_PATTERN.match(duration)
    if combined_match:
        minutes = int(combined_match.group(1)) * 60 + int(combined_match.group(2))
    elif simple_match:
        value = int(simple_match.group(1))
        minutes = value * 60 if simple_match.group(2) == "h" else value
    else:
        raise InvalidDurationError(
            f"invalid duration '{duration}': expected Xh, Xm or XhYm"
        )

    if minutes == 0:
        raise InvalidDurationError(
            f"invalid duration '{duration}': duration cannot be zero"
        )
    if minutes > MAX_DURATION_MINUTES:
        raise InvalidDurationError(
            f"invalid duration '{duration}': exceeds maximum of 24 hours "
            f"({MAX_DURATION_MINUTES} minutes)"
        )
    return minutes


def parse_project_and_tags(text: str) -> tuple[str, Optional[str], list[str]]:
    """
    Pull `@project` and `#tag` tokens out of `text`.

    Returns the remaining description with whitespace collapsed, the last
    project mentioned (or None) and the tags in order of first appearance.
    """
    projects = _PROJECT_PATTERN.findall(text)
    project = projects[-1] if projects else None

    tags: list[str] = []
    for tag in _TAG_PATTERN.findall(text):
        if tag not in tags:
            tags.append(tag)

    description = _TAG_PATTERN.sub("", _PROJECT_PATTERN.sub("", text))
    description = _WHITESPACE_PATTERN.sub(" ", description).strip()
    return description, project, tags


def parse_entry_input(raw_input: str) -> tuple[str, Optional[str], list[str], int]:
    """
    Split "<description> for <duration>" into its parts.

    The last " for " (any case) separates the description from the duration,
    so descriptions may themselves contain the word "for".
    """
    separator_index = raw_input.lower().rfind(DURATION_SEPARATOR)
    if separator_index == -1:
        raise MissingDurationError()

    text = raw_input[:separator_index].strip()
    duration = raw_input[separator_index + len(DURATION_SEPARATOR) :].strip()

    description, project, tags = parse_project_and_tags(text)
    if not description:
        raise EmptyDescriptionError()

    return description, project, tags, parse_duration(duration)


def format_duration_simple(minutes: int) -> str:
    """Format minutes the way they are typed: "45m", "2h" or "1h30m"."""
    hours, remaining_minutes = divmod(minutes, 60)
    if hours == 0:
        return f"{remaining_minutes}m"
    if remaining_minutes == 0:
        return f"{hours}h"
    return f"{hours}h{remaining_minutes}m"


def build_raw_input(entry: Entry) -> str:
    text = entry["description"]
    if entry["project"]:
        text += f" @{entry['project']}"
    for tag in entry["tags"]:
        text += f" #{tag}"
    duration = format_duration_simple(entry["duration_minutes"])
    return f"{text}{DURATION_SEPARATOR}{duration}"

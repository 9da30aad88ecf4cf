# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum
from rich.markup import escape

from did.model.entry import Entry


def format_duration(minutes: int) -> str:
    """Format minutes for display, e.g. 90 -> "1h 30m"."""
    hours, remaining_minutes = divmod(minutes, 60)
    if hours == 0:
        return f"{remaining_minutes}m"
    if remaining_minutes == 0:
        return f"{hours}h"
    return f"{hours}h {remaining_minutes}m"


def render_elapsed(elapsed: Optional[pendulum.Duration]) -> str:
    if elapsed is None:
        return ""
    total_seconds = int(elapsed.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    return f"{hours}:{remainder // 60:02d}:{remainder % 60:02d}"


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as "#a #b"."""
    if tags is None or len(tags) == 0:
        return ""
    return " ".join(f"#{tag}" for tag in tags)


def format_project(project: Optional[str]) -> str:
    if not project:
        return ""
    return f"@{project}"


def format_entry_text(entry: Entry) -> str:
    parts = [escape(entry["description"])]
    if entry["project"]:
        parts.append(f"[cyan]{format_project(entry['project'])}[/cyan]")
    if entry["tags"]:
        parts.append(f"[magenta]{format_tags(entry['tags'])}[/magenta]")
    return " ".join(parts)

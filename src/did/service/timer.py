# SPDX-License-Identifier: MIT

import logging
import math
from typing import Optional

import pendulum

from did.errors import (
    EmptyDescriptionError,
    NoTimerRunningError,
    TimerAlreadyRunningError,
)
from did.model.entry import Entry
from did.model.timer import TimerState, TimerStatus
from did.repository import entry as entry_repository
from did.repository import timer as timer_repository
from did.repository.store_context import StoreContext
from did.service.parse import (
    MAX_DURATION_MINUTES,
    build_raw_input,
    parse_project_and_tags,
)
from did.template.entry import get_entry_template
from did.template.timer import get_timer_state_template

log = logging.getLogger(__name__)


def start_timer(
    timer_store: StoreContext, text: str, force: bool = False
) -> tuple[TimerState, Optional[TimerState]]:
    """
    Start the timer for "<description> [@project] [#tag...]".

    Returns the new state and the one it replaced, if `force` was needed.
    """
    description, project, tags = parse_project_and_tags(text)
    if not description:
        raise EmptyDescriptionError()

    previous_state = timer_repository.load_timer_state(timer_store)
    if previous_state is not None and not force:
        raise TimerAlreadyRunningError(previous_state)

    state = get_timer_state_template(timer_store.clock)
    state["description"] = description
    state["project"] = project
    state["tags"] = tags

    timer_repository.save_timer_state(timer_store, state)
    if previous_state is not None:
        log.debug("replaced running timer '%s'", previous_state["description"])
    return state, previous_state


def calculate_duration_minutes(state: TimerState, now: pendulum.DateTime) -> int:
    """Elapsed whole minutes, half a minute rounding up, clamped to 1..1440."""
    elapsed_seconds = (now - state["started_at"]).total_seconds()
    minutes = math.floor(elapsed_seconds / 60 + 0.5)
    return min(max(minutes, 1), MAX_DURATION_MINUTES)


def stop_timer(
    timer_store: StoreContext, entry_store: StoreContext
) -> tuple[Entry, TimerState]:
    """Turn the running timer into an entry, then clear it."""
    state = timer_repository.load_timer_state(timer_store)
    if state is None:
        raise NoTimerRunningError()

    now = entry_store.clock()
    entry = get_entry_template(lambda: now)
    entry["description"] = state["description"]
    entry["duration_minutes"] = calculate_duration_minutes(state, now)
    entry["project"] = state["project"]
    entry["tags"] = list(state["tags"])
    entry["raw_input"] = build_raw_input(entry)

    entry_repository.append_entry(entry_store, entry)
    timer_repository.clear_timer_state(timer_store)
    return entry, state


def cancel_timer(timer_store: StoreContext) -> TimerState:
    state = timer_repository.load_timer_state(timer_store)
    if state is None:
        raise NoTimerRunningError()
    timer_repository.clear_timer_state(timer_store)
    return state


def get_timer_status(timer_store: StoreContext) -> TimerStatus:
    state = timer_repository.load_timer_state(timer_store)
    if state is None:
        return {"running": False, "state": None, "elapsed": None}
    return {
        "running": True,
        "state": state,
        "elapsed": timer_store.clock() - state["started_at"],
    }

# SPDX-License-Identifier: MIT

import json
import logging
from typing import Any, Optional

from did import time
from did.errors import StorageError, TimerStateError
from did.model.timer import TimerState
from did.repository.store_context import StoreContext

log = logging.getLogger(__name__)


def __convert_timer_state_for_serialization(state: TimerState) -> dict[str, Any]:
    serializable_state: dict[str, Any] = {
        "started_at": time.datetime_to_iso_str(state["started_at"]),
        "description": state["description"],
    }
    if state["project"]:
        serializable_state["project"] = state["project"]
    if state["tags"]:
        serializable_state["tags"] = list(state["tags"])
    return serializable_state


def __convert_timer_state_for_deserialization(raw_state: Any) -> TimerState:
    if not isinstance(raw_state, dict) or not isinstance(
        raw_state.get("started_at"), str
    ):
        raise ValueError("timer file does not hold a timer state")
    return {
        "started_at": time.datetime_from_str(raw_state["started_at"]),
        "description": raw_state.get("description") or "",
        "project": raw_state.get("project") or None,
        "tags": list(raw_state.get("tags") or []),
    }


def save_timer_state(timer_store: StoreContext, state: TimerState) -> None:
    data = json.dumps(
        __convert_timer_state_for_serialization(state),
        ensure_ascii=False,
        indent=2,
    )
    try:
        timer_store.fs.make_dirs(timer_store.path.parent)
        timer_store.fs.write_atomic(timer_store.path, data.encode("utf-8"))
    except OSError as e:
        raise StorageError(
            f"failed to save timer state to {timer_store.path}: {e}",
            timer_store.path,
        ) from e
    log.debug("saved timer state to %s", timer_store.path)


def load_timer_state(timer_store: StoreContext) -> Optional[TimerState]:
    """Return the running timer, or None when there is no timer file."""
    try:
        data = timer_store.fs.read_text(timer_store.path)
    except FileNotFoundError:
        return None
    except OSError as e:
        raise TimerStateError(
            f"failed to read timer state from {timer_store.path}: {e}",
            timer_store.path,
        ) from e

    try:
        return __convert_timer_state_for_deserialization(json.loads(data))
    except (ValueError, TypeError) as e:
        raise TimerStateError(
            f"timer file {timer_store.path} is corrupted: {e}", timer_store.path
        ) from e


def clear_timer_state(timer_store: StoreContext) -> None:
    if not timer_store.fs.exists(timer_store.path):
        return
    try:
        timer_store.fs.remove(timer_store.path)
    except OSError as e:
        raise StorageError(
            f"failed to clear timer state at {timer_store.path}: {e}",
            timer_store.path,
        ) from e
    log.debug("cleared timer state at %s", timer_store.path)


def is_timer_running(timer_store: StoreContext) -> bool:
    return load_timer_state(timer_store) is not None

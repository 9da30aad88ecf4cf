# SPDX-License-Identifier: MIT

from did.model.timer import TimerState
from did.time import Clock, now_utc


def get_timer_state_template(clock: Clock = now_utc) -> TimerState:
    return {
        "started_at": clock(),
        "description": "",
        "project": None,
        "tags": [],
    }

# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum


class TimerState(TypedDict):
    started_at: pendulum.DateTime
    description: str
    project: Optional[str]
    tags: list[str]


class TimerStatus(TypedDict):
    running: bool
    state: Optional[TimerState]
    elapsed: Optional[pendulum.Duration]

# SPDX-License-Identifier: MIT

from did.model.entry import Entry
from did.time import Clock, now_utc


def get_entry_template(clock: Clock = now_utc) -> Entry:
    return {
        "timestamp": clock(),
        "description": "",
        "duration_minutes": 0,
        "raw_input": "",
        "project": None,
        "tags": [],
        "deleted_at": None,
    }

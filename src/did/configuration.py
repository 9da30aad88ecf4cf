# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Any, Optional, TypedDict

import pendulum
import platformdirs

from did.errors import ConfigurationError
from did.time import WEEK_START_DAYS

APP_NAME = "did"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

DEFAULT_DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
ENTRIES_FILE = "entries.jsonl"
TIMER_FILE = "timer.json"


class Configuration(TypedDict):
    week_start_day: str  # "monday" or "sunday"
    timezone: str  # IANA name or "local"
    data_path: Optional[str]
    deleted_retention_days: int


def get_default_configuration() -> Configuration:
    return {
        "week_start_day": "monday",
        "timezone": "local",
        "data_path": None,
        "deleted_retention_days": 7,
    }


def validate_configuration(
    raw_config: Any, config_path: Optional[Path] = None
) -> Configuration:
    """
    Fill in defaults for missing keys and check every value.

    Returns a normalised copy; raises ConfigurationError on the first bad
    value.
    """
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigurationError(
            "configuration must be a mapping of settings", config_path
        )

    config = get_default_configuration()

    unknown_keys = set(raw_config) - set(config)
    if unknown_keys:
        raise ConfigurationError(
            f"unknown configuration key(s): {', '.join(sorted(unknown_keys))}",
            config_path,
        )

    week_start_day = raw_config.get("week_start_day", config["week_start_day"])
    week_start_day = str(week_start_day).strip().lower()
    if week_start_day not in WEEK_START_DAYS:
        raise ConfigurationError(
            f"invalid week_start_day: must be 'monday' or 'sunday', got '{week_start_day}'",
            config_path,
        )
    config["week_start_day"] = week_start_day

    timezone = str(raw_config.get("timezone") or config["timezone"]).strip()
    if timezone.lower() == "local":
        timezone = "local"
    else:
        try:
            pendulum.timezone(timezone)
        except (ValueError, KeyError) as e:
            raise ConfigurationError(
                f"invalid timezone: '{timezone}' is not a valid IANA timezone "
                "(e.g. 'America/New_York', 'Europe/London')",
                config_path,
            ) from e
    config["timezone"] = timezone

    data_path = raw_config.get("data_path")
    if data_path is not None and not isinstance(data_path, str):
        raise ConfigurationError("data_path must be a string", config_path)
    config["data_path"] = data_path

    retention_days = raw_config.get(
        "deleted_retention_days", config["deleted_retention_days"]
    )
    if (
        isinstance(retention_days, bool)
        or not isinstance(retention_days, int)
        or retention_days < 0
    ):
        raise ConfigurationError(
            f"deleted_retention_days must be a whole number >= 0, got {retention_days!r}",
            config_path,
        )
    config["deleted_retention_days"] = retention_days

    return config


def get_data_path(config: Configuration, override: Optional[Path] = None) -> Path:
    if override is not None:
        return Path(override).expanduser()
    if config["data_path"] is not None:
        return Path(config["data_path"]).expanduser()
    return DEFAULT_DATA_PATH


SAMPLE_CONFIGURATION = """\
# did configuration
# Every setting is optional; remove the leading '#' to change one.

# First day of the week for 'did list --week' and 'did stats --week'.
# monday (default) or sunday
# week_start_day: monday

# Timezone used for day and week boundaries.
# 'local' (default) or an IANA name such as Europe/London
# timezone: local

# Where entries.jsonl, its backups and timer.json live.
# Defaults to the platform data directory.
# data_path: ~/did

# Soft-deleted entries older than this many days are dropped
# the next time an entry is deleted. 0 keeps them until 'did purge'.
# deleted_retention_days: 7
"""

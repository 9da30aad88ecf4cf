# SPDX-License-Identifier: MIT

from contextvars import ContextVar
from pathlib import Path
from typing import Optional

from did import configuration
from did.repository.configuration import ConfigurationRepository
from did.repository.store_context import StoreContext

_config_path: ContextVar[Optional[Path]] = ContextVar("config_path", default=None)
_data_dir: ContextVar[Optional[Path]] = ContextVar("data_dir", default=None)
_configuration_repo: ContextVar[Optional[ConfigurationRepository]] = ContextVar(
    "configuration_repo", default=None
)


def set_config_path(value: Optional[Path]) -> None:
    _config_path.set(value)
    _configuration_repo.set(None)


def set_data_dir(value: Optional[Path]) -> None:
    _data_dir.set(value)


def get_configuration_repository() -> ConfigurationRepository:
    repository = _configuration_repo.get()
    if repository is None:
        repository = ConfigurationRepository(_config_path.get())
        _configuration_repo.set(repository)
    return repository


def get_config() -> configuration.Configuration:
    return get_configuration_repository().get_config()


def get_data_path() -> Path:
    return configuration.get_data_path(get_config(), _data_dir.get())


def get_entry_store() -> StoreContext:
    return StoreContext(get_data_path() / configuration.ENTRIES_FILE)


def get_timer_store() -> StoreContext:
    return StoreContext(get_data_path() / configuration.TIMER_FILE)
